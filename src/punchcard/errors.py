# SPDX-License-Identifier: MIT

from typing import Optional


class PunchcardError(Exception):
    """Base class for every error reported to the user."""

    pass


class ConfigError(PunchcardError):
    """Raised when a local configuration or settings file cannot be used."""

    pass


class UnknownAliasError(PunchcardError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown task alias @{name}.")
        self.name = name


class InvalidAliasNameError(PunchcardError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid alias name {name!r}, use letters, digits, '-' and '_'."
        )
        self.name = name


class AmbiguousTaskError(PunchcardError):
    """Raised when no task reference could be found in the arguments."""

    def __init__(self, aliases: list[str]) -> None:
        message = "Unknown task alias, try one of the following: " + ", ".join(
            aliases
        )
        if not aliases:
            message = "Unknown task, give a @alias or a project and task ID."
        super().__init__(message)
        self.aliases = aliases


class UnknownTaskError(PunchcardError):
    def __init__(self, project_id: str, task_id: str) -> None:
        super().__init__(
            f"Unrecognized project and task ID: {project_id!r} {task_id!r}"
        )
        self.project_id = project_id
        self.task_id = task_id


class NoMatchingTasksError(PunchcardError):
    def __init__(self) -> None:
        super().__init__("No matching tasks.")


class AlreadyRunningError(PunchcardError):
    def __init__(self) -> None:
        super().__init__("There is already a timer running.")


class NoRunningTimerError(PunchcardError):
    def __init__(self) -> None:
        super().__init__("No running timers found.")


class NoMatchingTimerError(PunchcardError):
    def __init__(self) -> None:
        super().__init__("No matching timer found.")


class NothingToCancelError(PunchcardError):
    def __init__(self) -> None:
        super().__init__("Nothing to cancel.")


class DeletionFailedError(PunchcardError):
    def __init__(self, entry_description: str) -> None:
        super().__init__(f"Failed to delete {entry_description}!")


class RemoteError(PunchcardError):
    """
    A failed call to the time tracking service.

    The message is the service's own text and is shown to the user as is.
    `status` is None when the request never got a response.
    """

    def __init__(self, status: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class NotFoundError(RemoteError):
    """Raised when an entry vanished between lookup and mutation."""

    pass
