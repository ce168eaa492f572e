# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from punchcard import configuration
from punchcard.errors import ConfigError

logger = logging.getLogger(__name__)


class SettingsRepository:
    """
    Flat string to string settings, persisted as a single YAML mapping.

    Every mutation rewrites the whole file.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or configuration.SETTINGS_PATH
        self._settings: Optional[dict[str, str]] = None

    @property
    def settings(self) -> dict[str, str]:
        if self._settings is None:
            self._settings = self.__load_data()
        return self._settings

    def __load_data(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = load(self.path.read_text(encoding="utf-8"), Loader=Loader)
        except (OSError, UnicodeDecodeError, YAMLError) as e:
            raise ConfigError(f"Unable to read settings from {self.path}: {e}") from e

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Settings file {self.path} must contain a mapping")
        if any(isinstance(v, (dict, list)) for v in raw.values()):
            raise ConfigError(f"Settings file {self.path} must be a flat mapping")

        logger.debug("Loaded %d settings from %s", len(raw), self.path)
        return {
            str(key): "" if value is None else str(value) for key, value in raw.items()
        }

    def __save_data(self, settings: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = dump(settings, Dumper=Dumper, allow_unicode=True, default_flow_style=False)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(text)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d settings to %s", len(settings), self.path)

    def load(self) -> dict[str, str]:
        return dict(self.settings)

    def flush(self) -> None:
        self.__save_data(self.settings)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.settings.get(key, default)

    def set(self, key: str, value: str) -> None:
        self.settings[key] = value
        self.flush()

    def unset(self, key: str) -> None:
        self.settings.pop(key, None)
        self.flush()

    def all(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.settings))
