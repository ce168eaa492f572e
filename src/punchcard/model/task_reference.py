# SPDX-License-Identifier: MIT

from dataclasses import dataclass


@dataclass(frozen=True)
class AliasReference:
    name: str


@dataclass(frozen=True)
class ExplicitReference:
    project_id: str
    task_id: str


TaskReference = AliasReference | ExplicitReference
