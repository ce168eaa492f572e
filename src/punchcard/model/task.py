# SPDX-License-Identifier: MIT

from typing import TypedDict


class Task(TypedDict):
    project_id: str
    task_id: str
    project_name: str
    project_code: str
    client: str
    task_name: str


def task_display_name(task: Task) -> str:
    project = f"{task['project_name']} - {task['task_name']}"
    if task["client"]:
        return f"{task['client']} - {project}"
    return project
