# src/taskdesk/cli/view.py

"""Plain-text rendering of the workspace (login screen / task list)."""

from __future__ import annotations

from ..core.workspace import TaskWorkspace
from ..tasks.task_models import Task

EMPTY_LIST = "No todos yet. Add some tasks above!"


def format_created(task: Task) -> str:
    if task.created_at is None:
        return "Invalid Date"
    return task.created_at.astimezone().strftime("%Y-%m-%d")


def render_task(index: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    title = f"~{task.title}~" if task.completed else task.title
    lines = [f"{index:>2}. [{mark}] {title}"]
    if task.description:
        lines.append(f"      {task.description}")
    lines.append(f"      Created: {format_created(task)}")
    return "\n".join(lines)


def render_login(ws: TaskWorkspace) -> str:
    form = ws.auth_form
    title = "Login" if form.is_login else "Register"
    lines = [f"== {title} =="]
    if ws.status.error:
        lines.append(f"! {ws.status.error}")
    if form.is_login:
        lines.append("Use /login <username> <password>  (need an account? /mode)")
    else:
        lines.append("Use /register <username> <password> <name>  (already have an account? /mode)")
    return "\n".join(lines)


def render_workspace(ws: TaskWorkspace) -> str:
    if not ws.is_authenticated:
        return render_login(ws)

    tl = ws.tasks
    header = "== My Todo List =="
    if ws.user is not None:
        header += f"  [{ws.user.display_name}]"

    lines = [header]
    if ws.status.error:
        lines.append(f"! {ws.status.error}")
    if tl.draft is not None:
        lines.append(f"Editing: {tl.draft.title!r} / {tl.draft.description!r}  (/title, /desc, /save, /cancel)")

    lines.append(f"Sort by Date {tl.sort_direction.arrow}")

    if not tl.tasks:
        lines.append(EMPTY_LIST)
    else:
        for i, task in enumerate(tl.tasks, start=1):
            lines.append(render_task(i, task))
    return "\n".join(lines)
