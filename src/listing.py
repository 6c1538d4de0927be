"""Task listing: sorting, filtering, and the column-aligned table.

Rows are sorted by priority rank, highest first. The sort is stable, so
tasks of equal priority keep their insertion order.
"""
import re
from typing import Iterable, List

from models import Task
from theme import (color, HEADER_COLOR, ID_COLOR, PRIORITY_COLOR, COMPLETED_COLOR,
                   PENDING_COLOR, EMPTY_COLOR)

ID_WIDTH = 5
DESC_WIDTH = 40
PRIORITY_WIDTH = 15
RULE_WIDTH = 70
TRUNCATE_AT = 37
ELLIPSIS = '...'
NO_TASKS = 'No tasks found.'
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def sort_tasks(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=lambda t: -t.priority.rank)


def shorten(description: str) -> str:
    """Display form of a description; the stored text is left alone."""
    if len(description) > DESC_WIDTH:
        return description[:TRUNCATE_AT] + ELLIPSIS
    return description


def _visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def _pad(cell: str, width: int) -> str:
    pad = width - _visible_len(cell)
    return cell + ' ' * pad if pad > 0 else cell


def _row(task: Task) -> str:
    status = 'Completed' if task.completed else 'Pending'
    return (_pad(color(str(task.id), ID_COLOR), ID_WIDTH)
            + _pad(shorten(task.description), DESC_WIDTH + 1)
            + _pad(color(task.priority.value, PRIORITY_COLOR[task.priority.value]), PRIORITY_WIDTH)
            + color(status, COMPLETED_COLOR if task.completed else PENDING_COLOR))


def render_tasks(tasks: Iterable[Task], include_completed: bool = True) -> str:
    """Render the task table, or a single 'no tasks' line when nothing is left to show."""
    shown = [t for t in tasks if include_completed or not t.completed]
    if not shown:
        return color(NO_TASKS, EMPTY_COLOR)
    header = ('ID'.ljust(ID_WIDTH) + 'Description'.ljust(DESC_WIDTH + 1)
              + 'Priority'.ljust(PRIORITY_WIDTH) + 'Status')
    lines = [color(header, HEADER_COLOR), color('-' * RULE_WIDTH, HEADER_COLOR)]
    lines.extend(_row(t) for t in sort_tasks(shown))
    return '\n'.join(lines)


def display_tasks(tasks: Iterable[Task], include_completed: bool = True) -> None:
    print(render_tasks(tasks, include_completed))
