"""Persistence helpers (load/save) for the task tracker.

File layout: one task per line, ``description|priority|completed|id``.

Decisions:
- Descriptions are escaped (``\\`` ``\\|`` ``\\n`` ``\\r``) so a ``|`` in the
  text no longer breaks the round trip. Unknown escapes are kept literally,
  which keeps older unescaped files loadable.
- A malformed line aborts the whole load with TaskFileError; silently
  dropping a line would lose it on the next save.
- Blank lines are ignored.
"""
import logging
import os
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from models import Priority, Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path('tasks.txt')
DELIMITER = '|'
FIELD_COUNT = 4

PathLike = Union[str, Path]

_ESCAPES = {'\\': '\\\\', DELIMITER: '\\' + DELIMITER, '\n': '\\n', '\r': '\\r'}
_UNESCAPES = {'\\': '\\', DELIMITER: DELIMITER, 'n': '\n', 'r': '\r'}


class StorageError(ValueError):
    """Base class for task file problems."""


class TaskFileError(StorageError):
    """A line in the task file could not be parsed."""

    def __init__(self, path: PathLike, line_no: int, reason: str):
        self.path = Path(path)
        self.line_no = line_no
        self.reason = reason
        super().__init__(f'{self.path}, line {line_no}: {reason}')


# -------------------- line codec --------------------
def escape_field(text: str) -> str:
    return ''.join(_ESCAPES.get(ch, ch) for ch in text)


def split_fields(line: str) -> List[str]:
    """Split on unescaped delimiters, decoding escapes along the way."""
    fields: List[str] = []
    current: List[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == '\\':
            nxt = next(chars, None)
            if nxt is None:
                current.append(ch)
            elif nxt in _UNESCAPES:
                current.append(_UNESCAPES[nxt])
            else:
                current.append(ch + nxt)
        elif ch == DELIMITER:
            fields.append(''.join(current))
            current = []
        else:
            current.append(ch)
    fields.append(''.join(current))
    return fields


def encode_line(task: Task) -> str:
    return DELIMITER.join([
        escape_field(task.description),
        task.priority.value,
        '1' if task.completed else '0',
        str(task.id),
    ])


def decode_line(line: str) -> Task:
    """Parse one stored line; raises ValueError describing the problem."""
    fields = split_fields(line.rstrip('\r\n'))
    if len(fields) != FIELD_COUNT:
        raise ValueError(f'expected {FIELD_COUNT} fields, found {len(fields)}')
    description = fields[0]
    raw_priority, raw_completed, raw_id = (f.strip() for f in fields[1:])
    if not description.strip():
        raise ValueError('empty description')
    priority = Priority.parse(raw_priority)
    if raw_completed not in ('0', '1'):
        raise ValueError(f'completed flag must be 0 or 1, got {raw_completed!r}')
    if not raw_id.isdecimal() or int(raw_id) < 1:
        raise ValueError(f'id must be a positive integer, got {raw_id!r}')
    return Task(id=int(raw_id), description=description, priority=priority,
                completed=raw_completed == '1')


class Storage:
    @staticmethod
    def load_tasks(path: PathLike = DEFAULT_TASKS_FILE) -> Tuple[List[Task], int]:
        """Load tasks from disk.

        Returns the tasks in file order and the next id to allocate.
        Missing file -> ([], 1).
        """
        path = Path(path)
        if not path.exists():
            logger.info('No task file at %s; starting empty', path)
            return [], 1
        tasks: List[Task] = []
        seen = set()
        with open(path, 'rb') as f:
            for line_no, raw in enumerate(f, start=1):
                try:
                    line = raw.decode('utf-8')
                except UnicodeDecodeError as exc:
                    raise TaskFileError(path, line_no, 'not valid UTF-8') from exc
                if not line.strip():
                    continue
                try:
                    task = decode_line(line)
                except ValueError as exc:
                    raise TaskFileError(path, line_no, str(exc)) from exc
                if task.id in seen:
                    raise TaskFileError(path, line_no, f'duplicate id {task.id}')
                seen.add(task.id)
                tasks.append(task)
        next_id = max((t.id for t in tasks), default=0) + 1
        logger.info('Loaded %d tasks from %s (next id %d)', len(tasks), path, next_id)
        return tasks, next_id

    @staticmethod
    def save_tasks(path: PathLike, tasks: Iterable[Task]) -> None:
        """Rewrite the task file; the old file is replaced only once the new one is complete."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [encode_line(t) + '\n' for t in tasks]
        tmp = path.with_name(path.name + '.tmp')
        try:
            with open(tmp, 'w', encoding='utf-8', newline='\n') as f:
                f.writelines(lines)
            os.replace(tmp, path)
        finally:
            if tmp.exists():
                tmp.unlink()
        logger.info('Saved %d tasks to %s', len(lines), path)
