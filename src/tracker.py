"""Task store: holds the task list, id allocation, and task mutation.

Ids come from a counter that only moves forward. After a reload it starts at
max(id) + 1, so an id deleted in this session is never handed out again.
"""
import logging
from typing import Iterable, List, Optional

from models import Priority, Task

logger = logging.getLogger(__name__)


class TaskStore:
    def __init__(self, tasks: Optional[Iterable[Task]] = None, next_id: Optional[int] = None):
        self._tasks: List[Task] = []
        self._next_id: int = 1
        if tasks:
            self._load(tasks)
        if next_id is not None:
            self._next_id = max(self._next_id, next_id)

    # -------------------- loading --------------------
    def _load(self, tasks: Iterable[Task]) -> None:
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise ValueError(f'duplicate task id {task.id}')
            seen.add(task.id)
            self._tasks.append(task)
        if self._tasks:
            self._next_id = max(t.id for t in self._tasks) + 1

    # -------------------- id management --------------------
    @property
    def next_id(self) -> int:
        return self._next_id

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    # -------------------- queries --------------------
    def all(self) -> List[Task]:
        return self._tasks

    def pending(self) -> List[Task]:
        return [t for t in self._tasks if not t.completed]

    def find(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # -------------------- task operations --------------------
    def add(self, description: str, priority: Priority) -> int:
        """Append a new pending task; input is expected to be validated already."""
        task = Task(id=self._allocate_id(), description=description, priority=priority)
        self._tasks.append(task)
        logger.debug('Added task %d (%s)', task.id, task.priority)
        return task.id

    def update(self, task_id: int, description: Optional[str] = None,
               priority: Optional[Priority] = None) -> bool:
        """Apply only the supplied fields. An empty description keeps the current one."""
        task = self.find(task_id)
        if task is None:
            return False
        if description is not None and description.strip():
            task.description = description
        if priority is not None:
            task.priority = priority
        logger.debug('Updated task %d', task_id)
        return True

    def mark_completed(self, task_id: int) -> bool:
        task = self.find(task_id)
        if task is None:
            return False
        task.completed = True
        logger.debug('Completed task %d', task_id)
        return True

    def delete(self, task_id: int) -> bool:
        task = self.find(task_id)
        if task is None:
            return False
        self._tasks.remove(task)
        logger.debug('Deleted task %d', task_id)
        return True

    def __len__(self) -> int:
        return len(self._tasks)

    def __str__(self) -> str:
        done = sum(1 for t in self._tasks if t.completed)
        return (f'{len(self._tasks)} tasks, '
                f'{len(self._tasks) - done} pending, '
                f'{done} completed')
