# tests/test_models.py

from __future__ import annotations

import pytest

from models import Priority, Task


def test_priority_ranks() -> None:
    assert Priority.HIGH.rank == 3
    assert Priority.MEDIUM.rank == 2
    assert Priority.LOW.rank == 1


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("High", Priority.HIGH),
        ("medium", Priority.MEDIUM),
        ("  LOW ", Priority.LOW),
        ("h", Priority.HIGH),
        ("M", Priority.MEDIUM),
        ("l", Priority.LOW),
    ],
)
def test_priority_parse_accepts_names_and_aliases(raw: str, expected: Priority) -> None:
    assert Priority.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", "Urgent", "3", "hi gh"])
def test_priority_parse_rejects_unknown(raw: str) -> None:
    with pytest.raises(ValueError):
        Priority.parse(raw)


def test_task_defaults_to_pending() -> None:
    task = Task(id=1, description="Write report", priority=Priority.HIGH)
    assert task.completed is False
    assert str(task.priority) == "High"
