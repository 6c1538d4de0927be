# tests/conftest.py

from __future__ import annotations

import logging
from typing import Callable, List

import pytest

import theme
from models import Priority, Task
from tracker import TaskStore


@pytest.fixture(autouse=True)
def no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    """Rendered text is compared verbatim, so colour stays off unless a test turns it on."""
    monkeypatch.setattr(theme, "_ENABLE", False)


@pytest.fixture()
def store() -> TaskStore:
    """Three tasks: #1 Low pending, #2 High completed, #3 Medium pending."""
    return TaskStore([
        Task(id=1, description="Water plants", priority=Priority.LOW),
        Task(id=2, description="Pay rent", priority=Priority.HIGH, completed=True),
        Task(id=3, description="Call the bank", priority=Priority.MEDIUM),
    ])


@pytest.fixture()
def feed(monkeypatch: pytest.MonkeyPatch) -> Callable[..., List[str]]:
    """
    Replace builtins.input with a scripted sequence of answers.

    Prompts are echoed to stdout so capsys sees the whole transcript. Running
    out of answers raises EOFError, like a closed stdin would.
    """

    def _feed(*answers: str) -> List[str]:
        queue = list(answers)

        def fake_input(prompt: str = "") -> str:
            print(prompt, end="")
            if not queue:
                raise EOFError
            return queue.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        return queue

    return _feed


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put the previous handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
