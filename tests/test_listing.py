# tests/test_listing.py

from __future__ import annotations

import pytest

import theme
from listing import ANSI_RE, NO_TASKS, display_tasks, render_tasks, shorten, sort_tasks
from models import Priority, Task
from tracker import TaskStore


def _ids_in(rendered: str):
    rows = rendered.splitlines()[2:]
    return [int(row.split()[0]) for row in rows]


def test_sort_by_priority_keeps_insertion_order_for_ties() -> None:
    tasks = [
        Task(id=1, description="low", priority=Priority.LOW),
        Task(id=2, description="high a", priority=Priority.HIGH),
        Task(id=3, description="medium", priority=Priority.MEDIUM),
        Task(id=4, description="high b", priority=Priority.HIGH),
    ]
    assert [t.id for t in sort_tasks(tasks)] == [2, 4, 3, 1]
    assert _ids_in(render_tasks(tasks)) == [2, 4, 3, 1]


def test_pending_view_omits_completed(store: TaskStore) -> None:
    rendered = render_tasks(store.all(), include_completed=False)
    assert sorted(_ids_in(rendered)) == [1, 3]
    assert "Pay rent" not in rendered
    assert "Completed" not in rendered


def test_all_view_shows_status(store: TaskStore) -> None:
    rendered = render_tasks(store.all())
    lines = rendered.splitlines()
    assert lines[0].split() == ["ID", "Description", "Priority", "Status"]
    assert set(lines[1]) == {"-"}
    assert lines[2].startswith("2")
    assert lines[2].rstrip().endswith("Completed")
    assert lines[3].rstrip().endswith("Pending")


def test_long_description_is_truncated_for_display_only() -> None:
    text = "x" * 41
    task = Task(id=1, description=text, priority=Priority.LOW)
    rendered = render_tasks([task])
    assert "x" * 37 + "..." in rendered
    assert text not in rendered
    assert task.description == text


def test_forty_characters_fit_without_truncation() -> None:
    text = "y" * 40
    assert shorten(text) == text
    assert shorten(text + "z") == "y" * 37 + "..."


@pytest.mark.parametrize("include_completed", [True, False])
def test_empty_list_renders_message(include_completed: bool) -> None:
    assert render_tasks([], include_completed) == NO_TASKS


def test_everything_filtered_renders_message() -> None:
    done = [Task(id=1, description="done", priority=Priority.HIGH, completed=True)]
    assert render_tasks(done, include_completed=False) == NO_TASKS


def test_columns_stay_aligned_with_color(monkeypatch: pytest.MonkeyPatch, store: TaskStore) -> None:
    plain = render_tasks(store.all())
    monkeypatch.setattr(theme, "_ENABLE", True)
    colored = render_tasks(store.all())
    assert colored != plain
    assert ANSI_RE.sub("", colored) == plain


def test_display_prints_table(capsys: pytest.CaptureFixture[str], store: TaskStore) -> None:
    display_tasks(store.all(), include_completed=False)
    out = capsys.readouterr().out
    assert "Water plants" in out
    assert "Pay rent" not in out


def test_rule_is_seventy_dashes(store: TaskStore) -> None:
    assert render_tasks(store.all()).splitlines()[1] == "-" * 70
