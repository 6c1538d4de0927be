"""Menu loop for the task tracker.

Every screen starts from a cleared terminal with the banner on top. Each
operation ends with a "Press Enter to continue..." pause before the menu is
drawn again. Choice 7 is the only way out that keeps changes.
"""
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import click

from listing import display_tasks
from models import Priority, Task
from storage import Storage
from theme import color, HEADER_COLOR, ERROR_COLOR
from tracker import TaskStore

logger = logging.getLogger(__name__)

BANNER = "===== Task Management System ====="
PRIORITY_HINT = "High/Medium/Low"
EXIT_CHOICE = 7


def _parse_positive_int(raw: str) -> Optional[int]:
    raw = raw.strip().rstrip('.')
    if not raw.isdecimal() or int(raw) < 1:
        return None
    return int(raw)


class CLI:
    def __init__(self, store: TaskStore, path: Path, autosave: bool = False, clear: bool = True):
        self.store: TaskStore = store
        self.path: Path = Path(path)
        self.autosave: bool = autosave
        self.clear: bool = clear
        self.menu: Dict[int, Tuple[str, Callable[[], object]]] = {
            1: ("Add Task", self._add),
            2: ("View All Tasks", self._view_all),
            3: ("View Pending Tasks", self._view_pending),
            4: ("Edit Task", self._edit),
            5: ("Mark Task as Completed", self._complete),
            6: ("Delete Task", self._delete),
            EXIT_CHOICE: ("Save and Exit", self._exit),
        }

    def run(self) -> int:
        """Main menu loop; returns the process exit code.

        0 after a successful save-and-exit. Ctrl-C or end of input leaves
        with 1 and without saving.
        """
        logger.info("Session started with %s", self.store)
        try:
            while True:
                self._header()
                self._show_menu()
                choice = _parse_positive_int(input("\nEnter your choice: "))
                if choice not in self.menu:
                    print("Invalid choice. Please try again.")
                    self._pause()
                    continue
                if choice == EXIT_CHOICE:
                    if self._exit():
                        return 0
                    continue
                self.menu[choice][1]()
        except (KeyboardInterrupt, EOFError):
            print("\nInterrupted. Unsaved changes were discarded.")
            logger.warning("Session interrupted; %s left unsaved", self.store)
            return 1

    # -------------------- screen helpers --------------------
    def _clear_screen(self) -> None:
        if self.clear:
            click.clear()

    def _header(self) -> None:
        self._clear_screen()
        print(color(BANNER, HEADER_COLOR))
        print(color("=" * len(BANNER), HEADER_COLOR) + "\n")

    def _show_menu(self) -> None:
        for number, (label, _) in self.menu.items():
            print(f"{number}. {label}")

    def _pause(self) -> None:
        input("\nPress Enter to continue...")
        self._clear_screen()

    def _error(self, message: str) -> None:
        print(color(message, ERROR_COLOR))

    # -------------------- prompts --------------------
    def _prompt_description(self) -> str:
        description = input("Enter task description: ").strip()
        while not description:
            description = input("Description cannot be empty. Try again: ").strip()
        return description

    def _prompt_priority(self, prompt: str, allow_empty: bool = False) -> Optional[Priority]:
        """Ask until a valid priority is given; None only when allow_empty and input is blank."""
        while True:
            raw = input(prompt).strip()
            if not raw and allow_empty:
                return None
            try:
                return Priority.parse(raw)
            except ValueError:
                print("Invalid priority. Please choose High, Medium, or Low.")

    def _prompt_id(self, prompt: str) -> Optional[int]:
        task_id = _parse_positive_int(input(prompt))
        if task_id is None:
            self._error("Invalid id.")
        return task_id

    def _select_task(self, shown: List[Task], include_completed: bool, prompt: str) -> Optional[Task]:
        """List tasks, ask for an id, and look it up. Reports every failure itself."""
        display_tasks(shown, include_completed)
        if not shown:
            return None
        task_id = self._prompt_id(prompt)
        if task_id is None:
            return None
        task = self.store.find(task_id)
        if task is None:
            self._error("Task not found.")
        return task

    # -------------------- persistence --------------------
    def _save(self) -> bool:
        try:
            Storage.save_tasks(self.path, self.store.all())
        except OSError as exc:
            logger.exception("Saving tasks to %s failed", self.path)
            self._error(f"Error: tasks were NOT saved ({exc}).")
            return False
        return True

    def _changed(self) -> None:
        if self.autosave:
            self._save()

    # -------------------- operations --------------------
    def _add(self) -> None:
        self._header()
        description = self._prompt_description()
        priority = self._prompt_priority(f"Enter task priority ({PRIORITY_HINT}): ")
        task_id = self.store.add(description, priority)
        print(f"Task added successfully! (id {task_id})")
        self._changed()
        self._pause()

    def _view_all(self) -> None:
        self._header()
        display_tasks(self.store.all())
        self._pause()

    def _view_pending(self) -> None:
        self._header()
        display_tasks(self.store.all(), include_completed=False)
        self._pause()

    def _edit(self) -> None:
        self._header()
        task = self._select_task(self.store.all(), True, "Enter task ID to edit: ")
        if task is not None:
            print(f"Current description: {task.description}")
            description = input("Enter new description (or press Enter to keep current): ").strip()
            print(f"Current priority: {task.priority}")
            priority = self._prompt_priority(
                f"Enter new priority ({PRIORITY_HINT}, or press Enter to keep current): ",
                allow_empty=True)
            self.store.update(task.id, description=description, priority=priority)
            print("Task updated successfully!")
            self._changed()
        self._pause()

    def _complete(self) -> None:
        self._header()
        task = self._select_task(self.store.pending(), False, "Enter task ID to mark as completed: ")
        if task is not None:
            if task.completed:
                print("Task is already completed.")
            else:
                self.store.mark_completed(task.id)
                print("Task marked as completed!")
                self._changed()
        self._pause()

    def _delete(self) -> None:
        self._header()
        task = self._select_task(self.store.all(), True, "Enter task ID to delete: ")
        if task is not None:
            self.store.delete(task.id)
            print("Task deleted successfully!")
            self._changed()
        self._pause()

    def _exit(self) -> bool:
        if not self._save():
            self._pause()
            return False
        print("Tasks saved. Goodbye!")
        logger.info("Saved %s to %s", self.store, self.path)
        return True
