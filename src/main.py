"""Main entry point for the terminal task tracker."""
import logging
from pathlib import Path

import click

from cli import CLI
from logging_setup import setup_logging
from storage import DEFAULT_TASKS_FILE, Storage, StorageError
from tracker import TaskStore
import theme

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--file", "tasks_file", type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_TASKS_FILE, show_default=True, help="Task file to load and save.")
@click.option("--autosave/--no-autosave", default=False, show_default=True,
              help="Save after every change instead of only on exit.")
@click.option("--clear/--no-clear", default=True, show_default=True,
              help="Clear the screen between menus.")
@click.option("--color/--no-color", "use_color", default=True,
              help="Allow colored output (NO_COLOR is always honored).")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Also write debug logs to this file.")
@click.option("-v", "--verbose", is_flag=True, help="Show info logs on stderr.")
def main(tasks_file: Path, autosave: bool, clear: bool, use_color: bool,
         log_file: Path, verbose: bool) -> None:
    """Interactive task tracker backed by a plain text file."""
    setup_logging(console_level=logging.INFO if verbose else logging.WARNING, log_file=log_file)
    if not use_color:
        theme.set_enabled(False)
    try:
        tasks, next_id = Storage.load_tasks(tasks_file)
    except (StorageError, OSError) as exc:
        logger.error("Could not load %s: %s", tasks_file, exc)
        raise click.ClickException(f"could not load tasks: {exc}")
    store = TaskStore(tasks, next_id)
    exit_code = CLI(store, tasks_file, autosave=autosave, clear=clear).run()
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
