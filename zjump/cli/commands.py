"""CLI commands for zjump."""

import os
import re
from enum import IntEnum
from importlib.resources import files
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from zjump import __logo__, __version__
from zjump.config.loader import load_config
from zjump.config.schema import Config
from zjump.errors import ZjumpError
from zjump.logging_config import setup_logging
from zjump.query.scoring import Scorer
from zjump.service import PathStore
from zjump.utils.helpers import ensure_dir, get_share_path

app = typer.Typer(
    name="zjump",
    help=f"{__logo__} zjump - jump to frecently used directories",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


class Outcome(IntEnum):
    """Exit codes understood by the shell helper."""
    SUCCESS = 0
    DO_CD = 69
    NO_OUTPUT = 70


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} zjump v{__version__}")
        raise typer.Exit()


# ============================================================================
# Actions
# ============================================================================


def _fork_is_parent() -> bool:
    """Fork; the child detaches from the caller's cwd and stdin."""
    if os.fork():
        return True
    os.chdir("/")
    os.close(0)
    return False


def _add(store: PathStore, path: str, *, background: bool) -> Outcome:
    if background and _fork_is_parent():
        return Outcome.NO_OUTPUT
    store.add(path)
    return Outcome.NO_OUTPUT


def _clean(store: PathStore) -> Outcome:
    removed = store.clean()
    console.print(f"Cleaned {removed} {'entry' if removed == 1 else 'entries'}.")
    return Outcome.SUCCESS


def _complete(store: PathStore, config: Config, line: str) -> Outcome:
    for path in store.complete(line, config.command_name):
        typer.echo(path)
    return Outcome.SUCCESS


def helper_script() -> bytes:
    """The bundled shell integration script."""
    return files("zjump").joinpath("shell", "z.sh").read_bytes()


def _add_to_profile(config: Config) -> Outcome:
    target = get_share_path() / "z.sh"
    try:
        ensure_dir(target.parent)
        target.write_bytes(helper_script())
    except OSError as e:
        raise ZjumpError(f"writing helper script to {target}: {e}") from e
    console.print(f"written helper script to {escape(str(target))}")

    if "'" in str(target):
        raise ZjumpError("cowardly refusing to handle paths with single quotes")
    source_line = f"\n\n. '{target}'\n"

    for rc in config.shell.profiles:
        rc_path = Path.home() / rc
        try:
            fd = os.open(rc_path, os.O_WRONLY | os.O_APPEND)
        except OSError as e:
            err_console.print(f"couldn't append to {escape(str(rc_path))}: {escape(str(e))}")
            continue
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(source_line)
        console.print(f"appended '. .../z.sh' to {escape(str(rc_path))}")

    return Outcome.SUCCESS


def _scorer(frecent: bool, rank: bool, recent: bool) -> Scorer:
    if frecent + rank + recent > 1:
        raise typer.BadParameter("only one of --frecent, --rank, --recent may be given")
    if recent:
        return Scorer.RECENT
    if rank:
        return Scorer.RANK
    return Scorer.FRECENT


def _expression(expressions: list[str], current_dir: bool) -> str:
    expr = ""
    if current_dir:
        expr = re.escape(os.getcwd()) + "/"
    for value in expressions:
        if expr:
            expr += ".*"
        expr += value
    return expr


def _print_listing(results) -> None:
    table = Table(box=None, show_header=False, pad_edge=False)
    table.add_column("Score", justify="right", style="cyan", no_wrap=True)
    table.add_column("Path", overflow="fold")
    for result in results:
        table.add_row(f"{result.score:.3f}", Text(result.path))
    console.print(table)


def _query(store: PathStore, expressions: list[str], scorer: Scorer, current_dir: bool, list_all: bool) -> Outcome:
    if not expressions:
        # no expressions: show the whole table
        list_all = True

    results = store.search(_expression(expressions, current_dir), scorer)
    if not results:
        return Outcome.NO_OUTPUT

    if list_all:
        _print_listing(results)
        return Outcome.SUCCESS

    for result in reversed(results):
        if not os.path.isdir(result.path):
            err_console.print(f"not a dir (run --clean to expunge): {escape(result.path)}")
            continue
        typer.echo(result.path)
        return Outcome.DO_CD

    return Outcome.NO_OUTPUT


# ============================================================================
# Entry point
# ============================================================================


@app.command()
def main(
    expressions: Optional[List[str]] = typer.Argument(None, help="Terms to filter by"),
    frecent: bool = typer.Option(False, "--frecent", "-f", help="Sort by a hybrid of the rank and age (default)"),
    rank: bool = typer.Option(False, "--rank", "-r", help="Sort by the match's rank directly (ignore the time component)"),
    recent: bool = typer.Option(False, "--recent", "-t", help="Sort by the match's age directly (ignore the rank component)"),
    current_dir: bool = typer.Option(False, "--current-dir", "-c", help="Only return matches in the current dir"),
    list_all: bool = typer.Option(False, "--list", "-l", help="Show all matching values"),
    clean: bool = typer.Option(False, "--clean", help="Remove entries which aren't dirs right now"),
    add_to_profile: bool = typer.Option(False, "--add-to-profile", hidden=True, help="Add the helper script to the profile"),
    add: Optional[str] = typer.Option(None, "--add", metavar="PATH", hidden=True, help="Add a new entry to the database"),
    add_blocking: Optional[str] = typer.Option(None, "--add-blocking", metavar="PATH", hidden=True, help="Add a new entry, without forking"),
    complete: Optional[str] = typer.Option(None, "--complete", metavar="PREFIX", hidden=True, help="The line we're trying to complete"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to zjump config json"),
    version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
):
    """Jump to the best match, or list matches."""
    config = load_config(config_path)
    setup_logging(os.environ.get("LOG_LEVEL") or config.log_level)
    scorer = _scorer(frecent, rank, recent)
    store = PathStore(config.data_path, config.store)

    try:
        if add is not None or add_blocking is not None:
            outcome = _add(store, add if add is not None else add_blocking, background=add is not None)
        elif complete is not None:
            outcome = _complete(store, config, complete)
        elif clean:
            outcome = _clean(store)
        elif add_to_profile:
            outcome = _add_to_profile(config)
        else:
            outcome = _query(store, expressions or [], scorer, current_dir, list_all)
    except ZjumpError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    raise typer.Exit(int(outcome))


if __name__ == "__main__":
    app()
