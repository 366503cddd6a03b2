"""Command line interface for git-checkout."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_checkout import __version__
from git_checkout.app import CheckoutApp
from git_checkout.git import GitError, GitRepo, NoBranchesError, list_branches
from git_checkout.selector import CursorPolicy, Selector

app = typer.Typer(help="Interactively check out a local git branch")
console = Console()
logger = logging.getLogger(__name__)


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


def configure_logging(log_file: Optional[Path]) -> None:
    """Send debug logs to a file; the terminal belongs to the TUI."""
    if log_file is None:
        return
    try:
        logging.basicConfig(
            filename=str(log_file),
            level=logging.DEBUG,
            format="%(asctime)s %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
    except OSError as err:
        print(f"[red]Error:[/red] Cannot open log file: {escape(str(err))}")
        raise typer.Exit(code=1) from err


def print_branch_table(repo: GitRepo) -> None:
    """Print local branches with the current one marked."""
    try:
        branches = list_branches(repo)
    except NoBranchesError as err:
        console.print(f"[yellow]{escape(str(err))}[/yellow]")
        return

    table = Table(
        title="Local Branches",
        show_header=True,
        header_style="bold",
        title_style="bold blue",
        show_edge=True,
    )
    table.add_column("Branch", style="cyan", no_wrap=True)
    table.add_column("Last Commit", style="yellow", no_wrap=True)
    for branch in branches:
        display_name = escape(branch.name)
        if branch.is_current:
            display_name = f"{display_name} [turquoise2](current)[/turquoise2]"
        table.add_row(display_name, repo.get_branch_last_commit(branch.name))
    console.print(table)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"git-checkout {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Annotated[Path, typer.Option(help="Path inside the git repository")] = Path("."),
    clamp: Annotated[bool, typer.Option("--clamp", help="Stop at the list ends instead of wrapping around")] = False,
    exit_on_checkout: Annotated[
        bool, typer.Option("--exit-on-checkout", "-x", help="Exit right after a successful checkout")
    ] = False,
    list_only: Annotated[bool, typer.Option("--list", "-l", help="Print the branches and exit")] = False,
    log_file: Annotated[
        Optional[Path], typer.Option(envvar="GIT_CHECKOUT_LOG_FILE", help="Write debug logs to this file")
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit")
    ] = False,
) -> None:
    """Pick a local branch and check it out."""
    configure_logging(log_file)
    repo = get_repo(path)

    if list_only:
        try:
            print_branch_table(repo)
        except GitError as err:
            print(f"[red]Error:[/red] {escape(str(err))}")
            raise typer.Exit(code=1) from err
        return

    policy = CursorPolicy.CLAMP if clamp else CursorPolicy.WRAP
    try:
        selector = Selector.from_repository(repo, policy)
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    logger.debug("Starting TUI with %d branches", len(selector.branches))
    CheckoutApp(selector, exit_on_checkout=exit_on_checkout).run()

    if selector.message and not selector.is_empty:
        if selector.is_error:
            print(f"[red]Error:[/red] {escape(selector.message)}")
        else:
            print(f"[green]{escape(selector.message)}[/green]")


if __name__ == "__main__":
    app()
