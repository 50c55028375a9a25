"""Shared rich consoles for command output."""

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def ok(text: str) -> None:
    console.print(f"[green]{escape(text)}[/green]")


def note(text: str) -> None:
    console.print(f"[yellow]{escape(text)}[/yellow]")


def refuse(text: str) -> None:
    console.print(f"[red]{escape(text)}[/red]")


def plain(text: str) -> None:
    console.print(escape(text))


def print_git_error(error) -> None:
    """Print a GitError with its command and verbatim stderr."""
    err_console.print(f"[red]ERROR ({type(error).__name__}):[/red] {escape(str(error))}")
