"""Interactive prompts. End-of-input always means the safe answer."""

import sys
from typing import Callable, TextIO

from smartgit.git.errors import InputOutputFailure


def ask_yes_no(question: str, stdin: TextIO | None = None, stdout: TextIO | None = None) -> bool:
    """Ask a [y/N] question. Only a line whose first character is y/Y is a yes."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    stdout.write(f"{question} [y/N]: ")
    stdout.flush()
    try:
        line = stdin.readline()
    except (OSError, UnicodeDecodeError):
        return False
    if not line:  # EOF
        return False
    return line[:1].lower() == "y"


def ask_commit_message(stdin: TextIO | None = None, stdout: TextIO | None = None) -> str:
    """Read one line as the commit message. EOF gives an empty message.

    Raises:
        InputOutputFailure: stdin could not be read
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    stdout.write("Enter commit message: ")
    stdout.flush()
    try:
        line = stdin.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise InputOutputFailure(f"could not read commit message: {e}") from e
    return line.rstrip("\r\n")


def make_confirm(render: Callable[[object], None], ask: Callable[[str], bool] = ask_yes_no):
    """Build a confirm callback that renders the gate's preview before asking."""
    def confirm(gate) -> bool:
        render(gate)
        return ask(gate.question)
    return confirm
