"""Git command runner.

Every call is `git -C <repo> ...`: the working directory is fixed by flag,
never by changing our own cwd, so one runner serves any repository path.
"""

import logging
import os
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from smartgit.git.errors import (
    CommandIntent,
    OutputTooLarge,
    ProcessSpawnFailure,
    check_result,
)

logger = logging.getLogger(__name__)

GIT_BINARY = "git"
DEFAULT_MAX_OUTPUT_BYTES = 1 << 20
READ_CHUNK = 64 * 1024


class Termination(Enum):
    EXITED = "exited"
    SIGNALED = "signaled"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GitOptions:
    """Per-invocation knobs shared by every call in a workflow."""
    show_calls: bool = False
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES


@dataclass
class GitResult:
    """Result of a git command. Owned by the call that produced it."""
    args: list[str]
    termination: Termination
    returncode: int | None
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        return self.termination is Termination.EXITED and self.returncode == 0

    @property
    def stdout_text(self) -> str:
        return os.fsdecode(self.stdout)

    @property
    def stderr_text(self) -> str:
        return os.fsdecode(self.stderr)


def _termination_for(returncode: int | None) -> Termination:
    if returncode is None:
        return Termination.UNKNOWN
    if returncode < 0:
        return Termination.SIGNALED
    return Termination.EXITED


def _quote_call(cwd: Path, args: list[str]) -> str:
    quoted = "".join(f" '{a}'" for a in args)
    return f"CALL: git -C '{cwd}'{quoted}"


def _drain(stream, sink: bytearray, limit: int, proc: subprocess.Popen, overflowed: list[str], name: str) -> None:
    """Read stream to EOF into sink. Past limit, record the overflow and kill proc."""
    with stream:
        while True:
            chunk = stream.read1(READ_CHUNK)
            if not chunk:
                return
            sink.extend(chunk)
            if len(sink) > limit:
                overflowed.append(name)
                proc.kill()
                return


def run_git(
    args: list[str],
    cwd: Path,
    capture_output: bool = True,
    options: GitOptions | None = None,
) -> GitResult:
    """
    Run a git command against the repository at cwd.

    Args:
        args: Git command arguments (e.g., ["status", "--porcelain", "-z"])
        cwd: Repository path, passed to git with -C
        capture_output: Collect stdout. When False stdout goes straight to
            the terminal; stderr is always collected.
        options: Trace and output-bound settings

    Returns:
        GitResult; a nonzero exit is NOT raised here.

    Raises:
        ProcessSpawnFailure: git could not be started
        OutputTooLarge: a captured stream exceeded options.max_output_bytes
    """
    options = options or GitOptions()
    cmd = [GIT_BINARY, "-C", str(cwd)] + list(args)

    if options.show_calls:
        logger.info(_quote_call(cwd, args))

    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE if capture_output else None,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
        )
    except OSError as e:
        raise ProcessSpawnFailure(f"could not start git: {e}", cmd) from e

    limit = options.max_output_bytes
    stdout, stderr = bytearray(), bytearray()
    overflowed: list[str] = []

    # stderr on a thread so neither pipe can fill up and stall git
    stderr_reader = threading.Thread(
        target=_drain, args=(proc.stderr, stderr, limit, proc, overflowed, "stderr"), daemon=True,
    )
    stderr_reader.start()
    if proc.stdout is not None:
        _drain(proc.stdout, stdout, limit, proc, overflowed, "stdout")
    stderr_reader.join()
    returncode = proc.wait()

    if overflowed:
        raise OutputTooLarge(f"git {overflowed[0]} exceeded {limit} bytes", cmd)

    result = GitResult(
        args=cmd,
        termination=_termination_for(returncode),
        returncode=returncode,
        stdout=bytes(stdout),
        stderr=bytes(stderr),
    )
    if not result.success:
        logger.debug(
            f"git failed: argv={cmd} exit={result.returncode} "
            f"termination={result.termination.value}\nstderr:\n{result.stderr_text}"
        )
    return result


def run_git_checked(
    args: list[str],
    cwd: Path,
    capture_output: bool = True,
    options: GitOptions | None = None,
    intent: CommandIntent = CommandIntent.GENERIC,
) -> GitResult:
    """run_git, raising the classified error on any failure."""
    return check_result(run_git(args, cwd, capture_output, options), intent)
