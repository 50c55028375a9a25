"""Error taxonomy for git invocations.

Every failure that leaves smartgit.git is one of the classes below.
"no upstream configured" is the exception to that rule: it is caught inside
branch.py and surfaced as the ABSENT_UPSTREAM value instead.
"""

from enum import Enum


class CommandIntent(Enum):
    """What the caller was asking git when the command failed.

    Identical exit codes mean different things for different queries, so
    classification needs to know the call site.
    """
    GENERIC = "generic"
    UPSTREAM_QUERY = "upstream_query"
    REPO_CHECK = "repo_check"


NO_UPSTREAM_MARKER = "no upstream"


class GitError(Exception):
    """Base class for every smartgit git failure."""

    def __init__(self, message: str, argv: list[str] | None = None, stderr: str = ""):
        self.message = message
        self.argv = list(argv) if argv else []
        self.stderr = stderr
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.argv:
            text += f"\n  command: {' '.join(self.argv)}"
        if self.stderr.strip():
            text += f"\n  stderr:\n{self.stderr.rstrip()}"
        return text


class NotARepository(GitError):
    """Target path is not inside a git work tree."""


class ProcessSpawnFailure(GitError):
    """The git process could not be started at all."""


class GitFailed(GitError):
    """git exited nonzero."""

    def __init__(self, message: str, argv: list[str] | None = None, stderr: str = "",
                 returncode: int | None = None):
        self.returncode = returncode
        super().__init__(message, argv, stderr)


class AbnormalTermination(GitFailed):
    """git was killed by a signal or ended without an exit status."""


class NoUpstream(GitError):
    """Current branch has no upstream configured."""


class MalformedOutput(GitError):
    """A porcelain status record could not be parsed."""


class OutputTooLarge(GitError):
    """Captured output exceeded the configured bound."""


class InputOutputFailure(GitError):
    """Reading interactive input failed."""


def classify_failure(result, intent: CommandIntent = CommandIntent.GENERIC) -> GitError:
    """Map a failed GitResult to exactly one error.

    Returns (does not raise) one of NoUpstream, NotARepository,
    AbnormalTermination or GitFailed.
    """
    from smartgit.git.runner import Termination

    stderr = result.stderr_text
    if result.termination is not Termination.EXITED:
        return AbnormalTermination(
            f"git terminated abnormally ({result.termination.value})",
            result.args, stderr,
        )

    if intent is CommandIntent.UPSTREAM_QUERY and NO_UPSTREAM_MARKER in stderr:
        return NoUpstream("no upstream configured for current branch", result.args, stderr)

    if intent is CommandIntent.REPO_CHECK:
        return NotARepository("not inside a git work tree", result.args, stderr)

    return GitFailed(
        f"git exited with status {result.returncode}",
        result.args, stderr, returncode=result.returncode,
    )


def check_result(result, intent: CommandIntent = CommandIntent.GENERIC):
    """Return result unchanged on success, raise the classified error otherwise."""
    if result.success:
        return result
    raise classify_failure(result, intent)
