"""Git remote operations.

Pushes run in passthrough mode: git's stdout goes straight to the terminal
while the push is in progress, and stderr comes back on the result.
"""

from pathlib import Path

from smartgit.git.repo import Repository
from smartgit.git.runner import GitResult, run_git_checked


def push(repo: Repository, cwd: Path | None = None) -> GitResult:
    """Push the current branch to its configured upstream."""
    return run_git_checked(["push"], cwd or repo.path, capture_output=False, options=repo.options)


def push_set_upstream(repo: Repository, remote: str, branch: str, cwd: Path | None = None) -> GitResult:
    """Push and set upstream tracking."""
    return run_git_checked(
        ["push", "-u", remote, branch], cwd or repo.path,
        capture_output=False, options=repo.options,
    )
