"""Repository handle and work-tree validation."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from smartgit.git.errors import CommandIntent, GitError, NotARepository, classify_failure
from smartgit.git.runner import GitOptions, run_git, run_git_checked

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repository:
    """A path verified to be inside a work tree when the workflow started.

    Holds no repository state; every query goes back to git.
    """
    path: Path
    options: GitOptions = field(default_factory=GitOptions)


def ensure_repo(path: Path, options: GitOptions | None = None) -> None:
    """Raise NotARepository unless path is inside a git work tree."""
    result = run_git(["rev-parse", "--is-inside-work-tree"], path, options=options)
    if not result.success:
        raise classify_failure(result, CommandIntent.REPO_CHECK)
    if result.stdout_text.strip() != "true":
        raise NotARepository(
            f"{path} is not inside a git work tree", result.args, result.stderr_text,
        )


def open_repository(path: Path, options: GitOptions | None = None) -> Repository:
    """Validate path and return a handle for it."""
    options = options or GitOptions()
    ensure_repo(path, options)
    return Repository(path=Path(path), options=options)


def refresh_index(repo: Repository) -> bool:
    """Best-effort `update-index -q --refresh`. Failures are logged, never raised."""
    try:
        result = run_git(["update-index", "-q", "--refresh"], repo.path, options=repo.options)
    except GitError as e:
        logger.warning(f"update-index ignored failure: {e}")
        return False
    if not result.success:
        logger.warning(f"update-index ignored failure: exit={result.returncode}")
        return False
    return True


def get_repo_root(repo: Repository) -> Path:
    """Canonical top-level directory of the work tree."""
    result = run_git_checked(["rev-parse", "--show-toplevel"], repo.path, options=repo.options)
    return Path(result.stdout_text.rstrip("\r\n"))
