"""Git diff operations."""

from smartgit.git.repo import Repository
from smartgit.git.runner import run_git_checked

# No pager, no color: clean ASCII for capture.
PLAIN_OUTPUT = ["-c", "core.pager=cat", "-c", "color.ui=false"]


def get_unstaged_diff(repo: Repository) -> str:
    """Worktree changes not yet staged."""
    result = run_git_checked(["diff"], repo.path, options=repo.options)
    return result.stdout_text.rstrip("\r\n")


def get_files_between(repo: Repository, upstream: str) -> list[str]:
    """Files changed on HEAD relative to upstream."""
    result = run_git_checked(["diff", "--name-only", f"{upstream}..HEAD"], repo.path, options=repo.options)
    return [f.strip() for f in result.stdout_text.splitlines() if f.strip()]


def diffstat(repo: Repository, base: str, sha: str) -> str:
    """`diff --stat` between two commits."""
    result = run_git_checked(
        PLAIN_OUTPUT + ["diff", "--stat", "--no-color", base, sha],
        repo.path, options=repo.options,
    )
    return result.stdout_text.rstrip("\r\n")


def show_stat(repo: Repository, sha: str) -> str:
    """`show --stat` of a single commit (used when it has no parent)."""
    result = run_git_checked(
        PLAIN_OUTPUT + ["show", "--stat", "--no-color", sha],
        repo.path, options=repo.options,
    )
    return result.stdout_text.rstrip("\r\n")


def get_staged_patch(repo: Repository) -> str:
    """Full patch of what is staged."""
    result = run_git_checked(PLAIN_OUTPUT + ["diff", "--cached", "-p"], repo.path, options=repo.options)
    return result.stdout_text.rstrip("\r\n")
