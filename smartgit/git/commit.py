"""Git index and commit operations."""

from smartgit.git.repo import Repository
from smartgit.git.runner import GitResult, run_git_checked


def stage_paths(repo: Repository, paths: list[str]) -> GitResult:
    """Stage specific paths in one `git add` call."""
    return run_git_checked(["add", "--"] + list(paths), repo.path, options=repo.options)


def unstage_removed(repo: Repository, paths: list[str]) -> GitResult:
    """Record deletions in the index only; files on disk are untouched."""
    return run_git_checked(
        ["rm", "--cached", "--quiet", "--"] + list(paths), repo.path, options=repo.options,
    )


def commit(repo: Repository, message: str) -> str:
    """Create a commit with the given message; returns git's summary output."""
    result = run_git_checked(["commit", "-m", message], repo.path, options=repo.options)
    return result.stdout_text.rstrip("\r\n")


def write_tree(repo: Repository) -> str:
    """Write the current index as a tree object and return its id."""
    result = run_git_checked(["write-tree"], repo.path, options=repo.options)
    return result.stdout_text.strip()


def commit_tree(repo: Repository, tree: str, parent: str | None, message: str) -> str:
    """Create a commit object for tree without touching any ref."""
    args = ["commit-tree", tree]
    if parent:
        args += ["-p", parent]
    args += ["-m", message]
    result = run_git_checked(args, repo.path, options=repo.options)
    return result.stdout_text.strip()
