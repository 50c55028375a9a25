"""Git status operations and the porcelain -z parser."""

import os
from dataclasses import dataclass

from smartgit.git.errors import MalformedOutput
from smartgit.git.repo import Repository
from smartgit.git.runner import run_git_checked

UNTRACKED = "?"
IGNORED = "!"
RENAME_CODES = ("R", "C")


@dataclass(frozen=True)
class Change:
    """One porcelain status record."""
    index_status: str
    worktree_status: str
    path: str
    old_path: str | None = None  # only for renames/copies

    def __post_init__(self):
        is_rename = self.index_status in RENAME_CODES
        if is_rename != (self.old_path is not None):
            raise ValueError(
                f"old_path must be set iff index status is R/C "
                f"(got {self.index_status!r}, old_path={self.old_path!r})"
            )

    @property
    def is_untracked(self) -> bool:
        return self.index_status == UNTRACKED and self.worktree_status == UNTRACKED

    @property
    def is_ignored(self) -> bool:
        return self.index_status == IGNORED and self.worktree_status == IGNORED

    def __str__(self) -> str:
        codes = f"{self.index_status}{self.worktree_status}"
        if self.old_path is not None:
            return f"{codes} {self.old_path} -> {self.path}"
        return f"{codes} {self.path}"


def _read_field(raw: bytes, start: int) -> tuple[str, int]:
    """Read a NUL-terminated field starting at start; return (text, next_offset)."""
    end = raw.find(b"\0", start)
    if end == -1:
        raise MalformedOutput(
            f"status record at byte {start} is missing its terminating NUL"
        )
    if end == start:
        raise MalformedOutput(f"empty path in status record at byte {start}")
    return os.fsdecode(raw[start:end]), end + 1


def parse_status_z(raw: bytes) -> list[Change]:
    """
    Parse `git status --porcelain -z` output.

    Each record is "XY <path>\\0". When X is R or C a second NUL-terminated
    field follows: the first field read is the old path, the second the new
    one. Records come back in emission order.

    Raises:
        MalformedOutput: any record is truncated or badly framed. The whole
            buffer is rejected; partial results are never returned.
    """
    changes: list[Change] = []
    i = 0
    while i < len(raw):
        if len(raw) - i < 3:
            raise MalformedOutput(f"truncated status header at byte {i}")
        index_status = chr(raw[i])
        worktree_status = chr(raw[i + 1])
        if raw[i + 2:i + 3] != b" ":
            raise MalformedOutput(f"expected space after status codes at byte {i + 2}")

        first, i = _read_field(raw, i + 3)
        if index_status in RENAME_CODES:
            second, i = _read_field(raw, i)
            changes.append(Change(index_status, worktree_status, second, old_path=first))
        else:
            changes.append(Change(index_status, worktree_status, first))

    return changes


def get_status_entries(repo: Repository) -> list[Change]:
    """Current working tree and index changes, untracked files included."""
    result = run_git_checked(["status", "--porcelain", "-z"], repo.path, options=repo.options)
    return parse_status_z(result.stdout)


def _lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.strip()]


def get_staged_files(repo: Repository) -> list[str]:
    """Paths staged for the next commit (submodules ignored)."""
    result = run_git_checked(
        ["diff", "--cached", "--name-only", "--ignore-submodules", "--"],
        repo.path, options=repo.options,
    )
    return _lines(result.stdout_text)


def get_staged_conflicts(repo: Repository) -> list[str]:
    """Staged paths that still carry an unresolved merge."""
    result = run_git_checked(
        ["diff", "--cached", "--name-only", "--diff-filter=U"],
        repo.path, options=repo.options,
    )
    return _lines(result.stdout_text)
