"""Branch, upstream and divergence queries."""

import logging
from dataclasses import dataclass

from smartgit.git.errors import CommandIntent, GitError, GitFailed, NoUpstream
from smartgit.git.repo import Repository
from smartgit.git.runner import run_git, run_git_checked

logger = logging.getLogger(__name__)

DETACHED_HEAD = "HEAD"
SHORT_SHA_LEN = 7


@dataclass(frozen=True)
class AheadBehind:
    """Commit counts unique to HEAD (ahead) and to its upstream (behind)."""
    ahead: int
    behind: int


class AbsentUpstream:
    """No upstream is configured, so no comparison was possible.

    Distinct from AheadBehind(0, 0), which means "compared and equal".
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT_UPSTREAM"

    def __bool__(self) -> bool:
        return False


ABSENT_UPSTREAM = AbsentUpstream()


def _first_line(text: str) -> str:
    return text.rstrip("\r\n")


def resolve_upstream(repo: Repository) -> str | AbsentUpstream:
    """Upstream ref of the current branch (e.g. "origin/main"), or ABSENT_UPSTREAM."""
    try:
        result = run_git_checked(
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"],
            repo.path, options=repo.options, intent=CommandIntent.UPSTREAM_QUERY,
        )
    except NoUpstream:
        logger.info(f"no upstream configured for {repo.path}")
        return ABSENT_UPSTREAM
    return _first_line(result.stdout_text)


def parse_left_right_counts(text: str, argv: list[str] | None = None) -> AheadBehind:
    """
    Parse `rev-list --left-right --count <upstream>...HEAD` output.

    Left is the upstream side (behind), right is HEAD (ahead).

    Raises:
        GitFailed: the output is not exactly two non-negative integers
    """
    parts = text.split()
    if len(parts) != 2:
        raise GitFailed(f"expected two counts from rev-list, got {text.strip()!r}", argv)
    try:
        behind, ahead = int(parts[0]), int(parts[1])
    except ValueError:
        raise GitFailed(f"non-numeric counts from rev-list: {text.strip()!r}", argv) from None
    if behind < 0 or ahead < 0:
        raise GitFailed(f"negative counts from rev-list: {text.strip()!r}", argv)
    return AheadBehind(ahead=ahead, behind=behind)


def compute_ahead_behind(repo: Repository) -> AheadBehind | AbsentUpstream:
    """Divergence between HEAD and its upstream, or ABSENT_UPSTREAM."""
    upstream = resolve_upstream(repo)
    if upstream is ABSENT_UPSTREAM:
        return ABSENT_UPSTREAM

    result = run_git_checked(
        ["rev-list", "--left-right", "--count", f"{upstream}...HEAD"],
        repo.path, options=repo.options,
    )
    return parse_left_right_counts(result.stdout_text, result.args)


def get_current_branch(repo: Repository) -> str:
    """Short name of HEAD; "HEAD" when detached."""
    result = run_git_checked(["rev-parse", "--abbrev-ref", "HEAD"], repo.path, options=repo.options)
    return _first_line(result.stdout_text)


def is_detached(branch: str) -> bool:
    return branch == DETACHED_HEAD or not branch


def get_head_branch(repo: Repository) -> str | None:
    """Branch HEAD points at, or None if detached."""
    result = run_git(["symbolic-ref", "-q", "--short", "HEAD"], repo.path, options=repo.options)
    if result.success:
        return _first_line(result.stdout_text) or None
    return None


def get_head_sha(repo: Repository) -> str | None:
    """SHA of HEAD, or None on an unborn branch."""
    result = run_git(["rev-parse", "--verify", "-q", "HEAD"], repo.path, options=repo.options)
    if result.success:
        return _first_line(result.stdout_text) or None
    return None


def short_sha(repo: Repository, sha: str) -> str:
    """Abbreviated object id. Falls back to plain truncation if git can't help."""
    try:
        result = run_git(["rev-parse", "--short", sha], repo.path, options=repo.options)
    except GitError as e:
        logger.debug(f"rev-parse --short failed, truncating: {e}")
        return sha[:SHORT_SHA_LEN]
    if result.success and result.stdout_text.strip():
        return result.stdout_text.strip()
    return sha[:SHORT_SHA_LEN]


def get_commits_between(repo: Repository, upstream: str) -> list[str]:
    """One-line log of commits on HEAD that upstream lacks."""
    result = run_git_checked(["log", "--oneline", f"{upstream}..HEAD"], repo.path, options=repo.options)
    return [line.rstrip("\r") for line in result.stdout_text.splitlines() if line.strip()]
