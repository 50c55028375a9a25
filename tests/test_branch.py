"""Tests for smartgit.git.branch: upstream resolution and divergence."""

import pytest

from smartgit.git.branch import (
    ABSENT_UPSTREAM,
    AbsentUpstream,
    AheadBehind,
    compute_ahead_behind,
    get_commits_between,
    get_current_branch,
    get_head_branch,
    get_head_sha,
    is_detached,
    parse_left_right_counts,
    resolve_upstream,
    short_sha,
)
from smartgit.git.errors import GitFailed

NO_UPSTREAM = b"fatal: no upstream configured for branch 'feature'\n"


class TestParseLeftRightCounts:
    """Left is behind, right is ahead; never swapped."""

    def test_tab_separated_pair(self):
        assert parse_left_right_counts("3\t5\n") == AheadBehind(ahead=5, behind=3)

    def test_space_separated_pair(self):
        assert parse_left_right_counts("0 2") == AheadBehind(ahead=2, behind=0)

    def test_non_numeric_is_git_failed(self):
        with pytest.raises(GitFailed):
            parse_left_right_counts("x\t1")

    def test_single_value_is_git_failed(self):
        with pytest.raises(GitFailed):
            parse_left_right_counts("4\n")

    def test_empty_is_git_failed(self):
        with pytest.raises(GitFailed):
            parse_left_right_counts("")


class TestAbsentUpstream:
    def test_singleton(self):
        assert AbsentUpstream() is ABSENT_UPSTREAM

    def test_not_equal_to_zero_counts(self):
        assert ABSENT_UPSTREAM != AheadBehind(0, 0)


class TestResolveUpstream:

    def test_returns_ref_name(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "--symbolic-full-name", stdout=b"origin/main\n")
        assert resolve_upstream(repo) == "origin/main"

    def test_no_upstream_is_absent_value(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "--symbolic-full-name",
                    returncode=128, stderr=NO_UPSTREAM)
        assert resolve_upstream(repo) is ABSENT_UPSTREAM

    def test_other_failure_raises(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "--symbolic-full-name",
                    returncode=128, stderr=b"fatal: HEAD does not point to a branch\n")
        with pytest.raises(GitFailed):
            resolve_upstream(repo)


class TestComputeAheadBehind:

    def test_counts_against_upstream(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "--symbolic-full-name", stdout=b"origin/main\n")
        fake_git.on("rev-list", stdout=b"3\t5\n")
        assert compute_ahead_behind(repo) == AheadBehind(ahead=5, behind=3)
        assert fake_git.called("rev-list") == [
            ["rev-list", "--left-right", "--count", "origin/main...HEAD"]
        ]

    def test_absent_upstream_skips_comparison(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "--symbolic-full-name",
                    returncode=128, stderr=NO_UPSTREAM)
        assert compute_ahead_behind(repo) is ABSENT_UPSTREAM
        assert fake_git.called("rev-list") == []

    def test_malformed_counts_raise_git_failed(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "--symbolic-full-name", stdout=b"origin/main\n")
        fake_git.on("rev-list", stdout=b"garbage\n")
        with pytest.raises(GitFailed) as exc:
            compute_ahead_behind(repo)
        assert "rev-list --left-right --count origin/main...HEAD" in str(exc.value)


class TestHeadQueries:

    def test_current_branch(self, fake_git, repo):
        fake_git.on("rev-parse", "--abbrev-ref", "HEAD", stdout=b"main\n")
        assert get_current_branch(repo) == "main"

    def test_detached(self):
        assert is_detached("HEAD")
        assert not is_detached("main")

    def test_head_branch_none_when_detached(self, fake_git, repo):
        fake_git.on("symbolic-ref", returncode=1)
        assert get_head_branch(repo) is None

    def test_head_sha_none_when_unborn(self, fake_git, repo):
        fake_git.on("rev-parse", "--verify", returncode=1)
        assert get_head_sha(repo) is None

    def test_head_sha(self, fake_git, repo):
        fake_git.on("rev-parse", "--verify", stdout=b"abc123\n")
        assert get_head_sha(repo) == "abc123"

    def test_short_sha(self, fake_git, repo):
        fake_git.on("rev-parse", "--short", stdout=b"deadbee\n")
        assert short_sha(repo, "deadbeefcafe") == "deadbee"

    def test_short_sha_falls_back_to_truncation(self, fake_git, repo):
        fake_git.on("rev-parse", "--short", returncode=128)
        assert short_sha(repo, "0123456789abcdef") == "0123456"

    def test_commits_between(self, fake_git, repo):
        fake_git.on("log", stdout=b"abc1 first\nabc2 second\n")
        assert get_commits_between(repo, "origin/main") == ["abc1 first", "abc2 second"]
        assert fake_git.called("log") == [["log", "--oneline", "origin/main..HEAD"]]
