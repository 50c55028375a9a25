"""Git operations for smartgit.

Every function here shells out to `git -C <repo> ...`; nothing is cached
between calls.

Return type conventions:
- Functions returning GitResult raise on failure; the result is only
  returned on success. Examples: stage_paths(), push()
- Functions returning parsed values (str, list, AheadBehind) raise on
  failure, except the upstream queries, which return ABSENT_UPSTREAM when no
  upstream is configured.
- Functions returning Optional values (get_head_sha(), get_head_branch())
  return None when the state simply does not exist (unborn or detached HEAD).
"""

from smartgit.git.errors import (
    CommandIntent,
    GitError,
    NotARepository,
    ProcessSpawnFailure,
    GitFailed,
    AbnormalTermination,
    NoUpstream,
    MalformedOutput,
    OutputTooLarge,
    InputOutputFailure,
    classify_failure,
    check_result,
)
from smartgit.git.runner import (
    GitOptions,
    GitResult,
    Termination,
    run_git,
    run_git_checked,
)
from smartgit.git.repo import (
    Repository,
    ensure_repo,
    open_repository,
    refresh_index,
    get_repo_root,
)
from smartgit.git.status import (
    Change,
    parse_status_z,
    get_status_entries,
    get_staged_files,
    get_staged_conflicts,
)
from smartgit.git.branch import (
    ABSENT_UPSTREAM,
    AbsentUpstream,
    AheadBehind,
    resolve_upstream,
    compute_ahead_behind,
    parse_left_right_counts,
    get_current_branch,
    is_detached,
    get_head_branch,
    get_head_sha,
    short_sha,
    get_commits_between,
)
from smartgit.git.diff import (
    get_unstaged_diff,
    get_files_between,
    diffstat,
    show_stat,
    get_staged_patch,
)
from smartgit.git.commit import (
    stage_paths,
    unstage_removed,
    commit,
    write_tree,
    commit_tree,
)
from smartgit.git.remote import (
    push,
    push_set_upstream,
)

__all__ = [
    # errors
    "CommandIntent",
    "GitError",
    "NotARepository",
    "ProcessSpawnFailure",
    "GitFailed",
    "AbnormalTermination",
    "NoUpstream",
    "MalformedOutput",
    "OutputTooLarge",
    "InputOutputFailure",
    "classify_failure",
    "check_result",
    # runner
    "GitOptions",
    "GitResult",
    "Termination",
    "run_git",
    "run_git_checked",
    # repo
    "Repository",
    "ensure_repo",
    "open_repository",
    "refresh_index",
    "get_repo_root",
    # status
    "Change",
    "parse_status_z",
    "get_status_entries",
    "get_staged_files",
    "get_staged_conflicts",
    # branch
    "ABSENT_UPSTREAM",
    "AbsentUpstream",
    "AheadBehind",
    "resolve_upstream",
    "compute_ahead_behind",
    "parse_left_right_counts",
    "get_current_branch",
    "is_detached",
    "get_head_branch",
    "get_head_sha",
    "short_sha",
    "get_commits_between",
    # diff
    "get_unstaged_diff",
    "get_files_between",
    "diffstat",
    "show_stat",
    "get_staged_patch",
    # commit
    "stage_paths",
    "unstage_removed",
    "commit",
    "write_tree",
    "commit_tree",
    # remote
    "push",
    "push_set_upstream",
]
