"""Shared fixtures: a scripted stand-in for the git binary."""

import io
from unittest.mock import MagicMock, patch

import pytest

from smartgit.git.repo import Repository
from smartgit.lib.config import SmartGitConfig
from smartgit.workflow.context import WorkflowContext


def _strip_config_flags(args: list[str]) -> list[str]:
    """Drop leading `-c key=value` pairs so responses match on the subcommand."""
    while len(args) >= 2 and args[0] == "-c":
        args = args[2:]
    return args


def fake_process(returncode=0, stdout=b"", stderr=b"", capture=True):
    """A stand-in for a finished Popen whose pipes hold the given bytes."""
    proc = MagicMock(returncode=returncode)
    proc.stdout = io.BytesIO(stdout) if capture else None
    proc.stderr = io.BytesIO(stderr)
    proc.wait.return_value = returncode
    return proc


class FakeGit:
    """Replaces subprocess.Popen in smartgit.git.runner.

    Responses are matched on argv prefix (after `git -C <repo>` and any
    `-c` pairs); the most recently registered match wins.
    """

    def __init__(self):
        self.responses: list[tuple[tuple[str, ...], int, bytes, bytes]] = []
        self.calls: list[list[str]] = []
        self.commands: list[list[str]] = []
        self.passthrough: list[list[str]] = []
        self.on("rev-parse", "--is-inside-work-tree", stdout=b"true\n")

    def on(self, *prefix: str, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
        self.responses.append((prefix, returncode, stdout, stderr))
        return self

    def __call__(self, cmd, stdout=None, stderr=None, stdin=None):
        args = list(cmd[3:])
        capture = stdout is not None
        self.commands.append(list(cmd))
        self.calls.append(args)
        if not capture:
            self.passthrough.append(args)
        match_args = _strip_config_flags(args)
        for prefix, rc, out, err in reversed(self.responses):
            if tuple(match_args[:len(prefix)]) == prefix:
                return fake_process(rc, out, err, capture)
        return fake_process(capture=capture)

    def called(self, *prefix: str) -> list[list[str]]:
        """All recorded calls whose subcommand starts with prefix."""
        return [
            c for c in self.calls
            if tuple(_strip_config_flags(c)[:len(prefix)]) == prefix
        ]


@pytest.fixture
def fake_git():
    fake = FakeGit()
    with patch("smartgit.git.runner.subprocess.Popen", side_effect=fake):
        yield fake


@pytest.fixture
def repo(tmp_path):
    return Repository(path=tmp_path)


@pytest.fixture
def make_ctx(tmp_path):
    """Factory for a WorkflowContext with scripted answers."""
    def _make(answers=(), message="", config=None):
        remaining = list(answers)
        gates = []

        def confirm(gate):
            gates.append(gate)
            return remaining.pop(0) if remaining else False

        ctx = WorkflowContext(
            repo_path=tmp_path,
            config=config or SmartGitConfig(),
            confirm=confirm,
            ask_message=lambda: message,
        )
        ctx.gates = gates
        return ctx
    return _make
