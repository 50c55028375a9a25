"""Tests for the smartgit CLI: argument parsing and exit codes."""

import logging
from unittest.mock import patch

import pytest

from smartgit.cli import build_parser, main, render_gate
from smartgit.workflow import CommitOutcome, CommitResult, ConfirmGate


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SMARTGIT_CONFIG", raising=False)
    monkeypatch.delenv("SMARTGIT_TRACE", raising=False)
    yield
    logging.getLogger("smartgit.git.runner").setLevel(logging.NOTSET)


class TestParser:

    def test_commit_message(self):
        args = build_parser().parse_args(["commit", "-m", "hello"])
        assert args.command == "commit"
        assert args.message == "hello"
        assert args.repo == "."

    def test_commit_without_message(self):
        assert build_parser().parse_args(["commit"]).message is None

    def test_global_flags(self):
        args = build_parser().parse_args(["-C", "/tmp/x", "--trace", "preview", "--no-stat"])
        assert args.repo == "/tmp/x"
        assert args.trace is True
        assert args.no_stat is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestExitCodes:

    def test_not_a_repo(self, fake_git, tmp_path, capsys):
        fake_git.on("rev-parse", "--is-inside-work-tree", returncode=128,
                    stderr=b"fatal: not a git repository\n")
        assert main(["--repo", str(tmp_path), "add"]) == 2
        assert "NotARepository" in capsys.readouterr().err

    def test_nothing_to_add(self, fake_git, tmp_path):
        assert main(["--repo", str(tmp_path), "add"]) == 0

    def test_conflicts_refusal(self, fake_git, tmp_path, capsys):
        fake_git.on("diff", "--cached", "--name-only", "--ignore-submodules", stdout=b"a.txt\n")
        fake_git.on("diff", "--cached", "--name-only", "--diff-filter=U", stdout=b"a.txt\n")
        assert main(["--repo", str(tmp_path), "commit", "-m", "x"]) == 1
        assert "Resolve conflicts" in capsys.readouterr().out

    def test_detached_push_refusal(self, fake_git, tmp_path):
        fake_git.on("rev-parse", "--abbrev-ref", "HEAD", stdout=b"HEAD\n")
        assert main(["--repo", str(tmp_path), "push"]) == 1

    def test_git_failure_shows_stderr(self, fake_git, tmp_path, capsys):
        fake_git.on("status", returncode=128, stderr=b"fatal: index file corrupt\n")
        assert main(["--repo", str(tmp_path), "add"]) == 2
        assert "index file corrupt" in capsys.readouterr().err

    def test_invalid_config(self, fake_git, tmp_path, capsys):
        (tmp_path / ".smartgit.yaml").write_text("dotfiles: [always]\n")
        assert main(["--repo", str(tmp_path), "add"]) == 2
        assert "invalid config" in capsys.readouterr().err

    @patch("smartgit.commands.commit.run_commit")
    def test_committed_is_success(self, mock_run, tmp_path, capsys):
        mock_run.return_value = CommitResult(
            CommitOutcome.COMMITTED_NO_UPSTREAM, message="m", summary="[main abc] m",
        )
        assert main(["--repo", str(tmp_path), "commit", "-m", "m"]) == 0
        out = capsys.readouterr().out
        assert "[main abc] m" in out
        assert "no upstream configured" in out
        assert mock_run.call_args.kwargs["message"] == "m"

    def test_trace_flag_turns_on_call_logging(self, fake_git, tmp_path):
        with patch("smartgit.cli.cmd_add_module.cmd_add", return_value=0) as mock_cmd:
            assert main(["--trace", "--repo", str(tmp_path), "add"]) == 0
        ctx = mock_cmd.call_args.args[1]
        assert ctx.config.show_calls is True
        assert ctx.git_options.show_calls is True


class TestTracing:
    """Call echo follows the loaded config, not just the --trace flag."""

    def test_env_var_prints_calls(self, fake_git, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("SMARTGIT_TRACE", "1")
        assert main(["--repo", str(tmp_path), "add"]) == 0
        assert f"CALL: git -C '{tmp_path}' 'status' '--porcelain' '-z'" in caplog.text

    def test_config_file_prints_calls(self, fake_git, tmp_path, caplog):
        (tmp_path / ".smartgit.yaml").write_text("show_calls: true\n")
        assert main(["--repo", str(tmp_path), "add"]) == 0
        assert "CALL: git -C" in caplog.text

    def test_quiet_by_default(self, fake_git, tmp_path, caplog):
        assert main(["--repo", str(tmp_path), "add"]) == 0
        assert "CALL:" not in caplog.text


class TestRenderGate:

    @patch("smartgit.cli.cmd_push_module.render_push_plan")
    def test_push_gate(self, mock_render):
        gate = ConfirmGate(name="push", question="Proceed with push?", preview="plan")
        render_gate(gate)
        mock_render.assert_called_once_with("plan")

    @patch("smartgit.cli.cmd_add_module.render_dotfiles")
    def test_dotfiles_gate(self, mock_render):
        render_gate(ConfirmGate(name="dotfiles", question="?", preview=[".env"]))
        mock_render.assert_called_once_with([".env"])
