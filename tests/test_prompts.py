"""Tests for interactive prompts."""

import io
from unittest.mock import MagicMock

import pytest

from smartgit.git.errors import InputOutputFailure
from smartgit.lib.prompts import ask_commit_message, ask_yes_no, make_confirm
from smartgit.workflow.context import ConfirmGate


class TestAskYesNo:

    @pytest.mark.parametrize("answer, expected", [
        ("y\n", True),
        ("Y\n", True),
        ("yes\n", True),
        ("yep\n", True),
        ("  y\n", False),     # leading whitespace is not skipped
        ("n\n", False),
        ("no\n", False),
        ("\n", False),
        ("sure\n", False),
        ("", False),
    ])
    def test_answers(self, answer, expected):
        out = io.StringIO()
        assert ask_yes_no("Stage?", stdin=io.StringIO(answer), stdout=out) is expected
        assert out.getvalue() == "Stage? [y/N]: "

    def test_read_error_is_no(self):
        stdin = MagicMock()
        stdin.readline.side_effect = OSError("closed")
        assert ask_yes_no("Push?", stdin=stdin, stdout=io.StringIO()) is False


class TestAskCommitMessage:

    def test_reads_one_line(self):
        stdin = io.StringIO("fix parser\nsecond line\n")
        assert ask_commit_message(stdin=stdin, stdout=io.StringIO()) == "fix parser"

    def test_strips_crlf(self):
        assert ask_commit_message(stdin=io.StringIO("msg\r\n"), stdout=io.StringIO()) == "msg"

    def test_keeps_inner_whitespace(self):
        assert ask_commit_message(stdin=io.StringIO("  a  b \n"), stdout=io.StringIO()) == "  a  b "

    def test_eof_is_empty(self):
        assert ask_commit_message(stdin=io.StringIO(""), stdout=io.StringIO()) == ""

    def test_read_error_raises(self):
        stdin = MagicMock()
        stdin.readline.side_effect = OSError("bad fd")
        with pytest.raises(InputOutputFailure):
            ask_commit_message(stdin=stdin, stdout=io.StringIO())


class TestMakeConfirm:

    def test_renders_then_asks(self):
        order = []
        render = MagicMock(side_effect=lambda gate: order.append("render"))

        def ask(question):
            order.append(question)
            return True

        confirm = make_confirm(render, ask=ask)
        gate = ConfirmGate(name="push", question="Proceed with push?")
        assert confirm(gate) is True
        assert order == ["render", "Proceed with push?"]
        render.assert_called_once_with(gate)
