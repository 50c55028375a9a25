#!/usr/bin/env python3
"""smartgit CLI entrypoint."""

import sys
import argparse
import dataclasses
import logging
from pathlib import Path

from rich.markup import escape

from smartgit.git.errors import GitError
from smartgit.lib.config import ConfigError, load_config
from smartgit.lib.console import err_console, print_git_error
from smartgit.lib.prompts import ask_commit_message, make_confirm
from smartgit.workflow import ConfirmGate, WorkflowContext
from smartgit.commands import add as cmd_add_module
from smartgit.commands import commit as cmd_commit_module
from smartgit.commands import push as cmd_push_module
from smartgit.commands import preview as cmd_preview_module
from smartgit.git import runner

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def render_gate(gate: ConfirmGate) -> None:
    """Show a gate's preview before its question is asked."""
    if gate.name == "stage":
        cmd_add_module.render_add_preview(gate.preview)
    elif gate.name == "dotfiles":
        cmd_add_module.render_dotfiles(gate.preview)
    elif gate.name == "push":
        cmd_push_module.render_push_plan(gate.preview)


def build_context(args) -> WorkflowContext:
    """Load config for the target repo and wire the interactive callbacks."""
    repo_path = Path(args.repo)
    config = load_config(repo_path)
    if args.trace:
        config = dataclasses.replace(config, show_calls=True)

    return WorkflowContext(
        repo_path=repo_path,
        config=config,
        confirm=make_confirm(render_gate),
        ask_message=ask_commit_message,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='smartgit', description='Guarded git add/commit/push')
    parser.add_argument('--repo', '-C', default='.', help='Path inside the target work tree (default: .)')
    parser.add_argument('--trace', '-v', action='store_true', help='Log every git call and workflow step')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # smartgit add
    p_add = subparsers.add_parser('add', help='Preview changes and stage them on confirmation')
    p_add.set_defaults(func=cmd_add_module.cmd_add)

    # smartgit commit
    p_commit = subparsers.add_parser('commit', help='Commit staged changes')
    p_commit.add_argument('--message', '-m', help='Commit message (prompts if not provided)')
    p_commit.set_defaults(func=cmd_commit_module.cmd_commit)

    # smartgit push
    p_push = subparsers.add_parser('push', help='Preview and push current branch')
    p_push.set_defaults(func=cmd_push_module.cmd_push)

    # smartgit preview
    p_preview = subparsers.add_parser('preview', help='Build the would-be commit without moving refs')
    p_preview.add_argument('--message', '-m', help='Message for the preview commit')
    p_preview.add_argument('--no-stat', action='store_true', help='Skip the diffstat')
    p_preview.set_defaults(func=cmd_preview_module.cmd_preview)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.trace else logging.WARNING,
        format=LOG_FORMAT,
    )

    try:
        ctx = build_context(args)
        if ctx.config.show_calls:
            # CALL: lines are INFO; show them whatever the root level is
            logging.getLogger(runner.__name__).setLevel(logging.INFO)
        return args.func(args, ctx)
    except ConfigError as e:
        err_console.print(f"[red]ERROR:[/red] invalid config: {escape(str(e))}")
        return 2
    except GitError as e:
        print_git_error(e)
        return 2


if __name__ == '__main__':
    sys.exit(main())
