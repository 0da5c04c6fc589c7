#!/usr/bin/env python3
"""Ralph CLI entrypoint."""

import argparse
import sys
from pathlib import Path

from ralph.commands import add_feature as cmd_add_feature_module
from ralph.commands import loop as cmd_loop_module
from ralph.commands import new as cmd_new_module
from ralph.lib.console import setup_logging
from ralph.lib.constants import FRAMEWORKS


def get_root_dir() -> Path:
    """Builder root: where .env, agents.yaml and apps/ live."""
    return Path.cwd()


def cmd_loop(args):
    return cmd_loop_module.cmd_loop(args, Path.cwd())


def cmd_new(args):
    return cmd_new_module.cmd_new(args, get_root_dir())


def cmd_add_feature(args):
    return cmd_add_feature_module.cmd_add_feature(args, get_root_dir())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ralph', description='AI app builder and story loop')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # ralph loop
    p_loop = subparsers.add_parser('loop', help='Implement pending stories of prd.json in the current directory')
    p_loop.set_defaults(func=cmd_loop)

    # ralph new
    p_new = subparsers.add_parser('new', help='Create a new app (repo, scaffold, Firebase, PRD)')
    p_new.add_argument('--framework', '-f', choices=FRAMEWORKS, help='Framework (prompted if omitted)')
    p_new.add_argument('--name', '-n', help='Project name, kebab-case (prompted if omitted)')
    p_new.add_argument('--description', '-d', help='What the app does (prompted if omitted)')
    p_new.set_defaults(func=cmd_new)

    # ralph add-feature
    p_add = subparsers.add_parser('add-feature', help='Append stories for new features to an existing app')
    p_add.add_argument('name', help='Project name under the apps directory')
    p_add.add_argument('--description', '-d', help='Features to add (prompted if omitted)')
    p_add.set_defaults(func=cmd_add_feature)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging()
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
