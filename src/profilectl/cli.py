#!/usr/bin/env python3
"""
profilectl CLI

Terminal front-end for the daemon's profiles. Every command goes through the
same workflows a graphical front-end uses (ActionOrchestrator); confirmation
dialogs become y/N prompts.

Subcommands:
  - list [--json]
  - switch NAME [--yes]
  - remove NAME [--yes]
  - create NAME
  - config show-paths [--json]

Exit codes:
  0: success (or nothing to do)
  1: daemon not running, timeout or general error
  2: invalid arguments
  3: daemon-side failure
  4: cancelled at the confirmation prompt
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Dict

from .config import load_settings, open_channel
from .errors import cli_exit_code_from_error
from .logging_setup import setup_logging
from .models import format_profiles
from .orchestrator import ActionOrchestrator, ActionResult, WorkflowOutcome
from .platform import log_path, settings_path, socket_path
from .session import SessionManager


EXIT_CANCELLED = 4


def _prompt(title: str, message: str) -> bool:
    try:
        answer = input(f"{title}: {message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _print_info(title: str, message: str) -> None:
    print(message)


def _print_error(title: str, message: str) -> None:
    print(message, file=sys.stderr)


def _exit_code(result: ActionResult) -> int:
    if result.ok:
        return 0
    if result.outcome is WorkflowOutcome.CANCELLED:
        return EXIT_CANCELLED
    return cli_exit_code_from_error(result.error)


def _open(args: argparse.Namespace) -> ActionOrchestrator:
    settings = load_settings(args.config)
    session = SessionManager(open_channel(settings), timeout=settings.timeout)
    assume_yes = bool(getattr(args, "yes", False)) or not settings.confirm
    confirm = (lambda _title, _message: True) if assume_yes else _prompt
    return ActionOrchestrator(session, confirm, notify_info=_print_info, notify_error=_print_error)


def cmd_list(args: argparse.Namespace) -> int:
    orch = _open(args)
    with orch.session:
        result = orch.load()
        if not result.ok:
            return _exit_code(result)
        if args.json:
            print(json.dumps([p.to_dict() for p in result.profiles], ensure_ascii=False, indent=2))
        else:
            print(format_profiles(result.profiles))
        return 0


def cmd_switch(args: argparse.Namespace) -> int:
    orch = _open(args)
    with orch.session:
        loaded = orch.load()
        if not loaded.ok:
            return _exit_code(loaded)
        result = orch.switch(args.name)
        if result.outcome is WorkflowOutcome.SKIPPED:
            print(result.message)
        return _exit_code(result)


def cmd_remove(args: argparse.Namespace) -> int:
    orch = _open(args)
    with orch.session:
        return _exit_code(orch.remove(args.name))


def cmd_create(args: argparse.Namespace) -> int:
    orch = _open(args)
    with orch.session:
        return _exit_code(orch.create(args.name))


def _config_paths() -> Dict[str, str]:
    return {
        "settings": str(settings_path()),
        "socket": str(socket_path()),
        "state_log": str(log_path()),
    }


def cmd_config_show_paths(args: argparse.Namespace) -> int:
    paths = _config_paths()
    if getattr(args, "json", False):
        print(json.dumps(paths, ensure_ascii=False, indent=2))
    else:
        for k, v in paths.items():
            print(f"{k}: {v}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="profilectl", description="Manage the daemon's profiles")
    p.add_argument("--config", help="path to settings.ini (default: XDG config dir)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="sub")

    p_list = sub.add_parser("list", help="list profiles known to the daemon")
    p_list.add_argument("--json", action="store_true", help="print as JSON")
    p_list.set_defaults(func=cmd_list)

    p_switch = sub.add_parser("switch", help="make a profile the active one")
    p_switch.add_argument("name", help="profile name")
    p_switch.add_argument("-y", "--yes", action="store_true", help="do not ask for confirmation")
    p_switch.set_defaults(func=cmd_switch)

    p_remove = sub.add_parser("remove", help="delete a profile")
    p_remove.add_argument("name", help="profile name")
    p_remove.add_argument("-y", "--yes", action="store_true", help="do not ask for confirmation")
    p_remove.set_defaults(func=cmd_remove)

    p_create = sub.add_parser("create", help="create a new profile")
    p_create.add_argument("name", help="profile name")
    p_create.set_defaults(func=cmd_create)

    # config
    p_cfg = sub.add_parser("config", help="configuration utilities")
    sub_cfg = p_cfg.add_subparsers(dest="sub_cfg")
    p_cfg_paths = sub_cfg.add_parser("show-paths", help="print important file paths")
    p_cfg_paths.add_argument("--json", action="store_true", help="print as JSON")
    p_cfg_paths.set_defaults(func=cmd_config_show_paths)

    return p


def main(argv: Any = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    setup_logging("DEBUG" if args.verbose else os.environ.get("PROFILECTL_LOG_LEVEL", "WARNING"))
    try:
        return args.func(args)
    except ValueError as e:
        # bad settings.ini values
        print(f"configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 1


if __name__ == "__main__":
    sys.exit(main())
