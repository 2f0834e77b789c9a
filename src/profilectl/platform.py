"""
Filesystem locations used by profilectl.

  settings   $XDG_CONFIG_HOME/profilectl/settings.ini
  log file   $XDG_STATE_HOME/profilectl/profilectl.log
  socket     $PROFILECTL_SOCKET, else $XDG_RUNTIME_DIR/profilectl.sock
"""

from __future__ import annotations

import os
from pathlib import Path


APP_NAME = "profilectl"
SOCKET_FILENAME = f"{APP_NAME}.sock"
SOCKET_ENV = "PROFILECTL_SOCKET"


def _from_env(var: str, *fallback: str) -> Path:
    # Empty values count as unset, as the XDG base directory rules say.
    base = os.environ.get(var)
    return Path(base) if base else Path.home().joinpath(*fallback)


def xdg_config_dir() -> Path:
    return _from_env("XDG_CONFIG_HOME", ".config") / APP_NAME


def xdg_state_dir() -> Path:
    return _from_env("XDG_STATE_HOME", ".local", "state") / APP_NAME


def runtime_dir() -> Path:
    # No per-user runtime dir outside a login session; /tmp is shared.
    base = os.environ.get("XDG_RUNTIME_DIR")
    return Path(base) if base else Path("/tmp")


def socket_path() -> Path:
    override = os.environ.get(SOCKET_ENV)
    if override:
        return Path(override).expanduser()
    return runtime_dir() / SOCKET_FILENAME


def settings_path() -> Path:
    return xdg_config_dir() / "settings.ini"


def log_path() -> Path:
    return xdg_state_dir() / f"{APP_NAME}.log"
