"""
Error taxonomy for profile operations.

Every error carries a stable string ``code`` matching the codes the daemon uses
in ``{"ok": false, "code": ...}`` replies:

  INVALID_ARG   empty/malformed input, detected before any remote call
  NOT_RUNNING   the daemon channel could not be established
  TIMEOUT       the fixed bound elapsed before a response arrived
  REMOTE_ERROR  the daemon was reachable but reported a failure
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ProfileError(Exception):
    code = "ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class InvalidArgument(ProfileError):
    code = "INVALID_ARG"


class RemoteUnavailable(ProfileError):
    code = "NOT_RUNNING"


class RemoteTimeout(ProfileError):
    code = "TIMEOUT"


class RemoteError(ProfileError):
    code = "REMOTE_ERROR"


def error_from_response(resp: Dict[str, Any], default: str = "daemon reported an error") -> ProfileError:
    """
    Map a ``{"ok": false, ...}`` reply to the matching error class.
    Unknown codes become RemoteError with the daemon's code preserved.
    """
    message = str(resp.get("error") or default)
    code = str(resp.get("code") or "").upper()
    if code == InvalidArgument.code:
        return InvalidArgument(message)
    if code == RemoteUnavailable.code:
        return RemoteUnavailable(message)
    if code == RemoteTimeout.code:
        return RemoteTimeout(message)
    if code and code != RemoteError.code:
        return RemoteError(message, code=code)
    return RemoteError(message)


def cli_exit_code_from_error(err: Optional[ProfileError]) -> int:
    """
    Map an error (or None for success) to CLI exit code.
    0: success
    1: daemon not running or timeout
    2: invalid arguments
    3: daemon-side failure
    """
    if err is None:
        return 0
    if isinstance(err, InvalidArgument):
        return 2
    if isinstance(err, (RemoteUnavailable, RemoteTimeout)):
        return 1
    return 3
