"""
RPC channels to the profile daemon.

Transports:
- Unix Domain Socket at $XDG_RUNTIME_DIR/profilectl.sock (see platform.socket_path),
  newline-delimited JSON per request/response
- HTTP POST <base_url>/rpc carrying the same JSON envelope

Envelope:
  request:  {"op": "profiles.list" | "profiles.switch" | "profiles.remove", ...}
  response: {"ok": true, "data": {...}} or {"ok": false, "error": "...", "code": "..."}

Channels raise the typed errors from errors.py; they never return failures
as values.
"""

from __future__ import annotations

import json
import logging
import socket
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

import requests

from .errors import RemoteError, RemoteTimeout, RemoteUnavailable, error_from_response
from .models import ProfileRecord, records_from_payload


OP_LIST = "profiles.list"
OP_SWITCH = "profiles.switch"
OP_REMOVE = "profiles.remove"

Request = Dict[str, Any]
Response = Dict[str, Any]

logger = logging.getLogger("profilectl.ipc")


class Channel(Protocol):
    def call(self, request: Request, timeout: float) -> Response: ...


def _decode_response(raw: bytes) -> Response:
    if not raw:
        raise RemoteError("empty response from daemon")
    try:
        resp = json.loads(raw.decode("utf-8").rstrip("\n"))
    except (UnicodeDecodeError, ValueError) as e:
        raise RemoteError(f"invalid json response: {e}") from e
    if not isinstance(resp, dict):
        raise RemoteError("malformed response")
    return resp


class SocketChannel:
    """
    Send a single JSON request per connection and wait for a single JSON response.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)

    def call(self, request: Request, timeout: float) -> Response:
        data = (json.dumps(request) + "\n").encode("utf-8")
        deadline = time.monotonic() + timeout

        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as s:
                s.settimeout(timeout)
                s.connect(self.path)
                s.sendall(data)

                # Read until newline
                buf = b""
                while not buf.endswith(b"\n"):
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise socket.timeout("deadline exceeded")
                    s.settimeout(remaining)
                    chunk = s.recv(65536)
                    if not chunk:
                        break
                    buf += chunk
        except (FileNotFoundError, ConnectionRefusedError) as e:
            raise RemoteUnavailable(f"daemon not running (socket {self.path})") from e
        except socket.timeout as e:
            raise RemoteTimeout(f"no response from daemon within {timeout:g}s") from e
        except OSError as e:
            raise RemoteUnavailable(f"daemon connection failed: {e}") from e

        return _decode_response(buf)

    def __repr__(self) -> str:
        return f"SocketChannel({self.path!r})"


class HttpChannel:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.url = f"{self.base_url}/rpc"
        self._session = session or requests.Session()

    def call(self, request: Request, timeout: float) -> Response:
        try:
            r = self._session.post(self.url, json=request, timeout=timeout)
        except requests.Timeout as e:
            raise RemoteTimeout(f"no response from daemon within {timeout:g}s") from e
        except requests.ConnectionError as e:
            raise RemoteUnavailable(f"daemon not reachable at {self.base_url}: {e}") from e
        except requests.RequestException as e:
            # InvalidURL, TooManyRedirects, ChunkedEncodingError, ...
            raise RemoteError(f"http request to {self.url} failed: {e}") from e

        if r.status_code >= 400:
            # Error replies may still carry the JSON envelope
            try:
                body = r.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("ok") is False:
                return body
            raise RemoteError(f"http {r.status_code} from {self.url}")

        return _decode_response(r.content)

    def __repr__(self) -> str:
        return f"HttpChannel({self.base_url!r})"


class RemoteProfileService:
    """
    Daemon profile operations on top of a channel.

    CreateProfile is reserved on the daemon side and has no client call yet.
    """

    def __init__(self, channel: Channel) -> None:
        self.channel = channel

    def _call(self, request: Request, timeout: float) -> Dict[str, Any]:
        logger.debug("ipc.call op=%s channel=%r", request.get("op"), self.channel)
        resp = self.channel.call(request, timeout)
        if resp.get("ok") is True:
            data = resp.get("data")
            return data if isinstance(data, dict) else {}
        raise error_from_response(resp)

    def get_profiles(self, timeout: float) -> List[ProfileRecord]:
        data = self._call({"op": OP_LIST}, timeout)
        return records_from_payload(data)

    def switch_profile(self, name: str, timeout: float) -> None:
        data = self._call({"op": OP_SWITCH, "profile": name}, timeout)
        # success=false is a reported failure, not a transport fault
        if not data.get("success"):
            raise RemoteError(str(data.get("error") or "daemon refused the switch"))

    def remove_profile(self, name: str, timeout: float) -> None:
        self._call({"op": OP_REMOVE, "profile": name}, timeout)
