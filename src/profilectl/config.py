"""
Configuration loading for profilectl.

- settings.ini in XDG config dir (~/.config/profilectl/settings.ini)

Provides:
- Settings (INI) as a lightweight dict-like wrapper.
- Typed accessors for the daemon connection and the fixed call timeout.
- open_channel(): build the RPC channel the settings describe.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .client_ipc import HttpChannel, SocketChannel
from .platform import SOCKET_ENV, settings_path, socket_path


DEFAULT_TIMEOUT = 3.0
TRANSPORTS = ("socket", "http")

DEFAULT_SETTINGS = {
    "daemon": {
        "transport": "socket",
        "socket_path": "",
        "base_url": "http://127.0.0.1:8765",
        "timeout": str(DEFAULT_TIMEOUT),
    },
    "ui": {
        "confirm": "true",
    },
}


@dataclass
class Settings:
    config: configparser.ConfigParser
    path: Path

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> str:
        return self.config.get(section, key, fallback=fallback)  # type: ignore[no-any-return]

    def getboolean(self, section: str, key: str, fallback: Optional[bool] = None) -> bool:
        try:
            return self.config.getboolean(section, key)
        except (configparser.Error, ValueError):
            if fallback is None:
                raise
            return fallback

    @property
    def transport(self) -> str:
        value = self.get("daemon", "transport", fallback="socket").strip().lower()
        if value not in TRANSPORTS:
            raise ValueError(f"daemon.transport must be one of {', '.join(TRANSPORTS)}, got {value!r}")
        return value

    @property
    def timeout(self) -> float:
        raw = self.get("daemon", "timeout", fallback=str(DEFAULT_TIMEOUT))
        try:
            value = float(raw)
        except ValueError:
            raise ValueError(f"daemon.timeout must be a number, got {raw!r}") from None
        if value <= 0:
            raise ValueError("daemon.timeout must be positive")
        return value

    @property
    def socket_path(self) -> Path:
        # PROFILECTL_SOCKET wins over the INI value
        raw = self.get("daemon", "socket_path", fallback="").strip()
        if raw and not os.environ.get(SOCKET_ENV):
            return Path(raw).expanduser()
        return socket_path()

    @property
    def base_url(self) -> str:
        url = self.get("daemon", "base_url", fallback="").strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError("daemon.base_url must start with http:// or https://")
        return url

    @property
    def confirm(self) -> bool:
        return self.getboolean("ui", "confirm", fallback=True)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    ini_path = Path(path) if path else settings_path()

    parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
    # preload defaults
    for section, kv in DEFAULT_SETTINGS.items():
        parser.add_section(section)
        for k, v in kv.items():
            parser.set(section, k, v)

    if ini_path.exists():
        parser.read(ini_path, encoding="utf-8")

    return Settings(parser, ini_path)


def open_channel(settings: Settings) -> Union[SocketChannel, HttpChannel]:
    if settings.transport == "http":
        return HttpChannel(settings.base_url)
    return SocketChannel(settings.socket_path)
