"""Shared fixtures for profilectl tests."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fake_daemon import FakeChannel, FakeDaemon, ProfileStore
from profilectl.session import SessionManager


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config, logs and sockets out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path / "run"))
    monkeypatch.delenv("PROFILECTL_SOCKET", raising=False)
    monkeypatch.delenv("PROFILECTL_LOG_LEVEL", raising=False)
    return tmp_path


@pytest.fixture
def store() -> ProfileStore:
    return ProfileStore([("default", True), ("work", False), ("travel", False)])


@pytest.fixture
def channel(store: ProfileStore) -> FakeChannel:
    return FakeChannel(store)


@pytest.fixture
def session(channel: FakeChannel) -> Generator[SessionManager, None, None]:
    with SessionManager(channel, timeout=1.0) as sm:
        yield sm


@pytest.fixture
def short_dir() -> Generator[Path, None, None]:
    # AF_UNIX paths are limited to ~108 bytes; pytest's tmp_path can be longer.
    d = Path(tempfile.mkdtemp(prefix="pctl-"))
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def daemon(store: ProfileStore, short_dir: Path) -> Generator[FakeDaemon, None, None]:
    srv = FakeDaemon(store.handle, str(short_dir / "d.sock"))
    srv.start()
    yield srv
    srv.stop()
