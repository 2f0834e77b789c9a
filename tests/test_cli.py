"""Tests for the profilectl command line front-end."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from fake_daemon import FakeChannel, ProfileStore
from profilectl import cli
from profilectl.errors import RemoteUnavailable


@pytest.fixture
def fake(monkeypatch: pytest.MonkeyPatch) -> FakeChannel:
    channel = FakeChannel(ProfileStore([("default", True), ("work", False)]))
    monkeypatch.setattr(cli, "open_channel", lambda settings: channel)
    return channel


def _answer(monkeypatch: pytest.MonkeyPatch, text: str) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt="": text)


def test_list(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["list"]) == 0
    out = capsys.readouterr().out
    assert "✓ default" in out
    assert "work" in out


def test_list_json(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["list", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == [{"name": "default", "is_active": True}, {"name": "work", "is_active": False}]


def test_switch_with_yes(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["switch", "work", "--yes"]) == 0
    assert fake.ops() == ["profiles.list", "profiles.switch", "profiles.list"]
    assert "Profile 'work' switched successfully" in capsys.readouterr().out


def test_switch_prompt_accepted(fake: FakeChannel, monkeypatch: pytest.MonkeyPatch) -> None:
    _answer(monkeypatch, "y")
    assert cli.main(["switch", "work"]) == 0
    assert "profiles.switch" in fake.ops()


def test_switch_to_active_profile(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["switch", "default"]) == 0
    assert fake.ops() == ["profiles.list"]
    assert "already active" in capsys.readouterr().out


def test_switch_unknown_profile(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["switch", "ghost", "-y"]) == 3
    assert "failed to select profile" in capsys.readouterr().err


def test_remove_declined(fake: FakeChannel, monkeypatch: pytest.MonkeyPatch) -> None:
    _answer(monkeypatch, "n")
    assert cli.main(["remove", "work"]) == cli.EXIT_CANCELLED
    assert fake.ops() == []


def test_remove_confirm_disabled_in_settings(fake: FakeChannel, isolated_xdg: Path) -> None:
    cfg = isolated_xdg / "config" / "profilectl"
    cfg.mkdir(parents=True)
    (cfg / "settings.ini").write_text("[ui]\nconfirm = false\n", encoding="utf-8")
    assert cli.main(["remove", "work"]) == 0
    assert fake.ops() == ["profiles.remove", "profiles.list"]


def test_create_empty_name(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["create", ""]) == 2
    assert "profile name cannot be empty" in capsys.readouterr().err
    assert fake.ops() == []


def test_create_deferred(fake: FakeChannel, capsys: Any) -> None:
    assert cli.main(["create", "office"]) == 0
    assert "not supported yet" in capsys.readouterr().out
    assert fake.ops() == []


def test_daemon_not_running(fake: FakeChannel, capsys: Any) -> None:
    fake.errors["profiles.list"] = RemoteUnavailable("daemon not running (socket /tmp/profilectl.sock)")
    assert cli.main(["list"]) == 1
    assert "daemon not running" in capsys.readouterr().err


def test_bad_settings(isolated_xdg: Path, capsys: Any) -> None:
    cfg = isolated_xdg / "config" / "profilectl"
    cfg.mkdir(parents=True)
    (cfg / "settings.ini").write_text("[daemon]\ntransport = carrier-pigeon\n", encoding="utf-8")
    assert cli.main(["list"]) == 2
    assert "configuration error" in capsys.readouterr().err


def test_config_show_paths(capsys: Any) -> None:
    assert cli.main(["config", "show-paths", "--json"]) == 0
    paths = json.loads(capsys.readouterr().out)
    assert set(paths) == {"settings", "socket", "state_log"}


def test_no_command_prints_help(capsys: Any) -> None:
    assert cli.main([]) == 2
