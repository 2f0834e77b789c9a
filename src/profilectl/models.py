"""Profile records as reported by the daemon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import RemoteError


@dataclass(frozen=True)
class ProfileRecord:
    name: str
    is_active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "is_active": self.is_active}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileRecord":
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise RemoteError(f"malformed profile entry: {data!r}")
        is_active = data.get("is_active", False)
        if not isinstance(is_active, bool):
            raise RemoteError(f"malformed profile entry {name!r}: is_active must be a boolean")
        return cls(name=name, is_active=is_active)


def records_from_payload(data: Any) -> List[ProfileRecord]:
    """
    Decode ``{"profiles": [...]}`` keeping the daemon's order.

    Raises RemoteError if the payload is malformed or reports more than one
    active profile.
    """
    if not isinstance(data, dict):
        raise RemoteError("malformed profiles response")
    items = data.get("profiles") or []
    if not isinstance(items, list):
        raise RemoteError("malformed profiles response: 'profiles' must be a list")

    records: List[ProfileRecord] = []
    for item in items:
        if not isinstance(item, dict):
            raise RemoteError(f"malformed profile entry: {item!r}")
        records.append(ProfileRecord.from_dict(item))

    active = [r.name for r in records if r.is_active]
    if len(active) > 1:
        raise RemoteError(f"daemon reported {len(active)} active profiles: {', '.join(active)}")
    return records


def active_profile(records: Tuple[ProfileRecord, ...]) -> Optional[ProfileRecord]:
    for r in records:
        if r.is_active:
            return r
    return None


def find_profile(records: Tuple[ProfileRecord, ...], name: str) -> Optional[ProfileRecord]:
    for r in records:
        if r.name == name:
            return r
    return None


def format_profiles(records: Tuple[ProfileRecord, ...]) -> str:
    """
    Plain-text listing: indicator, name and the action hint of each row.
    """
    if not records:
        return "(no profiles)"
    width = max(len(r.name) for r in records)
    lines = []
    for r in records:
        indicator = "✓" if r.is_active else " "
        hint = "Active" if r.is_active else "Select"
        lines.append(f"{indicator} {r.name.ljust(width)}  {hint}")
    return "\n".join(lines)
