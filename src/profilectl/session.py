"""
Profile session manager.

Owns the profile cache and every call to the daemon. Each public operation
issues at most one remote call, bounded by the same fixed timeout. On expiry
the call is abandoned: its worker result is discarded and RemoteTimeout is
raised, so the cache is only written from results that arrived in time.

Mutations (switch/remove) never touch the cache; callers re-list to observe
the daemon's new state.
"""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Any, Callable, Optional, Tuple, TypeVar

from .client_ipc import Channel, RemoteProfileService
from .config import DEFAULT_TIMEOUT
from .errors import InvalidArgument, ProfileError, RemoteTimeout
from .models import ProfileRecord, active_profile as find_active
from .profile_cache import ProfileCache


T = TypeVar("T")

logger = logging.getLogger("profilectl.session")


def validate_name(name: Any, *, strip: bool = False) -> str:
    """
    Reject empty names before any remote call.

    Existing profiles are addressed by their exact daemon name, blanks
    included; strip=True is for names typed into a create form.
    """
    if not isinstance(name, str) or not (name.strip() if strip else name):
        raise InvalidArgument("profile name cannot be empty")
    return name


class SessionManager:
    def __init__(self, channel: Channel, timeout: float = DEFAULT_TIMEOUT, max_workers: int = 4) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self._service = RemoteProfileService(channel)
        self._cache = ProfileCache()
        self._pool = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="profilectl-rpc"
        )

    # --- context management ---

    def close(self) -> None:
        # Abandoned calls are left to finish on their own; nobody waits for them.
        self._pool.shutdown(wait=False)

    def __enter__(self) -> "SessionManager":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # --- bounded remote call ---

    def _bounded(self, op: str, fn: Callable[..., T], *args: Any) -> T:
        future = self._pool.submit(fn, *args, self.timeout)
        try:
            return future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError:
            future.cancel()
            logger.warning("%s timeout after=%gs", op, self.timeout)
            raise RemoteTimeout(f"{op}: no response from daemon within {self.timeout:g}s") from None
        except ProfileError as e:
            logger.warning("%s failed code=%s error=%s", op, e.code, e.message)
            raise

    # --- public API ---

    def profiles(self) -> Tuple[ProfileRecord, ...]:
        """Last known snapshot; no remote call."""
        return self._cache.snapshot()

    def list_profiles(self) -> Tuple[ProfileRecord, ...]:
        """
        Fetch the full profile set and replace the cache with it.

        On any failure the previous snapshot stays in place.
        """
        records = self._bounded("profiles.list", self._service.get_profiles)
        snapshot = self._cache.set(records)
        logger.info("profiles.list ok count=%d", len(snapshot))
        return snapshot

    refresh = list_profiles

    def switch_active(self, name: str) -> None:
        validate_name(name)
        self._bounded("profiles.switch", self._service.switch_profile, name)
        logger.info("profiles.switch ok name=%s", name)

    def remove_profile(self, name: str) -> None:
        validate_name(name)
        self._bounded("profiles.remove", self._service.remove_profile, name)
        logger.info("profiles.remove ok name=%s", name)

    def create_profile(self, name: str) -> None:
        validate_name(name, strip=True)
        # TODO: send profiles.create and refresh once the daemon exposes CreateProfile
        logger.warning("profiles.create deferred name=%s (daemon call not wired)", name)

    def clear_profiles(self) -> None:
        """Explicit invalidation, e.g. when the profiles view closes."""
        self._cache.clear()
        logger.debug("profiles.cache cleared")

    def active_profile(self) -> Optional[ProfileRecord]:
        return find_active(self._cache.snapshot())
