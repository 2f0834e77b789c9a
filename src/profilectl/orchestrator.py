"""
User-facing profile workflows (switch, remove, create).

Each workflow is a small state machine:

  Idle -> Confirming -> InFlight -> Succeeded | Failed -> Idle

The orchestrator holds no profile state of its own. It asks the front-end for
confirmation through an injected callable, calls the session manager, refreshes
the profile list after a successful mutation, and reports results through the
injected notify callables. Errors are returned in the ActionResult, never raised.

Front-ends supply:
  confirm(title, message) -> bool
  notify_info(title, message)
  notify_error(title, message)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .errors import InvalidArgument, ProfileError
from .models import ProfileRecord, find_profile
from .session import SessionManager, validate_name


logger = logging.getLogger("profilectl.orchestrator")

Confirm = Callable[[str, str], bool]
Notify = Callable[[str, str], None]


class WorkflowState(Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class WorkflowOutcome(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"    # target already in the requested state
    DEFERRED = "deferred"  # accepted locally, no daemon call yet


@dataclass
class ActionResult:
    ok: bool
    outcome: WorkflowOutcome
    message: str = ""
    error: Optional[ProfileError] = None
    # set when the mutation succeeded but the follow-up list failed
    refresh_error: Optional[ProfileError] = None
    profiles: Tuple[ProfileRecord, ...] = ()
    states: List[WorkflowState] = field(default_factory=list)


def _ignore(_title: str, _message: str) -> None:
    return None


class _Run:
    def __init__(self, workflow: str, on_state: Optional[Callable[[str, WorkflowState], None]]) -> None:
        self.workflow = workflow
        self.states: List[WorkflowState] = []
        self._on_state = on_state
        self.to(WorkflowState.IDLE)

    def to(self, state: WorkflowState) -> None:
        self.states.append(state)
        logger.debug("workflow.%s state=%s", self.workflow, state.value)
        if self._on_state:
            self._on_state(self.workflow, state)


class ActionOrchestrator:
    def __init__(
        self,
        session: SessionManager,
        confirm: Confirm,
        notify_info: Optional[Notify] = None,
        notify_error: Optional[Notify] = None,
        on_state: Optional[Callable[[str, WorkflowState], None]] = None,
    ) -> None:
        self.session = session
        self._confirm = confirm
        self._notify_info = notify_info or _ignore
        self._notify_error = notify_error or _ignore
        self._on_state = on_state

    # --- views ---

    def load(self) -> ActionResult:
        """Initial load of the profiles view."""
        try:
            profiles = self.session.list_profiles()
        except ProfileError as e:
            self._notify_error("Error", e.message)
            return ActionResult(
                ok=False, outcome=WorkflowOutcome.FAILED, message=e.message,
                error=e, profiles=self.session.profiles(),
            )
        return ActionResult(ok=True, outcome=WorkflowOutcome.SUCCEEDED, profiles=profiles)

    def close(self) -> None:
        """The profiles view went away; drop the cached list."""
        self.session.clear_profiles()

    # --- workflows ---

    def switch(self, name: str) -> ActionResult:
        run = _Run("switch", self._on_state)
        try:
            validate_name(name)
        except InvalidArgument as e:
            return self._failed(run, e, "failed to select profile")

        current = find_profile(self.session.profiles(), name)
        if current is not None and current.is_active:
            logger.info("profiles.switch skipped name=%s already active", name)
            return ActionResult(
                ok=True, outcome=WorkflowOutcome.SKIPPED,
                message=f"Profile '{name}' is already active",
                profiles=self.session.profiles(), states=run.states,
            )

        if not self._confirmed(run, "Switch Profile", f"Are you sure you want to switch to '{name}'?"):
            return self._cancelled(run)

        run.to(WorkflowState.IN_FLIGHT)
        try:
            self.session.switch_active(name)
        except ProfileError as e:
            return self._failed(run, e, "failed to select profile")
        return self._succeeded(run, "Profile Switched", f"Profile '{name}' switched successfully")

    def remove(self, name: str) -> ActionResult:
        run = _Run("remove", self._on_state)
        try:
            validate_name(name)
        except InvalidArgument as e:
            return self._failed(run, e, "failed to remove profile")

        if not self._confirmed(run, "Delete Profile", f"Are you sure you want to delete '{name}'?"):
            return self._cancelled(run)

        run.to(WorkflowState.IN_FLIGHT)
        try:
            self.session.remove_profile(name)
        except ProfileError as e:
            return self._failed(run, e, "failed to remove profile")
        return self._succeeded(run, "Profile Removed", f"Profile '{name}' removed successfully")

    def create(self, name: str) -> ActionResult:
        # The name comes from the front-end's form; submitting it is the confirmation.
        run = _Run("create", self._on_state)
        try:
            validate_name(name, strip=True)
        except InvalidArgument as e:
            return self._failed(run, e, "failed to create profile")

        run.to(WorkflowState.IN_FLIGHT)
        try:
            self.session.create_profile(name)
        except ProfileError as e:
            return self._failed(run, e, "failed to create profile")

        run.to(WorkflowState.SUCCEEDED)
        message = f"Creating profiles is not supported yet; '{name}' was not created"
        self._notify_info("New Profile", message)
        run.to(WorkflowState.IDLE)
        return ActionResult(
            ok=True, outcome=WorkflowOutcome.DEFERRED, message=message,
            profiles=self.session.profiles(), states=run.states,
        )

    # --- transitions ---

    def _confirmed(self, run: _Run, title: str, message: str) -> bool:
        run.to(WorkflowState.CONFIRMING)
        return bool(self._confirm(title, message))

    def _cancelled(self, run: _Run) -> ActionResult:
        run.to(WorkflowState.IDLE)
        logger.info("workflow.%s cancelled", run.workflow)
        return ActionResult(
            ok=False, outcome=WorkflowOutcome.CANCELLED, message="cancelled",
            profiles=self.session.profiles(), states=run.states,
        )

    def _failed(self, run: _Run, err: ProfileError, prefix: str) -> ActionResult:
        # No refresh: the cache stays at the last good snapshot.
        run.to(WorkflowState.FAILED)
        message = f"{prefix}: {err.message}"
        self._notify_error("Error", message)
        run.to(WorkflowState.IDLE)
        return ActionResult(
            ok=False, outcome=WorkflowOutcome.FAILED, message=message, error=err,
            profiles=self.session.profiles(), states=run.states,
        )

    def _succeeded(self, run: _Run, title: str, message: str) -> ActionResult:
        run.to(WorkflowState.SUCCEEDED)
        refresh_error: Optional[ProfileError] = None
        try:
            profiles = self.session.list_profiles()
        except ProfileError as e:
            refresh_error = e
            profiles = self.session.profiles()
            self._notify_error("Error", f"failed to refresh profiles: {e.message}")
        self._notify_info(title, message)
        run.to(WorkflowState.IDLE)
        return ActionResult(
            ok=True, outcome=WorkflowOutcome.SUCCEEDED, message=message,
            refresh_error=refresh_error, profiles=profiles, states=run.states,
        )
