"""Client-side profile session layer for the networking daemon.

Exports:
- SessionManager: cached, timeout-bounded access to the daemon's profiles.
- ActionOrchestrator: switch/remove/create workflows for front-ends.
"""
from .errors import InvalidArgument, ProfileError, RemoteError, RemoteTimeout, RemoteUnavailable
from .models import ProfileRecord
from .orchestrator import ActionOrchestrator, ActionResult, WorkflowOutcome, WorkflowState
from .session import SessionManager

__version__ = "0.1.0"

__all__ = [
    "ActionOrchestrator",
    "ActionResult",
    "InvalidArgument",
    "ProfileError",
    "ProfileRecord",
    "RemoteError",
    "RemoteTimeout",
    "RemoteUnavailable",
    "SessionManager",
    "WorkflowOutcome",
    "WorkflowState",
]
