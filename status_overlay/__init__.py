"""Transient status message scheduling for the AR status panel."""
from __future__ import annotations

from status_overlay.message_types import ALL_MESSAGE_TYPES, MessageType
from status_overlay.status_controller import StatusController
from status_overlay.timers import ManualTimerFacility, QtTimerFacility, TimerHandle
from status_overlay.tracking_state import LimitedReason, TrackingState, TrackingStatus
from status_overlay.version import __version__

__all__ = [
    "ALL_MESSAGE_TYPES",
    "LimitedReason",
    "ManualTimerFacility",
    "MessageType",
    "QtTimerFacility",
    "StatusController",
    "TimerHandle",
    "TrackingState",
    "TrackingStatus",
    "__version__",
]
