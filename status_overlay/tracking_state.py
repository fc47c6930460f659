"""Camera tracking-quality states and their user-facing descriptions."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class TrackingStatus(str, Enum):
    NOT_AVAILABLE = "not_available"
    NORMAL = "normal"
    LIMITED = "limited"


class LimitedReason(str, Enum):
    EXCESSIVE_MOTION = "excessive_motion"
    INSUFFICIENT_FEATURES = "insufficient_features"
    INITIALIZING = "initializing"
    RELOCALIZING = "relocalizing"


_PRESENTATION: Dict[Tuple[TrackingStatus, Optional[LimitedReason]], str] = {
    (TrackingStatus.NOT_AVAILABLE, None): "TRACKING UNAVAILABLE",
    (TrackingStatus.NORMAL, None): "TRACKING NORMAL",
    (TrackingStatus.LIMITED, LimitedReason.EXCESSIVE_MOTION): "TRACKING LIMITED\nExcessive motion",
    (TrackingStatus.LIMITED, LimitedReason.INSUFFICIENT_FEATURES): "TRACKING LIMITED\nLow detail",
    (TrackingStatus.LIMITED, LimitedReason.INITIALIZING): "Initializing",
    (TrackingStatus.LIMITED, LimitedReason.RELOCALIZING): "Recovering from interruption",
}

_RECOMMENDATIONS: Dict[LimitedReason, str] = {
    LimitedReason.EXCESSIVE_MOTION: "Try slowing down your movement, or reset the session.",
    LimitedReason.INSUFFICIENT_FEATURES: "Try pointing at a flat surface, or reset the session.",
    LimitedReason.RELOCALIZING: "Return to the location where you left off or try resetting the session.",
}


@dataclass(frozen=True)
class TrackingState:
    """Tracking quality reported by the camera session.

    ``reason`` is only meaningful for ``LIMITED`` and must be None otherwise.
    """

    status: TrackingStatus
    reason: Optional[LimitedReason] = None

    def __post_init__(self) -> None:
        if self.status is TrackingStatus.LIMITED and self.reason is None:
            raise ValueError("limited tracking requires a reason")
        if self.status is not TrackingStatus.LIMITED and self.reason is not None:
            raise ValueError(f"{self.status.value} tracking does not take a reason")

    @classmethod
    def not_available(cls) -> "TrackingState":
        return cls(TrackingStatus.NOT_AVAILABLE)

    @classmethod
    def normal(cls) -> "TrackingState":
        return cls(TrackingStatus.NORMAL)

    @classmethod
    def limited(cls, reason: LimitedReason) -> "TrackingState":
        return cls(TrackingStatus.LIMITED, reason)

    @classmethod
    def parse(cls, token: str) -> "TrackingState":
        """Build a state from ``normal``, ``not_available`` or ``limited:<reason>``."""

        text = str(token or "").strip().lower().replace("-", "_")
        status_token, _, reason_token = text.partition(":")
        status = TrackingStatus(status_token)
        reason = LimitedReason(reason_token) if reason_token else None
        return cls(status, reason)

    @property
    def is_degraded(self) -> bool:
        return self.status is not TrackingStatus.NORMAL

    @property
    def presentation_string(self) -> str:
        return _PRESENTATION[(self.status, self.reason)]

    @property
    def recommendation(self) -> Optional[str]:
        if self.reason is None:
            return None
        return _RECOMMENDATIONS.get(self.reason)

    @property
    def escalation_message(self) -> str:
        message = self.presentation_string
        recommendation = self.recommendation
        if recommendation:
            message += f": {recommendation}"
        return message
