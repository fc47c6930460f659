"""Closed set of reasons a status message can be shown or scheduled."""
from __future__ import annotations

from enum import Enum
from typing import Tuple, Union


class MessageType(str, Enum):
    TRACKING_STATE_ESCALATION = "tracking_state_escalation"
    PLANE_ESTIMATION = "plane_estimation"
    CONTENT_PLACEMENT = "content_placement"
    FOCUS_SQUARE = "focus_square"


# Declaration order; cancel-all walks this tuple.
ALL_MESSAGE_TYPES: Tuple[MessageType, ...] = tuple(MessageType)

MessageTypeLike = Union[MessageType, str]


def coerce_message_type(value: MessageTypeLike) -> MessageType:
    """Return the member for ``value``; raises ValueError outside the closed set."""

    if isinstance(value, MessageType):
        return value
    token = str(value).strip().lower()
    return MessageType(token)
