"""Single-slot status message display with per-category delayed messages."""
from __future__ import annotations

import logging
import weakref
from typing import Callable, Dict, Optional, Tuple

from status_overlay.message_types import ALL_MESSAGE_TYPES, MessageType, MessageTypeLike, coerce_message_type
from status_overlay.status_config import DEFAULT_DISPLAY_DURATION, DEFAULT_ESCALATION_DELAY
from status_overlay.timers import TimerFacility, TimerHandle
from status_overlay.tracking_state import TrackingState

_LOGGER = logging.getLogger("StatusOverlay.Controller")


def _noop_text(_text: str) -> None:
    return None


def _noop_visible(_visible: bool) -> None:
    return None


class StatusController:
    """Decides what the status panel shows and when it hides.

    Only one message is visible at a time and the newest call wins. Delayed
    messages are kept per ``MessageType``; rescheduling a type cancels its
    previous timer so a superseded message can never appear.

    Timer callbacks reach the controller through a weak reference and do
    nothing once it is closed or collected.
    """

    def __init__(
        self,
        timers: TimerFacility,
        *,
        set_text: Callable[[str], None] = _noop_text,
        set_visible: Callable[[bool], None] = _noop_visible,
        display_duration: float = DEFAULT_DISPLAY_DURATION,
        escalation_delay: float = DEFAULT_ESCALATION_DELAY,
    ) -> None:
        self._timers = timers
        self._set_text = set_text
        self._set_visible = set_visible
        self._display_duration = max(0.0, float(display_duration))
        self._escalation_delay = max(0.0, float(escalation_delay))
        self._text = ""
        self._visible = False
        self._hide_timer: Optional[TimerHandle] = None
        self._scheduled: Dict[MessageType, TimerHandle] = {}
        self._closed = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def text(self) -> str:
        return self._text

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def display_duration(self) -> float:
        return self._display_duration

    @property
    def closed(self) -> bool:
        return self._closed

    def is_scheduled(self, message_type: MessageTypeLike) -> bool:
        return coerce_message_type(message_type) in self._scheduled

    def scheduled_types(self) -> Tuple[MessageType, ...]:
        return tuple(message_type for message_type in ALL_MESSAGE_TYPES if message_type in self._scheduled)

    # ------------------------------------------------------------------
    # Message display
    # ------------------------------------------------------------------
    def show_message(self, text: str, auto_hide: bool = True) -> None:
        if self._closed:
            return
        self._cancel_hide_timer()

        self._text = text
        self._set_text(text)
        self._visible = True
        self._set_visible(True)

        if auto_hide:
            self._hide_timer = self._after(self._display_duration, StatusController._on_hide_timeout)
        _LOGGER.debug("Showing status message (auto_hide=%s): %r", auto_hide, text)

    def hide_message(self) -> None:
        if self._closed:
            return
        self._cancel_hide_timer()
        self._apply_hidden()

    def _cancel_hide_timer(self) -> None:
        timer = self._hide_timer
        self._hide_timer = None
        if timer is not None:
            self._timers.cancel(timer)

    def _apply_hidden(self) -> None:
        self._visible = False
        self._set_visible(False)

    def _on_hide_timeout(self, handle: TimerHandle) -> None:
        if handle is not self._hide_timer:
            return
        self._hide_timer = None
        _LOGGER.debug("Auto-hiding status message after %.1fs", self._display_duration)
        self._apply_hidden()

    # ------------------------------------------------------------------
    # Scheduled messages
    # ------------------------------------------------------------------
    def schedule_message(self, text: str, delay: float, message_type: MessageTypeLike) -> None:
        kind = coerce_message_type(message_type)
        if self._closed:
            return
        self.cancel_scheduled_message(kind)

        def _fire(controller: "StatusController", handle: TimerHandle) -> None:
            if controller._scheduled.get(kind) is handle:
                del controller._scheduled[kind]
            controller.show_message(text)

        seconds = self._normalise_delay(delay, kind)
        self._scheduled[kind] = self._after(seconds, _fire)
        _LOGGER.debug("Scheduled %s message in %.2fs: %r", kind.value, seconds, text)

    def cancel_scheduled_message(self, message_type: MessageTypeLike) -> None:
        kind = coerce_message_type(message_type)
        timer = self._scheduled.pop(kind, None)
        if timer is None:
            return
        self._timers.cancel(timer)
        _LOGGER.debug("Cancelled scheduled %s message", kind.value)

    def cancel_all_scheduled_messages(self) -> None:
        for message_type in ALL_MESSAGE_TYPES:
            self.cancel_scheduled_message(message_type)

    # ------------------------------------------------------------------
    # Tracking quality feedback
    # ------------------------------------------------------------------
    def show_tracking_quality_info(self, state: TrackingState, auto_hide: bool) -> None:
        self.show_message(state.presentation_string, auto_hide=auto_hide)

    def escalate_feedback(self, state: TrackingState, delay: float) -> None:
        """Show a persistent message with guidance if ``state`` is still current after ``delay``."""
        kind = MessageType.TRACKING_STATE_ESCALATION
        if self._closed:
            return
        self.cancel_scheduled_message(kind)

        def _fire(controller: "StatusController", _handle: TimerHandle) -> None:
            controller.cancel_scheduled_message(kind)
            controller.show_message(state.escalation_message, auto_hide=False)

        seconds = self._normalise_delay(delay, kind)
        self._scheduled[kind] = self._after(seconds, _fire)
        _LOGGER.debug("Escalation for %s armed in %.2fs", state.status.value, seconds)

    def update_tracking_state(self, state: TrackingState) -> None:
        """Brief hint now; escalate if degraded, otherwise drop any pending escalation."""
        self.show_tracking_quality_info(state, auto_hide=True)
        if state.is_degraded:
            self.escalate_feedback(state, self._escalation_delay)
        else:
            self.cancel_scheduled_message(MessageType.TRACKING_STATE_ESCALATION)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self._closed:
            return
        self._cancel_hide_timer()
        self.cancel_all_scheduled_messages()
        self._closed = True
        _LOGGER.debug("Status controller closed")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _after(
        self,
        delay: float,
        action: Callable[["StatusController", TimerHandle], None],
    ) -> TimerHandle:
        owner = weakref.ref(self)
        handle_box: list[TimerHandle] = []

        def _callback() -> None:
            controller = owner()
            if controller is None or controller._closed or not handle_box:
                return
            action(controller, handle_box[0])

        handle = self._timers.after(delay, _callback)
        handle_box.append(handle)
        return handle

    @staticmethod
    def _normalise_delay(delay: float, kind: MessageType) -> float:
        try:
            seconds = float(delay)
        except (TypeError, ValueError):
            seconds = 0.0
        if not seconds >= 0.0:
            _LOGGER.debug("Clamped invalid delay %r for %s to 0", delay, kind.value)
            return 0.0
        return seconds
