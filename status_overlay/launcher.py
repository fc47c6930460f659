from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication, QVBoxLayout, QWidget

from status_overlay.message_types import MessageType
from status_overlay.status_config import StatusSettings, load_status_settings, resolve_settings_path
from status_overlay.status_controller import StatusController
from status_overlay.status_panel import StatusPanel
from status_overlay.timers import MAX_TIMER_MS, QtTimerFacility, TimerFacility, timer_interval_ms
from status_overlay.tracking_state import TrackingState
from status_overlay.version import __version__, is_dev_build

LOGGER_NAME = "StatusOverlay"
LOG_TAG = "StatusOverlay"
_CLIENT_LOGGER = logging.getLogger("StatusOverlay.Client")

# Seconds between scripted tracking-state changes in the demo.
DEMO_STATE_INTERVAL = 4.0


def resolve_log_level(cli_level: Optional[str], settings: StatusSettings) -> int:
    for candidate in (cli_level, settings.log_level):
        if not candidate:
            continue
        level = getattr(logging, str(candidate).strip().upper(), None)
        if isinstance(level, int):
            return level
    if is_dev_build():
        return logging.DEBUG
    return logging.INFO


def configure_logging(level: int) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(handler, "_status_overlay_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler._status_overlay_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def parse_states(tokens: Sequence[str]) -> List[TrackingState]:
    states: List[TrackingState] = []
    for token in tokens:
        try:
            states.append(TrackingState.parse(token))
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"unknown tracking state {token!r}") from exc
    return states


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Status overlay message panel demo")
    parser.add_argument("--settings", help="Path to status_settings.json")
    parser.add_argument("--log-level", help="Logging level name (DEBUG, INFO, ...)")
    parser.add_argument(
        "--exit-after",
        type=float,
        default=None,
        help="Quit the event loop after this many seconds",
    )
    parser.add_argument(
        "--state",
        dest="states",
        action="append",
        default=[],
        help="Tracking state to replay, e.g. normal, not_available, limited:excessive_motion",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def schedule_demo(controller: StatusController, states: Sequence[TrackingState], timers: TimerFacility) -> None:
    """Queue the scripted demo: a plane hint, then each tracking state in turn."""
    controller.schedule_message("Move the device to find a surface", 0.5, MessageType.PLANE_ESTIMATION)
    controller.schedule_message("Plane found", 2.0, MessageType.PLANE_ESTIMATION)
    for index, state in enumerate(states, start=1):
        timers.after(index * DEMO_STATE_INTERVAL, lambda state=state: controller.update_tracking_state(state))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        states = parse_states(args.states)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    settings_path = resolve_settings_path(args.settings)
    settings = load_status_settings(settings_path)
    configure_logging(resolve_log_level(args.log_level, settings))
    _CLIENT_LOGGER.info("Starting status overlay %s (pid=%s)", __version__, os.getpid())
    _CLIENT_LOGGER.debug(
        "Loaded settings from %s: display=%.1fs escalation=%.1fs fade=%.2fs",
        settings_path,
        settings.display_duration,
        settings.escalation_delay,
        settings.fade_duration,
    )

    app = QApplication(sys.argv[:1])
    window = QWidget()
    window.setWindowTitle("Status Overlay")
    window.resize(480, 160)
    layout = QVBoxLayout(window)
    panel = StatusPanel(window, fade_duration=settings.fade_duration)
    layout.addWidget(panel)
    layout.addStretch(1)

    timers = QtTimerFacility(window)
    controller = StatusController(
        timers,
        set_text=panel.set_message_text,
        set_visible=panel.set_message_visible,
        display_duration=settings.display_duration,
        escalation_delay=settings.escalation_delay,
    )
    schedule_demo(controller, states, timers)
    if args.exit_after is not None:
        interval = timer_interval_ms(max(0.0, args.exit_after))
        QTimer.singleShot(MAX_TIMER_MS if interval is None else interval, app.quit)

    window.show()
    exit_code = app.exec()
    controller.close()
    _CLIENT_LOGGER.info("Status overlay exiting with code %s", exit_code)
    return int(exit_code)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
