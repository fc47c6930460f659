from __future__ import annotations

import argparse
import logging

import pytest

from status_overlay import launcher
from status_overlay import version
from status_overlay.status_config import StatusSettings
from status_overlay.tracking_state import LimitedReason, TrackingState


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), ("off", False), ("0", False)],
)
def test_dev_mode_env_override(raw, expected) -> None:
    environ = {version.DEV_MODE_ENV_VAR: raw}

    assert version.is_dev_build("1.0.0", environ=environ) is expected
    assert version.is_dev_build("1.0.0-dev", environ=environ) is expected


@pytest.mark.parametrize(
    "identifier, expected",
    [("1.2.0", False), ("1.2.0-dev", True), ("1.2.0.dev4", True), ("0.3.1", False)],
)
def test_dev_mode_from_version_marker(identifier, expected) -> None:
    assert version.is_dev_build(identifier, environ={}) is expected


def test_dev_mode_ignores_unrecognised_env_value() -> None:
    environ = {version.DEV_MODE_ENV_VAR: "maybe"}

    assert version.is_dev_build("2.0.0-dev", environ=environ) is True


def test_resolve_log_level_prefers_cli_then_settings(monkeypatch) -> None:
    monkeypatch.setattr(launcher, "is_dev_build", lambda: False)

    assert launcher.resolve_log_level("warning", StatusSettings(log_level="DEBUG")) == logging.WARNING
    assert launcher.resolve_log_level(None, StatusSettings(log_level="DEBUG")) == logging.DEBUG
    assert launcher.resolve_log_level("nonsense", StatusSettings()) == logging.INFO


def test_resolve_log_level_dev_mode_defaults_to_debug(monkeypatch) -> None:
    monkeypatch.setattr(launcher, "is_dev_build", lambda: True)

    assert launcher.resolve_log_level(None, StatusSettings()) == logging.DEBUG


def test_configure_logging_installs_single_handler() -> None:
    logger = launcher.configure_logging(logging.INFO)
    launcher.configure_logging(logging.DEBUG)

    tagged = [handler for handler in logger.handlers if getattr(handler, "_status_overlay_handler", False)]
    assert len(tagged) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert logging.getLogger("StatusOverlay.Controller").getEffectiveLevel() == logging.DEBUG


def test_parse_states_and_parser() -> None:
    args = launcher.build_parser().parse_args(
        ["--state", "limited:excessive_motion", "--state", "normal", "--exit-after", "2"]
    )

    assert launcher.parse_states(args.states) == [
        TrackingState.limited(LimitedReason.EXCESSIVE_MOTION),
        TrackingState.normal(),
    ]
    assert args.exit_after == pytest.approx(2.0)


def test_parse_states_rejects_unknown_token() -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        launcher.parse_states(["limited:wobbly"])


def test_main_reports_bad_state(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        launcher.main(["--state", "sideways"])

    assert excinfo.value.code == 2
    assert "unknown tracking state" in capsys.readouterr().err


def test_schedule_demo_queues_plane_hint_and_states() -> None:
    from status_overlay.status_controller import StatusController
    from status_overlay.timers import ManualTimerFacility

    timers = ManualTimerFacility()
    shown: list[str] = []
    controller = StatusController(timers, set_text=shown.append)
    states = [TrackingState.not_available(), TrackingState.normal()]

    launcher.schedule_demo(controller, states, timers)
    timers.advance(2.0)
    assert shown == ["Plane found"]

    timers.advance(2.0)
    assert controller.text == "TRACKING UNAVAILABLE"
    timers.advance(4.0)
    assert controller.text == "TRACKING NORMAL"
    # The unavailable state escalated at t=7 before normal tracking resumed.
    assert shown == ["Plane found", "TRACKING UNAVAILABLE", "TRACKING UNAVAILABLE", "TRACKING NORMAL"]
