"""Settings for the status overlay, read from status_settings.json."""
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_FILENAME = "status_settings.json"
SETTINGS_ENV_VAR = "STATUS_OVERLAY_SETTINGS"

DEFAULT_DISPLAY_DURATION = 6.0
DEFAULT_ESCALATION_DELAY = 3.0
DEFAULT_FADE_DURATION = 0.2


@dataclass
class StatusSettings:
    """Timing knobs for the message panel."""

    # Seconds before an auto-hiding message fades out.
    display_duration: float = DEFAULT_DISPLAY_DURATION
    escalation_delay: float = DEFAULT_ESCALATION_DELAY
    fade_duration: float = DEFAULT_FADE_DURATION
    log_level: Optional[str] = None


def _clamped_float(data: Dict[str, Any], key: str, fallback: float, minimum: float, maximum: float) -> float:
    try:
        value = float(data.get(key, fallback))
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(value):
        return fallback
    return max(minimum, min(value, maximum))


def _level_name(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        token = str(value).strip().upper()
    except Exception:
        return None
    if isinstance(getattr(logging, token, None), int):
        return token
    return None


def resolve_settings_path(explicit: Optional[str] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser().resolve()
    env_override = os.getenv(SETTINGS_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser().resolve()
    return (Path(__file__).resolve().parent / SETTINGS_FILENAME).resolve()


def load_status_settings(settings_path: Path) -> StatusSettings:
    """Read settings if the file exists; any bad value falls back to its default."""
    defaults = StatusSettings()
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return defaults

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return defaults
    if not isinstance(data, dict):
        return defaults

    return StatusSettings(
        display_duration=_clamped_float(data, "display_duration", defaults.display_duration, 0.5, 120.0),
        escalation_delay=_clamped_float(data, "escalation_delay", defaults.escalation_delay, 0.0, 120.0),
        fade_duration=_clamped_float(data, "fade_duration", defaults.fade_duration, 0.0, 5.0),
        log_level=_level_name(data.get("log_level")),
    )
