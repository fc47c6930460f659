"""Version identifier and dev-mode switch for Status Overlay."""
from __future__ import annotations

import os
from typing import Mapping, Optional

__all__ = ["__version__", "DEV_MODE_ENV_VAR", "is_dev_build"]

__version__ = "0.3.1"
DEV_MODE_ENV_VAR = "STATUS_OVERLAY_DEV_MODE"

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _env_flag(environ: Mapping[str, str]) -> Optional[bool]:
    raw = environ.get(DEV_MODE_ENV_VAR)
    if raw is None:
        return None
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    return None


def is_dev_build(version: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when verbose diagnostics should be on by default.

    The environment variable wins when it holds a recognisable boolean; otherwise
    any ``dev`` marker in the version string (``-dev``, ``.dev3``) enables it.
    """

    flag = _env_flag(os.environ if environ is None else environ)
    if flag is not None:
        return flag
    identifier = (version or __version__).strip().lower()
    segments = identifier.replace(".", "-").split("-")
    return any(segment.startswith("dev") for segment in segments if segment)
