"""Run pytest with the project root importable.

Usage:
    python tests/configure_pytest_environment.py [pytest args]

Qt tests use the offscreen platform so the suite also runs on machines
without a display.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path


def main(argv: list[str]) -> int:
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    try:
        import pytest  # type: ignore
    except ImportError as exc:  # pragma: no cover
        print("pytest is not installed in this environment.", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        import PyQt6  # noqa: F401
    except ImportError as exc:  # pragma: no cover
        print("PyQt6 is not installed; run `pip install -e .[test]` first.", file=sys.stderr)
        raise SystemExit(1) from exc

    return pytest.main(argv or [str(root / "tests")])


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
