"""Fading message panel that renders the controller's text and visibility."""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QEasingCurve, QPropertyAnimation, Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QFrame, QGraphicsOpacityEffect, QLabel, QVBoxLayout, QWidget

from status_overlay.status_config import DEFAULT_FADE_DURATION

_CLIENT_LOGGER = logging.getLogger("StatusOverlay.Client")


class StatusPanel(QFrame):
    """Rounded translucent panel holding one word-wrapped message label."""

    def __init__(self, parent: Optional[QWidget] = None, *, fade_duration: float = DEFAULT_FADE_DURATION) -> None:
        super().__init__(parent)
        self.setObjectName("statusPanel")
        self.setStyleSheet(
            "#statusPanel { background: rgba(20, 20, 20, 190); border-radius: 8px; }"
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

        message_font = QFont()
        message_font.setPointSize(14)
        self.message_label = QLabel("", self)
        self.message_label.setFont(message_font)
        self.message_label.setStyleSheet("color: #f0f0f0; background: transparent;")
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.addWidget(self.message_label)

        self._opacity_effect = QGraphicsOpacityEffect(self)
        self._opacity_effect.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity_effect)

        self._fade_ms = max(0, int(round(fade_duration * 1000)))
        self._fade = QPropertyAnimation(self._opacity_effect, b"opacity", self)
        self._fade.setDuration(self._fade_ms)
        self._fade.setEasingCurve(QEasingCurve.Type.InOutQuad)

        # Hidden until the first message arrives.
        self.hide()

    @property
    def opacity(self) -> float:
        return float(self._opacity_effect.opacity())

    def set_message_text(self, text: str) -> None:
        self.message_label.setText(text)

    def set_message_hidden(self, hide: bool, animated: bool = True) -> None:
        self.setHidden(False)
        target = 0.0 if hide else 1.0

        self._fade.stop()
        if not animated or self._fade_ms <= 0:
            self._opacity_effect.setOpacity(target)
            return

        # Start from wherever a previous fade left off.
        self._fade.setStartValue(self._opacity_effect.opacity())
        self._fade.setEndValue(target)
        self._fade.start()
        _CLIENT_LOGGER.debug("Fading status panel %s over %dms", "out" if hide else "in", self._fade_ms)

    def set_message_visible(self, visible: bool) -> None:
        self.set_message_hidden(not visible, animated=True)
