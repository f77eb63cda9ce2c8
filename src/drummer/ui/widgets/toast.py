from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QEasingCurve, QPoint, QPropertyAnimation
from PySide6.QtWidgets import (
    QWidget,
    QFrame,
    QLabel,
    QHBoxLayout,
    QToolButton,
    QGraphicsOpacityEffect,
)

from drummer.core.models import Notification


def _colors(kind: str) -> tuple[str, str, str]:
    """
    Returns (bg, border, text).
    """
    kind = (kind or "info").lower()
    if kind == "success":
        return "#052e1a", "#16a34a", "#e5e7eb"
    if kind == "error":
        return "#2a0a0a", "#ef4444", "#e5e7eb"
    return "#0b1222", "#38bdf8", "#e5e7eb"


class ToastWidget(QFrame):
    def __init__(self, notification: Notification, parent: "ToastOverlay"):
        super().__init__(parent)
        self.notification = notification
        self._overlay = parent

        bg, border, text = _colors(notification.severity)

        self.setObjectName("Toast")
        self.setStyleSheet(f"""
        QFrame#Toast {{
            background: {bg};
            border: 1px solid {border};
            border-radius: 14px;
        }}
        QLabel {{
            color: {text};
            font-size: 12px;
        }}
        QToolButton {{
            border: none;
            background: transparent;
            color: {text};
            padding: 2px 6px;
        }}
        QToolButton:hover {{
            background: rgba(255,255,255,0.06);
            border-radius: 8px;
        }}
        """)

        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        root = QHBoxLayout(self)
        root.setContentsMargins(12, 10, 10, 10)
        root.setSpacing(10)

        self.lbl = QLabel(notification.text)
        self.lbl.setWordWrap(True)

        self.btn_close = QToolButton()
        self.btn_close.setText("✕")
        self.btn_close.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_close.clicked.connect(self._overlay.dismissRequested)

        root.addWidget(self.lbl, 1)
        root.addWidget(self.btn_close, 0, Qt.AlignmentFlag.AlignTop)

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)

        self._anim_opacity: Optional[QPropertyAnimation] = None
        self._anim_pos: Optional[QPropertyAnimation] = None

    def play_in(self, start_pos: QPoint, end_pos: QPoint):
        self.move(start_pos)

        self._anim_pos = QPropertyAnimation(self, b"pos", self)
        self._anim_pos.setDuration(180)
        self._anim_pos.setStartValue(start_pos)
        self._anim_pos.setEndValue(end_pos)
        self._anim_pos.setEasingCurve(QEasingCurve.Type.OutCubic)

        self._anim_opacity = QPropertyAnimation(self._opacity, b"opacity", self)
        self._anim_opacity.setDuration(180)
        self._anim_opacity.setStartValue(0.0)
        self._anim_opacity.setEndValue(1.0)
        self._anim_opacity.setEasingCurve(QEasingCurve.Type.OutCubic)

        self.show()
        self._anim_pos.start()
        self._anim_opacity.start()


class ToastOverlay(QWidget):
    """
    Shows the NotificationCenter's single slot in the top-right corner of the
    host. The overlay has no timers of its own: it only mirrors the slot.
    """

    def __init__(self, host: QWidget, notifications):
        super().__init__(host)
        self.host = host
        self.notifications = notifications
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, False)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, False)

        self._toast: Optional[ToastWidget] = None
        self._margin = 14

        notifications.changed.connect(self.show_notification)
        self.hide()

    @property
    def text(self) -> str:
        return self._toast.notification.text if self._toast else ""

    def dismissRequested(self):
        self.notifications.dismiss()

    def show_notification(self, n: Optional[Notification]):
        if self._toast is not None:
            self._toast.hide()
            self._toast.deleteLater()
            self._toast = None

        if n is None or not n.text:
            self.hide()
            return

        toast = ToastWidget(n, parent=self)
        self._toast = toast
        self._place(animate=True)

    def reposition(self):
        if self._toast is not None:
            self._place(animate=False)

    def _place(self, animate: bool):
        toast = self._toast
        width = min(420, max(260, self.host.width() // 2))
        toast.setFixedWidth(width)
        toast.adjustSize()
        h = toast.sizeHint().height()
        toast.setFixedHeight(h)

        # overlay only covers the toast so the rest of the window stays clickable
        x = self.host.width() - width - self._margin
        self.setGeometry(max(0, x), self._margin, width, h + 12)
        self.show()
        self.raise_()

        end_pos = QPoint(0, 0)
        if animate:
            toast.play_in(start_pos=end_pos + QPoint(0, -12), end_pos=end_pos)
        else:
            toast.move(end_pos)
            toast.show()
