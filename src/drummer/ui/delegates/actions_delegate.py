# ui/delegates/actions_delegate.py
from __future__ import annotations

from PySide6.QtCore import QEvent, Qt, QRect, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QStyledItemDelegate, QStyleOptionButton, QApplication, QStyle

from drummer.ui.models.song_table_model import ACTIONS_COL, EditingRole

ROW_ACTIONS = (("download", "Download"), ("original", "Original"), ("rename", "Rename"), ("delete", "Delete"))
EDIT_ACTIONS = (("save", "Save"), ("cancel", "Cancel"))

BTN_W, BTN_H, GAP = 78, 26, 6


def button_rects(rect: QRect, count: int) -> list[QRect]:
    x = rect.left() + 8
    y = rect.center().y() - BTN_H // 2
    out = []
    for _ in range(count):
        out.append(QRect(x, y, BTN_W, BTN_H))
        x += BTN_W + GAP
    return out


class ActionsDelegate(QStyledItemDelegate):
    actionClicked = Signal(str, str)  # action, song_id

    def _actions(self, index):
        return EDIT_ACTIONS if index.data(EditingRole) else ROW_ACTIONS

    def paint(self, painter: QPainter, option, index):
        super().paint(painter, option, index)

        actions = self._actions(index)
        for (_key, label), btn_rect in zip(actions, button_rects(option.rect, len(actions))):
            opt = QStyleOptionButton()
            opt.rect = btn_rect
            opt.text = label
            opt.state = QStyle.State_Enabled
            QApplication.style().drawControl(QStyle.CE_PushButton, opt, painter)

    def editorEvent(self, event, model, option, index):
        if index.column() != ACTIONS_COL:
            return False
        if event.type() == QEvent.Type.MouseButtonRelease and event.button() == Qt.LeftButton:
            song = index.data(Qt.UserRole)
            if not song:
                return False

            actions = self._actions(index)
            for (key, _label), btn_rect in zip(actions, button_rects(option.rect, len(actions))):
                if btn_rect.contains(event.position().toPoint()):
                    self.actionClicked.emit(key, song.id)
                    return True
        return False
