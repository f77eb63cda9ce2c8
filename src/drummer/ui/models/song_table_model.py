# ui/models/song_table_model.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from drummer.core.models import Song

NAME_COL = 0
DATE_COL = 1
ACTIONS_COL = 2

EditingRole = Qt.UserRole + 1


class SongTableModel(QAbstractTableModel):
    def __init__(self, rows=()):
        super().__init__()
        self._rows: list[Song] = list(rows)
        self._editing_id: Optional[str] = None

    def set_rows(self, rows):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def set_editing_id(self, song_id: Optional[str]):
        if song_id == self._editing_id:
            return
        changed = [self._editing_id, song_id]
        self._editing_id = song_id
        for sid in changed:
            row = self.row_for_song_id(sid) if sid else -1
            if row >= 0:
                self.dataChanged.emit(self.index(row, 0), self.index(row, ACTIONS_COL))

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 3

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return ["Name", "Upload Date", "Actions"][section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = self._rows[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == NAME_COL:
                # the inline editor covers the cell while renaming
                return "" if row.id == self._editing_id else row.name
            if col == DATE_COL:
                return row.created_date_label()
            return ""
        if role == Qt.ToolTipRole and col == NAME_COL:
            return row.name
        if role == Qt.UserRole:
            return row
        if role == EditingRole:
            return row.id == self._editing_id
        return None

    def song_at(self, row: int) -> Optional[Song]:
        if row < 0 or row >= len(self._rows):
            return None
        return self._rows[row]

    def row_for_song_id(self, song_id: str) -> int:
        for i, r in enumerate(self._rows):
            if r.id == song_id:
                return i
        return -1
