# ui/widgets/song_list_widget.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal, Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QLabel, QLineEdit, QStackedWidget

from drummer.core.models import EditSession
from drummer.ui.delegates.actions_delegate import ActionsDelegate
from drummer.ui.models.song_table_model import ACTIONS_COL, NAME_COL, SongTableModel

EMPTY_TEXT = "No songs uploaded yet. Upload your first MP3 file above!"


class SongListWidget(QWidget):
    actionRequested = Signal(str, str)  # action, song_id

    def __init__(self, app_state):
        super().__init__()
        self.app_state = app_state
        self.catalog = app_state.catalog
        self.edits = app_state.edits
        self._editor: Optional[QLineEdit] = None
        self._editor_song_id: Optional[str] = None

        self.table = QTableView()
        self.model = SongTableModel([])
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)

        self.table.setColumnWidth(NAME_COL, 360)
        self.table.setColumnWidth(1, 120)
        self.table.setColumnWidth(ACTIONS_COL, 350)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setObjectName("SongTable")
        self.table.verticalHeader().setDefaultSectionSize(34)

        self.actions = ActionsDelegate(self.table)
        self.actions.actionClicked.connect(self.actionRequested.emit)
        self.table.setItemDelegateForColumn(ACTIONS_COL, self.actions)

        self.table.doubleClicked.connect(self._on_double_click)

        self.empty_label = QLabel(EMPTY_TEXT)
        self.empty_label.setObjectName("EmptyLabel")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.stack = QStackedWidget()
        self.stack.addWidget(self.empty_label)
        self.stack.addWidget(self.table)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.stack)

        self._apply_styles()

        self.catalog.changed.connect(self.refresh)
        self.edits.changed.connect(self._on_edit_changed)
        self.refresh()

    # -------------------------
    # External API
    # -------------------------
    def refresh(self):
        session = self.edits.session
        cursor = None
        if session is not None and self._editor is not None and self._editor_song_id == session.song_id:
            # the model reset destroys index widgets; carry the caret over
            cursor = (
                self._editor.cursorPosition(),
                self._editor.selectionStart(),
                len(self._editor.selectedText()),
            )

        self._close_editor()
        self.model.set_rows(self.catalog.list())
        self.stack.setCurrentWidget(self.table if self.model.rowCount() else self.empty_label)
        self.model.set_editing_id(session.song_id if session else None)
        if session is not None:
            self._open_editor(session, cursor)

    def showing_empty_message(self) -> bool:
        return self.stack.currentWidget() is self.empty_label

    def displayed_names(self) -> list[str]:
        return [self.model.song_at(i).name for i in range(self.model.rowCount())]

    @property
    def editor(self) -> Optional[QLineEdit]:
        return self._editor

    # -------------------------
    # Inline rename
    # -------------------------
    def _on_edit_changed(self, session: Optional[EditSession]):
        if session is None:
            self._close_editor()
            self.model.set_editing_id(None)
            return

        self.model.set_editing_id(session.song_id)
        if self._editor is not None and self._editor_song_id == session.song_id:
            # draft updates come from the editor itself
            if self._editor.text() != session.draft_name:
                self._editor.setText(session.draft_name)
            return

        self._close_editor()
        self._open_editor(session)

    def _open_editor(self, session: EditSession, cursor: Optional[tuple[int, int, int]] = None):
        row = self.model.row_for_song_id(session.song_id)
        if row < 0:
            return

        editor = QLineEdit(session.draft_name)
        editor.setObjectName("RenameInput")
        editor.textEdited.connect(self.edits.update_draft)
        editor.returnPressed.connect(self.edits.save)
        esc = QShortcut(QKeySequence("Escape"), editor, activated=self.edits.cancel)
        esc.setContext(Qt.ShortcutContext.WidgetShortcut)

        self._editor = editor
        self._editor_song_id = session.song_id
        self.table.setIndexWidget(self.model.index(row, NAME_COL), editor)
        editor.setFocus()
        if cursor is None:
            editor.selectAll()
            return

        position, sel_start, sel_len = cursor
        if sel_start >= 0 and sel_len:
            if position == sel_start:
                editor.setSelection(sel_start + sel_len, -sel_len)
            else:
                editor.setSelection(sel_start, sel_len)
        else:
            editor.setCursorPosition(position)

    def _close_editor(self):
        if self._editor is None:
            return
        row = self.model.row_for_song_id(self._editor_song_id)
        if row >= 0:
            self.table.setIndexWidget(self.model.index(row, NAME_COL), None)
        else:
            self._editor.deleteLater()
        self._editor = None
        self._editor_song_id = None

    # -------------------------
    # UI Events
    # -------------------------
    def _on_double_click(self, index):
        if not index.isValid() or index.column() != NAME_COL:
            return
        song = self.model.song_at(index.row())
        if song is not None:
            self.actionRequested.emit("rename", song.id)

    def _apply_styles(self):
        self.setStyleSheet("""
        QTableView#SongTable {
            background-color: #020617;
            alternate-background-color: #030712;
            border: none;
            color: #e5e7eb;
            gridline-color: #020617;
            selection-background-color: rgba(56, 189, 248, 0.2);
            selection-color: #e5e7eb;
        }

        QHeaderView::section {
            background-color: #020617;
            color: #9ca3af;
            padding: 4px 6px;
            border: none;
            border-bottom: 1px solid #111827;
            font-size: 11px;
            text-transform: uppercase;
            letter-spacing: 0.08em;
        }

        QTableView::item {
            padding: 4px 6px;
        }

        QLabel#EmptyLabel {
            color: #9ca3af;
            padding: 24px;
        }
        """)
