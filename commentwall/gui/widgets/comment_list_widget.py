"""List widget rendering comments with View More / View Less toggles."""

import html
import logging

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)
from PyQt6.QtCore import Qt, pyqtSignal

from commentwall.core.i18n_manager import I18nManager
from commentwall.core.types import CommentView

logger = logging.getLogger("commentwall")


class CommentListWidget(QWidget):
    """Renders CommentView items; expansion state lives in the presenter."""

    toggle_requested = pyqtSignal(int)  # comment id

    def __init__(self, parent=None):
        super().__init__(parent)
        self._i18n = I18nManager()
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._heading = QLabel(self._i18n.get("list.heading"))
        self._heading.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self._heading)

        self._empty_label = QLabel(self._i18n.get("list.empty"))
        self._empty_label.setStyleSheet("color: gray;")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

        # Container layout for dynamically-added comment frames
        self._items_area = QVBoxLayout()
        layout.addLayout(self._items_area)
        layout.addStretch()

    def set_views(self, views: list[CommentView], show_empty: bool = True):
        """Replace all rendered comments.

        show_empty=False suppresses the "no comments" hint (while loading
        or after a failed load, when the list is not known to be empty).
        """
        self._clear_items()
        for view in views:
            self._items_area.addWidget(self._build_item(view))
        self._empty_label.setVisible(show_empty and not views)

    def _build_item(self, view: CommentView) -> QFrame:
        frame = QFrame()
        frame.setFrameShape(QFrame.Shape.StyledPanel)
        frame_layout = QVBoxLayout(frame)

        header_layout = QHBoxLayout()
        header_layout.addWidget(QLabel(f"<b>{html.escape(view.username)}</b>"))
        header_layout.addStretch()
        timestamp = QLabel(view.timestamp)
        timestamp.setStyleSheet("color: gray; font-size: 11px;")
        header_layout.addWidget(timestamp)
        frame_layout.addLayout(header_layout)

        body = QLabel(view.body)
        body.setTextFormat(Qt.TextFormat.PlainText)
        body.setWordWrap(True)
        body.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        frame_layout.addWidget(body)

        if view.has_toggle:
            key = "list.view_less" if view.expanded else "list.view_more"
            toggle_btn = QPushButton(self._i18n.get(key))
            toggle_btn.setFlat(True)
            toggle_btn.setStyleSheet("color: #1e88e5; text-align: left;")
            toggle_btn.clicked.connect(
                lambda checked, cid=view.comment_id: self.toggle_requested.emit(cid)
            )
            frame_layout.addWidget(toggle_btn, alignment=Qt.AlignmentFlag.AlignLeft)

        return frame

    def _clear_items(self):
        while self._items_area.count():
            item = self._items_area.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

