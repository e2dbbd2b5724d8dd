"""Main application window: comment form above the comment list."""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QScrollArea, QStatusBar,
)

from commentwall.core.i18n_manager import I18nManager
from commentwall.core.types import Comment
from commentwall.gui.workers import CommentStoreWorker
from commentwall.gui.widgets.comment_form_widget import CommentFormWidget
from commentwall.gui.widgets.comment_list_widget import CommentListWidget
from commentwall.services.page_controller import PageController

logger = logging.getLogger("commentwall")


class MainWindow(QMainWindow):
    """Single-page comment wall.

    All PageController mutations happen here on the UI thread; store calls
    run on CommentStoreWorker threads and report back through signals.
    """

    def __init__(self, controller: PageController, load_on_start: bool = True):
        super().__init__()
        self._controller = controller
        self._i18n = I18nManager()

        # Workers kept as instance attrs to prevent GC while running
        self._load_worker: Optional[CommentStoreWorker] = None
        self._submit_worker: Optional[CommentStoreWorker] = None

        self.setWindowTitle(self._i18n.get("app.title"))
        self.setMinimumSize(640, 600)

        self._init_ui()

        if load_on_start:
            self.load_comments()

    def _init_ui(self):
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        self.setCentralWidget(scroll)

        content = QWidget()
        layout = QVBoxLayout(content)

        self._form_widget = CommentFormWidget(self._controller.form)
        self._form_widget.submit_requested.connect(self._on_submit_requested)
        layout.addWidget(self._form_widget)

        # Load status row: loading text or load error + retry
        status_row = QHBoxLayout()
        self._load_status_label = QLabel()
        self._load_status_label.setWordWrap(True)
        status_row.addWidget(self._load_status_label)
        status_row.addStretch()
        self._retry_btn = QPushButton(self._i18n.get("list.retry"))
        self._retry_btn.clicked.connect(self.load_comments)
        self._retry_btn.hide()
        status_row.addWidget(self._retry_btn)
        layout.addLayout(status_row)

        self._list_widget = CommentListWidget()
        self._list_widget.toggle_requested.connect(self._on_toggle_requested)
        layout.addWidget(self._list_widget)

        scroll.setWidget(content)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._refresh_list()
        self._refresh_load_status()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_comments(self):
        """Start the async list-fetch. Ignored while one is running."""
        if self._load_worker is not None and self._load_worker.isRunning():
            return

        self._controller.begin_load()
        self._refresh_load_status()
        self._refresh_list()

        self._load_worker = CommentStoreWorker(self._controller.store)
        self._load_worker.comments_ready.connect(self._on_comments_ready)
        self._load_worker.error_occurred.connect(self._on_load_error)
        self._load_worker.list_comments()
        self._load_worker.start()

    def _on_comments_ready(self, comments: list):
        self._controller.finish_load(comments)
        self._refresh_load_status()
        self._refresh_list()

    def _on_load_error(self, error):
        self._controller.fail_load(error)
        self._refresh_load_status()
        self._refresh_list()

    def _refresh_load_status(self):
        if self._controller.loading:
            self._load_status_label.setStyleSheet("color: gray;")
            self._load_status_label.setText(self._i18n.get("list.loading"))
            self._load_status_label.show()
            self._retry_btn.hide()
        elif self._controller.load_error:
            self._load_status_label.setStyleSheet("color: #e53935;")
            self._load_status_label.setText(self._controller.load_error)
            self._load_status_label.show()
            self._retry_btn.show()
        else:
            self._load_status_label.clear()
            self._load_status_label.hide()
            self._retry_btn.hide()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _on_submit_requested(self):
        draft = self._controller.begin_submit()
        self._form_widget.sync_from_form()
        if draft is None:
            return

        self._submit_worker = CommentStoreWorker(self._controller.store)
        self._submit_worker.comment_created.connect(self._on_comment_created)
        self._submit_worker.error_occurred.connect(self._on_submit_error)
        self._submit_worker.create_comment(draft)
        self._submit_worker.start()

    def _on_comment_created(self, comment: Comment):
        self._controller.finish_submit(comment)
        self._form_widget.sync_from_form()
        self._refresh_list()
        self._status_bar.showMessage(self._i18n.get("status.comment_added"), 3000)

    def _on_submit_error(self, error):
        self._controller.fail_submit(error)
        self._form_widget.sync_from_form()

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def _on_toggle_requested(self, comment_id: int):
        self._controller.toggle_expanded(comment_id)
        self._refresh_list()

    def _refresh_list(self):
        show_empty = not self._controller.loading and not self._controller.load_error
        self._list_widget.set_views(self._controller.rendered_comments(), show_empty=show_empty)

