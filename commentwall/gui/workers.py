"""QThread worker for comment store calls."""

import logging
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from commentwall.core.exceptions import CommentWallError, NetworkError
from commentwall.core.types import Draft

logger = logging.getLogger("commentwall")


class CommentStoreWorker(QThread):
    """Background worker for listing or creating comments.

    Emits signals to the main thread; widgets never call the store directly.
    Configure with list_comments() or create_comment(), then call start().
    """
    comments_ready = pyqtSignal(list)       # list[Comment]
    comment_created = pyqtSignal(object)    # Comment
    error_occurred = pyqtSignal(object)     # CommentWallError

    def __init__(self, store, parent=None):
        """
        Args:
            store: CommentStore instance
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._store = store
        self._task: Optional[str] = None  # "list" or "create"
        self._draft: Optional[Draft] = None

    def list_comments(self):
        """Configure worker to fetch the comment list, then call start()."""
        self._task = "list"
        self._draft = None

    def create_comment(self, draft: Draft):
        """Configure worker to submit draft, then call start()."""
        self._task = "create"
        self._draft = draft

    def run(self):
        """Execute the configured store call."""
        try:
            if self._task == "list":
                self.comments_ready.emit(self._store.list_comments())
            elif self._task == "create":
                self.comment_created.emit(self._store.create_comment(self._draft))
        except CommentWallError as e:
            logger.error(f"Comment store error: {e}")
            self.error_occurred.emit(e)
        except Exception as e:
            logger.exception("Unexpected comment store error")
            self.error_occurred.emit(NetworkError(str(e)))
