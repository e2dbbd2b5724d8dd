"""Page controller: comment collection, initial load and submission flow."""

import logging
from typing import Iterable, Optional

from commentwall.adapters.comment_store import CommentStore
from commentwall.core.exceptions import ApiError, CommentWallError
from commentwall.core.i18n_manager import I18nManager
from commentwall.core.types import Comment, CommentView, Draft
from commentwall.services.comment_form import CommentForm
from commentwall.services.list_presenter import CommentListPresenter

logger = logging.getLogger("commentwall")

LOAD_FAILED_MESSAGE = "Failed to load comments."
SUBMIT_FAILED_MESSAGE = "An unexpected error occurred."
CREATE_FAILED_MESSAGE = "Failed to add comment"


class PageController:
    """Orchestrates the comment wall page.

    Responsibilities:
    - Load the comment collection once via CommentStore
    - Surface load failures as load_error instead of an empty list
    - Drive the form through submission and append created comments
    - Delegate rendering and expanded flags to CommentListPresenter

    Each network operation is split into begin/finish/fail steps so the GUI
    can run the store call on a worker thread and apply results on the UI
    thread. load_comments() and submit() compose the steps synchronously.
    """

    def __init__(
        self,
        store: CommentStore,
        form: Optional[CommentForm] = None,
        presenter: Optional[CommentListPresenter] = None,
    ):
        self._store = store
        self._form = form or CommentForm()
        self._presenter = presenter or CommentListPresenter()
        self._comments: list[Comment] = []
        self._loading = False
        self._load_error: Optional[str] = None
        # Comments created while a list-fetch is in flight
        self._created_during_load: list[Comment] = []

    @property
    def store(self) -> CommentStore:
        return self._store

    @property
    def form(self) -> CommentForm:
        return self._form

    @property
    def presenter(self) -> CommentListPresenter:
        return self._presenter

    @property
    def comments(self) -> tuple[Comment, ...]:
        return tuple(self._comments)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def submitting(self) -> bool:
        return self._form.is_submitting

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def begin_load(self) -> None:
        self._loading = True
        self._load_error = None
        self._created_during_load = []

    def finish_load(self, comments: Iterable[Comment]) -> None:
        """Replace the collection with a successful list-fetch result.

        Comments created after the fetch started are kept when the fetched
        snapshot does not already contain them.
        """
        fetched = list(comments)
        fetched_ids = {c.id for c in fetched}
        fetched.extend(c for c in self._created_during_load if c.id not in fetched_ids)
        self._comments = fetched
        self._created_during_load = []
        self._loading = False
        self._load_error = None
        logger.info(f"Loaded {len(self._comments)} comments")

    def fail_load(self, error: Exception) -> None:
        """Record a failed list-fetch. The collection is left untouched."""
        self._loading = False
        self._created_during_load = []
        self._load_error = I18nManager().translate("errors.load_failed", LOAD_FAILED_MESSAGE)
        logger.error(f"Failed to load comments: {error}")

    def load_comments(self) -> bool:
        """Fetch the collection. Returns False and sets load_error on failure."""
        self.begin_load()
        try:
            comments = self._store.list_comments()
        except CommentWallError as e:
            self.fail_load(e)
            return False
        self.finish_load(comments)
        return True

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def begin_submit(self) -> Optional[Draft]:
        """Draft to send, or None when nothing should reach the network."""
        return self._form.begin_submit()

    def finish_submit(self, comment: Comment) -> None:
        """Append the stored comment and reset the draft."""
        self._comments.append(comment)
        if self._loading:
            self._created_during_load.append(comment)
        self._form.complete()

    def fail_submit(self, error: Exception) -> None:
        """Show the backend's own message for ApiError, a localized one otherwise."""
        i18n = I18nManager()
        if isinstance(error, ApiError):
            if error.from_backend:
                message = error.message
            else:
                logger.warning(f"Comment submission rejected: {error}")
                message = i18n.translate("errors.create_failed", CREATE_FAILED_MESSAGE)
        else:
            logger.error(f"Comment submission failed: {error}")
            message = i18n.translate("errors.submit_failed", SUBMIT_FAILED_MESSAGE)
        self._form.fail(message)

    def submit(self) -> Optional[Comment]:
        """Validate, send and apply one submission. Returns the new comment."""
        draft = self.begin_submit()
        if draft is None:
            return None
        try:
            comment = self._store.create_comment(draft)
        except CommentWallError as e:
            self.fail_submit(e)
            return None
        self.finish_submit(comment)
        return comment

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def rendered_comments(self) -> list[CommentView]:
        return self._presenter.render(self._comments)

    def toggle_expanded(self, comment_id: int) -> bool:
        return self._presenter.toggle(comment_id)
