"""Comment form: draft fields, validation and the submit state machine."""

import logging
from typing import Optional

from commentwall.core.exceptions import ValidationError
from commentwall.core.i18n_manager import I18nManager
from commentwall.core.types import Draft, FormState

logger = logging.getLogger("commentwall")

MAX_CONTENT_LENGTH = 2000

USERNAME_REQUIRED_MESSAGE = "Username is required"
CONTENT_REQUIRED_MESSAGE = "Comment is required"
CONTENT_TOO_LONG_TEMPLATE = "Comment exceeds maximum length of {max} characters"
CONTENT_TOO_LONG_MESSAGE = CONTENT_TOO_LONG_TEMPLATE.format(max=MAX_CONTENT_LENGTH)


class CommentForm:
    """Owns the draft comment and its Editing/Submitting/Error state.

    Transitions:
    - EDITING or ERROR -> ERROR on failed local validation (no network call)
    - EDITING or ERROR -> SUBMITTING via begin_submit()
    - SUBMITTING -> EDITING via complete() (draft reset, error cleared)
    - SUBMITTING -> ERROR via fail() (draft preserved)

    A previous error message stays set while SUBMITTING; it is replaced or
    cleared only when the next terminal state is reached.
    """

    def __init__(self, max_length: int = MAX_CONTENT_LENGTH):
        self._max_length = max_length
        self._username = ""
        self._content = ""
        self._state = FormState.EDITING
        self._error: Optional[str] = None

    @property
    def username(self) -> str:
        return self._username

    @property
    def content(self) -> str:
        return self._content

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def error_message(self) -> Optional[str]:
        return self._error

    @property
    def is_submitting(self) -> bool:
        return self._state is FormState.SUBMITTING

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def character_count(self) -> int:
        return len(self._content)

    @property
    def remaining_characters(self) -> int:
        return self._max_length - len(self._content)

    def set_username(self, value: str) -> None:
        self._username = value

    def set_content(self, value: str) -> None:
        self._content = value

    def validate(self) -> Draft:
        """Return the current draft or raise ValidationError.

        Only empty fields are missing; whitespace counts as content.
        """
        i18n = I18nManager()
        if not self._username:
            raise ValidationError(i18n.translate("errors.username_required", USERNAME_REQUIRED_MESSAGE))
        if not self._content:
            raise ValidationError(i18n.translate("errors.content_required", CONTENT_REQUIRED_MESSAGE))
        if len(self._content) > self._max_length:
            raise ValidationError(
                i18n.translate("errors.content_too_long", CONTENT_TOO_LONG_TEMPLATE, max=self._max_length)
            )
        return Draft(username=self._username, content=self._content)

    def begin_submit(self) -> Optional[Draft]:
        """Enter SUBMITTING and hand back the draft to send.

        Returns None (and sends nothing) while a submission is already in
        flight or when validation fails; the latter moves to ERROR.
        """
        if self.is_submitting:
            logger.debug("Submit ignored: submission already in flight")
            return None

        try:
            draft = self.validate()
        except ValidationError as e:
            logger.info(f"Draft rejected locally: {e.message}")
            self.fail(e.message)
            return None

        self._state = FormState.SUBMITTING
        return draft

    def complete(self) -> None:
        """Submission stored: reset the draft and return to EDITING."""
        self._username = ""
        self._content = ""
        self._error = None
        self._state = FormState.EDITING

    def fail(self, message: str) -> None:
        """Enter ERROR with message. The draft is kept for correction."""
        self._error = message
        self._state = FormState.ERROR
