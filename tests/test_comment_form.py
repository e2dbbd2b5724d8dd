"""Tests for CommentForm."""

import pytest

from commentwall.core.exceptions import ValidationError
from commentwall.core.i18n_manager import I18nManager
from commentwall.core.types import Draft, FormState
from commentwall.services.comment_form import (
    CommentForm,
    CONTENT_REQUIRED_MESSAGE,
    CONTENT_TOO_LONG_MESSAGE,
    USERNAME_REQUIRED_MESSAGE,
)


def make_form(username="alice", content="hi"):
    form = CommentForm()
    form.set_username(username)
    form.set_content(content)
    return form


class TestInitialState:
    def test_starts_editing_with_empty_draft(self):
        form = CommentForm()
        assert form.state is FormState.EDITING
        assert form.username == ""
        assert form.content == ""
        assert form.error_message is None
        assert not form.is_submitting


class TestValidate:
    def test_valid_draft(self):
        assert make_form().validate() == Draft(username="alice", content="hi")

    def test_exactly_max_length_is_valid(self):
        assert make_form(content="x" * 2000).validate().content == "x" * 2000

    def test_over_max_length_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_form(content="x" * 2001).validate()
        assert exc_info.value.message == "Comment exceeds maximum length of 2000 characters"

    def test_empty_username_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_form(username="").validate()
        assert exc_info.value.message == USERNAME_REQUIRED_MESSAGE

    def test_whitespace_username_accepted(self):
        assert make_form(username=" ").validate() == Draft(username=" ", content="hi")

    def test_whitespace_content_accepted(self):
        assert make_form(content="   ").validate().content == "   "

    def test_whitespace_content_enters_submitting(self):
        form = make_form(username=" ", content=" ")
        assert form.begin_submit() == Draft(" ", " ")
        assert form.state is FormState.SUBMITTING

    def test_empty_content_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_form(content="").validate()
        assert exc_info.value.message == CONTENT_REQUIRED_MESSAGE


class TestBeginSubmit:
    def test_valid_draft_enters_submitting(self):
        form = make_form()
        draft = form.begin_submit()
        assert draft == Draft("alice", "hi")
        assert form.state is FormState.SUBMITTING
        assert form.is_submitting

    def test_too_long_enters_error_without_draft(self):
        form = make_form(content="x" * 2001)
        assert form.begin_submit() is None
        assert form.state is FormState.ERROR
        assert form.error_message == CONTENT_TOO_LONG_MESSAGE
        # Draft is untouched
        assert form.content == "x" * 2001

    def test_second_submit_while_submitting_is_noop(self):
        form = make_form()
        form.begin_submit()
        assert form.begin_submit() is None
        assert form.state is FormState.SUBMITTING
        assert form.error_message is None

    def test_resubmit_from_error_keeps_message_until_terminal(self):
        form = make_form()
        form.begin_submit()
        form.fail("username required")

        assert form.begin_submit() == Draft("alice", "hi")
        assert form.state is FormState.SUBMITTING
        assert form.error_message == "username required"

    def test_validation_error_replaces_previous_error(self):
        form = make_form()
        form.fail("server said no")
        form.set_content("")
        form.begin_submit()
        assert form.error_message == CONTENT_REQUIRED_MESSAGE


class TestTerminalTransitions:
    def test_complete_resets_draft_and_error(self):
        form = make_form()
        form.fail("old error")
        form.begin_submit()
        form.complete()

        assert form.state is FormState.EDITING
        assert form.username == ""
        assert form.content == ""
        assert form.error_message is None

    def test_fail_preserves_draft(self):
        form = make_form()
        form.begin_submit()
        form.fail("An unexpected error occurred.")

        assert form.state is FormState.ERROR
        assert form.username == "alice"
        assert form.content == "hi"


class TestLocalizedMessages:
    def test_english_locale_matches_defaults(self):
        I18nManager().load_locale("en_US")
        with pytest.raises(ValidationError) as exc_info:
            make_form(content="x" * 2001).validate()
        assert exc_info.value.message == CONTENT_TOO_LONG_MESSAGE

    def test_korean_locale_messages(self):
        I18nManager().load_locale("ko_KR")
        form = make_form(username="")
        form.begin_submit()
        assert form.error_message == "이름을 입력하세요"

        with pytest.raises(ValidationError) as exc_info:
            make_form(content="x" * 2001).validate()
        assert exc_info.value.message == "댓글은 최대 2000자까지 입력할 수 있습니다"

    def test_custom_max_length_in_message(self):
        form = CommentForm(max_length=10)
        form.set_username("alice")
        form.set_content("x" * 11)
        with pytest.raises(ValidationError) as exc_info:
            form.validate()
        assert exc_info.value.message == "Comment exceeds maximum length of 10 characters"


class TestCounter:
    def test_character_count_and_remaining(self):
        form = make_form(content="abcde")
        assert form.character_count == 5
        assert form.remaining_characters == 1995
        assert form.max_length == 2000

    def test_remaining_goes_negative_over_limit(self):
        assert make_form(content="x" * 2003).remaining_characters == -3
