"""Comment list rendering: truncation, expansion flags and timestamps."""

from datetime import datetime
from typing import Iterable

from commentwall.core.types import Comment, CommentView

MAX_DISPLAY_LENGTH = 150
TRUNCATION_MARKER = "..."


def format_timestamp(created_at: str) -> str:
    """Render an ISO-8601 timestamp in local time using the locale format.

    Unparseable values are returned unchanged.
    """
    if not created_at:
        return ""
    value = created_at.strip()
    # fromisoformat() before 3.11 rejects the "Z" suffix
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return created_at
    return parsed.astimezone().strftime("%x %X")


def render_comment(comment: Comment, expanded: bool = False) -> CommentView:
    """Pure rendering of one comment for the given expanded flag."""
    content = comment.content or ""
    is_long = len(content) > MAX_DISPLAY_LENGTH

    if is_long and not expanded:
        body = content[:MAX_DISPLAY_LENGTH] + TRUNCATION_MARKER
    else:
        body = content

    return CommentView(
        comment_id=comment.id,
        username=comment.username,
        timestamp=format_timestamp(comment.created_at),
        body=body,
        truncated=is_long and not expanded,
        has_toggle=is_long,
        expanded=expanded and is_long,
    )


class CommentListPresenter:
    """Keeps per-comment expanded flags keyed by comment id.

    Flags survive re-renders and reorderings of the list; toggling one
    comment never touches another.
    """

    def __init__(self):
        self._expanded: dict[int, bool] = {}

    def is_expanded(self, comment_id: int) -> bool:
        return self._expanded.get(comment_id, False)

    def toggle(self, comment_id: int) -> bool:
        """Flip the flag for one comment and return the new value."""
        expanded = not self.is_expanded(comment_id)
        self._expanded[comment_id] = expanded
        return expanded

    def render_one(self, comment: Comment) -> CommentView:
        return render_comment(comment, self.is_expanded(comment.id))

    def render(self, comments: Iterable[Comment]) -> list[CommentView]:
        return [self.render_one(c) for c in comments]
