"""Data Transfer Objects for CommentWall."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Comment:
    """Comment record as returned by the backend."""

    id: int                          # backend-assigned
    username: str
    content: str = ""                # 1-2000 chars; "" when backend omits it
    created_at: str = ""             # ISO-8601, "createdAt" on the wire


@dataclass
class Draft:
    """Unsaved comment being composed in the form."""

    username: str = ""
    content: str = ""

    def to_payload(self) -> dict:
        return {"username": self.username, "content": self.content}


class FormState(Enum):
    """Observable states of the comment form."""

    EDITING = "editing"
    SUBMITTING = "submitting"
    ERROR = "error"


@dataclass
class CommentView:
    """Render result for a single comment in the list."""

    comment_id: int
    username: str
    timestamp: str                   # locale-formatted created_at
    body: str                        # already truncated + marker when collapsed
    truncated: bool = False          # marker appended
    has_toggle: bool = False         # View More / View Less control shown
    expanded: bool = False
