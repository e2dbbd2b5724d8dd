"""Abstract base class for comment store access."""

from abc import ABC, abstractmethod

from commentwall.core.types import Comment, Draft


class CommentStore(ABC):
    """Abstract interface for reading and writing comments."""

    @abstractmethod
    def list_comments(self) -> list[Comment]:
        """Fetch every comment, in backend order.

        Returns:
            List of Comment

        Raises:
            ApiError: Non-success response or malformed payload
            NetworkError: Transport failure
        """
        ...

    @abstractmethod
    def create_comment(self, draft: Draft) -> Comment:
        """Persist a new comment.

        Args:
            draft: Username and content to submit

        Returns:
            The stored Comment with backend-assigned id and created_at

        Raises:
            ApiError: Backend rejected the comment (message from its "error" field)
            NetworkError: Transport failure
        """
        ...

    def close(self) -> None:
        """Release any held resources."""
