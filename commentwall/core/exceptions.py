"""Custom exception hierarchy for CommentWall."""

from typing import Optional


class CommentWallError(Exception):
    """Base exception for all CommentWall errors."""

    def __init__(self, message: str = "An error occurred in CommentWall"):
        self.message = message
        super().__init__(self.message)


class ValidationError(CommentWallError):
    """Draft failed local validation. Never reaches the network."""

    def __init__(self, message: str = "Comment is invalid"):
        super().__init__(message)


class StoreError(CommentWallError):
    """Base exception for comment store errors."""

    def __init__(self, message: str = "A comment store error occurred"):
        super().__init__(message)


class ApiError(StoreError):
    """Backend rejected the request or returned an unusable response."""

    def __init__(
        self,
        message: str = "Failed to add comment",
        status_code: Optional[int] = None,
        from_backend: bool = False,
    ):
        self.status_code = status_code
        self.from_backend = from_backend  # message is the backend's own "error" text
        super().__init__(message)


class NetworkError(StoreError):
    """Transport failure (DNS, timeout, connection reset)."""

    def __init__(self, message: str = "A network error occurred"):
        super().__init__(message)


class ConfigError(CommentWallError):
    """Configuration is invalid or cannot be saved."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)
