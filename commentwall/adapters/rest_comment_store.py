"""Comment store adapter for the /api/comments REST endpoint."""

import logging
from typing import Any, Optional

import requests

from commentwall.adapters.comment_store import CommentStore
from commentwall.core.exceptions import ApiError, NetworkError
from commentwall.core.types import Comment, Draft


logger = logging.getLogger("commentwall")

COMMENTS_PATH = "/api/comments"
CREATE_FAILED_MESSAGE = "Failed to add comment"


class RestCommentStore(CommentStore):
    """Reads and writes comments over HTTP. No caching, no retries."""

    def __init__(self, base_url: str, timeout: float = 30):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    @property
    def url(self) -> str:
        return f"{self._base_url}{COMMENTS_PATH}"

    def list_comments(self) -> list[Comment]:
        try:
            response = self._session.get(self.url, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error(f"Comment list request failed: {e}")
            raise NetworkError(f"Failed to reach comment store: {e}")

        if response.status_code != 200:
            logger.error(f"Comment list returned HTTP {response.status_code}")
            raise ApiError(
                f"Failed to load comments (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        data = self._decode_json(response)
        if not isinstance(data, list):
            raise ApiError("Unexpected response format", status_code=response.status_code)

        comments = [self._parse_comment(item) for item in data]
        logger.debug(f"Fetched {len(comments)} comments")
        return comments

    def create_comment(self, draft: Draft) -> Comment:
        try:
            response = self._session.post(
                self.url, json=draft.to_payload(), timeout=self._timeout
            )
        except requests.RequestException as e:
            logger.error(f"Comment create request failed: {e}")
            raise NetworkError(f"Failed to reach comment store: {e}")

        if not 200 <= response.status_code < 300:
            backend_message = self._error_message(response)
            logger.warning(f"Comment rejected (HTTP {response.status_code}): {backend_message}")
            raise ApiError(
                backend_message or CREATE_FAILED_MESSAGE,
                status_code=response.status_code,
                from_backend=backend_message is not None,
            )

        comment = self._parse_comment(self._decode_json(response))
        logger.info(f"Created comment {comment.id} by {comment.username}")
        return comment

    def close(self) -> None:
        self._session.close()

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            raise ApiError("Unexpected response format", status_code=response.status_code)

    @staticmethod
    def _error_message(response: requests.Response) -> Optional[str]:
        """Backend "error" field when present and non-empty, else None.

        Failure bodies may be empty or non-JSON.
        """
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, str) and error:
                return error
        return None

    @staticmethod
    def _parse_comment(item: Any) -> Comment:
        """Convert one wire object ({id, username, content, createdAt}) to Comment."""
        if not isinstance(item, dict):
            raise ApiError("Unexpected response format")
        try:
            comment_id = int(item["id"])
        except (KeyError, TypeError, ValueError):
            raise ApiError("Unexpected response format: comment without id")

        return Comment(
            id=comment_id,
            username=RestCommentStore._string_field(item, "username"),
            content=RestCommentStore._string_field(item, "content"),
            created_at=RestCommentStore._string_field(item, "createdAt"),
        )

    @staticmethod
    def _string_field(item: dict, key: str) -> str:
        """String wire field; absent or null becomes "", any other type is rejected."""
        value = item.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ApiError(f"Unexpected response format: {key} is not a string")
        return value
