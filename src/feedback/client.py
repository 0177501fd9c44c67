"""HTTP client for like/dislike votes and comments, with a read-through cache."""

from dataclasses import dataclass, replace
from typing import Callable, Optional
from urllib.parse import quote

import httpx
import structlog

from cli.retry import http_retry
from errors import ValidationError
from validation import MAX_COMMENT_LENGTH, parse_vote, validate_comment_text

logger = structlog.get_logger()

NETWORK_NOTICE = "Unable to save feedback. Please try again."
READ_NOTICE = "Could not load feedback."


@dataclass(frozen=True)
class FeedbackSnapshot:
    resource_id: str
    likes: int = 0
    dislikes: int = 0
    comment_count: int = 0
    user_vote: Optional[str] = None

    @classmethod
    def from_payload(cls, resource_id: str, payload: dict, user_vote: Optional[str] = None) -> "FeedbackSnapshot":
        return cls(
            resource_id=payload.get("resourceId", resource_id),
            likes=int(payload.get("likes") or 0),
            dislikes=int(payload.get("dislikes") or 0),
            comment_count=int(payload.get("commentCount") or 0),
            user_vote=payload.get("userVote", user_vote),
        )


@dataclass(frozen=True)
class PublicComment:
    id: str
    text: str
    timestamp: str
    helpful: int = 0

    @classmethod
    def from_payload(cls, payload: dict) -> "PublicComment":
        return cls(
            id=payload["id"],
            text=payload["text"],
            timestamp=payload["timestamp"],
            helpful=int(payload.get("helpful") or 0),
        )


def _resource_path(prefix: str, resource_id: str, suffix: str = "") -> str:
    return f"{prefix}/{quote(resource_id, safe='')}{suffix}"


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        return response.json().get("error") or default
    except ValueError:
        return default


class FeedbackClient:
    """Talks to the feedback API on behalf of one visitor.

    Network failures never escape: reads fall back to the cache (or zeros),
    writes leave the cache untouched, and both call ``notify`` once with a
    user-facing message. Callers re-render from ``cached()`` afterwards.
    """

    def __init__(
        self,
        base_url: str,
        visitor_id: str,
        http: Optional[httpx.Client] = None,
        notify: Optional[Callable[[str], None]] = None,
        timeout: float = 10.0,
        read_attempts: int = 2,
        retry_wait: float = 0.5,
        max_comment_length: int = MAX_COMMENT_LENGTH,
    ):
        self.visitor_id = visitor_id
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._notify = notify or (lambda message: None)
        self._cache: dict[str, FeedbackSnapshot] = {}
        self.max_comment_length = max_comment_length
        self._read = http_retry(max_attempts=read_attempts, min_wait=retry_wait)(self._send)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "FeedbackClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- transport ---

    def _send(self, method: str, path: str, body: Optional[dict] = None) -> dict:
        response = self._http.request(
            method,
            path,
            json=body,
            headers={"X-Visitor-Id": self.visitor_id, "Content-Type": "application/json"},
        )
        response.raise_for_status()
        return response.json()

    def _failed(self, method: str, path: str, error: Exception, notice: str = NETWORK_NOTICE) -> None:
        logger.warning("feedback_client.request_failed", method=method, path=path, error=str(error))
        self._notify(notice)

    # --- cache ---

    def cached(self, resource_id: str) -> FeedbackSnapshot:
        return self._cache.get(resource_id) or FeedbackSnapshot(resource_id)

    # --- reads ---

    def fetch_all(self) -> dict[str, FeedbackSnapshot]:
        """Bulk warm-up of counts; keeps any per-visitor vote already cached."""
        try:
            data = self._read("GET", "/feedback")
        except (httpx.HTTPError, ValueError) as e:
            self._failed("GET", "/feedback", e, READ_NOTICE)
            return dict(self._cache)

        for resource_id, counts in (data.get("feedback") or {}).items():
            previous = self._cache.get(resource_id)
            self._cache[resource_id] = FeedbackSnapshot.from_payload(
                resource_id, counts, user_vote=previous.user_vote if previous else None
            )
        return dict(self._cache)

    def fetch_one(self, resource_id: str) -> FeedbackSnapshot:
        path = _resource_path("/feedback", resource_id)
        try:
            data = self._read("GET", path)
        except (httpx.HTTPError, ValueError) as e:
            self._failed("GET", path, e, READ_NOTICE)
            return self.cached(resource_id)
        snapshot = FeedbackSnapshot.from_payload(resource_id, data)
        self._cache[resource_id] = snapshot
        return snapshot

    def list_comments(self, resource_id: str) -> list[PublicComment]:
        path = _resource_path("/comments", resource_id)
        try:
            data = self._read("GET", path)
        except (httpx.HTTPError, ValueError) as e:
            self._failed("GET", path, e, READ_NOTICE)
            return []
        return [PublicComment.from_payload(c) for c in data.get("comments", [])]

    # --- writes (never retried) ---

    def vote(self, resource_id: str, choice: Optional[str]) -> Optional[FeedbackSnapshot]:
        """Toggle a vote. Returns the server's new state, or None on failure."""
        parse_vote(choice)
        path = _resource_path("/feedback", resource_id, "/vote")
        try:
            data = self._send("POST", path, {"vote": choice})
        except (httpx.HTTPError, ValueError) as e:
            self._failed("POST", path, e)
            return None
        snapshot = FeedbackSnapshot.from_payload(resource_id, data)
        self._cache[resource_id] = snapshot
        return snapshot

    def comment(self, resource_id: str, text: str) -> Optional[PublicComment]:
        """Post a comment. Returns it, or None on network failure.

        Raises:
            ValidationError: blank or oversized text, checked locally and by the server.
        """
        clean = validate_comment_text(text, self.max_comment_length)
        path = _resource_path("/comments", resource_id)
        try:
            data = self._send("POST", path, {"text": clean})
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 400:
                raise ValidationError(_error_message(e.response, "Invalid comment")) from e
            self._failed("POST", path, e)
            return None
        except (httpx.HTTPError, ValueError) as e:
            self._failed("POST", path, e)
            return None

        current = self.cached(resource_id)
        self._cache[resource_id] = replace(current, comment_count=current.comment_count + 1)
        return PublicComment.from_payload(data)
