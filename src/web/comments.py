"""Append-only anonymous comments per resource."""

import time
import uuid
from typing import Callable

import structlog

from errors import ValidationError
from observability import metrics
from validation import MAX_COMMENT_LENGTH, validate_comment_text
from web.feedback_store import Comment, FeedbackStore, utc_timestamp

logger = structlog.get_logger()


def hash_visitor_id(visitor_id: str) -> str:
    """One-way fold of a visitor id into a signed 32-bit hex string.

    Folds UTF-16 code units, so characters outside the BMP count as two
    surrogates. Collisions only blur attribution; comments are never
    de-duplicated by visitor.
    """
    data = visitor_id.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = int.from_bytes(data[i : i + 2], "little")
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(h, "x")


def new_comment_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class CommentStore:
    def __init__(
        self,
        store: FeedbackStore,
        max_length: int = MAX_COMMENT_LENGTH,
        clock: Callable[[], str] = utc_timestamp,
    ):
        self.store = store
        self.max_length = max_length
        self.clock = clock

    def add(self, resource_id: str, visitor_id: str, text: object) -> Comment:
        """Validate and append a comment.

        Raises:
            ValidationError: text missing, blank, or over ``max_length``.
        """
        try:
            clean = validate_comment_text(text, self.max_length)
        except ValidationError:
            metrics.counter("comments.rejected")
            raise

        comment = Comment(
            id=new_comment_id(),
            resource_id=resource_id,
            text=clean,
            visitor_hash=hash_visitor_id(visitor_id),
            timestamp=self.clock(),
        )
        self.store.add_comment(comment)
        metrics.counter("comments.added")
        logger.info("comments.added", resource_id=resource_id, comment_id=comment.id, length=len(clean))
        return comment

    def list(self, resource_id: str) -> list[Comment]:
        return self.store.list_comments(resource_id)

    def count(self, resource_id: str) -> int:
        return self.store.get_aggregate(resource_id).comment_count
