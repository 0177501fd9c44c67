"""Client for the feedback API: votes, comments, cached counts."""

from .client import FeedbackClient, FeedbackSnapshot, PublicComment
from .visitor import get_or_create_visitor_id

__all__ = ["FeedbackClient", "FeedbackSnapshot", "PublicComment", "get_or_create_visitor_id"]
