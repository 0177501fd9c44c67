"""CLI command modules."""

from .feedback_cmd import comment, comments, feedback, vote
from .server import serve
from .tracking import clear, interests, recommend, search, track

__all__ = [
    "serve",
    "track",
    "interests",
    "recommend",
    "clear",
    "search",
    "feedback",
    "vote",
    "comment",
    "comments",
]
