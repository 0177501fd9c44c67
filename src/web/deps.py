"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from typing import Optional

import structlog
from fastapi import Depends, Header

from cli.config import load_config_model
from cli.config_models import SupportConfig
from web.comments import CommentStore
from web.feedback_store import FeedbackStore
from web.votes import VoteReconciler

logger = structlog.get_logger()

ANONYMOUS_VISITOR = "anonymous"


@lru_cache
def get_config() -> SupportConfig:
    """Load config once per process. ``create_app(config)`` overrides this."""
    return load_config_model()


@lru_cache
def _open_store(db_path: str) -> FeedbackStore:
    logger.info("feedback_store.open", db_path=db_path)
    return FeedbackStore(db_path)


def get_feedback_store(config: SupportConfig = Depends(get_config)) -> FeedbackStore:
    return _open_store(str(config.storage.db_path))


def get_vote_reconciler(
    store: FeedbackStore = Depends(get_feedback_store),
    config: SupportConfig = Depends(get_config),
) -> VoteReconciler:
    return VoteReconciler(
        store,
        retention_days=config.feedback.vote_retention_days,
        max_attempts=config.feedback.max_vote_attempts,
    )


def get_comment_store(
    store: FeedbackStore = Depends(get_feedback_store),
    config: SupportConfig = Depends(get_config),
) -> CommentStore:
    return CommentStore(store, max_length=config.feedback.max_comment_length)


def get_visitor_id(x_visitor_id: Optional[str] = Header(None)) -> str:
    """Opaque correlation key from X-Visitor-Id; not authenticated."""
    return x_visitor_id or ANONYMOUS_VISITOR
