"""Anonymous visitor token, generated once per client and kept in local state."""

import time
import uuid

import structlog

from personalization.storage import VISITOR_KEY, LocalStore

logger = structlog.get_logger()


def new_visitor_id() -> str:
    return f"v_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def get_or_create_visitor_id(store: LocalStore) -> str:
    """Correlation key for feedback calls; not a credential."""
    visitor_id = store.get(VISITOR_KEY)
    if not visitor_id:
        visitor_id = new_visitor_id()
        store.set(VISITOR_KEY, visitor_id)
        logger.info("visitor.created", visitor_id=visitor_id)
    return visitor_id
