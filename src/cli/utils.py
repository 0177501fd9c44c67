"""Shared CLI utilities."""

from typing import Optional

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def toast(message: str) -> None:
    """Transient notice for failures the user should know about but can ignore."""
    console.print(f"[yellow]![/] {message}")


def get_components(config_model=None, with_client: bool = False, new_visit: bool = False):
    """Initialize all components from config.

    Args:
        config_model: Pre-loaded config; loaded from the standard locations if None.
        with_client: If True, also build a FeedbackClient (opens an HTTP client).
        new_visit: If True, count this invocation as a visit to the directory.
    """
    from cli.config import get_paths, load_config_model
    from feedback import FeedbackClient, get_or_create_visitor_id
    from personalization import (
        CategoryCatalog,
        Classifier,
        InteractionStore,
        LocalStore,
        ProfileStorage,
        Ranker,
        SearchIndex,
    )

    config_model = config_model or load_config_model()
    paths = get_paths(config_model)
    tracking = config_model.tracking

    local_store = LocalStore(paths["local_state"])
    catalog = CategoryCatalog()
    tracker = InteractionStore(
        ProfileStorage(local_store),
        history_limit=tracking.history_limit,
        external_history_limit=tracking.external_history_limit,
        passive_weight=tracking.passive_weight,
    )
    if new_visit:
        tracker.begin_visit()
    visitor_id = get_or_create_visitor_id(local_store)

    client: Optional[FeedbackClient] = None
    if with_client:
        client = FeedbackClient(
            config_model.api.endpoint,
            visitor_id,
            notify=toast,
            timeout=config_model.api.timeout,
            read_attempts=config_model.api.read_attempts,
            max_comment_length=config_model.feedback.max_comment_length,
        )

    return {
        "config_model": config_model,
        "paths": paths,
        "local_store": local_store,
        "catalog": catalog,
        "classifier": Classifier(catalog),
        "tracker": tracker,
        "ranker": Ranker(catalog, top_interests=tracking.top_interests),
        "search": SearchIndex(),
        "visitor_id": visitor_id,
        "client": client,
    }
