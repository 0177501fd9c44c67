"""Interaction tracking: categorized event log and weighted interest profile."""

from datetime import datetime, timezone
from typing import Callable, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from personalization.models import ExternalLinkEvent, InterestProfile, event_adapter
from personalization.storage import ProfileStorage
from shared_types import InteractionKind

logger = structlog.get_logger()

EXPLICIT_WEIGHT = 1.0
PASSIVE_WEIGHT = 0.1
HISTORY_LIMIT = 20
EXTERNAL_HISTORY_LIMIT = 50


class InteractionStore:
    """Records interactions and keeps per-category interest weights.

    Every ``record`` and ``clear`` ends with a synchronous call to each
    subscribed listener (the recommendation panel refresh).
    """

    def __init__(
        self,
        storage: ProfileStorage,
        history_limit: int = HISTORY_LIMIT,
        external_history_limit: int = EXTERNAL_HISTORY_LIMIT,
        passive_weight: float = PASSIVE_WEIGHT,
    ):
        self.storage = storage
        self.history_limit = history_limit
        self.external_history_limit = external_history_limit
        self.passive_weight = passive_weight
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def weight_for(self, kind: str) -> float:
        return self.passive_weight if kind == InteractionKind.PASSIVE_VIEW else EXPLICIT_WEIGHT

    def record(self, category: str, kind: str, detail: Optional[dict] = None):
        """Append an interaction and bump the category's weight.

        Passive views only add weight; external links go to their own history.

        Raises:
            ValidationError: unknown kind or a detail field the kind does not carry.
        """
        try:
            event = event_adapter.validate_python({**(detail or {}), "kind": kind, "category": category})
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {kind!r} interaction: {e.errors()[0]['msg']}") from e

        with self.storage.mutate() as profile:
            profile.clicks[category] = profile.clicks.get(category, 0.0) + self.weight_for(event.kind)
            if isinstance(event, ExternalLinkEvent):
                profile.external_clicks = [event, *profile.external_clicks][: self.external_history_limit]
            elif event.kind != InteractionKind.PASSIVE_VIEW:
                profile.last_clicks = [event, *profile.last_clicks][: self.history_limit]

        logger.debug("tracker.recorded", category=category, kind=event.kind)
        self._notify()
        return event

    def profile(self) -> InterestProfile:
        return self.storage.load()

    def top_interests(self, limit: int = 3) -> list[tuple[str, float]]:
        return self.storage.load().top_interests(limit)

    def begin_visit(self) -> InterestProfile:
        """Count a new visit and restart the session clock."""
        returning = self.storage.exists()
        with self.storage.mutate() as profile:
            if returning:
                profile.total_visits += 1
            profile.session_start = datetime.now(timezone.utc)
        return profile

    def clear(self) -> None:
        self.storage.reset()
        logger.info("tracker.cleared")
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
