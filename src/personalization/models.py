"""Pydantic models for tracked interactions and the local interest profile."""

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Event(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    category: str
    timestamp: datetime = Field(default_factory=_utcnow)


class NavigationEvent(_Event):
    kind: Literal["navigation"] = "navigation"


class ExternalLinkEvent(_Event):
    kind: Literal["external-link"] = "external-link"
    url: str = ""
    title: str = ""


class AccordionEvent(_Event):
    kind: Literal["accordion"] = "accordion"
    section: str = ""


class RecommendationEvent(_Event):
    kind: Literal["recommendation"] = "recommendation"


class PassiveViewEvent(_Event):
    kind: Literal["passive-view"] = "passive-view"


class SearchEvent(_Event):
    kind: Literal["search"] = "search"
    query: str = ""
    title: str = ""


class HelplineEvent(_Event):
    kind: Literal["helpline"] = "helpline"
    title: str = ""


InteractionEvent = Annotated[
    Union[
        NavigationEvent,
        ExternalLinkEvent,
        AccordionEvent,
        RecommendationEvent,
        PassiveViewEvent,
        SearchEvent,
        HelplineEvent,
    ],
    Field(discriminator="kind"),
]

event_adapter: TypeAdapter = TypeAdapter(InteractionEvent)


class InterestProfile(BaseModel):
    """Per-visitor engagement state kept on the client.

    ``clicks`` maps category id to accumulated weight; its insertion order is
    the tie-break for equal weights. Histories are newest first.
    """

    clicks: dict[str, float] = Field(default_factory=dict)
    last_clicks: list[InteractionEvent] = Field(default_factory=list)
    external_clicks: list[ExternalLinkEvent] = Field(default_factory=list)
    session_start: datetime = Field(default_factory=_utcnow)
    total_visits: int = 1

    def top_interests(self, limit: int = 3) -> list[tuple[str, float]]:
        ranked = sorted(self.clicks.items(), key=lambda kv: kv[1], reverse=True)
        return ranked[:limit]

    def is_empty(self) -> bool:
        return not self.clicks
