"""Shared enums and types for the support centre."""

from enum import StrEnum


class VoteChoice(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"


class VoteState(StrEnum):
    NONE = "none"
    LIKED = "liked"
    DISLIKED = "disliked"


class InteractionKind(StrEnum):
    NAVIGATION = "navigation"
    EXTERNAL_LINK = "external-link"
    ACCORDION = "accordion"
    RECOMMENDATION = "recommendation"
    PASSIVE_VIEW = "passive-view"
    SEARCH = "search"
    HELPLINE = "helpline"


class Relevance(StrEnum):
    PRIMARY = "primary"
    RELATED = "related"
    GENERAL = "general"


GENERAL_CATEGORY = "general"
SEARCH_CATEGORY = "search"
