"""Recommendation assembly from interest weights and the category catalog."""

from dataclasses import dataclass

import structlog

from personalization.catalog import CategoryCatalog, Resource
from personalization.models import InterestProfile
from shared_types import Relevance

logger = structlog.get_logger()

MAX_RESULTS = 8
TOP_INTERESTS = 3
RELATED_PER_CATEGORY = 2
GENERAL_MIX = ("mental-health", "grief-loss", "financial-support")
GENERAL_PER_CATEGORY = 2


@dataclass(frozen=True)
class Recommendation:
    resource: Resource
    category: str
    relevance: Relevance

    @property
    def url(self) -> str:
        return self.resource.url

    @property
    def title(self) -> str:
        return self.resource.title


class Ranker:
    """Greedy, weight-ordered recommendation builder.

    For each top interest: every curated resource of the category, then the
    first two of each related category. The first occurrence of a url wins,
    so primaries beat relateds and stronger interests beat weaker ones.
    """

    def __init__(self, catalog: CategoryCatalog, top_interests: int = TOP_INTERESTS):
        self.catalog = catalog
        self.top_interests = top_interests

    def recommendations(self, profile: InterestProfile, max_results: int = MAX_RESULTS) -> list[Recommendation]:
        picked: list[Recommendation] = []
        seen: set[str] = set()

        def add(resource: Resource, category: str, relevance: Relevance) -> None:
            if resource.url in seen:
                return
            seen.add(resource.url)
            picked.append(Recommendation(resource, category, relevance))

        for category_id, _weight in profile.top_interests(self.top_interests):
            category = self.catalog.get(category_id)
            if category is None:
                continue
            for resource in category.resources:
                add(resource, category_id, Relevance.PRIMARY)
            for related_id in category.related:
                for resource in self.catalog.resources(related_id, RELATED_PER_CATEGORY):
                    add(resource, related_id, Relevance.RELATED)

        if not picked:
            for category_id in GENERAL_MIX:
                for resource in self.catalog.resources(category_id, GENERAL_PER_CATEGORY):
                    add(resource, category_id, Relevance.GENERAL)

        logger.debug("ranker.assembled", candidates=len(picked), max_results=max_results)
        return picked[:max_results]
