"""Tests for recommendation assembly."""

import pytest

from personalization import InterestProfile, Ranker
from shared_types import Relevance


@pytest.fixture
def ranker(catalog):
    return Ranker(catalog)


def _profile(**weights) -> InterestProfile:
    return InterestProfile(clicks={k.replace("_", "-"): v for k, v in weights.items()})


class TestRanker:
    def test_empty_profile_gets_general_mix(self, ranker):
        recs = ranker.recommendations(InterestProfile())
        assert len(recs) == 6
        assert all(r.relevance == Relevance.GENERAL for r in recs)
        assert [r.category for r in recs] == [
            "mental-health",
            "mental-health",
            "grief-loss",
            "grief-loss",
            "financial-support",
            "financial-support",
        ]

    def test_primaries_then_related(self, ranker):
        recs = ranker.recommendations(_profile(grief_loss=3.0))
        assert len(recs) == 8
        assert [r.relevance for r in recs[:4]] == [Relevance.PRIMARY] * 4
        assert recs[0].url == "https://www.cruse.org.uk"
        assert [r.category for r in recs[4:]] == ["mental-health", "mental-health", "financial-support", "financial-support"]
        assert all(r.relevance == Relevance.RELATED for r in recs[4:])

    def test_no_duplicate_urls(self, ranker):
        """Samaritans is curated under both grief and crisis; the stronger interest keeps it."""
        recs = ranker.recommendations(_profile(grief_loss=5.0, crisis=3.0, mental_health=1.0), max_results=100)
        urls = [r.url for r in recs]
        assert len(urls) == len(set(urls))
        samaritans = [r for r in recs if r.url == "https://www.samaritans.org"]
        assert samaritans[0].category == "grief-loss"
        assert samaritans[0].relevance == Relevance.PRIMARY

    def test_respects_max_results(self, ranker):
        profile = _profile(carers=3.0, crisis=2.0, degenerative=1.0)
        assert len(ranker.recommendations(profile, max_results=3)) == 3
        assert len(ranker.recommendations(InterestProfile(), max_results=4)) == 4

    def test_only_top_three_interests_used(self, ranker):
        profile = _profile(carers=4.0, crisis=3.0, degenerative=2.0, professional_guidance=1.0)
        recs = ranker.recommendations(profile, max_results=100)
        assert "https://www.nice.org.uk" not in {r.url for r in recs if r.relevance == Relevance.PRIMARY}

    def test_unknown_categories_skipped(self, ranker):
        recs = ranker.recommendations(_profile(general=9.0, carers=1.0), max_results=100)
        assert recs[0].category == "carers"
        assert recs[0].relevance == Relevance.PRIMARY

    def test_only_unknown_categories_falls_back_to_general(self, ranker):
        recs = ranker.recommendations(_profile(general=2.0, search=1.0))
        assert len(recs) == 6
        assert {r.relevance for r in recs} == {Relevance.GENERAL}

    def test_unknown_related_category_contributes_nothing(self, ranker):
        """mental-health lists self-care as related, which has no resources."""
        recs = ranker.recommendations(_profile(mental_health=1.0), max_results=100)
        assert "self-care" not in {r.category for r in recs}
        assert len(recs) == 4 + 2 + 2
