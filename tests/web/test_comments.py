"""Tests for comment validation and storage."""

import re

import pytest

from errors import ValidationError
from observability import metrics
from web.comments import CommentStore, hash_visitor_id, new_comment_id


@pytest.fixture
def comments(feedback_store):
    return CommentStore(feedback_store)


class TestHashVisitorId:
    def test_deterministic(self):
        assert hash_visitor_id("v_1_abc") == hash_visitor_id("v_1_abc")
        assert hash_visitor_id("v_1_abc") != hash_visitor_id("v_1_abd")

    def test_known_values(self):
        assert hash_visitor_id("") == "0"
        assert hash_visitor_id("a") == "61"
        # "anonymous" overflows 32 bits and folds to a negative number
        assert hash_visitor_id("anonymous").startswith("-")

    def test_astral_characters_fold_as_surrogate_pairs(self):
        # U+1F600 is the pair D83D DE00: 0xD83D * 31 + 0xDE00
        assert hash_visitor_id("\U0001F600") == "1b0d63"

    def test_does_not_contain_visitor_id(self):
        assert "abc123" not in hash_visitor_id("v_1700000000000_abc123")


class TestCommentId:
    def test_shape(self):
        assert re.fullmatch(r"\d{13}-[0-9a-f]{9}", new_comment_id())

    def test_unique(self):
        assert len({new_comment_id() for _ in range(50)}) == 50


class TestCommentStore:
    def test_add_trims_and_stores_hash(self, comments, feedback_store):
        comment = comments.add("mind", "v_1_abc", "  Really helpful  ")
        assert comment.text == "Really helpful"
        assert comment.visitor_hash == hash_visitor_id("v_1_abc")
        assert comment.helpful == 0
        assert feedback_store.list_comments("mind")[0].id == comment.id

    def test_max_length_accepted(self, comments):
        assert len(comments.add("mind", "v1", "x" * 500).text) == 500

    def test_over_max_length_rejected(self, comments):
        with pytest.raises(ValidationError, match="500 characters or less"):
            comments.add("mind", "v1", "x" * 501)
        assert comments.count("mind") == 0
        assert metrics.summary()["counters"]["comments.rejected"] == 1

    @pytest.mark.parametrize("text", [None, "", "   \n\t", 42])
    def test_missing_text_rejected(self, comments, text):
        with pytest.raises(ValidationError, match="Comment text is required"):
            comments.add("mind", "v1", text)
        assert comments.count("mind") == 0

    def test_custom_limit(self, feedback_store):
        store = CommentStore(feedback_store, max_length=10)
        with pytest.raises(ValidationError, match="10 characters or less"):
            store.add("mind", "v1", "x" * 11)

    def test_list_newest_first(self, feedback_store):
        stamps = iter(["2026-01-01T00:00:00.000+00:00", "2026-01-02T00:00:00.000+00:00"])
        store = CommentStore(feedback_store, clock=lambda: next(stamps))
        store.add("mind", "v1", "older")
        store.add("mind", "v2", "newer")
        assert [c.text for c in store.list("mind")] == ["newer", "older"]
        assert store.count("mind") == 2
