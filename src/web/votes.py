"""Vote reconciliation: one current vote per (visitor, resource), toggle semantics."""

from dataclasses import dataclass
from typing import Optional

import structlog

from errors import StorageFailure
from observability import metrics
from shared_types import VoteChoice, VoteState
from validation import parse_vote
from web.feedback_store import DEFAULT_VOTE_RETENTION_DAYS, FeedbackAggregate, FeedbackStore

logger = structlog.get_logger()

_STATE_FOR_CHOICE = {VoteChoice.LIKE: VoteState.LIKED, VoteChoice.DISLIKE: VoteState.DISLIKED}
_CHOICE_FOR_STATE = {v: k for k, v in _STATE_FOR_CHOICE.items()}


def state_of(vote: Optional[str]) -> VoteState:
    """Stored vote value -> state."""
    return _STATE_FOR_CHOICE[VoteChoice(vote)] if vote else VoteState.NONE


def vote_of(state: VoteState) -> Optional[VoteChoice]:
    return _CHOICE_FOR_STATE.get(state)


def next_state(current: VoteState, requested: Optional[VoteChoice]) -> VoteState:
    """Repeating the current vote retracts it; any other choice replaces it."""
    if requested is None:
        return VoteState.NONE
    target = _STATE_FOR_CHOICE[requested]
    return VoteState.NONE if target == current else target


def vote_deltas(previous: VoteState, current: VoteState) -> tuple[int, int]:
    """(like_delta, dislike_delta) for moving from ``previous`` to ``current``."""
    like = int(current == VoteState.LIKED) - int(previous == VoteState.LIKED)
    dislike = int(current == VoteState.DISLIKED) - int(previous == VoteState.DISLIKED)
    return like, dislike


@dataclass(frozen=True)
class FeedbackState:
    """A resource's aggregate plus one visitor's current vote."""

    aggregate: FeedbackAggregate
    user_vote: Optional[VoteChoice] = None

    def to_dict(self) -> dict:
        return {
            "resourceId": self.aggregate.resource_id,
            "likes": self.aggregate.likes,
            "dislikes": self.aggregate.dislikes,
            "userVote": self.user_vote.value if self.user_vote else None,
            "commentCount": self.aggregate.comment_count,
        }


@dataclass(frozen=True)
class VoteOutcome:
    previous: VoteState
    current: VoteState
    like_delta: int
    dislike_delta: int
    state: FeedbackState


class VoteReconciler:
    """Applies toggle votes and keeps aggregate counters in step.

    The visitor's vote row is swapped with compare-and-set against the state
    that was read; a lost race re-reads and recomputes, so a double click
    cannot count the same transition twice. The counter update that follows
    is a separate atomic increment: a failure between the two leaves the vote
    row ahead of the counters.
    """

    def __init__(
        self,
        store: FeedbackStore,
        retention_days: int = DEFAULT_VOTE_RETENTION_DAYS,
        max_attempts: int = 3,
    ):
        self.store = store
        self.retention_days = retention_days
        self.max_attempts = max_attempts

    def submit_vote(self, visitor_id: str, resource_id: str, requested: object) -> VoteOutcome:
        """Toggle ``requested`` for the visitor and return the fresh aggregate.

        Raises:
            ValidationError: requested is not "like", "dislike" or None.
            StorageFailure: the vote row kept changing underneath us.
        """
        choice = parse_vote(requested)
        with metrics.timer("votes.submit"):
            return self._apply(visitor_id, resource_id, choice)

    def _apply(self, visitor_id: str, resource_id: str, choice: Optional[VoteChoice]) -> VoteOutcome:
        for attempt in range(1, self.max_attempts + 1):
            previous = state_of(self.store.get_vote(visitor_id, resource_id))
            current = next_state(previous, choice)
            if self.store.compare_and_set_vote(
                visitor_id,
                resource_id,
                expected=vote_of(previous),
                new=vote_of(current),
                retention_days=self.retention_days,
            ):
                break
            metrics.counter("votes.cas_retry")
            logger.info("votes.cas_conflict", resource_id=resource_id, attempt=attempt)
        else:
            raise StorageFailure(f"Vote for {resource_id} changed concurrently; gave up after {self.max_attempts} attempts")

        like_delta, dislike_delta = vote_deltas(previous, current)
        if like_delta or dislike_delta:
            self.store.increment(resource_id, like_delta, dislike_delta)

        metrics.counter("votes.submitted")
        logger.info(
            "votes.submitted",
            resource_id=resource_id,
            previous=previous.value,
            current=current.value,
            like_delta=like_delta,
            dislike_delta=dislike_delta,
        )
        return VoteOutcome(
            previous=previous,
            current=current,
            like_delta=like_delta,
            dislike_delta=dislike_delta,
            state=FeedbackState(self.store.get_aggregate(resource_id), vote_of(current)),
        )

    def get_state(self, visitor_id: str, resource_id: str) -> FeedbackState:
        vote = self.store.get_vote(visitor_id, resource_id)
        return FeedbackState(self.store.get_aggregate(resource_id), VoteChoice(vote) if vote else None)

    def get_all(self) -> dict[str, FeedbackAggregate]:
        return self.store.all_aggregates()
