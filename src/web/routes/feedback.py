"""Like/dislike feedback routes."""

from fastapi import APIRouter, Depends

from web.deps import get_visitor_id, get_vote_reconciler
from web.models import FeedbackCounts, FeedbackListResponse, FeedbackResponse, VoteRequest
from web.votes import FeedbackState, VoteReconciler

router = APIRouter(prefix="/feedback", tags=["feedback"])


def _to_response(state: FeedbackState) -> FeedbackResponse:
    return FeedbackResponse(**state.to_dict())


@router.get("", response_model=FeedbackListResponse)
async def list_feedback(reconciler: VoteReconciler = Depends(get_vote_reconciler)):
    aggregates = reconciler.get_all()
    return FeedbackListResponse(
        feedback={
            resource_id: FeedbackCounts(likes=a.likes, dislikes=a.dislikes, comment_count=a.comment_count)
            for resource_id, a in aggregates.items()
        }
    )


@router.get("/{resource_id}", response_model=FeedbackResponse)
async def get_feedback(
    resource_id: str,
    visitor_id: str = Depends(get_visitor_id),
    reconciler: VoteReconciler = Depends(get_vote_reconciler),
):
    return _to_response(reconciler.get_state(visitor_id, resource_id))


@router.post("/{resource_id}/vote", response_model=FeedbackResponse)
async def submit_vote(
    resource_id: str,
    body: VoteRequest,
    visitor_id: str = Depends(get_visitor_id),
    reconciler: VoteReconciler = Depends(get_vote_reconciler),
):
    outcome = reconciler.submit_vote(visitor_id, resource_id, body.vote)
    return _to_response(outcome.state)
