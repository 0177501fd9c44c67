"""Pydantic request/response schemas for the feedback API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Feedback ---


class VoteRequest(BaseModel):
    """Vote body; ``vote`` must be present, null retracts. Values are checked by the reconciler."""

    vote: Optional[str]


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resource_id: str = Field(alias="resourceId")
    likes: int = 0
    dislikes: int = 0
    user_vote: Optional[str] = Field(None, alias="userVote")
    comment_count: int = Field(0, alias="commentCount")


class FeedbackCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    likes: int = 0
    dislikes: int = 0
    comment_count: int = Field(0, alias="commentCount")


class FeedbackListResponse(BaseModel):
    feedback: dict[str, FeedbackCounts] = {}


# --- Comments ---


class CommentCreate(BaseModel):
    text: Optional[str] = None


class CommentOut(BaseModel):
    id: str
    text: str
    timestamp: str
    helpful: int = 0


class CommentListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resource_id: str = Field(alias="resourceId")
    comments: list[CommentOut] = []


# --- Service ---


class HealthResponse(BaseModel):
    status: str
    metrics: dict = {}
