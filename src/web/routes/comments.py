"""Anonymous comment routes."""

from fastapi import APIRouter, Depends, status

from web.comments import CommentStore
from web.deps import get_comment_store, get_visitor_id
from web.models import CommentCreate, CommentListResponse, CommentOut

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{resource_id}", response_model=CommentListResponse)
async def list_comments(resource_id: str, comments: CommentStore = Depends(get_comment_store)):
    return CommentListResponse(
        resource_id=resource_id,
        comments=[CommentOut(**c.to_dict()) for c in comments.list(resource_id)],
    )


@router.post("/{resource_id}", status_code=status.HTTP_201_CREATED, response_model=CommentOut)
async def add_comment(
    resource_id: str,
    body: CommentCreate,
    visitor_id: str = Depends(get_visitor_id),
    comments: CommentStore = Depends(get_comment_store),
):
    comment = comments.add(resource_id, visitor_id, body.text)
    return CommentOut(**comment.to_dict())
