"""Review detail, comment and like endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.review_model import Comment, CommentCreate, LikeState, Review
from app.services import review_service
from app.utils.dependencies import get_current_user

router = APIRouter()


def review_from_record(record, comments=()) -> Review:
    return Review(
        id=record["id"],
        user_id=record["user_id"],
        user_name=record["user_name"],
        book_id=record["book_id"],
        title=record["title"],
        description=record["description"],
        like_count=record["like_count"],
        comment_count=record["comment_count"],
        comments=[Comment(**dict(comment)) for comment in comments],
        date=record["date"],
    )


async def _require_review(review_id: str):
    # Ids that cannot be "<name>_<book id>" never reach the database
    if review_service.parse_review_id(review_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    review = await review_service.get_review(review_id)
    if not review:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return review


@router.get("/{review_id}", response_model=Review)
async def get_review(review_id: str):
    """A review together with its comments."""
    record = await _require_review(review_id)
    comments = await review_service.list_comments(review_id)
    return review_from_record(record, comments)


@router.post("/{review_id}/comments", response_model=List[Comment], status_code=status.HTTP_201_CREATED)
async def add_comment(
    review_id: str,
    payload: CommentCreate,
    current_user=Depends(get_current_user),
):
    text = payload.text.strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment cannot be empty")
    await _require_review(review_id)
    comments = await review_service.add_comment(review_id, current_user, text)
    return [Comment(**dict(comment)) for comment in comments]


@router.post("/{review_id}/like", response_model=LikeState)
async def toggle_like(review_id: str, current_user=Depends(get_current_user)):
    """Like the review, or take the like back if already given."""
    await _require_review(review_id)
    liked, like_count = await review_service.toggle_like(review_id, current_user["id"])
    return LikeState(liked=liked, like_count=like_count)
