"""Voting endpoints."""

from fastapi import APIRouter, status

from learnloop.api.v1.dependencies import CurrentUserDep, SessionDep
from learnloop.schemas.common import MessageResponse
from learnloop.schemas.vote import VoteCreate, VoteResponse
from learnloop.services import votes as vote_service

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(payload: VoteCreate, db: SessionDep, user: CurrentUserDep) -> VoteResponse:
    """Upvote a post or comment."""
    vote = vote_service.cast_vote(db, user, post_id=payload.post_id, comment_id=payload.comment_id)
    return VoteResponse.model_validate(vote)


@router.delete("/{vote_id}", response_model=MessageResponse)
async def remove_vote(vote_id: int, db: SessionDep, user: CurrentUserDep) -> MessageResponse:
    vote_service.remove_vote(db, user, vote_id)
    return MessageResponse(message="Vote removed")
