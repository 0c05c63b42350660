"""Topic endpoints."""

from fastapi import APIRouter, status

from learnloop.api.v1.dependencies import AdminUserDep, SessionDep
from learnloop.schemas.topic import TopicCreate, TopicResponse
from learnloop.services import topics as topic_service

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=list[TopicResponse])
async def list_topics(db: SessionDep) -> list[TopicResponse]:
    return [TopicResponse.model_validate(topic) for topic in topic_service.list_topics(db)]


@router.get("/{topic_id}", response_model=TopicResponse)
async def get_topic(topic_id: int, db: SessionDep) -> TopicResponse:
    return TopicResponse.model_validate(topic_service.get_topic(db, topic_id))


@router.post("", response_model=TopicResponse, status_code=status.HTTP_201_CREATED)
async def create_topic(payload: TopicCreate, db: SessionDep, admin: AdminUserDep) -> TopicResponse:
    return TopicResponse.model_validate(topic_service.create_topic(db, payload))
