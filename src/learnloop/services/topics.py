"""Topic lookup and administration."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from learnloop.core.errors import Conflict, NotFound
from learnloop.models import Topic
from learnloop.schemas.topic import TopicCreate

logger = logging.getLogger(__name__)


def list_topics(db: Session) -> Sequence[Topic]:
    return db.scalars(select(Topic).order_by(Topic.name)).all()


def get_topic(db: Session, topic_id: int) -> Topic:
    topic = db.get(Topic, topic_id)
    if topic is None:
        raise NotFound("Topic not found")
    return topic


def create_topic(db: Session, data: TopicCreate) -> Topic:
    """Create a topic; names are unique regardless of case.

    Raises:
        Conflict: If a topic with the same name exists.
    """
    name = data.name.strip()
    existing = db.scalar(select(Topic.id).where(func.lower(Topic.name) == name.lower()))
    if existing is not None:
        raise Conflict("Topic already exists")

    topic = Topic(name=name, description=data.description.strip())
    db.add(topic)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise Conflict("Topic already exists") from err
    db.refresh(topic)
    logger.info("Created topic %s (%s)", topic.id, topic.name)
    return topic
