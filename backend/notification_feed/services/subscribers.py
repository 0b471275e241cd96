import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from notification_feed.models.subscriber import Subscriber
from notification_feed.repositories.subscriber import SubscriberRepository
from notification_feed.schemas.subscriber import CreateSubscriberCommand

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("email", "first_name", "last_name", "phone", "avatar")


def get_subscriber(db: Session, environment_id: str, subscriber_id: str) -> Subscriber:
    subscriber = SubscriberRepository(db).find_by_subscriber_id(environment_id, subscriber_id)
    if not subscriber:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Subscriber not found for id {subscriber_id}")
    return subscriber


def create_subscriber(db: Session, command: CreateSubscriberCommand) -> Subscriber:
    """Create a subscriber, or update the profile fields of an existing one.

    Only fields present in the command overwrite stored values.
    """
    repo = SubscriberRepository(db)
    values = {k: getattr(command, k) for k in _PROFILE_FIELDS if getattr(command, k) is not None}
    subscriber = repo.find_by_subscriber_id(command.environment_id, command.subscriber_id)
    if subscriber:
        for key, value in values.items():
            setattr(subscriber, key, value)
        logger.info("[subscribers] updated %s in env %s", command.subscriber_id, command.environment_id)
    else:
        subscriber = repo.create(
            environment_id=command.environment_id,
            organization_id=command.organization_id,
            subscriber_id=command.subscriber_id,
            **values,
        )
        logger.info("[subscribers] created %s in env %s", command.subscriber_id, command.environment_id)
    db.commit()
    db.refresh(subscriber)
    return subscriber
