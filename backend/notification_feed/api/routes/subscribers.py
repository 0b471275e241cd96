from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notification_feed.api.deps import get_environment_id, get_organization_id
from notification_feed.db.session import get_db
from notification_feed.repositories.notification import NotificationRepository
from notification_feed.schemas.notification import NotificationOut
from notification_feed.schemas.subscriber import CreateSubscriberBody, CreateSubscriberCommand, SubscriberOut
from notification_feed.services.subscribers import create_subscriber, get_subscriber

router = APIRouter()

@router.post("/", response_model=SubscriberOut)
def create(
    payload: CreateSubscriberBody,
    environment_id: str = Depends(get_environment_id),
    organization_id: str = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    command = CreateSubscriberCommand(
        environment_id=environment_id,
        organization_id=organization_id,
        **payload.model_dump(),
    )
    return create_subscriber(db, command)

@router.get("/{subscriber_id}", response_model=SubscriberOut)
def get_one(subscriber_id: str, environment_id: str = Depends(get_environment_id), db: Session = Depends(get_db)):
    return get_subscriber(db, environment_id, subscriber_id)

@router.get("/{subscriber_id}/notifications", response_model=list[NotificationOut])
def subscriber_notifications(subscriber_id: str, environment_id: str = Depends(get_environment_id), db: Session = Depends(get_db)):
    """All notifications sent to the subscriber, without populated relations."""
    subscriber = get_subscriber(db, environment_id, subscriber_id)
    return NotificationRepository(db).find_by_subscriber_id(environment_id, subscriber.id)
