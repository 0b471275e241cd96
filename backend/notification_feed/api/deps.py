from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from notification_feed.db.session import get_db
from notification_feed.models.subscriber import Subscriber
from notification_feed.repositories.subscriber import SubscriberRepository

def get_environment_id(x_environment_id: str = Header(..., min_length=1)) -> str:
    return x_environment_id

def get_organization_id(x_organization_id: str = Header(..., min_length=1)) -> str:
    return x_organization_id

def get_widget_subscriber(
    x_subscriber_id: str = Header(..., min_length=1),
    environment_id: str = Depends(get_environment_id),
    db: Session = Depends(get_db),
) -> Subscriber:
    """Resolve the subscriber a widget request acts for (scoped by environment)."""
    subscriber = SubscriberRepository(db).find_by_subscriber_id(environment_id, x_subscriber_id)
    if not subscriber:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Subscriber not found for id {x_subscriber_id}")
    return subscriber
