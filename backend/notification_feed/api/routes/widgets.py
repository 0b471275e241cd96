import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from notification_feed.api.deps import get_environment_id, get_widget_subscriber
from notification_feed.core.config import settings
from notification_feed.db.session import get_db
from notification_feed.models.enums import ButtonType
from notification_feed.models.subscriber import Subscriber
from notification_feed.repositories.message import MessageRepository
from notification_feed.schemas.message import MarkSeenBody, MessageOut, UpdateActionBody

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/notifications/feed", response_model=list[MessageOut])
def widget_feed(
    page: int = Query(0, ge=0),
    seen: bool | None = None,
    read: bool | None = None,
    environment_id: str = Depends(get_environment_id),
    subscriber: Subscriber = Depends(get_widget_subscriber),
    db: Session = Depends(get_db),
):
    return MessageRepository(db).get_feed(
        environment_id, subscriber.id, page=page, limit=settings.feed_page_size, seen=seen, read=read
    )

@router.post("/messages/seen", response_model=list[MessageOut])
def mark_seen(
    payload: MarkSeenBody,
    environment_id: str = Depends(get_environment_id),
    subscriber: Subscriber = Depends(get_widget_subscriber),
    db: Session = Depends(get_db),
):
    messages = MessageRepository(db).mark_as_seen(environment_id, subscriber.id, payload.message_ids)
    db.commit()
    for m in messages:
        db.refresh(m)
    logger.debug("[widget] %s marked %d message(s) seen", subscriber.subscriber_id, len(messages))
    return messages

@router.post("/messages/{message_id}/read", response_model=MessageOut)
def mark_read(
    message_id: int,
    environment_id: str = Depends(get_environment_id),
    subscriber: Subscriber = Depends(get_widget_subscriber),
    db: Session = Depends(get_db),
):
    message = MessageRepository(db).mark_as_read(environment_id, subscriber.id, message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    db.commit()
    db.refresh(message)
    return message

@router.post("/messages/{message_id}/actions/{button_type}", response_model=MessageOut)
def update_action(
    message_id: int,
    button_type: ButtonType,
    payload: UpdateActionBody,
    environment_id: str = Depends(get_environment_id),
    subscriber: Subscriber = Depends(get_widget_subscriber),
    db: Session = Depends(get_db),
):
    message = MessageRepository(db).update_action_status(
        environment_id, subscriber.id, message_id, button_type, payload.status, payload.payload
    )
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    db.commit()
    db.refresh(message)
    return message
