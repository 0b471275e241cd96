from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from notification_feed.api.deps import get_environment_id, get_organization_id
from notification_feed.core.config import settings
from notification_feed.db.session import get_read_db
from notification_feed.models.base import utcnow
from notification_feed.models.enums import ChannelType
from notification_feed.repositories.notification import FeedQuery, NotificationRepository
from notification_feed.schemas.notification import (
    ActivityGraphStatOut,
    ActivityStatsOut,
    FeedItemOut,
    FeedPageOut,
)

router = APIRouter()


@router.get("/", response_model=FeedPageOut)
def activity_feed(
    page: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=100),
    channels: list[ChannelType] | None = Query(None),
    templates: list[int] | None = Query(None),
    subscriber_ids: list[int] | None = Query(None),
    transaction_id: str | None = None,
    environment_id: str = Depends(get_environment_id),
    db: Session = Depends(get_read_db),
):
    """Paginated activity feed of the environment, newest first.

    Returns:
        data: populated notifications of the requested page
        total_count: number of notifications under the current filter
        page, page_size, has_more
    """
    page_size = limit or settings.feed_page_size
    query = FeedQuery(
        channels=channels,
        templates=templates,
        subscriber_ids=subscriber_ids,
        transaction_id=transaction_id,
    )
    result = NotificationRepository(db).get_feed(environment_id, query, skip=page * page_size, limit=page_size)
    return {
        "total_count": result.total_count,
        "page": page,
        "page_size": page_size,
        "has_more": (page + 1) * page_size < result.total_count,
        "data": result.data,
    }


@router.get("/graph/stats", response_model=list[ActivityGraphStatOut])
def activity_graph_stats(
    days: int | None = Query(None, ge=1, le=366),
    environment_id: str = Depends(get_environment_id),
    db: Session = Depends(get_read_db),
):
    since = utcnow() - timedelta(days=days or settings.activity_graph_days)
    return NotificationRepository(db).get_activity_graph_stats(since, environment_id)


@router.get("/stats", response_model=ActivityStatsOut)
def activity_stats(environment_id: str = Depends(get_environment_id), db: Session = Depends(get_read_db)):
    return NotificationRepository(db).get_stats(environment_id)


@router.get("/{notification_id}", response_model=FeedItemOut)
def activity_feed_item(
    notification_id: int,
    environment_id: str = Depends(get_environment_id),
    organization_id: str = Depends(get_organization_id),
    db: Session = Depends(get_read_db),
):
    item = NotificationRepository(db).get_feed_item(notification_id, environment_id, organization_id)
    if not item:
        raise HTTPException(status_code=404, detail="Notification not found")
    return item
