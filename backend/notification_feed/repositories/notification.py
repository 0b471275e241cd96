from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel
from sqlalchemy import Select, case, func, select
from sqlalchemy.orm import selectinload

from notification_feed.models.base import utcnow
from notification_feed.models.enums import ChannelType, StepType
from notification_feed.models.job import ExecutionDetail, Job
from notification_feed.models.notification import Notification, NotificationChannel
from notification_feed.models.notification_template import NotificationStep, NotificationTemplate
from notification_feed.models.subscriber import Subscriber
from notification_feed.repositories.base import BaseRepository


class FeedQuery(BaseModel):
    """Optional feed filters; a field left as None is not part of the query."""

    channels: list[ChannelType] | None = None
    templates: list[int] | None = None
    subscriber_ids: list[int] | None = None
    transaction_id: str | None = None


@dataclass
class FeedResult:
    total_count: int
    data: list[Notification] = field(default_factory=list)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    def find_by_subscriber_id(self, environment_id: str, subscriber_id: int) -> Sequence[Notification]:
        return self.find(environment_id=environment_id, subscriber_id=subscriber_id)

    def get_feed(self, environment_id: str, query: FeedQuery | None = None, skip: int = 0, limit: int = 10) -> FeedResult:
        query = query or FeedQuery()
        conditions = [Notification.environment_id == environment_id]

        if query.transaction_id:
            conditions.append(Notification.transaction_id == query.transaction_id)

        # An explicit empty list matches nothing
        if query.templates is not None:
            conditions.append(Notification.template_id.in_(query.templates))

        if query.subscriber_ids:
            conditions.append(Notification.subscriber_id.in_(query.subscriber_ids))

        if query.channels is not None:
            channels = [ChannelType(c).value for c in query.channels]
            conditions.append(Notification.channel_links.any(NotificationChannel.channel.in_(channels)))

        total_count = self.read_db.scalar(select(func.count(Notification.id)).where(*conditions)) or 0
        stmt = (
            self._populate_feed(select(Notification).where(*conditions), environment_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(skip)
            .limit(limit)
        )
        data = list(self.read_db.scalars(stmt).all())
        return FeedResult(total_count=total_count, data=data)

    def get_feed_item(self, notification_id: int, environment_id: str, organization_id: str) -> Notification | None:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.environment_id == environment_id,
            Notification.organization_id == organization_id,
        )
        return self.read_db.scalars(self._populate_feed(stmt, environment_id)).first()

    def _populate_feed(self, stmt: Select, environment_id: str) -> Select:
        jobs = Notification.jobs.and_(
            Job.environment_id == environment_id,
            Job.type.not_in([StepType.TRIGGER.value]),
        )
        return stmt.options(
            selectinload(Notification.channel_links),
            selectinload(Notification.subscriber).load_only(
                Subscriber.first_name, Subscriber.last_name, Subscriber.email, Subscriber.phone,
            ),
            selectinload(Notification.template).load_only(NotificationTemplate.name, NotificationTemplate.triggers),
            selectinload(jobs)
            .load_only(
                Job.notification_id, Job.created_at, Job.digest, Job.payload, Job.overrides, Job.to,
                Job.provider_id, Job.step_id, Job.status, Job.type, Job.updated_at,
            )
            .options(
                selectinload(Job.execution_details).load_only(
                    ExecutionDetail.job_id, ExecutionDetail.created_at, ExecutionDetail.detail,
                    ExecutionDetail.is_retry, ExecutionDetail.is_test, ExecutionDetail.provider_id,
                    ExecutionDetail.raw, ExecutionDetail.source, ExecutionDetail.status,
                    ExecutionDetail.updated_at, ExecutionDetail.webhook_status,
                ),
                selectinload(Job.step).load_only(
                    NotificationStep.parent_id, NotificationStep.template_id, NotificationStep.active,
                    NotificationStep.filters, NotificationStep.template,
                ),
            ),
        ).execution_options(populate_existing=True)

    def get_activity_graph_stats(self, since: datetime, environment_id: str) -> list[dict]:
        """Per-day counts since ``since``, newest day first.

        Each record counts once per channel it was sent on; records with no
        channel do not show up at all.
        """
        stmt = (
            select(Notification.created_at, Notification.template_id, NotificationChannel.channel)
            .join(NotificationChannel, NotificationChannel.notification_id == Notification.id)
            .where(
                Notification.created_at >= _naive_utc(since),
                Notification.environment_id == environment_id,
            )
        )
        buckets: dict[str, dict] = {}
        for created_at, template_id, channel in self.read_db.execute(stmt):
            day = created_at.strftime("%Y-%m-%d")
            bucket = buckets.setdefault(day, {"count": 0, "templates": set(), "channels": set()})
            bucket["count"] += 1
            if template_id is not None:
                bucket["templates"].add(template_id)
            bucket["channels"].add(channel)

        return [
            {
                "date": day,
                "count": buckets[day]["count"],
                "templates": sorted(buckets[day]["templates"]),
                "channels": sorted(buckets[day]["channels"]),
            }
            for day in sorted(buckets, reverse=True)
        ]

    def get_stats(self, environment_id: str, now: datetime | None = None) -> dict[str, int]:
        now = _naive_utc(now) if now else utcnow()
        year_before = now - relativedelta(years=1)
        month_before = now - relativedelta(months=1)
        week_before = now - relativedelta(weeks=1)

        stmt = select(
            func.sum(case((Notification.created_at >= week_before, 1), else_=0)).label("weekly"),
            func.sum(case((Notification.created_at >= month_before, 1), else_=0)).label("monthly"),
            func.count(Notification.id).label("yearly"),
        ).where(
            Notification.environment_id == environment_id,
            Notification.created_at >= year_before,
        )
        row = self.read_db.execute(stmt).one()
        return {
            "weekly": int(row.weekly or 0),
            "monthly": int(row.monthly or 0),
            "yearly": int(row.yearly or 0),
        }
