from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime

from notification_feed.models.base import Base, utcnow
from notification_feed.models.subscriber import Subscriber
from notification_feed.models.notification_template import NotificationTemplate
from notification_feed.models.job import Job

class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    environment_id: Mapped[str] = mapped_column(String(64), index=True)
    organization_id: Mapped[str] = mapped_column(String(64), index=True)
    subscriber_id: Mapped[int] = mapped_column(Integer, ForeignKey("subscribers.id"), index=True)
    template_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("notification_templates.id"), nullable=True, index=True)
    transaction_id: Mapped[str] = mapped_column(String(255), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)

    subscriber: Mapped[Subscriber] = relationship()
    template: Mapped[NotificationTemplate | None] = relationship()
    jobs: Mapped[list[Job]] = relationship(order_by=Job.id)
    channel_links: Mapped[list["NotificationChannel"]] = relationship(
        cascade="all, delete-orphan", order_by="NotificationChannel.id"
    )
    # Plain list of channel names, backed by notification_channels rows
    channels: AssociationProxy[list[str]] = association_proxy(
        "channel_links", "channel", creator=lambda channel: NotificationChannel(channel=channel)
    )


class NotificationChannel(Base):
    __tablename__ = "notification_channels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    notification_id: Mapped[int] = mapped_column(Integer, ForeignKey("notifications.id", ondelete="CASCADE"), index=True)
    channel: Mapped[str] = mapped_column(String(32), index=True)
