from sqlalchemy import Integer, String, DateTime, Boolean, ForeignKey, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime

from notification_feed.models.base import Base, utcnow
from notification_feed.models.notification_template import NotificationStep

class ExecutionDetail(Base):
    __tablename__ = "execution_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_id: Mapped[int] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), index=True)
    notification_id: Mapped[int] = mapped_column(Integer, index=True)
    environment_id: Mapped[str] = mapped_column(String(64), index=True)
    detail: Mapped[str] = mapped_column(String(1024))
    is_retry: Mapped[bool] = mapped_column(Boolean, default=False)
    is_test: Mapped[bool] = mapped_column(Boolean, default=False)
    provider_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    raw: Mapped[str | None] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(String(32), default="internal")  # internal | credentials | webhook | payload
    status: Mapped[str] = mapped_column(String(32), default="pending")  # pending | success | warning | failed | queued
    webhook_status: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    notification_id: Mapped[int] = mapped_column(Integer, ForeignKey("notifications.id", ondelete="CASCADE"), index=True)
    environment_id: Mapped[str] = mapped_column(String(64), index=True)
    organization_id: Mapped[str] = mapped_column(String(64))
    subscriber_id: Mapped[int] = mapped_column(Integer, ForeignKey("subscribers.id"))
    step_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("notification_steps.id"), nullable=True)
    type: Mapped[str] = mapped_column(String(32))  # StepType value
    status: Mapped[str] = mapped_column(String(32), default="pending")  # pending | queued | running | completed | failed | canceled
    digest: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    payload: Mapped[dict] = mapped_column(JSON, default=dict)
    overrides: Mapped[dict] = mapped_column(JSON, default=dict)
    to: Mapped[dict] = mapped_column(JSON, default=dict)
    provider_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    execution_details: Mapped[list[ExecutionDetail]] = relationship(order_by=ExecutionDetail.id, cascade="all, delete-orphan")
    step: Mapped[NotificationStep | None] = relationship()
