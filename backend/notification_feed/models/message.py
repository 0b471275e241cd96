from sqlalchemy import Integer, String, DateTime, Boolean, ForeignKey, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

from notification_feed.models.base import Base, utcnow

class Message(Base):
    """In-app message shown in a subscriber's feed."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    environment_id: Mapped[str] = mapped_column(String(64), index=True)
    organization_id: Mapped[str] = mapped_column(String(64))
    subscriber_id: Mapped[int] = mapped_column(Integer, ForeignKey("subscribers.id"), index=True)
    notification_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=True)
    template_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("notification_templates.id"), nullable=True)
    transaction_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    channel: Mapped[str] = mapped_column(String(32), default="in_app")
    content: Mapped[str] = mapped_column(Text, default="")
    payload: Mapped[dict] = mapped_column(JSON, default=dict)
    # {"type": "redirect", "data": {...}, "action": {"status": "pending", "buttons": [...], "result": {...}}}
    cta: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    seen: Mapped[bool] = mapped_column(Boolean, default=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False)
    last_seen_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    last_read_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
