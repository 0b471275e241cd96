from sqlalchemy import Integer, String, DateTime, Boolean, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime

from notification_feed.models.base import Base, utcnow

class NotificationTemplate(Base):
    __tablename__ = "notification_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    environment_id: Mapped[str] = mapped_column(String(64), index=True)
    organization_id: Mapped[str] = mapped_column(String(64))
    name: Mapped[str] = mapped_column(String(255))
    # [{"type": "event", "identifier": "...", "variables": [...]}]
    triggers: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    steps: Mapped[list["NotificationStep"]] = relationship(back_populates="notification_template")


class NotificationStep(Base):
    __tablename__ = "notification_steps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    template_id: Mapped[int] = mapped_column(Integer, ForeignKey("notification_templates.id", ondelete="CASCADE"), index=True)
    parent_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("notification_steps.id"), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    filters: Mapped[list] = mapped_column(JSON, default=list)
    # Step content (channel type, subject, body ...)
    template: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    notification_template: Mapped[NotificationTemplate] = relationship(back_populates="steps")
