from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from notification_feed.models.enums import MessageActionStatus


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    notification_id: int | None = None
    template_id: int | None = None
    transaction_id: str | None = None
    channel: str
    content: str
    payload: dict[str, Any] = {}
    cta: dict[str, Any] | None = None
    seen: bool
    read: bool
    last_seen_date: datetime | None = None
    last_read_date: datetime | None = None
    created_at: datetime


class MarkSeenBody(BaseModel):
    message_ids: list[int] = Field(min_length=1)


class UpdateActionBody(BaseModel):
    status: MessageActionStatus
    payload: dict[str, Any] | None = None
