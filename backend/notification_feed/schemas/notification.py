from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class FeedSubscriberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None


class FeedTemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    triggers: list[dict[str, Any]] = []


class ExecutionDetailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    detail: str
    is_retry: bool
    is_test: bool
    provider_id: str | None = None
    raw: str | None = None
    source: str
    status: str
    updated_at: datetime
    webhook_status: str | None = None


class JobStepOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    parent_id: int | None = None
    template_id: int
    active: bool
    filters: list[Any] = []
    template: dict[str, Any] | None = None


class FeedJobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    digest: dict[str, Any] | None = None
    payload: dict[str, Any] = {}
    overrides: dict[str, Any] = {}
    to: dict[str, Any] = {}
    provider_id: str | None = None
    step: JobStepOut | None = None
    status: str
    type: str
    updated_at: datetime
    execution_details: list[ExecutionDetailOut] = []


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    environment_id: str
    organization_id: str
    transaction_id: str
    channels: list[str] = []
    created_at: datetime

    @field_validator("channels", mode="before")
    @classmethod
    def _channels_as_list(cls, v):
        # ORM side is an association proxy, not a plain list
        return list(v or [])


class FeedItemOut(NotificationOut):
    subscriber: FeedSubscriberOut | None = None
    template: FeedTemplateOut | None = None
    jobs: list[FeedJobOut] = []


class FeedPageOut(BaseModel):
    total_count: int
    page: int
    page_size: int
    has_more: bool
    data: list[FeedItemOut]


class ActivityGraphStatOut(BaseModel):
    date: str
    count: int
    templates: list[int]
    channels: list[str]


class ActivityStatsOut(BaseModel):
    weekly: int
    monthly: int
    yearly: int
