from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CreateSubscriberBody(BaseModel):
    subscriber_id: str = Field(min_length=1)
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar: str | None = None


class CreateSubscriberCommand(CreateSubscriberBody):
    environment_id: str = Field(min_length=1)
    organization_id: str = Field(min_length=1)


class SubscriberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subscriber_id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    avatar: str | None = None
    created_at: datetime
