from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from notification_feed.models.enums import MessageActionStatus


class MessageAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: MessageActionStatus = MessageActionStatus.PENDING
    buttons: list[dict[str, Any]] = []
    result: dict[str, Any] | None = None


class MessageCta(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str | None = None
    data: dict[str, Any] = {}
    action: MessageAction = Field(default_factory=MessageAction)


class FeedMessage(BaseModel):
    """A feed message as the client holds it; mutated in place on acknowledged changes."""

    model_config = ConfigDict(extra="allow")

    id: int
    seen: bool = False
    # None means the server did not report a read state at all
    read: bool | None = None
    content: str = ""
    cta: MessageCta | None = None


class StoreQuery(BaseModel):
    seen: bool | None = None
    read: bool | None = None

    def params(self) -> dict[str, Any]:
        return {k: str(v).lower() for k, v in self.model_dump(exclude_none=True).items()}


class StoreConfig(BaseModel):
    store_id: str
    query: StoreQuery = Field(default_factory=StoreQuery)
