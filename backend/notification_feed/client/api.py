import logging
from typing import Any, Protocol, Sequence

import httpx

from notification_feed.client.models import FeedMessage, StoreQuery
from notification_feed.models.enums import ButtonType, MessageActionStatus

logger = logging.getLogger(__name__)


class FeedApi(Protocol):
    """Remote side of the feed store."""

    async def get_notifications_list(self, page: int, query: StoreQuery | None = None) -> list[FeedMessage]: ...

    async def mark_message_as_read(self, message_id: int) -> FeedMessage: ...

    async def update_action(
        self,
        message_id: int,
        button_type: ButtonType,
        status: MessageActionStatus,
        payload: dict[str, Any] | None = None,
    ) -> FeedMessage: ...

    async def mark_message_as_seen(self, message_ids: Sequence[int]) -> list[FeedMessage]: ...


class WidgetApiClient:
    """httpx client for the /widgets routes of one subscriber.

    Non-2xx responses raise ``httpx.HTTPStatusError``; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        environment_id: str,
        subscriber_id: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        headers = {"X-Environment-Id": environment_id, "X-Subscriber-Id": subscriber_id}
        if client is None:
            client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
        client.headers.update(headers)
        self._client = client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "WidgetApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    async def get_notifications_list(self, page: int, query: StoreQuery | None = None) -> list[FeedMessage]:
        params = {"page": page, **(query.params() if query else {})}
        data = await self._request("GET", "/widgets/notifications/feed", params=params)
        logger.debug("[widget-api] page %s -> %d message(s)", page, len(data))
        return [FeedMessage.model_validate(item) for item in data]

    async def mark_message_as_read(self, message_id: int) -> FeedMessage:
        data = await self._request("POST", f"/widgets/messages/{message_id}/read")
        return FeedMessage.model_validate(data)

    async def update_action(
        self,
        message_id: int,
        button_type: ButtonType,
        status: MessageActionStatus,
        payload: dict[str, Any] | None = None,
    ) -> FeedMessage:
        body = {"status": MessageActionStatus(status).value, "payload": payload}
        data = await self._request(
            "POST", f"/widgets/messages/{message_id}/actions/{ButtonType(button_type).value}", json=body
        )
        return FeedMessage.model_validate(data)

    async def mark_message_as_seen(self, message_ids: Sequence[int]) -> list[FeedMessage]:
        data = await self._request("POST", "/widgets/messages/seen", json={"message_ids": list(message_ids)})
        return [FeedMessage.model_validate(item) for item in data]
