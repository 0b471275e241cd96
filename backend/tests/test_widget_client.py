import asyncio
from datetime import timedelta

import httpx
import pytest

from factories import make_message, make_subscriber
from notification_feed.client.api import WidgetApiClient
from notification_feed.client.feed_store import DEFAULT_STORE_ID, FeedStore
from notification_feed.client.models import StoreConfig, StoreQuery
from notification_feed.main import app
from notification_feed.models.base import utcnow
from notification_feed.models.enums import ButtonType, MessageActionStatus


def widget_client(subscriber_id: str = "sub-1") -> WidgetApiClient:
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    return WidgetApiClient("http://testserver", "env-1", subscriber_id, client=http)


def seed(db, n: int):
    sub = make_subscriber(db)
    now = utcnow()
    ids = [make_message(db, sub, content=f"m{i}", created_at=now - timedelta(minutes=i)).id for i in range(n)]
    db.commit()
    return ids


def test_feed_store_over_http(db):
    ids = seed(db, 12)

    async def run():
        async with widget_client() as api:
            store = FeedStore(api)
            await store.fetch_next_page()
            await store.fetch_next_page()
            assert store.has_next_page() is False

            await store.mark_as_read(ids[0])
            await store.update_action(ids[1], ButtonType.PRIMARY, MessageActionStatus.DONE)
            await store.mark_notifications_as_seen()

            # Server state now matches what the store patched locally
            await store.fetch_page(0, is_refetch=True)
            return store

    store = asyncio.run(run())
    messages = store.notifications[DEFAULT_STORE_ID]
    assert [m.id for m in messages] == ids[:10]
    assert messages[0].read is True
    assert messages[1].cta.action.status is MessageActionStatus.DONE
    assert all(m.seen for m in messages)


def test_store_query_reaches_server(db):
    ids = seed(db, 3)

    async def run():
        async with widget_client() as api:
            await api.mark_message_as_read(ids[0])
            store = FeedStore(api, stores=[StoreConfig(store_id="unread", query=StoreQuery(read=False))])
            await store.fetch_page(0, store_id="unread")
            return store

    store = asyncio.run(run())
    assert [m.id for m in store.notifications["unread"]] == ids[1:]


def test_http_errors_propagate():
    async def run():
        async with widget_client("ghost") as api:
            store = FeedStore(api)
            await store.fetch_page(0)

    with pytest.raises(httpx.HTTPStatusError) as exc:
        asyncio.run(run())
    assert exc.value.response.status_code == 404
