"""Client-side state for paged notification feeds.

One ``FeedStore`` owns a ``StoreState`` per store id (an independently paged
view of the subscriber's feed, optionally filtered by its own query). All
methods run on a single event loop; remote calls are awaited one at a time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence

from notification_feed.client.api import FeedApi
from notification_feed.client.models import FeedMessage, MessageCta, StoreConfig, StoreQuery
from notification_feed.client.scheduler import ScheduledCall, schedule
from notification_feed.models.enums import ButtonType, MessageActionStatus

logger = logging.getLogger(__name__)

DEFAULT_STORE_ID = "default_store"
PAGE_SIZE = 10
REFETCH_DELAY = 0.25  # seconds


class StoreStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    EXHAUSTED = "exhausted"


class UnknownStoreError(KeyError):
    def __init__(self, store_id: str) -> None:
        super().__init__(store_id)
        self.store_id = store_id

    def __str__(self) -> str:
        return f"unknown store {self.store_id!r}"


@dataclass
class StoreState:
    messages: list[FeedMessage] = field(default_factory=list)
    page: int = 0
    has_next_page: bool = True
    status: StoreStatus = StoreStatus.EMPTY
    refetch_handle: ScheduledCall | None = None
    loaded: bool = False
    in_flight: int = 0

    def begin_fetch(self) -> None:
        self.in_flight += 1
        self.status = StoreStatus.LOADING

    def end_fetch(self) -> None:
        # Stays LOADING until the last overlapping fetch settles
        self.in_flight -= 1
        if self.in_flight:
            self.status = StoreStatus.LOADING
        elif not self.loaded:
            self.status = StoreStatus.EMPTY
        else:
            self.status = StoreStatus.LOADED if self.has_next_page else StoreStatus.EXHAUSTED

    def apply_page(self, page_number: int, items: Sequence[FeedMessage], is_refetch: bool, page_size: int) -> None:
        if is_refetch:
            self.messages = list(items)
        else:
            self.messages = self.messages + list(items)
        self.page = page_number
        self.has_next_page = len(items) >= page_size
        self.loaded = True


class FeedStore:
    def __init__(
        self,
        api: FeedApi,
        stores: Iterable[StoreConfig] | None = None,
        page_size: int = PAGE_SIZE,
        refetch_delay: float = REFETCH_DELAY,
    ) -> None:
        self.api = api
        self.stores = list(stores or [])
        self.page_size = page_size
        self.refetch_delay = refetch_delay
        self._states: dict[str, StoreState] = {DEFAULT_STORE_ID: StoreState()}
        self._in_flight = 0

    @property
    def fetching(self) -> bool:
        if self._in_flight:
            return True
        return any(s.refetch_handle is not None and not s.refetch_handle.done() for s in self._states.values())

    @property
    def notifications(self) -> dict[str, list[FeedMessage]]:
        return {store_id: list(state.messages) for store_id, state in self._states.items()}

    def state(self, store_id: str = DEFAULT_STORE_ID) -> StoreState:
        try:
            return self._states[store_id]
        except KeyError:
            raise UnknownStoreError(store_id) from None

    def has_next_page(self, store_id: str = DEFAULT_STORE_ID) -> bool:
        state = self._states.get(store_id)
        return True if state is None else state.has_next_page

    def get_store_query(self, store_id: str) -> StoreQuery:
        for store in self.stores:
            if store.store_id == store_id:
                return store.query
        return StoreQuery()

    async def fetch_page(self, page_number: int, is_refetch: bool = False, store_id: str = DEFAULT_STORE_ID) -> list[FeedMessage]:
        state = self._states.setdefault(store_id, StoreState())
        state.begin_fetch()
        self._in_flight += 1
        try:
            items = await self.api.get_notifications_list(page_number, self.get_store_query(store_id))
            state.apply_page(page_number, items, is_refetch, self.page_size)
        finally:
            self._in_flight -= 1
            state.end_fetch()

        logger.debug("[store] %s page %s: %d item(s), status=%s", store_id, page_number, len(items), state.status.value)
        return items

    async def fetch_next_page(self, store_id: str = DEFAULT_STORE_ID) -> list[FeedMessage]:
        state = self._states.get(store_id)
        if state is None or state.status is StoreStatus.EMPTY:
            return await self.fetch_page(0, store_id=store_id)
        if not state.has_next_page:
            return []
        return await self.fetch_page(state.page + 1, store_id=store_id)

    def refetch(self, store_id: str = DEFAULT_STORE_ID) -> ScheduledCall:
        """Debounced reload of page 0; a newer call replaces a pending one.

        Must be called from a running event loop. Await the returned handle to
        wait for (and observe failures of) the reload.
        """
        state = self._states.setdefault(store_id, StoreState())
        if state.refetch_handle is not None:
            state.refetch_handle.cancel()

        async def reload():
            return await self.fetch_page(0, True, store_id)

        state.refetch_handle = schedule(self.refetch_delay, reload, name=f"refetch:{store_id}")
        return state.refetch_handle

    def _find(self, message_id: int) -> Iterator[FeedMessage]:
        for state in self._states.values():
            for message in state.messages:
                if message.id == message_id:
                    yield message

    async def mark_as_read(self, message_id: int) -> FeedMessage:
        result = await self.api.mark_message_as_read(message_id)
        for message in self._find(message_id):
            message.read = True
            message.seen = True
        return result

    async def update_action(
        self,
        message_id: int,
        button_type: ButtonType,
        status: MessageActionStatus,
        payload: dict[str, Any] | None = None,
    ) -> FeedMessage:
        result = await self.api.update_action(message_id, button_type, status, payload)
        for message in self._find(message_id):
            if message.cta is None:
                message.cta = MessageCta()
            message.cta.action.status = MessageActionStatus.DONE
        return result

    async def mark_notifications_as_seen(
        self,
        read_exist: bool = False,
        messages_to_mark: FeedMessage | Sequence[FeedMessage] | None = None,
        store_id: str = DEFAULT_STORE_ID,
    ) -> list[FeedMessage]:
        """Mark messages seen remotely, then locally in every store.

        Without explicit messages, every unseen message of ``store_id`` is
        marked. ``read_exist`` keeps only messages that carry a read flag.
        """
        if messages_to_mark is None:
            to_mark = [m for m in self.state(store_id).messages if not m.seen]
        elif isinstance(messages_to_mark, FeedMessage):
            to_mark = [messages_to_mark]
        else:
            to_mark = list(messages_to_mark)

        if read_exist:
            to_mark = [m for m in to_mark if m.read is not None]
        if not to_mark:
            return []

        ids = [m.id for m in to_mark]
        result = await self.api.mark_message_as_seen(ids)
        for message_id in ids:
            for message in self._find(message_id):
                message.seen = True
        for message in to_mark:
            message.seen = True
        return result
