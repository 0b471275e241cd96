from typing import Any, Sequence

from sqlalchemy import select

from notification_feed.models.base import utcnow
from notification_feed.models.enums import ButtonType, ChannelType, MessageActionStatus
from notification_feed.models.message import Message
from notification_feed.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """In-app messages of a single subscriber, as served to the feed widget."""

    model = Message

    def get_feed(
        self,
        environment_id: str,
        subscriber_id: int,
        page: int = 0,
        limit: int = 10,
        seen: bool | None = None,
        read: bool | None = None,
    ) -> Sequence[Message]:
        stmt = select(Message).where(
            Message.environment_id == environment_id,
            Message.subscriber_id == subscriber_id,
            Message.channel == ChannelType.IN_APP.value,
        )
        if seen is not None:
            stmt = stmt.where(Message.seen == seen)
        if read is not None:
            stmt = stmt.where(Message.read == read)
        stmt = stmt.order_by(Message.created_at.desc(), Message.id.desc()).offset(max(page, 0) * limit).limit(limit)
        return self.read_db.scalars(stmt).all()

    def _scoped(self, environment_id: str, subscriber_id: int, message_id: int) -> Message | None:
        return self.find_one(environment_id=environment_id, subscriber_id=subscriber_id, id=message_id)

    def mark_as_read(self, environment_id: str, subscriber_id: int, message_id: int) -> Message | None:
        message = self._scoped(environment_id, subscriber_id, message_id)
        if not message:
            return None
        now = utcnow()
        message.read = True
        message.last_read_date = now
        if not message.seen:
            message.seen = True
            message.last_seen_date = now
        self.db.flush()
        return message

    def mark_as_seen(self, environment_id: str, subscriber_id: int, message_ids: list[int]) -> Sequence[Message]:
        if not message_ids:
            return []
        stmt = select(Message).where(
            Message.environment_id == environment_id,
            Message.subscriber_id == subscriber_id,
            Message.id.in_(message_ids),
        ).order_by(Message.id)
        messages = self.db.scalars(stmt).all()
        now = utcnow()
        for message in messages:
            message.seen = True
            message.last_seen_date = now
        self.db.flush()
        return messages

    def update_action_status(
        self,
        environment_id: str,
        subscriber_id: int,
        message_id: int,
        button_type: ButtonType,
        status: MessageActionStatus,
        payload: dict[str, Any] | None = None,
    ) -> Message | None:
        message = self._scoped(environment_id, subscriber_id, message_id)
        if not message:
            return None
        # JSON columns are not mutation-tracked; assign a fresh dict
        cta = dict(message.cta or {})
        action = dict(cta.get("action") or {})
        action["status"] = MessageActionStatus(status).value
        action["result"] = {"type": ButtonType(button_type).value, "payload": payload or {}}
        cta["action"] = action
        message.cta = cta
        self.db.flush()
        return message
