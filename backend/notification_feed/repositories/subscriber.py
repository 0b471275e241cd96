from notification_feed.models.subscriber import Subscriber
from notification_feed.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository[Subscriber]):
    model = Subscriber

    def find_by_subscriber_id(self, environment_id: str, subscriber_id: str) -> Subscriber | None:
        return self.find_one(environment_id=environment_id, subscriber_id=subscriber_id)
