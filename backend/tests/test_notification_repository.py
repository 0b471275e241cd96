from datetime import datetime, timedelta

from factories import make_notification, make_subscriber, make_template
from notification_feed.models.enums import ChannelType, StepType
from notification_feed.repositories.notification import FeedQuery, NotificationRepository


def test_feed_never_leaks_other_environment(db):
    a = make_subscriber(db, "sub-a", environment_id="env-1")
    b = make_subscriber(db, "sub-b", environment_id="env-2")
    for _ in range(3):
        make_notification(db, a)
        make_notification(db, b)
    db.commit()

    result = NotificationRepository(db).get_feed("env-1", limit=50)
    assert result.total_count == 3
    assert {n.environment_id for n in result.data} == {"env-1"}

    # Filtering by the other environment's subscriber yields nothing, not a leak
    result = NotificationRepository(db).get_feed("env-1", FeedQuery(subscriber_ids=[b.id]))
    assert result.total_count == 0
    assert result.data == []


def test_feed_is_newest_first_and_paged(db):
    sub = make_subscriber(db)
    base = datetime(2026, 1, 1, 12, 0)
    created = [make_notification(db, sub, created_at=base + timedelta(minutes=i)) for i in range(12)]
    db.commit()

    repo = NotificationRepository(db)
    first = repo.get_feed("env-1", skip=0, limit=10)
    second = repo.get_feed("env-1", skip=10, limit=10)

    assert first.total_count == 12
    assert second.total_count == 12
    assert [n.id for n in first.data] == [n.id for n in reversed(created)][:10]
    assert [n.id for n in second.data] == [created[1].id, created[0].id]


def test_feed_filters(db):
    sub = make_subscriber(db)
    other = make_subscriber(db, "sub-2")
    welcome = make_template(db, "Welcome")
    digest = make_template(db, "Digest")
    n1 = make_notification(db, sub, welcome, channels=["in_app", "email"], transaction_id="tx-a")
    n2 = make_notification(db, sub, digest, channels=["sms"], transaction_id="tx-b")
    n3 = make_notification(db, other, welcome, channels=["push"], transaction_id="tx-c")
    db.commit()
    repo = NotificationRepository(db)

    def ids(query):
        return sorted(n.id for n in repo.get_feed("env-1", query).data)

    assert ids(FeedQuery(transaction_id="tx-b")) == [n2.id]
    assert ids(FeedQuery(templates=[welcome.id])) == sorted([n1.id, n3.id])
    assert ids(FeedQuery(subscriber_ids=[other.id])) == [n3.id]
    assert ids(FeedQuery(channels=[ChannelType.EMAIL])) == [n1.id]
    assert ids(FeedQuery(channels=[ChannelType.SMS, ChannelType.PUSH])) == sorted([n2.id, n3.id])
    assert ids(FeedQuery(templates=[welcome.id], subscriber_ids=[sub.id])) == [n1.id]

    # Empty subscriber list is ignored, empty template list matches nothing
    assert ids(FeedQuery(subscriber_ids=[])) == sorted([n1.id, n2.id, n3.id])
    assert ids(FeedQuery(templates=[])) == []


def test_feed_population(db):
    sub = make_subscriber(db, first_name="Grace", last_name="Hopper", email="grace@example.com", phone="+1")
    template = make_template(db, "Welcome")
    make_notification(db, sub, template, job_types=[StepType.TRIGGER.value, StepType.IN_APP.value, StepType.EMAIL.value])
    db.commit()

    item = NotificationRepository(db).get_feed("env-1").data[0]

    assert item.subscriber.first_name == "Grace"
    assert item.subscriber.email == "grace@example.com"
    assert item.template.name == "Welcome"
    assert item.template.triggers[0]["identifier"] == "welcome"
    assert sorted(j.type for j in item.jobs) == ["email", "in_app"]
    for job in item.jobs:
        assert job.execution_details[0].detail == f"{job.type} sent"
        assert job.step.template_id == template.id
    assert list(item.channels) == ["in_app"]


def test_feed_item_requires_matching_organization(db):
    sub = make_subscriber(db)
    n = make_notification(db, sub, job_types=[StepType.IN_APP.value])
    db.commit()
    repo = NotificationRepository(db)

    found = repo.get_feed_item(n.id, "env-1", "org-1")
    assert found is not None
    assert found.id == n.id
    assert [j.type for j in found.jobs] == ["in_app"]

    assert repo.get_feed_item(n.id, "env-1", "org-2") is None
    assert repo.get_feed_item(n.id, "env-2", "org-1") is None
    assert repo.get_feed_item(n.id + 100, "env-1", "org-1") is None


def test_find_by_subscriber_id(db):
    sub = make_subscriber(db)
    other = make_subscriber(db, "sub-2")
    mine = [make_notification(db, sub), make_notification(db, sub)]
    make_notification(db, other)
    db.commit()

    found = NotificationRepository(db).find_by_subscriber_id("env-1", sub.id)
    assert [n.id for n in found] == [n.id for n in mine]
    assert NotificationRepository(db).find_by_subscriber_id("env-2", sub.id) == []


def test_activity_graph_stats(db):
    sub = make_subscriber(db)
    welcome = make_template(db, "Welcome")
    digest = make_template(db, "Digest")
    base = datetime(2026, 3, 10, 12, 0)
    day1 = base - timedelta(days=1)
    make_notification(db, sub, welcome, channels=["in_app", "email"], created_at=day1)
    make_notification(db, sub, digest, channels=["in_app"], created_at=day1)
    make_notification(db, sub, welcome, channels=[], created_at=day1)
    make_notification(db, sub, welcome, channels=["sms"], created_at=base - timedelta(days=3))
    make_notification(db, sub, welcome, channels=["push"], created_at=base - timedelta(days=40))
    make_notification(db, sub, welcome, channels=["chat"], created_at=day1, environment_id="env-2")
    db.commit()

    stats = NotificationRepository(db).get_activity_graph_stats(base - timedelta(days=30), "env-1")

    assert stats == [
        {"date": "2026-03-09", "count": 3, "templates": sorted([welcome.id, digest.id]), "channels": ["email", "in_app"]},
        {"date": "2026-03-07", "count": 1, "templates": [welcome.id], "channels": ["sms"]},
    ]


def test_get_stats_windows(db):
    sub = make_subscriber(db)
    now = datetime(2026, 6, 15, 12, 0)
    for days in (8, 40, 400):
        make_notification(db, sub, created_at=now - timedelta(days=days))
    make_notification(db, sub, created_at=now - timedelta(days=1), environment_id="env-2")
    db.commit()

    repo = NotificationRepository(db)
    assert repo.get_stats("env-1", now=now) == {"weekly": 0, "monthly": 1, "yearly": 2}
    assert repo.get_stats("env-2", now=now) == {"weekly": 1, "monthly": 1, "yearly": 1}
    assert repo.get_stats("env-3", now=now) == {"weekly": 0, "monthly": 0, "yearly": 0}
