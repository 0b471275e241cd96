from datetime import datetime
from itertools import count

from notification_feed.models.base import utcnow
from notification_feed.models.enums import MessageActionStatus, StepType
from notification_feed.models.job import ExecutionDetail, Job
from notification_feed.models.message import Message
from notification_feed.models.notification import Notification
from notification_feed.models.notification_template import NotificationStep, NotificationTemplate
from notification_feed.models.subscriber import Subscriber

_seq = count(1)


def make_subscriber(db, subscriber_id: str = "sub-1", environment_id: str = "env-1", organization_id: str = "org-1", **kw):
    s = Subscriber(
        environment_id=environment_id,
        organization_id=organization_id,
        subscriber_id=subscriber_id,
        first_name=kw.pop("first_name", "Ada"),
        last_name=kw.pop("last_name", "Lovelace"),
        email=kw.pop("email", f"{subscriber_id}@example.com"),
        phone=kw.pop("phone", "+100000000"),
        avatar=kw.pop("avatar", "https://example.com/a.png"),
        **kw,
    )
    db.add(s)
    db.flush()
    return s


def make_template(db, name: str = "Welcome", environment_id: str = "env-1", organization_id: str = "org-1"):
    t = NotificationTemplate(
        environment_id=environment_id,
        organization_id=organization_id,
        name=name,
        triggers=[{"type": "event", "identifier": name.lower(), "variables": []}],
    )
    db.add(t)
    db.flush()
    step = NotificationStep(template_id=t.id, active=True, filters=[], template={"type": "in_app", "content": "Hi"})
    db.add(step)
    db.flush()
    return t


def make_notification(
    db,
    subscriber: Subscriber,
    template: NotificationTemplate | None = None,
    channels=("in_app",),
    created_at: datetime | None = None,
    transaction_id: str | None = None,
    job_types=(),
    environment_id: str | None = None,
    organization_id: str | None = None,
):
    env = environment_id or subscriber.environment_id
    org = organization_id or subscriber.organization_id
    n = Notification(
        environment_id=env,
        organization_id=org,
        subscriber_id=subscriber.id,
        template_id=template.id if template else None,
        transaction_id=transaction_id or f"tx-{next(_seq)}",
        channels=list(channels),
        created_at=created_at or utcnow(),
    )
    db.add(n)
    db.flush()
    step_id = template.steps[0].id if template and template.steps else None
    for job_type in job_types:
        job = Job(
            notification_id=n.id,
            environment_id=env,
            organization_id=org,
            subscriber_id=subscriber.id,
            step_id=step_id,
            type=job_type,
            status="completed",
            payload={"name": "Ada"},
        )
        job.execution_details.append(
            ExecutionDetail(notification_id=n.id, environment_id=env, detail=f"{job_type} sent", status="success")
        )
        db.add(job)
    db.flush()
    return n


def make_message(
    db,
    subscriber: Subscriber,
    content: str = "hello",
    seen: bool = False,
    read: bool = False,
    created_at: datetime | None = None,
    status: MessageActionStatus = MessageActionStatus.PENDING,
):
    m = Message(
        environment_id=subscriber.environment_id,
        organization_id=subscriber.organization_id,
        subscriber_id=subscriber.id,
        channel=StepType.IN_APP.value,
        content=content,
        seen=seen,
        read=read,
        cta={"type": "redirect", "data": {"url": "/x"}, "action": {"status": status.value, "buttons": []}},
        created_at=created_at or utcnow(),
    )
    db.add(m)
    db.flush()
    return m
