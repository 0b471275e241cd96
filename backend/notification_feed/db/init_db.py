import logging
from datetime import timedelta

from notification_feed.db.session import engine, SessionLocal
from notification_feed.models import subscriber  # noqa: F401
from notification_feed.models import notification_template  # noqa: F401
from notification_feed.models import job  # noqa: F401
from notification_feed.models import notification  # noqa: F401
from notification_feed.models import message  # noqa: F401
from notification_feed.models.base import Base, utcnow
from notification_feed.models.enums import ChannelType, MessageActionStatus, StepType
from notification_feed.models.job import ExecutionDetail, Job
from notification_feed.models.message import Message
from notification_feed.models.notification import Notification
from notification_feed.models.notification_template import NotificationStep, NotificationTemplate
from notification_feed.models.subscriber import Subscriber

logger = logging.getLogger(__name__)

DEMO_ENVIRONMENT_ID = "demo-env"
DEMO_ORGANIZATION_ID = "demo-org"
DEMO_SUBSCRIBER_ID = "demo-subscriber"

def create_tables():
    Base.metadata.create_all(bind=engine)

def drop_tables():
    Base.metadata.drop_all(bind=engine)

def seed_demo_data():
    """Idempotent dev seed: one subscriber, one template and a handful of notifications/messages."""
    db = SessionLocal()
    try:
        existing = (
            db.query(Subscriber)
            .filter(Subscriber.environment_id == DEMO_ENVIRONMENT_ID, Subscriber.subscriber_id == DEMO_SUBSCRIBER_ID)
            .first()
        )
        if existing:
            return

        sub = Subscriber(
            environment_id=DEMO_ENVIRONMENT_ID,
            organization_id=DEMO_ORGANIZATION_ID,
            subscriber_id=DEMO_SUBSCRIBER_ID,
            first_name="Demo",
            last_name="User",
            email="demo@example.com",
        )
        template = NotificationTemplate(
            environment_id=DEMO_ENVIRONMENT_ID,
            organization_id=DEMO_ORGANIZATION_ID,
            name="Welcome",
            triggers=[{"type": "event", "identifier": "welcome", "variables": []}],
        )
        db.add_all([sub, template])
        db.flush()
        step = NotificationStep(template_id=template.id, active=True, template={"type": StepType.IN_APP.value, "content": "Hi {{name}}"})
        db.add(step)
        db.flush()

        now = utcnow()
        for i in range(15):
            created = now - timedelta(hours=i * 6)
            n = Notification(
                environment_id=DEMO_ENVIRONMENT_ID,
                organization_id=DEMO_ORGANIZATION_ID,
                subscriber_id=sub.id,
                template_id=template.id,
                transaction_id=f"demo-tx-{i}",
                channels=[ChannelType.IN_APP.value],
                created_at=created,
            )
            db.add(n)
            db.flush()
            step_job = Job(
                notification_id=n.id,
                environment_id=DEMO_ENVIRONMENT_ID,
                organization_id=DEMO_ORGANIZATION_ID,
                subscriber_id=sub.id,
                step_id=step.id,
                type=StepType.IN_APP.value,
                status="completed",
                created_at=created,
            )
            step_job.execution_details.append(
                ExecutionDetail(
                    notification_id=n.id,
                    environment_id=DEMO_ENVIRONMENT_ID,
                    detail="Message created",
                    status="success",
                    created_at=created,
                )
            )
            db.add(step_job)
            db.add(Message(
                environment_id=DEMO_ENVIRONMENT_ID,
                organization_id=DEMO_ORGANIZATION_ID,
                subscriber_id=sub.id,
                notification_id=n.id,
                template_id=template.id,
                transaction_id=n.transaction_id,
                content=f"Demo message #{i + 1}",
                cta={"type": "redirect", "data": {"url": "/"}, "action": {"status": MessageActionStatus.PENDING.value, "buttons": []}},
                created_at=created,
            ))
        db.commit()
        logger.info("[seed] demo data created for environment %s", DEMO_ENVIRONMENT_ID)
    finally:
        db.close()
