"""notification feed schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade() -> None:
    op.create_table('subscribers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('environment_id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('subscriber_id', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=255)),
        sa.Column('last_name', sa.String(length=255)),
        sa.Column('email', sa.String(length=255)),
        sa.Column('phone', sa.String(length=64)),
        sa.Column('avatar', sa.String(length=1024)),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.UniqueConstraint('environment_id', 'subscriber_id', name='uq_subscribers_env_subscriber'),
    )
    op.create_index('ix_subscribers_environment_id', 'subscribers', ['environment_id'])
    op.create_index('ix_subscribers_organization_id', 'subscribers', ['organization_id'])

    op.create_table('notification_templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('environment_id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('triggers', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_notification_templates_environment_id', 'notification_templates', ['environment_id'])

    op.create_table('notification_steps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('notification_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('notification_steps.id')),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('filters', sa.JSON(), nullable=False),
        sa.Column('template', sa.JSON()),
    )
    op.create_index('ix_notification_steps_template_id', 'notification_steps', ['template_id'])

    op.create_table('notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('environment_id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('subscriber_id', sa.Integer(), sa.ForeignKey('subscribers.id'), nullable=False),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('notification_templates.id')),
        sa.Column('transaction_id', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_notifications_environment_id', 'notifications', ['environment_id'])
    op.create_index('ix_notifications_organization_id', 'notifications', ['organization_id'])
    op.create_index('ix_notifications_subscriber_id', 'notifications', ['subscriber_id'])
    op.create_index('ix_notifications_template_id', 'notifications', ['template_id'])
    op.create_index('ix_notifications_transaction_id', 'notifications', ['transaction_id'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    op.create_table('notification_channels',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('notification_id', sa.Integer(), sa.ForeignKey('notifications.id', ondelete='CASCADE'), nullable=False),
        sa.Column('channel', sa.String(length=32), nullable=False),
    )
    op.create_index('ix_notification_channels_notification_id', 'notification_channels', ['notification_id'])
    op.create_index('ix_notification_channels_channel', 'notification_channels', ['channel'])

    op.create_table('jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('notification_id', sa.Integer(), sa.ForeignKey('notifications.id', ondelete='CASCADE'), nullable=False),
        sa.Column('environment_id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('subscriber_id', sa.Integer(), sa.ForeignKey('subscribers.id'), nullable=False),
        sa.Column('step_id', sa.Integer(), sa.ForeignKey('notification_steps.id')),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('digest', sa.JSON()),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('overrides', sa.JSON(), nullable=False),
        sa.Column('to', sa.JSON(), nullable=False),
        sa.Column('provider_id', sa.String(length=64)),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_jobs_notification_id', 'jobs', ['notification_id'])
    op.create_index('ix_jobs_environment_id', 'jobs', ['environment_id'])

    op.create_table('execution_details',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('notification_id', sa.Integer(), nullable=False),
        sa.Column('environment_id', sa.String(length=64), nullable=False),
        sa.Column('detail', sa.String(length=1024), nullable=False),
        sa.Column('is_retry', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_test', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('provider_id', sa.String(length=64)),
        sa.Column('raw', sa.Text()),
        sa.Column('source', sa.String(length=32), nullable=False, server_default='internal'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('webhook_status', sa.String(length=64)),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_execution_details_job_id', 'execution_details', ['job_id'])
    op.create_index('ix_execution_details_notification_id', 'execution_details', ['notification_id'])
    op.create_index('ix_execution_details_environment_id', 'execution_details', ['environment_id'])

    op.create_table('messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('environment_id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('subscriber_id', sa.Integer(), sa.ForeignKey('subscribers.id'), nullable=False),
        sa.Column('notification_id', sa.Integer(), sa.ForeignKey('notifications.id', ondelete='CASCADE')),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('notification_templates.id')),
        sa.Column('transaction_id', sa.String(length=255)),
        sa.Column('channel', sa.String(length=32), nullable=False, server_default='in_app'),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('cta', sa.JSON()),
        sa.Column('seen', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('last_seen_date', sa.DateTime()),
        sa.Column('last_read_date', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_messages_environment_id', 'messages', ['environment_id'])
    op.create_index('ix_messages_subscriber_id', 'messages', ['subscriber_id'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('execution_details')
    op.drop_table('jobs')
    op.drop_table('notification_channels')
    op.drop_table('notifications')
    op.drop_table('notification_steps')
    op.drop_table('notification_templates')
    op.drop_table('subscribers')
