"""Create users, video summaries and action items

Revision ID: a7c3e9d1f2b4
Revises:
Create Date: 2026-10-18 09:00:00.000000

This migration creates the fastapi-users table and the per-user summary
library: one row per summarized video plus its ordered action items.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a7c3e9d1f2b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, video_summaries and action_items tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_superuser', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'video_summaries',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_url', sa.String(), nullable=False),
        sa.Column('video_id', sa.String(length=11), nullable=False),
        sa.Column('video_title', sa.String(), nullable=True),
        sa.Column('thumbnail_url', sa.String(), nullable=True),
        sa.Column('tldr', sa.Text(), nullable=False),
        sa.Column('difficulty_level', sa.String(), nullable=False),
        sa.Column('vibe_category', sa.String(), nullable=False),
        sa.Column('user_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('is_synced', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('remote_id', sa.String(), nullable=True),
    )
    op.create_index('ix_video_summaries_user_id', 'video_summaries', ['user_id'])
    op.create_index('ix_video_summaries_video_id', 'video_summaries', ['video_id'])
    op.create_index('ix_video_summaries_vibe_category', 'video_summaries', ['vibe_category'])
    op.create_index('ix_video_summaries_created_at', 'video_summaries', ['created_at'])

    op.create_table(
        'action_items',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('summary_id', sa.String(), sa.ForeignKey('video_summaries.id', ondelete='CASCADE'), nullable=False),
        sa.Column('emoji', sa.String(), nullable=False),
        sa.Column('headline', sa.String(), nullable=False),
        sa.Column('detail', sa.Text(), nullable=False),
        sa.Column('timestamp_seconds', sa.Integer(), server_default='0', nullable=False),
        sa.Column('order_index', sa.Integer(), server_default='0', nullable=False),
    )
    op.create_index('ix_action_items_summary_id', 'action_items', ['summary_id'])


def downgrade() -> None:
    """Drop the summary library and users."""
    op.drop_index('ix_action_items_summary_id', table_name='action_items')
    op.drop_table('action_items')
    op.drop_index('ix_video_summaries_created_at', table_name='video_summaries')
    op.drop_index('ix_video_summaries_vibe_category', table_name='video_summaries')
    op.drop_index('ix_video_summaries_video_id', table_name='video_summaries')
    op.drop_index('ix_video_summaries_user_id', table_name='video_summaries')
    op.drop_table('video_summaries')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
