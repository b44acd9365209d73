"""create_carbon_tracker_tables

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-16 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('activity', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_activities_id'), 'activities', ['id'], unique=False)
    op.create_index('idx_activities_occurred_at', 'activities', ['occurred_at'], unique=False)
    op.create_index('idx_activities_user_category', 'activities', ['user_id', 'category'], unique=False)

    op.create_table(
        'reduction_targets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('target_type', sa.String(length=20), nullable=False),
        sa.Column('target_value', sa.Float(), nullable=False),
        sa.Column('description', sa.String(length=200), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('target_period', sa.String(length=20), nullable=False),
        sa.Column('categories', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reduction_targets_id'), 'reduction_targets', ['id'], unique=False)
    op.create_index(op.f('ix_reduction_targets_user_id'), 'reduction_targets', ['user_id'], unique=False)
    op.create_index(
        'uq_reduction_targets_active',
        'reduction_targets',
        ['user_id', 'target_period'],
        unique=True,
        postgresql_where=sa.text('is_active'),
    )

    op.create_table(
        'weekly_summaries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('week_start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('week_end', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_value', sa.Float(), nullable=False),
        sa.Column('activities_count', sa.Integer(), nullable=False),
        sa.Column('by_category_totals', sa.JSON(), nullable=False),
        sa.Column('by_category_counts', sa.JSON(), nullable=False),
        sa.Column('highest_emission_category', sa.JSON(), nullable=True),
        sa.Column('lowest_emission_category', sa.JSON(), nullable=True),
        sa.Column('personalized_tip', sa.JSON(), nullable=True),
        sa.Column('reduction_target', sa.JSON(), nullable=True),
        sa.Column('generated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'week_start', name='uq_weekly_summaries_user_week')
    )
    op.create_index(op.f('ix_weekly_summaries_id'), 'weekly_summaries', ['id'], unique=False)
    op.create_index(op.f('ix_weekly_summaries_user_id'), 'weekly_summaries', ['user_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_weekly_summaries_user_id'), table_name='weekly_summaries')
    op.drop_index(op.f('ix_weekly_summaries_id'), table_name='weekly_summaries')
    op.drop_table('weekly_summaries')
    op.drop_index('uq_reduction_targets_active', table_name='reduction_targets')
    op.drop_index(op.f('ix_reduction_targets_user_id'), table_name='reduction_targets')
    op.drop_index(op.f('ix_reduction_targets_id'), table_name='reduction_targets')
    op.drop_table('reduction_targets')
    op.drop_index('idx_activities_user_category', table_name='activities')
    op.drop_index('idx_activities_occurred_at', table_name='activities')
    op.drop_index(op.f('ix_activities_id'), table_name='activities')
    op.drop_table('activities')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
