"""Initial migration: vocabulary catalog, review state and history

Revision ID: 001_initial_migration
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_migration'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'hebrew_card',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('word_hebrew', sa.String(), nullable=False),
        sa.Column('word_english', sa.String(), nullable=False),
        sa.Column('transliteration', sa.String(), nullable=False),
        sa.Column('difficulty_level', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('gematria_value', sa.Integer(), nullable=True),
        sa.Column('audio_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_hebrew_card_difficulty_level'), 'hebrew_card', ['difficulty_level'], unique=False)
    op.create_index(op.f('ix_hebrew_card_category'), 'hebrew_card', ['category'], unique=False)

    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('streak_days', sa.Integer(), nullable=False),
        sa.Column('streak_counted_on', sa.Date(), nullable=True),
        sa.Column('total_coins', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_username'), 'user', ['username'], unique=True)

    op.create_table(
        'review_state',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('card_id', sa.Integer(), nullable=False),
        sa.Column('ease_factor', sa.Float(), nullable=False),
        sa.Column('interval_days', sa.Integer(), nullable=False),
        sa.Column('repetitions', sa.Integer(), nullable=False),
        sa.Column('next_review_at', sa.DateTime(), nullable=False),
        sa.Column('last_reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['card_id'], ['hebrew_card.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'card_id', name='uq_review_state_user_card')
    )
    op.create_index(op.f('ix_review_state_user_id'), 'review_state', ['user_id'], unique=False)
    op.create_index(op.f('ix_review_state_next_review_at'), 'review_state', ['next_review_at'], unique=False)

    op.create_table(
        'review_event',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('card_id', sa.Integer(), nullable=False),
        sa.Column('quality', sa.Integer(), nullable=False),
        sa.Column('coins_earned', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['card_id'], ['hebrew_card.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_review_event_user_id'), 'review_event', ['user_id'], unique=False)
    op.create_index(op.f('ix_review_event_reviewed_at'), 'review_event', ['reviewed_at'], unique=False)

    op.create_table(
        'reward_settlement',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('review_event_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('reason', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False),
        sa.Column('last_error', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('settled_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['review_event_id'], ['review_event.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('review_event_id')
    )
    op.create_index(op.f('ix_reward_settlement_user_id'), 'reward_settlement', ['user_id'], unique=False)
    op.create_index(op.f('ix_reward_settlement_status'), 'reward_settlement', ['status'], unique=False)

    op.create_table(
        'review_reminder',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('card_id', sa.Integer(), nullable=False),
        sa.Column('remind_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['card_id'], ['hebrew_card.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_review_reminder_user_id'), 'review_reminder', ['user_id'], unique=False)
    op.create_index(op.f('ix_review_reminder_remind_at'), 'review_reminder', ['remind_at'], unique=False)
    op.create_index(op.f('ix_review_reminder_status'), 'review_reminder', ['status'], unique=False)


def downgrade() -> None:
    op.drop_table('review_reminder')
    op.drop_table('reward_settlement')
    op.drop_table('review_event')
    op.drop_table('review_state')
    op.drop_table('user')
    op.drop_table('hebrew_card')
