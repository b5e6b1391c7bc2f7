"""Create registration, team member and on-site action tables

Revision ID: s001_initial_schema
Revises:
Create Date: 2025-01-10

This migration creates:
- registrations: one row per team application
- team_members: one row per participant, with QR payload and image
- meal_logs, workshop_attendance, competition_checkins, accommodation_logs:
  append-only action logs, each unique per participant/category/day
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 's001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'registrations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('team_id', sa.String(), nullable=False),
        sa.Column('registration_code', sa.String(), nullable=False),
        sa.Column('college', sa.String(), nullable=False),
        sa.Column('team_size', sa.Integer(), nullable=False),

        # Enum values stored as strings
        sa.Column('ticket_type', sa.String(20), nullable=False),
        sa.Column('workshop_track', sa.String(20), nullable=False),
        sa.Column('competition_track', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),

        # Payment
        sa.Column('total_amount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('transaction_id', sa.String(), nullable=True),
        sa.Column('payment_screenshot_url', sa.String(), nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),

        sa.CheckConstraint('team_size >= 1', name='check_team_size_positive'),
        sa.CheckConstraint('total_amount >= 0', name='check_total_amount_positive'),
    )
    op.create_index('ix_registrations_team_id', 'registrations', ['team_id'], unique=True)
    op.create_index('ix_registrations_registration_code', 'registrations', ['registration_code'], unique=True)
    op.create_index('ix_registrations_workshop_track', 'registrations', ['workshop_track'])
    op.create_index('ix_registrations_competition_track', 'registrations', ['competition_track'])

    op.create_table(
        'team_members',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('participant_id', sa.String(), nullable=False),
        sa.Column('registration_id', sa.String(), sa.ForeignKey('registrations.team_id'), nullable=False),
        sa.Column('member_index', sa.Integer(), nullable=False, server_default='0'),

        # Identity
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('whatsapp', sa.String(), nullable=False),
        sa.Column('year', sa.String(), nullable=True),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('college', sa.String(), nullable=True),
        sa.Column('gender', sa.String(), nullable=True),
        sa.Column('food_preference', sa.String(20), nullable=False),

        # Accommodation
        sa.Column('accommodation', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('accommodation_status', sa.String(20), nullable=False),
        sa.Column('accommodation_room', sa.String(), nullable=True),

        sa.Column('present', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('passkey', sa.String(), nullable=False),

        # QR
        sa.Column('qr_payload', sa.Text(), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_team_members_participant_id', 'team_members', ['participant_id'], unique=True)
    op.create_index('ix_team_members_registration_id', 'team_members', ['registration_id'])
    op.create_index('ix_team_members_email', 'team_members', ['email'])

    op.create_table(
        'meal_logs',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('participant_id', sa.String(), sa.ForeignKey('team_members.participant_id'), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=False),
        sa.Column('meal_type', sa.String(20), nullable=False),
        sa.Column('food_preference', sa.String(20), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('distributed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('participant_id', 'meal_type', 'date', name='unique_meal_per_day'),
    )
    op.create_index('ix_meal_logs_participant_id', 'meal_logs', ['participant_id'])
    op.create_index('ix_meal_logs_date', 'meal_logs', ['date'])

    op.create_table(
        'workshop_attendance',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('participant_id', sa.String(), sa.ForeignKey('team_members.participant_id'), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=False),
        sa.Column('workshop_session', sa.String(), nullable=False),
        sa.Column('workshop_track', sa.String(20), nullable=False),
        sa.Column('completion_status', sa.String(20), nullable=False, server_default='attended'),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            'participant_id', 'workshop_session', 'date', name='unique_workshop_attendance_per_day'
        ),
    )
    op.create_index('ix_workshop_attendance_participant_id', 'workshop_attendance', ['participant_id'])
    op.create_index('ix_workshop_attendance_date', 'workshop_attendance', ['date'])

    op.create_table(
        'competition_checkins',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('participant_id', sa.String(), sa.ForeignKey('team_members.participant_id'), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=False),
        sa.Column('team_id', sa.String(), nullable=False),
        sa.Column('competition_type', sa.String(20), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('checkin_time', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            'participant_id', 'competition_type', 'date', name='unique_competition_checkin_per_day'
        ),
    )
    op.create_index('ix_competition_checkins_participant_id', 'competition_checkins', ['participant_id'])
    op.create_index('ix_competition_checkins_team_id', 'competition_checkins', ['team_id'])
    op.create_index('ix_competition_checkins_date', 'competition_checkins', ['date'])

    op.create_table(
        'accommodation_logs',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('participant_id', sa.String(), sa.ForeignKey('team_members.participant_id'), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=False),
        sa.Column('gender', sa.String(), nullable=False, server_default='Other'),
        sa.Column('action', sa.String(20), nullable=False),
        sa.Column('room_number', sa.String(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('participant_id', 'action', name='unique_accommodation_action'),
    )
    op.create_index('ix_accommodation_logs_participant_id', 'accommodation_logs', ['participant_id'])
    op.create_index('ix_accommodation_logs_date', 'accommodation_logs', ['date'])


def downgrade() -> None:
    op.drop_table('accommodation_logs')
    op.drop_table('competition_checkins')
    op.drop_table('workshop_attendance')
    op.drop_table('meal_logs')
    op.drop_table('team_members')
    op.drop_table('registrations')
