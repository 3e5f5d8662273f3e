"""create booking schema

Revision ID: 3f1c9a7d2b4e
Revises:
Create Date: 2026-10-19 09:12:44

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b4e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Enum columns store member names, matching SQLEnum(UserRole) / SQLEnum(RoomStatus)
userrole_enum = sa.Enum('ADMIN', 'STAFF', 'CUSTOMER', name='userrole')
roomstatus_enum = sa.Enum('AVAILABLE', 'BOOKED', 'UNDER_MAINTENANCE', name='roomstatus')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('role', userrole_enum, nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('contact_number', sa.String(length=30), nullable=True),
    )
    op.create_index('ix_properties_id', 'properties', ['id'])
    op.create_index('ix_properties_name', 'properties', ['name'])

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id'), nullable=False),
        sa.Column('room_name', sa.String(length=100), nullable=False),
        sa.Column('room_type', sa.String(length=100), nullable=False),
        sa.Column('price_per_night', sa.Float(), nullable=False),
        sa.Column('status', roomstatus_enum, nullable=False, server_default='AVAILABLE'),
    )
    op.create_index('ix_rooms_id', 'rooms', ['id'])
    op.create_index('ix_rooms_property_id', 'rooms', ['property_id'])
    op.create_index('ix_rooms_room_type', 'rooms', ['room_type'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('rooms.id'), nullable=False),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('check_out_date', sa.Date(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_room_id', 'bookings', ['room_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('bookings.id'), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_date', sa.TIMESTAMP(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
    )
    op.create_index('ix_payments_id', 'payments', ['id'])
    op.create_index('ix_payments_booking_id', 'payments', ['booking_id'])


def downgrade() -> None:
    """Downgrade schema."""
    # --- Drop dependants first ---
    op.drop_table('payments')
    op.drop_table('bookings')
    op.drop_table('rooms')
    op.drop_table('properties')
    op.drop_table('users')

    # --- Then, drop the ENUM types ---
    roomstatus_enum.drop(op.get_bind(), checkfirst=True)
    userrole_enum.drop(op.get_bind(), checkfirst=True)
