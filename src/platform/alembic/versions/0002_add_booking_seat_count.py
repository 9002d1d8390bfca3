"""add_booking_seat_count

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Cancelling a booking deletes its seat_assignment rows, so the number of seats
it held is kept on the booking row itself.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, Sequence[str], None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        'booking',
        sa.Column('seat_count', sa.Integer(), nullable=False, server_default='0'),
    )
    # Bookings cancelled before this revision have no seats left to count
    op.execute(
        'UPDATE booking SET seat_count = ('
        'SELECT COUNT(*) FROM seat_assignment WHERE seat_assignment.booking_id = booking.id'
        ')'
    )
    op.create_check_constraint('ck_booking_seat_count_non_negative', 'booking', 'seat_count >= 0')


def downgrade() -> None:
    op.drop_constraint('ck_booking_seat_count_non_negative', 'booking', type_='check')
    op.drop_column('booking', 'seat_count')
