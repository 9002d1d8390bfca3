"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: Accounts (user/admin) with verification, reset and remember-me tokens
- genre, movie, movie_genre: Catalog
- theater: Screens with a rows x seats_per_row grid
- showtime: One screening of a movie in a theater (unique per theater slot)
- booking: Reservations with a unique human-readable reference
- seat_assignment: One row per claimed seat (unique per showtime)
- login_attempt: Failed logins per client IP for lockout
- audit_log: Append-only trail of security and business events
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Accounts ==========

    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('verification_token', sa.String(length=64), nullable=True),
        sa.Column('verification_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_token', sa.String(length=64), nullable=True),
        sa.Column('reset_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('remember_token_hash', sa.String(length=255), nullable=True),
        sa.Column('remember_token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)
    op.create_index(op.f('ix_user_verification_token'), 'user', ['verification_token'])
    op.create_index(op.f('ix_user_reset_token'), 'user', ['reset_token'])

    op.create_table(
        'login_attempt',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column(
            'attempted_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_login_attempt_ip_address'), 'login_attempt', ['ip_address'])

    # ========== Catalog ==========

    op.create_table(
        'genre',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=False),
        sa.Column('poster_url', sa.String(length=500), nullable=True),
        sa.Column('trailer_url', sa.String(length=500), nullable=True),
        sa.Column('rating', sa.Numeric(3, 1), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='coming_soon'),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.CheckConstraint('duration_minutes > 0', name='ck_movie_duration_positive'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_movie_title'), 'movie', ['title'])

    op.create_table(
        'movie_genre',
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['genre_id'], ['genre.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('movie_id', 'genre_id'),
    )

    op.create_table(
        'theater',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('rows_count', sa.Integer(), nullable=False),
        sa.Column('seats_per_row', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint('rows_count BETWEEN 1 AND 26', name='ck_theater_rows_range'),
        sa.CheckConstraint('seats_per_row > 0', name='ck_theater_seats_positive'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'showtime',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('theater_id', sa.Integer(), nullable=False),
        sa.Column('show_date', sa.Date(), nullable=False),
        sa.Column('show_time', sa.Time(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.CheckConstraint('price >= 0', name='ck_showtime_price_non_negative'),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['theater_id'], ['theater.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'theater_id', 'show_date', 'show_time', name='uq_showtime_theater_slot'
        ),
    )
    op.create_index(op.f('ix_showtime_movie_id'), 'showtime', ['movie_id'])
    op.create_index(op.f('ix_showtime_show_date'), 'showtime', ['show_date'])

    # ========== Bookings ==========

    op.create_table(
        'booking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reference', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payment_ref', sa.String(length=100), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.CheckConstraint('total_amount >= 0', name='ck_booking_total_non_negative'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtime.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reference', name='uq_booking_reference'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_showtime_id'), 'booking', ['showtime_id'])
    op.create_index(op.f('ix_booking_status'), 'booking', ['status'])

    op.create_table(
        'seat_assignment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('seat_number', sa.String(length=10), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtime.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'showtime_id', 'seat_number', name='uq_seat_assignment_showtime_seat'
        ),
    )
    op.create_index(op.f('ix_seat_assignment_booking_id'), 'seat_assignment', ['booking_id'])

    # ========== Audit ==========

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_audit_log_user_id'), 'audit_log', ['user_id'])
    op.create_index(op.f('ix_audit_log_category'), 'audit_log', ['category'])
    op.create_index(op.f('ix_audit_log_created_at'), 'audit_log', ['created_at'])


def downgrade() -> None:
    op.drop_table('audit_log')
    op.drop_table('seat_assignment')
    op.drop_table('booking')
    op.drop_table('showtime')
    op.drop_table('theater')
    op.drop_table('movie_genre')
    op.drop_table('movie')
    op.drop_table('genre')
    op.drop_table('login_attempt')
    op.drop_table('user')
