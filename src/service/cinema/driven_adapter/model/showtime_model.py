from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    Time,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class ShowtimeModel(Base):
    __tablename__ = 'showtime'
    __table_args__ = (
        # Two screenings cannot start at the same slot in one theater
        UniqueConstraint('theater_id', 'show_date', 'show_time', name='uq_showtime_theater_slot'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('movie.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    theater_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('theater.id', ondelete='RESTRICT'), nullable=False
    )
    show_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    show_time: Mapped[time] = mapped_column(Time, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
