"""SQLAlchemy model for the leads table."""

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from leadtrack.db.base import BaseEntity


class LeadEntity(BaseEntity):
    """A sales opportunity tracked by one user."""

    __tablename__ = "leads"

    id: Mapped[str] = mapped_column(String(48), primary_key=True)
    client: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    value: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal(0)
    )
    likelihood: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="new")
    user_id: Mapped[str] = mapped_column(
        String(48), ForeignKey("users.id"), nullable=False, index=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
