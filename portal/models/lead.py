"""Lead model (enquiries captured by the public site form)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from portal.models.base import Base

LEAD_STATUSES = ("pending", "contacted", "paid", "failed", "closed")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Lead(Base):
    """Enquiry from a student or parent."""

    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    purpose: Mapped[str] = mapped_column(String(64), nullable=False)  # Counselling, Registration, ...
    amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # lowest currency unit
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    gateway: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)  # e.g. razorpay
    transaction_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
