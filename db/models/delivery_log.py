"""
db/models/delivery_log.py

One attempted send. Onboarding only counts successful rows.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, IdMixin, TimestampMixin


class DeliveryStatus:
    QUEUED = "QUEUED"
    SENDING = "SENDING"
    SENT = "SENT"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"
    OPTED_OUT = "OPTED_OUT"


SUCCESSFUL_DELIVERY_STATUSES: tuple[str, ...] = (DeliveryStatus.SENT, DeliveryStatus.DELIVERED)


class DeliveryLog(Base, IdMixin, TimestampMixin):
    __tablename__ = "delivery_logs"

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    person_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
    )
    template_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("templates.id", ondelete="RESTRICT"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=DeliveryStatus.QUEUED,
    )
    scheduled_for: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_delivery_logs_organization_id_status", "organization_id", "status"),
    )
