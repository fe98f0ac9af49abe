"""
db/models/onboarding_progress.py

One row per organization. completed_steps is a cache of the derived
checklist; the two timestamps are the only user-driven state and are
never cleared once set.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from db.models.organization import Organization


class OnboardingProgress(Base, IdMixin, TimestampMixin):
    __tablename__ = "onboarding_progress"

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    completed_steps: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="Ordered step ids as last computed",
    )
    test_email_sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    automation_activated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="onboarding_progress",
    )

    def __repr__(self) -> str:
        return (
            f"<OnboardingProgress organization_id={self.organization_id} "
            f"completed_steps={self.completed_steps!r}>"
        )
