"""
db/models/organization.py

Organization model, the tenant root. People, template assignments,
delivery history and onboarding progress are all scoped to one organization.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from db.models.onboarding_progress import OnboardingProgress
    from db.models.person import Person


class Organization(Base, IdMixin, TimestampMixin):
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    timezone: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        default="UTC",
        comment="IANA timezone used for birthday send times",
    )

    email_from_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    email_from_address: Mapped[str | None] = mapped_column(
        String(320),
        nullable=True,
        comment="Sender address; falls back to DEFAULT_FROM_EMAIL when empty",
    )

    birthday_send_hour: Mapped[int | None] = mapped_column(Integer, nullable=True, default=9)

    birthday_send_minute: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)

    sms_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ── Relationships ──────────────────────────────────────────────────────────

    people: Mapped[list["Person"]] = relationship(
        "Person",
        back_populates="organization",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    onboarding_progress: Mapped["OnboardingProgress | None"] = relationship(
        "OnboardingProgress",
        back_populates="organization",
        uselist=False,
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Organization id={self.id} name={self.name!r} timezone={self.timezone!r}>"
