"""
db/models/person.py

Roster entry with a birthday, belonging to exactly one organization.
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from db.models.organization import Organization


class Person(Base, IdMixin, TimestampMixin):
    __tablename__ = "people"

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    birthday: Mapped[date] = mapped_column(Date, nullable=False)
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str | None] = mapped_column(String(200), nullable=True)
    opted_out: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    organization: Mapped["Organization"] = relationship("Organization", back_populates="people")

    __table_args__ = (
        UniqueConstraint("organization_id", "email", name="uq_people_organization_id_email"),
        Index("ix_people_organization_id_opted_out", "organization_id", "opted_out"),
    )

    def __repr__(self) -> str:
        return f"<Person id={self.id} email={self.email!r} organization_id={self.organization_id}>"
