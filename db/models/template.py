"""
db/models/template.py

Global template catalogue and the per-organization assignment table.
Only assignments are read by onboarding; rendering lives elsewhere.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, IdMixin, TimestampMixin


class TemplateType:
    PLAIN_TEXT = "PLAIN_TEXT"
    HTML = "HTML"
    CUSTOM_IMAGE = "CUSTOM_IMAGE"


class Template(Base, IdMixin, TimestampMixin):
    __tablename__ = "templates"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TemplateType.PLAIN_TEXT,
        comment="PLAIN_TEXT, HTML, CUSTOM_IMAGE",
    )
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class OrganizationTemplate(Base, IdMixin):
    """
    Links a global template to an organization. The row flagged
    is_default (and still active) is the one automated sends use.
    """

    __tablename__ = "organization_templates"

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    template_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("templates.id", ondelete="CASCADE"),
        nullable=False,
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint(
            "organization_id",
            "template_id",
            name="uq_organization_templates_organization_id_template_id",
        ),
        Index("ix_organization_templates_default", "organization_id", "is_default", "is_active"),
    )
