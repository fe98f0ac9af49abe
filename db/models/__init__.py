"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.delivery_log import SUCCESSFUL_DELIVERY_STATUSES, DeliveryLog, DeliveryStatus
from db.models.onboarding_progress import OnboardingProgress
from db.models.organization import Organization
from db.models.person import Person
from db.models.template import OrganizationTemplate, Template, TemplateType

__all__ = [
    "DeliveryLog",
    "DeliveryStatus",
    "OnboardingProgress",
    "Organization",
    "OrganizationTemplate",
    "Person",
    "SUCCESSFUL_DELIVERY_STATUSES",
    "Template",
    "TemplateType",
]
