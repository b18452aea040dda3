"""
models/__init__.py
------------------
Re-export all models so create_tables.py (and Alembic, later) can discover
every table via a single import:

    from brokerage.models import Base
"""

from brokerage.db.base import Base
from brokerage.models.company import Company
from brokerage.models.user import User, UserRole
from brokerage.models.property import Property, PropertyPurpose, PropertyStatus
from brokerage.models.partnership import Partnership, PartnershipStatus
from brokerage.models.property_share import PropertyShare, ShareStatus
from brokerage.models.activity import ActivityAction, PartnershipActivity

__all__ = [
    "Base",
    "Company",
    "User",
    "UserRole",
    "Property",
    "PropertyPurpose",
    "PropertyStatus",
    "Partnership",
    "PartnershipStatus",
    "PropertyShare",
    "ShareStatus",
    "ActivityAction",
    "PartnershipActivity",
]
