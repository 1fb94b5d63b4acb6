# src/models/__init__.py
"""
Models initialization file so every table is registered on Base.metadata
"""

from .patient import OPPatient
from .screening import (
    IPNutritionalScreening,
    IPCustomField,
    OPNutritionalScreening,
    OPCustomField,
)
from .follow_up import FollowUpRecord
from .user import User

from sqlalchemy.orm import configure_mappers

# Configure all mappers
configure_mappers()

__all__ = [
    "OPPatient",
    "IPNutritionalScreening",
    "IPCustomField",
    "OPNutritionalScreening",
    "OPCustomField",
    "FollowUpRecord",
    "User",
]
