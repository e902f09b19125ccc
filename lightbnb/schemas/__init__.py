"""
Pydantic schemas for query payloads and returned records.
"""

from .user import UserCreate, UserRecord
from .property import PropertyCreate, PropertyRecord, PropertyListing, PropertySearchFilters
from .reservation import ReservationListing

__all__ = [
    "UserCreate",
    "UserRecord",
    "PropertyCreate",
    "PropertyRecord",
    "PropertyListing",
    "PropertySearchFilters",
    "ReservationListing",
]
