"""
Data models for medicine records, lookup results and transcript messages.
"""

from .medicine import (
    Alternative,
    Availability,
    LookupErrorKind,
    LookupResult,
    MedicineRecord,
    PriceRange,
    ScheduleClass,
)
from .message import Message, Role

__all__ = [
    "Alternative",
    "Availability",
    "LookupErrorKind",
    "LookupResult",
    "MedicineRecord",
    "PriceRange",
    "ScheduleClass",
    "Message",
    "Role",
]
