"""
Application Constants and Enums

Status strings stored in the database live here so every status gate
compares against the same closed set of values instead of raw strings.
"""

from enum import Enum


# ==================== BOQ STATUSES ====================

class BOQStatus(str, Enum):
    """BOQ lifecycle status constants"""
    DRAFT = 'draft'
    CONFIRMED = 'confirmed'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    @classmethod
    def parse(cls, value):
        """
        Convert a stored status value into a BOQStatus

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown BOQ status: {value!r}")


# Status transitions allowed from each status
BOQ_STATUS_TRANSITIONS = {
    BOQStatus.DRAFT: frozenset({BOQStatus.CONFIRMED, BOQStatus.APPROVED, BOQStatus.REJECTED}),
    BOQStatus.CONFIRMED: frozenset(),
    BOQStatus.APPROVED: frozenset(),
    BOQStatus.REJECTED: frozenset(),
}


# ==================== DEFAULTS ====================

DEFAULT_SELLING_GENERAL_COST = 0.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_JWT_EXPIRATION_MINUTES = 15
DEFAULT_PORT = 8004
