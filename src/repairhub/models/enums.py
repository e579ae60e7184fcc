"""String enums used by the API models."""

from enum import StrEnum


class ApplicationStatus(StrEnum):
    PENDING = "Pending"
    WORKING = "Working"
    COMPLETE = "Complete"


class TokenStatus(StrEnum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"
    MISSING = "missing"


class PriceSort(StrEnum):
    ASC = "asc"
    NEWEST = "newest"
