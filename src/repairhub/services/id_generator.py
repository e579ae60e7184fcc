"""Prefixed ID generation and validation."""

import re
import uuid

SERVICE_PREFIX = "svc_"
APPLICATION_PREFIX = "app_"

_HEX_LEN = 16
_ID_PATTERNS: dict[str, re.Pattern] = {}


def generate_id(prefix: str) -> str:
    """Generate a prefixed unique ID.

    Args:
        prefix: The prefix (e.g., "svc_", "app_").

    Returns:
        A string like "svc_a1b2c3d4e5f6a7b8".
    """
    short_uuid = uuid.uuid4().hex[:_HEX_LEN]
    return f"{prefix}{short_uuid}"


def is_valid_id(value: object, prefix: str) -> bool:
    """Return True if ``value`` has the shape produced by ``generate_id(prefix)``."""
    if not isinstance(value, str):
        return False
    pattern = _ID_PATTERNS.get(prefix)
    if pattern is None:
        pattern = re.compile(rf"^{re.escape(prefix)}[0-9a-f]{{{_HEX_LEN}}}$")
        _ID_PATTERNS[prefix] = pattern
    return bool(pattern.match(value))
