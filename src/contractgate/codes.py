"""Code constants for contractgate.

These constants prevent stringly-typed change codes and exit statuses
and ensure client code uses the correct values.
"""

from enum import Enum, IntEnum


class ChangeCode(str, Enum):
    """Structural change codes reported by the schema diff."""

    # Breaking
    PROPERTY_REMOVED = "PROPERTY_REMOVED"
    PROPERTY_SHAPE_CHANGED = "PROPERTY_SHAPE_CHANGED"
    REQUIRED_ADDED = "REQUIRED_ADDED"
    REQUIRED_PROPERTY_ADDED = "REQUIRED_PROPERTY_ADDED"

    # Additive
    SCHEMA_ADDED = "SCHEMA_ADDED"
    PROPERTY_ADDED = "PROPERTY_ADDED"

    # Non-breaking shape change
    ENUM_WIDENED = "ENUM_WIDENED"


class ExitCode(IntEnum):
    """Process exit statuses of the `contractgate` CLI."""

    OK = 0
    POLICY_FAILED = 1
    CONFIG_ERROR = 2
