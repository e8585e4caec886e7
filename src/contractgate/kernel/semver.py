"""Semantic version parsing and bump classification."""

import re
from enum import Enum
from typing import NamedTuple, Optional

# Only the leading MAJOR.MINOR.PATCH is significant; pre-release and build
# suffixes are ignored.
_VERSION_HEAD = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)")

# Stands in for a manifest that exists but declares no `version`; never parses.
MISSING_VERSION = "<missing>"


class VersionTriple(NamedTuple):
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class BumpClassification(str, Enum):
    """How a new version relates to an old one."""
    INVALID = "invalid"
    NONE_OR_DOWN = "none-or-down"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


def parse_version(text) -> Optional[VersionTriple]:
    """Parse the head of a version string.

    Returns None when the string does not start with three dot-separated
    base-10 integers.
    """
    if text is None:
        return None
    match = _VERSION_HEAD.match(str(text))
    if match is None:
        return None
    return VersionTriple(*(int(part) for part in match.groups()))


def compare_versions(old, new) -> BumpClassification:
    """Classify the bump from `old` to `new`.

    The first component that increased, in major -> minor -> patch order,
    wins. Equality and any downgrade collapse to NONE_OR_DOWN.
    """
    old_v = parse_version(old)
    new_v = parse_version(new)
    if old_v is None or new_v is None:
        return BumpClassification.INVALID

    if new_v.major > old_v.major:
        return BumpClassification.MAJOR
    if new_v.major == old_v.major and new_v.minor > old_v.minor:
        return BumpClassification.MINOR
    if (
        new_v.major == old_v.major
        and new_v.minor == old_v.minor
        and new_v.patch > old_v.patch
    ):
        return BumpClassification.PATCH
    return BumpClassification.NONE_OR_DOWN
