"""Severity lattice: none < patch < minor < major."""

from enum import Enum
from typing import Iterable


class Severity(str, Enum):
    """Classified breaking-ness of a schema change.

    Members are declared in lattice order; comparisons use that order,
    not the string values.
    """
    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_ORDER = tuple(Severity)


def aggregate(severities: Iterable[Severity]) -> Severity:
    """Fold severities into the single required severity.

    Returns the maximum under the lattice order, or NONE for an empty input.
    Associative and commutative, so file processing order never matters.
    """
    return max(severities, default=Severity.NONE)
