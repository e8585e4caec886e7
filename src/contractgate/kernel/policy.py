"""Policy decision engine: required severity vs actual version bump."""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .semver import BumpClassification
from .severity import Severity


class VerdictStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class Verdict(BaseModel):
    """Terminal outcome of one evaluation run."""
    model_config = ConfigDict(frozen=True)

    status: VerdictStatus
    required_severity: Severity
    actual_bump: BumpClassification
    message: str
    warning: Optional[str] = None  # Non-fatal annotation (only when required is NONE)

    @property
    def ok(self) -> bool:
        return self.status is VerdictStatus.PASS


_B = BumpClassification

# required -> bumps that satisfy it
ACCEPTED_BUMPS: Dict[Severity, FrozenSet[BumpClassification]] = {
    Severity.PATCH: frozenset({_B.PATCH, _B.MINOR, _B.MAJOR}),
    Severity.MINOR: frozenset({_B.MINOR, _B.MAJOR}),
    Severity.MAJOR: frozenset({_B.MAJOR}),
}

# required -> (pass message, fail message)
MESSAGES: Dict[Severity, Tuple[str, str]] = {
    Severity.PATCH: ("patch ok", "patch change needs version bump"),
    Severity.MINOR: ("minor ok", "additive change needs minor bump"),
    Severity.MAJOR: ("major ok", "breaking change needs MAJOR bump"),
}

NO_CHANGE_MESSAGE = "no schema changes"
UNEXPLAINED_BUMP_WARNING = "non-patch bump without schema change"

_QUIET_BUMPS = frozenset({_B.NONE_OR_DOWN, _B.PATCH})


def decide(required: Severity, actual_bump: BumpClassification) -> Verdict:
    """Accept or reject a change.

    Every (required, actual_bump) combination has a defined outcome;
    this function never raises for valid enum values.
    """
    required = Severity(required)
    actual_bump = BumpClassification(actual_bump)

    if required is Severity.NONE:
        warning = None if actual_bump in _QUIET_BUMPS else UNEXPLAINED_BUMP_WARNING
        return Verdict(
            status=VerdictStatus.PASS,
            required_severity=required,
            actual_bump=actual_bump,
            message=NO_CHANGE_MESSAGE,
            warning=warning,
        )

    ok_message, fail_message = MESSAGES[required]
    passed = actual_bump in ACCEPTED_BUMPS[required]
    return Verdict(
        status=VerdictStatus.PASS if passed else VerdictStatus.FAIL,
        required_severity=required,
        actual_bump=actual_bump,
        message=ok_message if passed else fail_message,
    )
