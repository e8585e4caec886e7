"""Public result models for contractgate."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from contractgate.kernel.classify import SchemaChange
from contractgate.kernel.policy import Verdict
from contractgate.kernel.semver import BumpClassification
from contractgate.kernel.severity import Severity


class ChangeRecord(BaseModel):
    """One changed schema file and its classified severity."""
    model_config = ConfigDict(frozen=True)

    path: str
    severity: Severity
    is_new: bool  # Absent at the old revision
    changes: List[SchemaChange]  # Sorted by (field, change_type)


class CheckResult(BaseModel):
    """Outcome of one `check_contracts` run."""
    model_config = ConfigDict(frozen=True)

    records: List[ChangeRecord]  # In changed-file order
    old_version: str
    new_version: Optional[str]  # None if the manifest has no `version`
    required_severity: Severity
    actual_bump: BumpClassification
    verdict: Verdict

    @property
    def ok(self) -> bool:
        return self.verdict.ok
