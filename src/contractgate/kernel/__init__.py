"""Pure classification kernel: no I/O, no printing, no clocks."""

from .severity import Severity, aggregate
from .semver import BumpClassification, VersionTriple, compare_versions, parse_version
from .schema import (
    ABSENT,
    Absent,
    LeafShape,
    ObjectShape,
    Present,
    Revision,
    SchemaDocument,
    SchemaShapeError,
)
from .classify import SchemaChange, classify, diff_schemas, is_enum_widening, severity_of
from .policy import Verdict, VerdictStatus, decide

__all__ = [
    "Severity",
    "aggregate",
    "BumpClassification",
    "VersionTriple",
    "compare_versions",
    "parse_version",
    "ABSENT",
    "Absent",
    "LeafShape",
    "ObjectShape",
    "Present",
    "Revision",
    "SchemaDocument",
    "SchemaShapeError",
    "SchemaChange",
    "classify",
    "diff_schemas",
    "is_enum_widening",
    "severity_of",
    "Verdict",
    "VerdictStatus",
    "decide",
]
