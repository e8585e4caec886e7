"""Schema severity classifier: structural diff of two contract schema revisions."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from contractgate.codes import ChangeCode
from .schema import Absent, LeafShape, ObjectShape, Revision, SchemaDocument, canonical_dumps, enum_values, shape_key
from .severity import Severity, aggregate


@dataclass(frozen=True)
class SchemaChange:
    """A single structural change between two schema revisions."""
    change_type: ChangeCode
    field: Optional[str]  # Top-level property name (None for whole-document changes)
    severity: Severity
    details: Optional[dict] = None


def is_enum_widening(old: Union[ObjectShape, LeafShape], new: Union[ObjectShape, LeafShape]) -> bool:
    """True if both shapes declare an enum and the new one keeps every old value.

    The size check is implied by the superset check; it is kept so the rule
    reads the same as the policy it enforces.
    """
    old_enum = enum_values(old)
    new_enum = enum_values(new)
    if old_enum is None or new_enum is None:
        return False
    return new_enum >= old_enum and len(new_enum) >= len(old_enum)


def diff_schemas(old: Revision, new: SchemaDocument) -> List[SchemaChange]:
    """
    Compute every tracked structural change from `old` to `new`.
    Does not short-circuit: each category is reported independently.
    Output is sorted by (field, change_type) for deterministic reports.
    """
    if isinstance(old, Absent):
        return [SchemaChange(ChangeCode.SCHEMA_ADDED, None, Severity.MINOR)]

    old_doc = old.document
    old_props = old_doc.properties
    new_props = new.properties
    changes: List[SchemaChange] = []

    # Removal is always breaking, required or not
    for name in old_props.keys() - new_props.keys():
        changes.append(SchemaChange(
            ChangeCode.PROPERTY_REMOVED,
            name,
            Severity.MAJOR,
            details={"was_required": name in old_doc.required},
        ))

    for name in old_props.keys() & new_props.keys():
        old_shape = old_props[name]
        new_shape = new_props[name]
        if shape_key(old_shape) == shape_key(new_shape):
            continue
        if is_enum_widening(old_shape, new_shape):
            old_keys = {canonical_dumps(v) for v in old_shape.enum}
            changes.append(SchemaChange(
                ChangeCode.ENUM_WIDENED,
                name,
                Severity.PATCH,
                details={"added_values": [v for v in new_shape.enum if canonical_dumps(v) not in old_keys]},
            ))
        else:
            changes.append(SchemaChange(
                ChangeCode.PROPERTY_SHAPE_CHANGED,
                name,
                Severity.MAJOR,
                details={"old_kind": old_shape.kind, "new_kind": new_shape.kind},
            ))

    added = new_props.keys() - old_props.keys()
    newly_required = new.required - old_doc.required

    for name in newly_required - added:
        changes.append(SchemaChange(ChangeCode.REQUIRED_ADDED, name, Severity.MAJOR))

    for name in added:
        if name in new.required:
            changes.append(SchemaChange(ChangeCode.REQUIRED_PROPERTY_ADDED, name, Severity.MAJOR))
        else:
            changes.append(SchemaChange(ChangeCode.PROPERTY_ADDED, name, Severity.MINOR))

    changes.sort(key=lambda c: (c.field or "", c.change_type.value))
    return changes


def classify(old: Revision, new: SchemaDocument) -> Severity:
    """Classify a schema edit as patch, minor or major.

    - new file (old absent) -> minor
    - property removed, shape changed (other than enum widening),
      field newly required, or required property added -> major
    - optional property added -> minor
    - otherwise -> patch
    """
    return severity_of(diff_schemas(old, new))


def severity_of(changes: Iterable[SchemaChange]) -> Severity:
    """Severity implied by a change list; PATCH when nothing tracked changed."""
    return aggregate([Severity.PATCH, *(c.severity for c in changes)])
