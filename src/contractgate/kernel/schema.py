"""Structural model for JSON-Schema-like contract documents.

Only the dimensions the classifier tracks are modeled explicitly:

- `properties`: field name -> field shape
- `required`: set of field names
- `enum`: closed literal set on a field shape

Every other key of a field shape (type, format, items, ...) is kept verbatim in
`extra`. Shapes are compared through `shape_key`, their canonical JSON text:
key order never matters, list order does, `1` equals `1.0` but not `true`.
"""

import json
from dataclasses import dataclass
from typing import Annotated, Any, Dict, FrozenSet, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class SchemaShapeError(ValueError):
    """Raised when a document does not have the SchemaDocument shape."""
    pass


class LeafShape(BaseModel):
    """A field shape without nested `properties`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = "leaf"
    enum: Optional[Tuple[Any, ...]] = None  # Only set when the raw `enum` is a list
    extra: Dict[str, Any] = Field(default_factory=dict)


class ObjectShape(BaseModel):
    """A field shape that declares nested `properties`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["object"] = "object"
    properties: Dict[str, "FieldShape"] = Field(default_factory=dict)
    required: Tuple[Any, ...] = ()  # Raw order kept; nested shapes compare structurally
    enum: Optional[Tuple[Any, ...]] = None
    extra: Dict[str, Any] = Field(default_factory=dict)


FieldShape = Annotated[Union[ObjectShape, LeafShape], Field(discriminator="kind")]

ObjectShape.model_rebuild()


# Boolean schemas (`true` / `false`) and other non-mapping shapes are kept
# under this key of a LeafShape.
LITERAL_KEY = "$literal"


def shape_from_json(raw: Any) -> Union[ObjectShape, LeafShape]:
    """Build a tagged field shape from a raw JSON value."""
    if not isinstance(raw, dict):
        return LeafShape(extra={LITERAL_KEY: raw})

    enum = raw.get("enum")
    enum_tuple = tuple(enum) if isinstance(enum, list) else None
    tracked = {"enum"} if enum_tuple is not None else set()

    nested = raw.get("properties")
    if isinstance(nested, dict):
        required = raw.get("required")
        if isinstance(required, list):
            tracked.add("required")
            required_tuple = tuple(required)
        else:
            required_tuple = ()
        tracked.add("properties")
        return ObjectShape(
            properties={name: shape_from_json(value) for name, value in nested.items()},
            required=required_tuple,
            enum=enum_tuple,
            extra={k: v for k, v in raw.items() if k not in tracked},
        )

    return LeafShape(
        enum=enum_tuple,
        extra={k: v for k, v in raw.items() if k not in tracked},
    )


def _normalize_numbers(value: Any) -> Any:
    # JSON has one number type: 1 and 1.0 are the same value, true is not 1
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(v) for v in value]
    return value


def canonical_dumps(value: Any) -> str:
    """
    Canonical JSON text of a value.

    Rules:
    - Sorted keys, stable separators (",", ":"), UTF-8
    - Integral floats written as integers
    - Booleans stay distinct from numbers

    Used as the equality key for JSON literals and field shapes, and for
    byte-stable reports.
    """
    return json.dumps(
        _normalize_numbers(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def shape_key(shape: Union[ObjectShape, LeafShape]) -> str:
    """Structural equality key of a field shape."""
    return canonical_dumps(shape.model_dump(mode="json"))


def enum_values(shape: Union[ObjectShape, LeafShape]) -> Optional[FrozenSet[str]]:
    """Return the enum of a shape as a set of literal keys, or None if it has none."""
    if shape.enum is None:
        return None
    return frozenset(canonical_dumps(v) for v in shape.enum)


class SchemaDocument(BaseModel):
    """Top-level contract schema: tracked `properties` and `required` only."""
    model_config = ConfigDict(frozen=True)

    properties: Dict[str, FieldShape] = Field(default_factory=dict)
    required: FrozenSet[str] = frozenset()

    @classmethod
    def from_json(cls, raw: Any) -> "SchemaDocument":
        """Build a document from parsed JSON.

        Missing (or null) `properties` / `required` are treated as empty.
        Raises SchemaShapeError if the document is not an object, if
        `properties` is not an object, or if `required` is not a list of strings.
        """
        if not isinstance(raw, dict):
            raise SchemaShapeError(
                f"schema document must be a JSON object, got {type(raw).__name__}"
            )

        props_raw = raw.get("properties")
        if props_raw is None:
            props_raw = {}
        if not isinstance(props_raw, dict):
            raise SchemaShapeError(
                f"'properties' must be a JSON object, got {type(props_raw).__name__}"
            )

        required_raw = raw.get("required")
        if required_raw is None:
            required_raw = []
        if not isinstance(required_raw, list):
            raise SchemaShapeError(
                f"'required' must be a JSON array, got {type(required_raw).__name__}"
            )
        bad = [item for item in required_raw if not isinstance(item, str)]
        if bad:
            raise SchemaShapeError(f"'required' entries must be strings: {bad!r}")

        return cls(
            properties={name: shape_from_json(value) for name, value in props_raw.items()},
            required=frozenset(required_raw),
        )

    @classmethod
    def from_json_bytes(cls, data: bytes) -> "SchemaDocument":
        """Parse UTF-8 JSON bytes into a document.

        Raises SchemaShapeError on invalid JSON as well as on a bad shape.
        """
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SchemaShapeError(f"invalid JSON: {e}") from e
        return cls.from_json(raw)


@dataclass(frozen=True)
class Present:
    """The schema file existed at the old revision."""
    document: SchemaDocument


@dataclass(frozen=True)
class Absent:
    """The schema file did not exist at the old revision (newly introduced)."""
    pass


Revision = Union[Present, Absent]

ABSENT = Absent()
