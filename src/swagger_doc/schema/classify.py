"""Read-only introspection over the tagged schema family."""

from dataclasses import dataclass

from swagger_doc.errors import SchemaError
from swagger_doc.schema.base import (
    AnythingSchema,
    Field,
    MapSchema,
    NothingSchema,
    Primitive,
    SequenceSchema,
    SetSchema,
)


@dataclass(frozen=True)
class MapKind:
    entries: tuple[Field, ...]
    open: bool


@dataclass(frozen=True)
class SequenceKind:
    element: object


@dataclass(frozen=True)
class SetKind:
    element: object


@dataclass(frozen=True)
class PrimitiveKind:
    primitive: Primitive


@dataclass(frozen=True)
class FieldMeta:
    required: bool
    field_name: str


def schema_name(schema) -> str | None:
    """Return the model name of ``schema``, or None if it is anonymous or a sentinel."""
    match schema:
        case AnythingSchema() | NothingSchema():
            return None
        case Primitive() | MapSchema() | SequenceSchema() | SetSchema():
            return schema.name or None
    raise SchemaError(f"not a schema: {schema!r}")


def container_kind(schema) -> MapKind | SequenceKind | SetKind | PrimitiveKind:
    """Return the structural shape of ``schema``."""
    match schema:
        case MapSchema(fields=fields, open=is_open):
            return MapKind(fields, is_open)
        case SequenceSchema(items=items):
            return SequenceKind(items)
        case SetSchema(items=items):
            return SetKind(items)
        case Primitive():
            return PrimitiveKind(schema)
        case AnythingSchema():
            return MapKind((), True)
        case NothingSchema():
            return MapKind((), False)
    raise SchemaError(f"not a schema: {schema!r}")


def field_meta(entry: Field) -> FieldMeta:
    return FieldMeta(required=entry.required, field_name=entry.key)


def literal_fields(schema) -> tuple[Field, ...]:
    """Literal entries of a map-shaped schema, in declared order."""
    kind = container_kind(schema)
    if not isinstance(kind, MapKind):
        raise SchemaError(f"expected a map schema, got {type(schema).__name__}")
    return kind.entries
