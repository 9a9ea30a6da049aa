"""Converts Python schema values into the tagged schema family.

API authors describe their payloads with pydantic models, builtin and
``typing`` annotations, or plain dict literals::

    class Pet(BaseModel):
        id: int
        name: str
        weight: float | None = None

    to_schema(Pet)                       # named map "Pet"
    to_schema({"sum": int})              # anonymous map, "sum" not required
    to_schema({required("sum"): int})    # anonymous map, "sum" required
    to_schema({str: Any, "x": int})      # open map with one literal key
    to_schema(list[Pet])                 # sequence of Pet
"""

import collections.abc
import inspect
import types
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Union, get_args, get_origin
from uuid import UUID

from pydantic import BaseModel

from swagger_doc.errors import SchemaError
from swagger_doc.schema.base import (
    SCHEMA_TYPES,
    Anything,
    Field,
    MapSchema,
    Nothing,
    Primitive,
    SequenceSchema,
    SetSchema,
)

# Exact type -> (type, format). bool must not fall through to int.
PRIMITIVES: dict[type, tuple[str, str | None]] = {
    str: ("string", None),
    int: ("integer", "int64"),
    float: ("number", "double"),
    Decimal: ("number", "double"),
    bool: ("boolean", None),
    datetime: ("string", "date-time"),
    date: ("string", "date"),
    UUID: ("string", "uuid"),
    bytes: ("string", "byte"),
}

WILDCARD = "*"

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence, collections.abc.Iterable)
_SET_ORIGINS = (set, frozenset, collections.abc.Set, collections.abc.MutableSet)
_MAP_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


@dataclass(frozen=True)
class OptionalKey:
    key: str


@dataclass(frozen=True)
class RequiredKey:
    key: str


def optional(key: str) -> OptionalKey:
    return OptionalKey(key)


def required(key: str) -> RequiredKey:
    return RequiredKey(key)


def to_schema(value: Any, _building: tuple[type, ...] = ()):
    """Convert a Python schema value into a tagged schema."""
    if isinstance(value, SCHEMA_TYPES):
        return value
    if value is None or value is type(None):
        return Nothing
    if value is Any or value is dict or value is object:
        return Anything
    if isinstance(value, dict):
        return _from_dict(value, _building)
    if isinstance(value, list):
        return SequenceSchema(items=to_schema(_single(value, "list"), _building))
    if isinstance(value, (set, frozenset)):
        return SetSchema(items=to_schema(_single(value, "set"), _building))
    if value in (list, tuple):
        return SequenceSchema(items=Anything)
    if value in (set, frozenset):
        return SetSchema(items=Anything)

    if inspect.isclass(value):
        if issubclass(value, BaseModel):
            return _from_model(value, _building)
        if issubclass(value, Enum):
            return enum_schema(tuple(member.value for member in value))
        if value in PRIMITIVES:
            type_, format_ = PRIMITIVES[value]
            return Primitive(type=type_, format=format_)

    origin = get_origin(value)
    args = get_args(value)
    if origin is Annotated:
        return to_schema(args[0], _building)
    if origin is Literal:
        return enum_schema(args)
    if origin is Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        if len(members) != 1:
            raise SchemaError(f"cannot express union {value!r} as a single schema")
        return to_schema(members[0], _building)
    if origin in _SET_ORIGINS:
        return SetSchema(items=to_schema(args[0], _building) if args else Anything)
    if origin in _SEQUENCE_ORIGINS:
        return SequenceSchema(items=to_schema(args[0], _building) if args else Anything)
    if origin in _MAP_ORIGINS:
        return Anything

    raise SchemaError(f"unsupported schema value: {value!r}")


def render_primitive(primitive: Primitive) -> dict:
    """Render a primitive as a JSON-Schema fragment: ``{type, format?, enum?}``."""
    rendered = {"type": primitive.type}
    if primitive.format:
        rendered["format"] = primitive.format
    if primitive.enum is not None:
        rendered["enum"] = list(primitive.enum)
    return rendered


def _single(values, what: str):
    if len(values) != 1:
        raise SchemaError(f"a {what} schema takes exactly one element schema, got {len(values)}")
    return next(iter(values))


def enum_schema(values: tuple) -> Primitive:
    if values and all(isinstance(v, bool) for v in values):
        type_ = "boolean"
    elif values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        type_ = "integer"
    else:
        type_ = "string"
        values = tuple(str(v) for v in values)
    return Primitive(type=type_, enum=values)


def _from_dict(value: dict, building: tuple[type, ...]) -> MapSchema:
    fields = []
    is_open = False
    for key, sub in value.items():
        match key:
            case OptionalKey(key=name):
                fields.append(Field(key=name, required=False, value=to_schema(sub, building)))
            case RequiredKey(key=name):
                fields.append(Field(key=name, required=True, value=to_schema(sub, building)))
            case str() if key == WILDCARD:
                is_open = True
            case str():
                fields.append(Field(key=key, required=False, value=to_schema(sub, building)))
            case _ if key is str:
                is_open = True
            case _:
                raise SchemaError(f"unsupported map key: {key!r}")
    return MapSchema(fields=tuple(fields), open=is_open)


def _from_model(cls: type[BaseModel], building: tuple[type, ...]) -> MapSchema:
    if cls in building:
        raise SchemaError(f"recursive model {cls.__name__!r} cannot be expressed as a schema tree")
    building = building + (cls,)
    fields = tuple(
        Field(
            key=info.alias or key,
            required=info.is_required(),
            value=to_schema(info.annotation, building),
        )
        for key, info in cls.model_fields.items()
    )
    return MapSchema(
        fields=fields,
        open=cls.model_config.get("extra") == "allow",
        name=cls.__name__,
    )
