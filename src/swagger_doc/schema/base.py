"""Tagged schema family.

Every component of the generator pattern-matches over these variants.
A schema optionally carries a ``name``; named schemas are promoted to
shared definitions, anonymous ones are rendered inline.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field as PydanticField


class _Schema(BaseModel):
    model_config = ConfigDict(frozen=True)


class Primitive(_Schema):
    """A leaf value: string, integer, number, boolean, date..."""

    kind: Literal["primitive"] = "primitive"
    type: str
    format: str | None = None
    enum: tuple[Any, ...] | None = None
    name: str | None = None


class Field(_Schema):
    """One literal entry of a map schema."""

    key: str
    required: bool = False
    value: "Schema"


class MapSchema(_Schema):
    """Ordered map of literal keys; ``open`` means a wildcard key is present too."""

    kind: Literal["map"] = "map"
    fields: tuple[Field, ...] = ()
    open: bool = False
    name: str | None = None


class SequenceSchema(_Schema):
    kind: Literal["sequence"] = "sequence"
    items: "Schema"
    name: str | None = None


class SetSchema(_Schema):
    kind: Literal["set"] = "set"
    items: "Schema"
    name: str | None = None


class AnythingSchema(_Schema):
    """Accepts any key and any value."""

    kind: Literal["anything"] = "anything"


class NothingSchema(_Schema):
    """Accepts no keys at all, e.g. an absent request body."""

    kind: Literal["nothing"] = "nothing"


Schema = Annotated[
    Union[Primitive, MapSchema, SequenceSchema, SetSchema, AnythingSchema, NothingSchema],
    PydanticField(discriminator="kind"),
]

Field.model_rebuild()
MapSchema.model_rebuild()
SequenceSchema.model_rebuild()
SetSchema.model_rebuild()

SCHEMA_TYPES = (Primitive, MapSchema, SequenceSchema, SetSchema, AnythingSchema, NothingSchema)

Anything = AnythingSchema()
Nothing = NothingSchema()


def named(name: str, schema):
    """Return a copy of ``schema`` carrying ``name``."""
    if isinstance(schema, (AnythingSchema, NothingSchema)):
        return schema
    return schema.model_copy(update={"name": name})


def field(key: str, value, required: bool = False) -> Field:
    return Field(key=key, required=required, value=value)


def model(name: str | None, *fields: Field, open: bool = False) -> MapSchema:
    """Shorthand for building a map schema from fields."""
    return MapSchema(fields=tuple(fields), open=open, name=name)
