"""Parameter conversion: per-location schemas -> Swagger parameter objects."""

import logging
from enum import Enum

from swagger_doc.errors import SchemaError
from swagger_doc.generator.models import ref, render_field
from swagger_doc.generator.paths import path_params
from swagger_doc.generator.swagger import ITEM_TYPES, PARAMETER_TYPES
from swagger_doc.schema.base import AnythingSchema, Field, MapSchema, NothingSchema, Primitive
from swagger_doc.schema.classify import field_meta, literal_fields, schema_name

log = logging.getLogger(__name__)


class ParameterLocation(str, Enum):
    BODY = "body"
    QUERY = "query"
    PATH = "path"
    HEADER = "header"
    FORM = "form"

    @property
    def wire_name(self) -> str:
        """Value of the ``in`` field of a parameter object."""
        return "formData" if self is ParameterLocation.FORM else self.value


def convert_parameters(parameters) -> list[dict]:
    """Convert an operation's parameters into a flat list of parameter objects.

    Order: body, then query, path, header and form, each in declared field order.
    """
    result = []
    for location in ParameterLocation:
        schema = getattr(parameters, location.value)
        if schema is None:
            continue
        match location:
            case ParameterLocation.BODY:
                result.extend(_body_parameter(schema))
            case ParameterLocation.QUERY | ParameterLocation.PATH | ParameterLocation.HEADER | ParameterLocation.FORM:
                result.extend(_field_parameters(location, schema))
    return result


def _body_parameter(schema) -> list[dict]:
    if isinstance(schema, NothingSchema):
        return []
    if isinstance(schema, AnythingSchema):
        log.debug("unconstrained body schema; no body parameter emitted")
        return []
    name = schema_name(schema)
    if name is None:
        # Anonymous bodies have no definition to point at; they are not documented.
        log.warning("anonymous body schema is not documented; give the schema a name")
        return []
    return [
        {
            "in": ParameterLocation.BODY.wire_name,
            "name": name.lower(),
            "required": True,
            "schema": ref(name),
        }
    ]


def _field_parameters(location: ParameterLocation, schema) -> list[dict]:
    if isinstance(schema, AnythingSchema):
        return []
    if not isinstance(schema, (MapSchema, NothingSchema)):
        raise SchemaError(
            f"{location.value} parameters must be a map schema, got {type(schema).__name__}"
        )
    result = []
    for entry in literal_fields(schema):
        meta = field_meta(entry)
        type_info = render_field(entry.value, inline=True)
        _check_parameter_type(type_info, PARAMETER_TYPES, f"{location.value} parameter {meta.field_name!r}")
        # Swagger 2.0 path parameters are always required.
        required = True if location is ParameterLocation.PATH else meta.required
        result.append(
            {"in": location.wire_name, "name": meta.field_name, "required": required, **type_info}
        )
    return result


def _check_parameter_type(type_info: dict, allowed: frozenset, where: str) -> None:
    """Reject object types at the top level and inside array ``items`` at any depth."""
    if type_info.get("type") not in allowed:
        raise SchemaError(f"{where} must be a primitive or an array of primitives")
    if type_info["type"] == "array":
        _check_parameter_type(type_info.get("items", {}), ITEM_TYPES, f"{where} items")


def path_parameters_for(path: str) -> MapSchema | None:
    """String path parameters for every ``:name`` in ``path``, or None if it has none."""
    names = path_params(path)
    if not names:
        return None
    return MapSchema(
        fields=tuple(Field(key=n, required=True, value=Primitive(type="string")) for n in names)
    )
