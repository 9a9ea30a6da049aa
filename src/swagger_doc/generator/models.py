"""Model discovery and definition rendering.

``collect_models`` walks schema trees and returns every named schema that
needs a standalone entry under ``definitions``. ``render_definition`` turns
one of them into its JSON-Schema form. Named schemas met while rendering
become ``$ref`` pointers, so definitions stay flat.
"""

import logging
from functools import reduce
from typing import Iterable, Mapping

from swagger_doc.errors import ModelNameConflict
from swagger_doc.schema.classify import (
    MapKind,
    PrimitiveKind,
    SequenceKind,
    SetKind,
    container_kind,
    field_meta,
    schema_name,
)
from swagger_doc.schema.python import render_primitive

log = logging.getLogger(__name__)

DEFINITIONS_PREFIX = "#/definitions/"


def ref(name: str) -> dict:
    return {"$ref": DEFINITIONS_PREFIX + name}


# -- walking ----------------------------------------------------------------


def collect_models(roots: Iterable) -> dict:
    """Return ``{name: schema}`` for every named schema reachable from ``roots``.

    Raises ModelNameConflict when one name is bound to two different schemas.
    """
    return dict(reduce(_visit, roots, {}))


def _visit(acc: Mapping, schema) -> Mapping:
    name = schema_name(schema)
    if name is not None:
        seen = acc.get(name)
        if seen is None:
            log.debug("discovered model %s", name)
            acc = {**acc, name: schema}
        elif seen != schema:
            raise ModelNameConflict(name, seen, schema)

    match container_kind(schema):
        case MapKind(entries=entries):
            return reduce(_visit, (entry.value for entry in entries), acc)
        case SequenceKind(element=element) | SetKind(element=element):
            return _visit(acc, element)
        case PrimitiveKind():
            return acc


def model_roots(operations: Iterable) -> list:
    """Body and response schemas of ``operations``; the only schemas promoted to definitions."""
    roots = []
    for operation in operations:
        if operation.parameters.body is not None:
            roots.append(operation.parameters.body)
        for response in operation.responses.values():
            if response.response_schema is not None:
                roots.append(response.response_schema)
    return roots


# -- rendering --------------------------------------------------------------


def render_field(schema, inline: bool = False) -> dict:
    """Render a schema in property position.

    Named schemas become ``$ref`` pointers unless ``inline`` is set, in which
    case they are expanded in place.
    """
    name = schema_name(schema)
    if name is not None and not inline:
        return ref(name)
    return _render_shape(schema, inline)


def _render_shape(schema, inline: bool) -> dict:
    match container_kind(schema):
        case PrimitiveKind(primitive=primitive):
            return render_primitive(primitive)
        case SequenceKind(element=element) | SetKind(element=element):
            return {"type": "array", "items": render_field(element, inline)}
        case MapKind(entries=()):
            return {"type": "object"}
        case MapKind():
            return {"type": "object", **_render_properties(schema, inline)}


def _render_properties(schema, inline: bool = False) -> dict:
    properties = {}
    required = []
    for entry in container_kind(schema).entries:
        meta = field_meta(entry)
        properties[meta.field_name] = render_field(entry.value, inline)
        if meta.required:
            required.append(meta.field_name)
    rendered = {"properties": properties}
    if required:
        rendered["required"] = required
    return rendered


def render_definition(schema) -> dict:
    """Render ``schema`` as a definition: ``{properties, required?}``.

    Non-map schemas render structurally, e.g. ``{type: array, items: ...}``.
    """
    if isinstance(container_kind(schema), MapKind):
        return _render_properties(schema)
    return _render_shape(schema, inline=False)


def transform_models(roots: Iterable) -> dict:
    """Render every model reachable from ``roots``, keyed by model name."""
    return {name: render_definition(schema) for name, schema in collect_models(roots).items()}
