"""Route file parser.

Reads a YAML or JSON route file into an InputDocument. Schemas are written
in a compact notation::

    models:
      LegOfPet:
        length!: integer
      Pet:
        id!: integer           # trailing '!' marks a required key
        name!: string
        leg: LegOfPet          # reference to another model
        weight?: number        # '?' (or no marker) leaves the key optional
    paths:
      /api/pets/:id:
        - method: get
          parameters:
            query: {"*": any, limit: integer}   # '*' is the wildcard key
            header: anything
          responses:
            200: {description: ok, schema: [Pet]}   # one-element list = sequence

``{$set: T}`` declares a set and ``{$enum: [a, b]}`` an enumeration.
"""

import importlib
from pathlib import Path

import yaml
from pydantic import ValidationError

from swagger_doc.errors import LoaderError
from swagger_doc.parser.base import InputDocument
from swagger_doc.schema.base import (
    Anything,
    Field,
    MapSchema,
    Nothing,
    Primitive,
    SequenceSchema,
    SetSchema,
    named,
)
from swagger_doc.schema.python import WILDCARD, enum_schema

TYPE_NAMES = {
    "string": Primitive(type="string"),
    "integer": Primitive(type="integer", format="int64"),
    "long": Primitive(type="integer", format="int64"),
    "int64": Primitive(type="integer", format="int64"),
    "int32": Primitive(type="integer", format="int32"),
    "number": Primitive(type="number", format="double"),
    "double": Primitive(type="number", format="double"),
    "float": Primitive(type="number", format="float"),
    "boolean": Primitive(type="boolean"),
    "date": Primitive(type="string", format="date"),
    "date-time": Primitive(type="string", format="date-time"),
    "uuid": Primitive(type="string", format="uuid"),
    "byte": Primitive(type="string", format="byte"),
    "any": Anything,
    "anything": Anything,
    "nothing": Nothing,
}

PARAMETER_LOCATIONS = ("body", "query", "path", "header", "form")


def parse_route_file(file_path: Path) -> InputDocument:
    """Parse a YAML or JSON route file into an InputDocument."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LoaderError(f"{file_path}: {e}") from e
    if not isinstance(data, dict):
        raise LoaderError(f"{file_path}: expected a mapping at the top level")
    return parse_routes(data)


def parse_routes(data: dict) -> InputDocument:
    data = dict(data)
    resolver = _Resolver(data.pop("models", None) or {})

    paths = {}
    for path, operations in (data.get("paths") or {}).items():
        if not isinstance(operations, list):
            raise LoaderError(f"paths.{path}: expected a list of operations")
        paths[path] = [
            _parse_operation(op, resolver, f"paths.{path}[{i}]") for i, op in enumerate(operations)
        ]
    data["paths"] = paths

    try:
        return InputDocument.model_validate(data)
    except ValidationError as e:
        raise LoaderError(f"malformed route table:\n{e}") from e


def load_python_object(reference: str) -> InputDocument:
    """Load ``"package.module:attribute"``; the attribute may be a document or a callable returning one."""
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise LoaderError(f"expected 'module:attribute', got {reference!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LoaderError(f"cannot import {module_name!r}: {e}") from e
    try:
        value = getattr(module, attribute)
    except AttributeError as e:
        raise LoaderError(f"{module_name!r} has no attribute {attribute!r}") from e
    if callable(value) and not isinstance(value, type):
        value = value()
    if isinstance(value, InputDocument):
        return value
    try:
        return InputDocument.model_validate(value)
    except ValidationError as e:
        raise LoaderError(f"{reference} is not a route table:\n{e}") from e


def _parse_operation(op: dict, resolver: "_Resolver", where: str) -> dict:
    if not isinstance(op, dict):
        raise LoaderError(f"{where}: expected a mapping")
    op = dict(op)

    parameters = op.get("parameters") or {}
    if not isinstance(parameters, dict):
        raise LoaderError(f"{where}.parameters: expected a mapping")
    converted = {}
    for location, node in parameters.items():
        if location not in PARAMETER_LOCATIONS:
            raise LoaderError(f"{where}.parameters: unknown location {location!r}")
        if node is None:
            continue
        converted[location] = resolver.schema(node, f"{where}.parameters.{location}")
    op["parameters"] = converted

    responses = {}
    for status, response in (op.get("responses") or {}).items():
        if not isinstance(response, dict):
            raise LoaderError(f"{where}.responses.{status}: expected a mapping")
        response = dict(response)
        if response.get("schema") is None:
            response.pop("schema", None)
        else:
            response["schema"] = resolver.schema(response["schema"], f"{where}.responses.{status}.schema")
        responses[status] = response
    op["responses"] = responses
    return op


class _Resolver:
    """Turns notation nodes into schemas, resolving model names on first use."""

    def __init__(self, models: dict):
        if not isinstance(models, dict):
            raise LoaderError("models: expected a mapping")
        self.models = models
        self._resolved: dict = {}
        self._building: list[str] = []

    def model(self, name: str):
        if name in self._resolved:
            return self._resolved[name]
        if name in self._building:
            cycle = " -> ".join(self._building + [name])
            raise LoaderError(f"models: recursive model reference {cycle}")
        self._building.append(name)
        try:
            schema = named(name, self.schema(self.models[name], f"models.{name}"))
        finally:
            self._building.pop()
        self._resolved[name] = schema
        return schema

    def schema(self, node, where: str):
        match node:
            case str() if node in TYPE_NAMES:
                return TYPE_NAMES[node]
            case str() if node in self.models:
                return self.model(node)
            case str():
                raise LoaderError(f"{where}: unknown type or model {node!r}")
            case [item]:
                return SequenceSchema(items=self.schema(item, f"{where}[]"))
            case {"$set": item} if len(node) == 1:
                return SetSchema(items=self.schema(item, f"{where}.$set"))
            case {"$enum": list(values)} if len(node) == 1:
                return enum_schema(tuple(values))
            case dict():
                return self._map(node, where)
        raise LoaderError(f"{where}: cannot read {node!r} as a schema")

    def _map(self, node: dict, where: str) -> MapSchema:
        fields = []
        is_open = False
        for key, value in node.items():
            key = str(key)
            if key == WILDCARD:
                is_open = True
                continue
            required = key.endswith("!")
            name = key[:-1] if key.endswith(("!", "?")) else key
            fields.append(Field(key=name, required=required, value=self.schema(value, f"{where}.{name}")))
        return MapSchema(fields=tuple(fields), open=is_open)
