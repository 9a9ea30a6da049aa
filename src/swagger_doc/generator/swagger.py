"""Pydantic models of the Swagger 2.0 document shape.

A subset of http://swagger.io/v2/schema.json: enough to check what the
generator emits. Vendor extensions (``x-*``) are allowed where the format
allows them.
"""

from typing import Annotated, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ItemType = Literal["string", "number", "integer", "boolean", "array"]
ParameterType = Literal[ItemType, "file"]

ITEM_TYPES = frozenset(get_args(ItemType))
PARAMETER_TYPES = frozenset(get_args(ParameterType))


class _Extensible(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class JsonReference(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    ref: str = Field(alias="$ref")


class Info(_Extensible):
    title: str
    version: str


class BodyParameter(_Extensible):
    in_: Literal["body"] = Field(alias="in")
    name: str
    required: bool = False
    description: str | None = None
    schema_: JsonReference = Field(alias="schema")


class Items(_Extensible):
    """Element type of an array parameter; objects are not allowed at any depth."""

    type: ItemType
    format: str | None = None
    items: "Items | None" = None
    enum: list | None = None

    @model_validator(mode="after")
    def _check(self):
        if self.type == "array" and self.items is None:
            raise ValueError("array items need items")
        return self


class NonBodyParameter(_Extensible):
    in_: Literal["query", "path", "header", "formData"] = Field(alias="in")
    name: str
    required: bool = False
    description: str | None = None
    type: ParameterType
    format: str | None = None
    items: Items | None = None

    @model_validator(mode="after")
    def _check(self):
        if self.in_ == "path" and not self.required:
            raise ValueError(f"path parameter {self.name!r} must be required")
        if self.type == "array" and self.items is None:
            raise ValueError(f"array parameter {self.name!r} needs items")
        return self


Parameter = Annotated[Union[BodyParameter, NonBodyParameter], Field(discriminator="in_")]


class Response(_Extensible):
    description: str
    schema_: JsonReference | dict | None = Field(default=None, alias="schema")


class Operation(_Extensible):
    responses: dict[int | Literal["default"], Response]
    parameters: list[Parameter] = []
    tags: list[str] | None = None
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    consumes: list[str] | None = None
    produces: list[str] | None = None
    external_docs: dict | None = Field(default=None, alias="externalDocs")
    deprecated: bool | None = None

    @field_validator("responses")
    @classmethod
    def _has_responses(cls, value: dict) -> dict:
        if not value:
            raise ValueError("an operation needs at least one response")
        return value

    @model_validator(mode="after")
    def _check_parameters(self):
        seen = set()
        for p in self.parameters:
            key = (p.name, p.in_)
            if key in seen:
                raise ValueError(f"duplicate parameter {p.name!r} in {p.in_}")
            seen.add(key)
        locations = [p.in_ for p in self.parameters]
        if locations.count("body") > 1:
            raise ValueError("an operation can have only one body parameter")
        if "body" in locations and "formData" in locations:
            raise ValueError("body and formData parameters cannot be mixed")
        return self


class PathItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None


class Swagger(_Extensible):
    swagger: Literal["2.0"]
    info: Info
    host: str | None = None
    base_path: str | None = Field(default=None, alias="basePath")
    schemes: list[Literal["http", "https", "ws", "wss"]] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    paths: dict[str, PathItem]
    definitions: dict[str, dict] = {}

    @field_validator("base_path")
    @classmethod
    def _absolute_base_path(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith("/"):
            raise ValueError("basePath must start with '/'")
        return value

    @field_validator("paths")
    @classmethod
    def _absolute_paths(cls, value: dict) -> dict:
        for path in value:
            if not path.startswith("/"):
                raise ValueError(f"path {path!r} must start with '/'")
        return value
