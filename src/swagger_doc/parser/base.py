"""Route table models.

Every loader (route files, in-code documents) produces an InputDocument;
the generator turns it into a Swagger 2.0 document.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from swagger_doc.schema.base import Schema
from swagger_doc.schema.python import to_schema

# Accepts tagged schemas as well as pydantic models, annotations and dict literals.
SchemaValue = Annotated[Schema, BeforeValidator(to_schema)]

StatusKey = int | Literal["default"]


class HttpMethod(str, Enum):
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"


class Parameters(BaseModel):
    """Schemas of an operation's inputs, one per location."""

    model_config = ConfigDict(extra="forbid")

    body: SchemaValue | None = None
    query: SchemaValue | None = None
    path: SchemaValue | None = None
    header: SchemaValue | None = None
    form: SchemaValue | None = None


class ResponseSpec(BaseModel):
    """One documented response. No schema means no documented body."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    response_schema: SchemaValue | None = Field(default=None, alias="schema")


class Operation(BaseModel):
    """One HTTP method on one path."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    method: HttpMethod
    parameters: Parameters = Parameters()
    responses: dict[StatusKey, ResponseSpec] = {}
    summary: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    consumes: list[str] | None = None
    produces: list[str] | None = None
    external_docs: dict | None = Field(default=None, alias="externalDocs")
    deprecated: bool | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _lowercase_method(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class InputDocument(BaseModel):
    """A whole API: passthrough metadata plus the route table."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    swagger: str = "2.0"
    info: dict = {}
    base_path: str | None = Field(default=None, alias="basePath")
    consumes: list[str] | None = None
    produces: list[str] | None = None
    paths: dict[str, list[Operation]] = {}  # "/api/:id" -> operations

    @field_validator("swagger", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, float)) else value

    def operations(self) -> list[Operation]:
        return [op for ops in self.paths.values() for op in ops]
