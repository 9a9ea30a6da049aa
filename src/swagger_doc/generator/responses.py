"""Response conversion: status-keyed ResponseSpecs -> Swagger response objects."""

from swagger_doc.errors import DocumentError
from swagger_doc.generator.models import ref, render_definition
from swagger_doc.schema.classify import schema_name

DEFAULT = "default"


def convert_responses(responses: dict) -> dict:
    """Convert ``{status: ResponseSpec}``; status keys (ints or "default") pass through."""
    return {status_key(status): convert_response(response) for status, response in responses.items()}


def status_key(status):
    match status:
        case bool():
            raise DocumentError(f"invalid response status: {status!r}")
        case int() if 100 <= status <= 599:
            return status
        case "default":
            return DEFAULT
    raise DocumentError(f"invalid response status: {status!r}")


def convert_response(response) -> dict:
    rendered = {"description": response.description}
    schema = response.response_schema
    if schema is not None:
        name = schema_name(schema)
        rendered["schema"] = ref(name) if name is not None else render_definition(schema)
    return rendered
