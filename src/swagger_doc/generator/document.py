"""Assembles a Swagger 2.0 document from a route table."""

import logging
from typing import Mapping

from pydantic import ValidationError

from swagger_doc.config import Settings, load_settings
from swagger_doc.errors import DocumentError
from swagger_doc.generator.models import model_roots, transform_models
from swagger_doc.generator.parameters import convert_parameters, path_parameters_for
from swagger_doc.generator.paths import template_path
from swagger_doc.generator.responses import convert_responses
from swagger_doc.generator.validator import validate_document
from swagger_doc.parser.base import InputDocument, Operation

log = logging.getLogger(__name__)


def as_input_document(document: InputDocument | Mapping) -> InputDocument:
    if isinstance(document, InputDocument):
        return document
    try:
        return InputDocument.model_validate(document)
    except ValidationError as e:
        raise DocumentError(f"malformed route table:\n{e}") from e


def transform_operation(path: str, operation: Operation) -> dict:
    """Render one operation: parameters and responses converted, the rest passed through."""
    rendered = operation.model_dump(
        by_alias=True,
        exclude_none=True,
        exclude={"method", "parameters", "responses"},
    )
    parameters = operation.parameters
    if parameters.path is None:
        derived = path_parameters_for(path)
        if derived is not None:
            parameters = parameters.model_copy(update={"path": derived})
    rendered["parameters"] = convert_parameters(parameters)
    rendered["responses"] = convert_responses(operation.responses)
    return rendered


def transform_path_operations(path: str, operations: list[Operation]) -> dict:
    """Return ``{method: operation}`` for all operations of one path."""
    result = {}
    for operation in operations:
        method = operation.method.value
        if method in result:
            raise DocumentError(f"{method.upper()} {path} is declared twice")
        result[method] = transform_operation(path, operation)
    return result


def extract_paths_and_definitions(document: InputDocument) -> tuple[dict, dict]:
    # Models come from the route table as declared, before any path rewriting.
    definitions = transform_models(model_roots(document.operations()))
    log.debug("collected %d definitions", len(definitions))

    paths = {}
    for path, operations in document.paths.items():
        templated = template_path(path)
        if templated in paths:
            raise DocumentError(f"paths {path!r} and another path both template to {templated!r}")
        log.debug("converting %s (%d operations)", templated, len(operations))
        paths[templated] = transform_path_operations(path, operations)
    return paths, definitions


def assemble(
    document: InputDocument | Mapping,
    settings: Settings | None = None,
    validate: bool = True,
) -> dict:
    """Build the Swagger 2.0 document for ``document``.

    Top-level fields the input leaves out are filled from ``settings``.
    Raises a SwaggerDocError subclass if any step fails.
    """
    document = as_input_document(document)
    settings = settings or load_settings()

    paths, definitions = extract_paths_and_definitions(document)

    result = settings.defaults()
    passthrough = document.model_dump(by_alias=True, exclude_unset=True, exclude={"paths"})
    passthrough.update(document.model_extra or {})
    if not passthrough.get("info"):
        passthrough.pop("info", None)
    result.update({k: v for k, v in passthrough.items() if v is not None})
    result["paths"] = paths
    result["definitions"] = definitions

    if validate:
        validate_document(result)
    return result


swagger_json = assemble
