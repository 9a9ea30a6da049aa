"""Validates assembled documents for Swagger 2.0 shape and reference integrity."""

from typing import Iterator

from pydantic import ValidationError

from swagger_doc.errors import ValidationFailed
from swagger_doc.generator.models import DEFINITIONS_PREFIX
from swagger_doc.generator.swagger import Swagger


def find_refs(node) -> Iterator[str]:
    """Yield every ``$ref`` string in a JSON-like tree."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield value
            else:
                yield from find_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from find_refs(item)


def dangling_refs(document: dict) -> list[str]:
    """References under ``paths`` or ``definitions`` with no matching definition."""
    definitions = document.get("definitions", {})
    refs = set(find_refs(document.get("paths", {}))) | set(find_refs(definitions))
    return sorted(
        r for r in refs
        if not r.startswith(DEFINITIONS_PREFIX) or r[len(DEFINITIONS_PREFIX):] not in definitions
    )


def validate_shape(document: dict) -> list[str]:
    """Check the document against the Swagger 2.0 models.

    Returns a list of problems, empty if the document is well formed.
    """
    try:
        Swagger.model_validate(document)
    except ValidationError as e:
        return [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
    return []


def validate_document(document: dict) -> dict:
    """Run all validations; raises ValidationFailed listing every problem found."""
    problems = validate_shape(document)
    problems.extend(f"unresolved reference: {r}" for r in dangling_refs(document))
    if problems:
        raise ValidationFailed(problems)
    return document
