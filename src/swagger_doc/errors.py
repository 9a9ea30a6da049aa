"""Exceptions raised while building a Swagger document.

Every error is fatal: a document is either produced whole or not at all.
"""


class SwaggerDocError(Exception):
    """Base class for all swagger-doc errors."""


class SchemaError(SwaggerDocError):
    """Raised when a value cannot be classified as a schema, or has the wrong shape."""


class ModelNameConflict(SwaggerDocError):
    """Raised when two structurally different schemas share one model name."""

    def __init__(self, name: str, first, second):
        super().__init__(f"model name {name!r} is used by two different schemas")
        self.name = name
        self.first = first
        self.second = second


class DocumentError(SwaggerDocError):
    """Raised when the input route table does not have the expected shape."""


class ValidationFailed(SwaggerDocError):
    """Raised when an assembled document is not a valid Swagger 2.0 document."""

    def __init__(self, problems: list[str]):
        super().__init__("invalid Swagger document:\n  " + "\n  ".join(problems))
        self.problems = problems


class LoaderError(SwaggerDocError):
    """Raised when a route file cannot be read into a route table."""
