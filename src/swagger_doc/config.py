"""Defaults for the top-level document fields, overridable from the environment."""

import os

from pydantic import BaseModel, field_validator

from swagger_doc.generator.paths import join_paths

SWAGGER_VERSION = "2.0"


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings(BaseModel):
    base_path: str = "/"
    consumes: list[str] = ["application/json"]
    produces: list[str] = ["application/json"]
    title: str = "API"
    version: str = "0.0.1"
    log_level: str = "WARNING"

    @field_validator("base_path")
    @classmethod
    def _normalize_base_path(cls, value: str) -> str:
        return join_paths("/", value)

    def defaults(self) -> dict:
        """Top-level fields used where the input document leaves them out."""
        return {
            "swagger": SWAGGER_VERSION,
            "info": {"title": self.title, "version": self.version},
            "basePath": self.base_path,
            "consumes": list(self.consumes),
            "produces": list(self.produces),
        }


def load_settings(**overrides) -> Settings:
    """Read settings from ``SWAGGER_DOC_*`` variables; keyword overrides win."""
    values = {
        "base_path": os.getenv("SWAGGER_DOC_BASE_PATH", "/"),
        "consumes": _split(os.getenv("SWAGGER_DOC_CONSUMES", "application/json")),
        "produces": _split(os.getenv("SWAGGER_DOC_PRODUCES", "application/json")),
        "title": os.getenv("SWAGGER_DOC_TITLE", "API"),
        "version": os.getenv("SWAGGER_DOC_VERSION", "0.0.1"),
        "log_level": os.getenv("SWAGGER_DOC_LOG_LEVEL", "WARNING"),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
