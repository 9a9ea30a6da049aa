"""CLI entry point for swagger-doc."""

import json
import logging
from pathlib import Path

import click
import yaml

from swagger_doc.config import load_settings
from swagger_doc.errors import SwaggerDocError
from swagger_doc.generator.document import assemble
from swagger_doc.log import configure_root
from swagger_doc.parser.base import InputDocument
from swagger_doc.parser.detect import detect_format
from swagger_doc.parser.routes import load_python_object, parse_route_file

log = logging.getLogger(__name__)

FORMATS = ["auto", "yaml", "json", "python"]


def _load_source(source: str, fmt: str) -> InputDocument:
    """Load a route table based on format."""
    if fmt == "auto":
        try:
            fmt = detect_format(source)
        except FileNotFoundError:
            raise click.BadParameter(f"{source} is neither a file nor a module:attribute reference") from None
    log.info("loading %s as %s", source, fmt)

    if fmt == "python":
        return load_python_object(source)
    return parse_route_file(Path(source))


def _build(source: str, fmt: str, base_path: str | None, validate: bool) -> dict:
    settings = load_settings(base_path=base_path)
    try:
        document = _load_source(source, fmt)
        return assemble(document, settings=settings, validate=validate)
    except (SwaggerDocError, OSError) as e:
        raise click.ClickException(str(e)) from e


def _dump(document: dict, output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(_string_keys(document), sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _string_keys(node):
    # Status codes are ints in memory; both output formats carry them as strings.
    if isinstance(node, dict):
        return {str(k): _string_keys(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_string_keys(item) for item in node]
    return node


@click.group()
@click.option("-v", "--verbose", count=True, help="Log progress (-v info, -vv debug).")
def main(verbose: int):
    """swagger-doc — build Swagger 2.0 documents from route tables."""
    if verbose >= 2:
        configure_root(logging.DEBUG)
    elif verbose == 1:
        configure_root(logging.INFO)
    else:
        configure_root(load_settings().log_level)


@main.command()
@click.argument("source")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the Swagger document.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Route table format.")
@click.option("--output-format", default="json", type=click.Choice(["json", "yaml"]), help="Document format.")
@click.option("--base-path", default=None, help="basePath used when the route table has none.")
@click.option("--no-validate", is_flag=True, help="Skip Swagger 2.0 validation of the result.")
def generate(source: str, output: Path, fmt: str, output_format: str, base_path: str | None, no_validate: bool):
    """Generate a Swagger 2.0 document from a route table."""
    click.echo(f"Reading {source} (format: {fmt})...")
    document = _build(source, fmt, base_path, validate=not no_validate)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump(document, output_format), encoding="utf-8")
    click.echo(
        f"Wrote {len(document['paths'])} paths and {len(document['definitions'])} definitions to {output}"
    )


@main.command()
@click.argument("source")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Route table format.")
def check(source: str, fmt: str):
    """Build and validate a document without writing it."""
    document = _build(source, fmt, None, validate=True)
    operations = sum(len(methods) for methods in document["paths"].values())
    click.echo(
        f"OK: {len(document['paths'])} paths, {operations} operations, "
        f"{len(document['definitions'])} definitions"
    )


@main.command()
@click.argument("source")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Route table format.")
def paths(source: str, fmt: str):
    """List the templated paths and their methods."""
    document = _build(source, fmt, None, validate=False)
    for path, methods in document["paths"].items():
        click.echo(f"{' '.join(m.upper() for m in methods)} {path}")
