from __future__ import annotations

"""Command line front end for the ontology parser."""

import json
from pathlib import Path

import click
from tabulate import tabulate

from ontoParser import __version__
from ontoParser.config import load_config
from ontoParser.errors import OntologyParserError
from ontoParser.handlers.ntriples import NTriplesHandler
from ontoParser.parser import OntologyParser


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@click.group()
@click.version_option(__version__)
def cli() -> None:
    """Parse RDF ontologies and inspect the extracted entities."""


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default=None, help="Format name or alias (turtle, ttl, nt, xml, jsonld ...).")
@click.option("--skolemize", is_flag=True, help="Include blank-node classes and properties as urn:bnode: URIs.")
@click.option("--lang", default=None, help="Preferred language tag for labels and descriptions.")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
def parse(path: Path, fmt: str | None, skolemize: bool, lang: str | None, as_json: bool) -> None:
    """Parse PATH and summarise the extracted ontology."""

    parser = OntologyParser(load_config())
    try:
        result = parser.parse(
            _read(path),
            format=fmt,
            include_skolemized_blank_nodes=skolemize or None,
            preferred_language=lang,
        )
    except OntologyParserError as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(json.dumps(result.to_dict(), sort_keys=True, indent=2, ensure_ascii=False))
        return

    click.echo(f"format: {result.metadata.get('format')}")
    click.echo(f"resources: {result.metadata.get('resource_count')}")
    counts = [
        ("classes", len(result.classes)),
        ("properties", len(result.properties)),
        ("shapes", len(result.shapes)),
        ("prefixes", len(result.prefixes)),
        ("restrictions", len(result.restrictions)),
        ("graphs", len(result.graphs)),
    ]
    click.echo(tabulate(counts, headers=["Entity", "Count"]))
    if result.classes:
        rows = [(uri, rec.get("label") or "") for uri, rec in sorted(result.classes.items())]
        click.echo()
        click.echo(tabulate(rows, headers=["Class", "Label"]))
    if result.properties:
        rows = [
            (uri, rec.get("property_type"), ", ".join(rec.get("range") or []))
            for uri, rec in sorted(result.properties.items())
        ]
        click.echo()
        click.echo(tabulate(rows, headers=["Property", "Type", "Range"]))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def detect(path: Path) -> None:
    """Print the format detected for PATH."""

    parser = OntologyParser(load_config())
    try:
        handler = parser.select_handler(_read(path))
    except OntologyParserError as exc:
        raise click.ClickException(str(exc))
    click.echo(handler.format_name())


@cli.command()
def formats() -> None:
    """List supported formats in detection order."""

    for name in OntologyParser().get_supported_formats():
        click.echo(name)


@cli.command(name="validate-nt")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate_nt(path: Path) -> None:
    """Run strict N-Triples validation on PATH without building a graph."""

    handler = NTriplesHandler(load_config())
    try:
        handler.validate(_read(path))
    except OntologyParserError as exc:
        raise click.ClickException(str(exc))
    click.echo("ok")


def main() -> None:  # pragma: no cover - CLI entrypoint
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
