from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ontoParser.cli.__main__ import cli


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ("ONTOPARSER_CONFIG", "ONTOPARSER_MAX_LINE_BYTES", "ONTOPARSER_PREFERRED_LANGUAGE"):
        monkeypatch.delenv(name, raising=False)


def test_formats_lists_detection_order() -> None:
    result = CliRunner().invoke(cli, ["formats"])
    assert result.exit_code == 0
    assert result.output.split() == ["json-ld", "turtle", "n-triples", "rdf/xml"]


def test_detect(fixtures_dir: Path) -> None:
    result = CliRunner().invoke(cli, ["detect", str(fixtures_dir / "catalog.jsonld")])
    assert result.exit_code == 0
    assert result.output.strip() == "json-ld"


def test_parse_summary(fixtures_dir: Path) -> None:
    result = CliRunner().invoke(cli, ["parse", str(fixtures_dir / "library.ttl")])
    assert result.exit_code == 0, result.output
    assert "format: turtle" in result.output
    assert "Entity" in result.output
    assert "http://example.org/library#Work" in result.output
    assert "written by" not in result.output
    assert "object" in result.output


def test_parse_json_with_language(fixtures_dir: Path) -> None:
    result = CliRunner().invoke(
        cli, ["parse", str(fixtures_dir / "library.ttl"), "--json", "--lang", "fr"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["metadata"]["format"] == "turtle"
    assert payload["classes"]["http://example.org/library#Work"]["label"] == "Oeuvre"
    assert payload["graphs"] == ["_:default"]


def test_parse_with_explicit_format_and_skolemize(tmp_path: Path) -> None:
    doc = tmp_path / "anon.ttl"
    doc.write_text(
        "@prefix owl: <http://www.w3.org/2002/07/owl#> .\n[] a owl:Class .\n",
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["parse", str(doc), "--format", "ttl", "--skolemize", "--json"])
    assert result.exit_code == 0, result.output
    classes = json.loads(result.output)["classes"]
    assert len(classes) == 1
    assert next(iter(classes)).startswith("urn:bnode:")


def test_parse_failure_exits_non_zero(tmp_path: Path) -> None:
    doc = tmp_path / "notes.txt"
    doc.write_text("just some prose\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["parse", str(doc)])
    assert result.exit_code == 1
    assert "Unable to detect RDF format" in result.output


def test_validate_nt_ok(fixtures_dir: Path) -> None:
    result = CliRunner().invoke(cli, ["validate-nt", str(fixtures_dir / "sample.nt")])
    assert result.exit_code == 0
    assert result.output.strip() == "ok"


def test_validate_nt_reports_line(tmp_path: Path) -> None:
    doc = tmp_path / "bad.nt"
    doc.write_text(
        "<http://example.org/s> <http://example.org/p> <http://example.org/o> .\n"
        "<http://example.org/s> <p> <http://example.org/o> .\n",
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["validate-nt", str(doc)])
    assert result.exit_code == 1
    assert "N-Triples parsing failed: line 2: " in result.output


def test_config_file_applies_to_cli(tmp_path: Path, monkeypatch) -> None:
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"max_line_bytes": 10}), encoding="utf-8")
    monkeypatch.setenv("ONTOPARSER_CONFIG", str(cfg))
    doc = tmp_path / "one.nt"
    doc.write_text("<http://example.org/s> <http://example.org/p> <http://example.org/o> .\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["validate-nt", str(doc)])
    assert result.exit_code == 1
