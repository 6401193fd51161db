from __future__ import annotations

import json
from pathlib import Path

from ontoParser.config import ParserConfig, load_config, save_config


def _clear(monkeypatch) -> None:
    for name in ("ONTOPARSER_CONFIG", "ONTOPARSER_MAX_LINE_BYTES", "ONTOPARSER_PREFERRED_LANGUAGE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    _clear(monkeypatch)
    cfg = load_config()
    assert cfg == ParserConfig()
    assert cfg.max_line_bytes == 1_048_576
    assert cfg.detection_line_limit == 10
    assert cfg.include_skolemized_blank_nodes is False


def test_file_then_env_overrides(tmp_path: Path, monkeypatch) -> None:
    _clear(monkeypatch)
    path = tmp_path / "parser.json"
    path.write_text(
        json.dumps({"max_line_bytes": 2048, "preferred_language": "de", "unknown": True}),
        encoding="utf-8",
    )
    monkeypatch.setenv("ONTOPARSER_CONFIG", str(path))
    cfg = load_config()
    assert cfg.max_line_bytes == 2048
    assert cfg.preferred_language == "de"

    monkeypatch.setenv("ONTOPARSER_MAX_LINE_BYTES", "512")
    monkeypatch.setenv("ONTOPARSER_PREFERRED_LANGUAGE", "fr")
    cfg = load_config()
    assert cfg.max_line_bytes == 512
    assert cfg.preferred_language == "fr"


def test_missing_file_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _clear(monkeypatch)
    monkeypatch.setenv("ONTOPARSER_CONFIG", str(tmp_path / "absent.json"))
    assert load_config() == ParserConfig()


def test_save_round_trip(tmp_path: Path, monkeypatch) -> None:
    _clear(monkeypatch)
    path = tmp_path / "nested" / "parser.json"
    save_config(ParserConfig(detection_line_limit=3, include_skolemized_blank_nodes=True), path)
    monkeypatch.setenv("ONTOPARSER_CONFIG", str(path))
    cfg = load_config()
    assert cfg.detection_line_limit == 3
    assert cfg.include_skolemized_blank_nodes is True
