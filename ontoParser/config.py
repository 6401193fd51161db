from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

CONFIG_ENV = "ONTOPARSER_CONFIG"
MAX_LINE_BYTES_ENV = "ONTOPARSER_MAX_LINE_BYTES"
PREFERRED_LANGUAGE_ENV = "ONTOPARSER_PREFERRED_LANGUAGE"


@dataclass
class ParserConfig:
    max_line_bytes: int = 1_048_576
    detection_line_limit: int = 10
    preferred_language: str | None = None
    include_skolemized_blank_nodes: bool = False
    max_list_length: int = 10_000


def config_path() -> Path | None:
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return None


def load_config() -> ParserConfig:
    """Return the parser configuration.

    Values come from the JSON file named by ``ONTOPARSER_CONFIG`` (unknown
    keys are ignored) and are then overridden by the individual
    ``ONTOPARSER_*`` environment variables.
    """

    data: dict[str, Any] = {}
    path = config_path()
    if path is not None and path.exists():
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        known = {f.name for f in fields(ParserConfig)}
        data = {k: v for k, v in raw.items() if k in known}

    max_line = os.getenv(MAX_LINE_BYTES_ENV)
    if max_line:
        data["max_line_bytes"] = int(max_line)
    lang = os.getenv(PREFERRED_LANGUAGE_ENV)
    if lang:
        data["preferred_language"] = lang
    return ParserConfig(**data)


def save_config(cfg: ParserConfig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(asdict(cfg), fh, indent=2)


__all__ = ["ParserConfig", "load_config", "save_config", "config_path", "CONFIG_ENV"]
