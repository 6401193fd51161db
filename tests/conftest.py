from __future__ import annotations

from pathlib import Path

import pytest

from ontoParser.parser import OntologyParser

FIXTURES = Path(__file__).parent / "fixtures" / "ontologies"


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def load_fixture():
    """Return a loader reading a fixture document by file name."""

    def _load(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def parser() -> OntologyParser:
    return OntologyParser()
