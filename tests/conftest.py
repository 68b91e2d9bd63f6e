"""
Shared test fixtures and configuration for the JSON API mock server tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from mock_api import create_app
from mock_api.config import TestConfig
from mock_api.storage.json_store import CollectionStore


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path of a (not yet existing) data file inside a temp directory."""
    return tmp_path / "mock-data.json"


@pytest.fixture
def seeded_data_file(data_file: Path) -> Path:
    """Data file pre-populated with a small custom document."""
    write_document(data_file, {
        "books": [
            {"id": 10, "title": "Dune", "author": "Herbert"},
            {"id": 11, "title": "Emma", "author": "Austen"},
        ],
        "tags": [],
    })
    return data_file


@pytest.fixture
def app(data_file: Path) -> Flask:
    """Create a test Flask application bound to a temp data file."""
    app = create_app(TestConfig, DATA_FILE=str(data_file))
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def collection_store(data_file: Path) -> CollectionStore:
    """A CollectionStore with a deterministic id clock."""
    ticks = iter(range(1_700_000_000_000, 1_700_000_001_000))
    return CollectionStore(data_file, id_factory=lambda: next(ticks))


# Helper functions for tests

def write_document(path: Path, document) -> Path:
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path

