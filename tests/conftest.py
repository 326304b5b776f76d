"""
Shared test fixtures and configuration for docstore tests.
"""
import json
from pathlib import Path

import pytest

from docstore.storage.json_store import JsonCollection, JsonStore


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for JsonStore tests."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def json_store(temp_data_dir: Path) -> JsonStore:
    """Create a JsonStore instance with temporary directory."""
    return JsonStore(str(temp_data_dir))


@pytest.fixture
def collection_path(temp_data_dir: Path) -> Path:
    """Path of a collection file that does not exist yet."""
    return temp_data_dir / "records.json"


@pytest.fixture
def collection(collection_path: Path) -> JsonCollection:
    """Create a JsonCollection bound to a missing file."""
    return JsonCollection(collection_path)


@pytest.fixture
def five_records(collection_path: Path) -> JsonCollection:
    """A collection holding five records with ids 0..4."""
    write_json(collection_path, [{"id": i, "name": f"item-{i}"} for i in range(5)])
    return JsonCollection(collection_path)


@pytest.fixture
def users_collection(collection_path: Path) -> JsonCollection:
    """A collection in location mode with a single 'users' location."""
    write_json(collection_path, {"users": [{"id": 1, "name": "A"}]})
    return JsonCollection(collection_path)


# Helper functions for tests

def write_json(path: Path, data) -> Path:
    """Write ``data`` as JSON to ``path``."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path
