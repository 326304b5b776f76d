"""
Unit tests for configuration and the store factory.
"""
import importlib
from pathlib import Path

import pytest

from docstore import create_store
import docstore.config
from docstore.config import TestingConfig, _env_flag, _env_int


@pytest.mark.unit
class TestCreateStore:
    """Tests for building a JsonStore from a config class."""

    def test_store_uses_config_values(self, tmp_path):
        class LocalConfig(TestingConfig):
            DATA_DIR = tmp_path / "store"
            ATOMIC_WRITES = False

        store = create_store(LocalConfig)

        assert store.data_dir == tmp_path / "store"
        assert store.data_dir.is_dir()
        assert store.indent == 2
        assert store.atomic_writes is False

    def test_collections_written_with_config_indent(self, tmp_path):
        class LocalConfig(TestingConfig):
            DATA_DIR = tmp_path

        store = create_store(LocalConfig)
        store.collection("notes").save({"text": "hi"})

        assert '  {\n    "text": "hi"\n  }' in (tmp_path / "notes.json").read_text()


@pytest.mark.unit
class TestEnvFlag:
    """Tests for boolean environment settings."""

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy(self, monkeypatch, raw):
        monkeypatch.setenv("DOCSTORE_TEST_FLAG", raw)
        assert _env_flag("DOCSTORE_TEST_FLAG", "false") is True

    @pytest.mark.parametrize("raw", ["0", "false", "off", ""])
    def test_falsy(self, monkeypatch, raw):
        monkeypatch.setenv("DOCSTORE_TEST_FLAG", raw)
        assert _env_flag("DOCSTORE_TEST_FLAG", "true") is False

    def test_default(self, monkeypatch):
        monkeypatch.delenv("DOCSTORE_TEST_FLAG", raising=False)
        assert _env_flag("DOCSTORE_TEST_FLAG", "true") is True


@pytest.mark.unit
class TestEnvInt:
    """Tests for integer environment settings."""

    def test_valid(self, monkeypatch):
        monkeypatch.setenv("DOCSTORE_TEST_INT", " 2 ")
        assert _env_int("DOCSTORE_TEST_INT", 4) == 2

    @pytest.mark.parametrize("raw", ["four", "2.5", "  "])
    def test_malformed_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("DOCSTORE_TEST_INT", raw)
        assert _env_int("DOCSTORE_TEST_INT", 4) == 4

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("DOCSTORE_TEST_INT", raising=False)
        assert _env_int("DOCSTORE_TEST_INT", 4) == 4


@pytest.mark.unit
class TestConfigDefaults:
    """Tests for the values Config picks up at import time."""

    @pytest.fixture
    def reload_config(self, monkeypatch):
        yield lambda: importlib.reload(docstore.config)
        monkeypatch.undo()
        importlib.reload(docstore.config)

    def test_data_dir_relative_to_working_directory(self, monkeypatch, reload_config):
        monkeypatch.delenv("DOCSTORE_DATA_DIR", raising=False)

        config = reload_config()

        assert config.Config.DATA_DIR == Path("data")

    def test_malformed_indent_does_not_break_import(self, monkeypatch, reload_config):
        monkeypatch.setenv("DOCSTORE_JSON_INDENT", "wide")

        config = reload_config()

        assert config.Config.JSON_INDENT == 4
