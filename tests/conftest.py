import os
import sys
import configparser
import pytest
from click.testing import CliRunner

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cli.main import filehasher_cli
from models.run_configuration import RunConfiguration

# ────────────────────────────────────────────────
# FILE FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def make_file(tmp_path):
    """Factory writing a file under tmp_path and returning its path as a string."""
    def _make_file(name: str, content: bytes = b"") -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)
    return _make_file

@pytest.fixture
def test_file(make_file):
    """A small file containing b'test'."""
    return make_file("test.txt", b"test")

@pytest.fixture
def many_files(make_file):
    """Twelve small files with distinct contents."""
    return [make_file(f"file_{i:02d}.bin", f"content {i}".encode()) for i in range(12)]

@pytest.fixture(autouse=True)
def clear_hasher_env(monkeypatch):
    """Keep FILEHASHER_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("FILEHASHER_"):
            monkeypatch.delenv(name, raising=False)

# ────────────────────────────────────────────────
# CONFIGURATION FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def run_config():
    """Factory for RunConfiguration objects with progress disabled."""
    def _run_config(**overrides) -> RunConfiguration:
        values = {"no_progress": True}
        values.update(overrides)
        return RunConfiguration(**values)
    return _run_config

@pytest.fixture
def config_file(tmp_path):
    """Factory writing an INI config file and returning its path."""
    def _config_file(sections: dict, name: str = "filehasher_config.ini") -> str:
        parser = configparser.ConfigParser()
        for section, values in sections.items():
            parser[section] = values
        path = tmp_path / name
        with path.open("w") as f:
            parser.write(f)
        return str(path)
    return _config_file

# ────────────────────────────────────────────────
# CLI FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def cli_runner():
    """Provide a Click test runner."""
    return CliRunner()

@pytest.fixture
def cli():
    """Provide the filehasher CLI group."""
    return filehasher_cli
