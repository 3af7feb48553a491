"""Pytest configuration and fixtures."""

import pytest

from path_sanitize import config as config_module


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep user config files and environment out of every test."""
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", [])
    for name in (
        config_module.ENV_CONFIG,
        config_module.ENV_PARENT_DIRECTORY_PATTERN,
        config_module.ENV_DISALLOWED_CHAR_PATTERN,
        config_module.ENV_BASE_DIR,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    """Return a writer that stores TOML text in a temporary config file."""

    def _write(content: str):
        path = tmp_path / "config.toml"
        path.write_text(content)
        return path

    return _write
