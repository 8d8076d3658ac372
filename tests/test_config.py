"""Tests for the HeyZub settings file."""

from pathlib import Path

import pytest
import yaml

from heyzub.config import (
    DEFAULT_MODEL,
    ConfigError,
    find_config_file,
    load_config,
    resolve_registry_dir,
)


def _write_yaml(path: Path, data) -> Path:
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


def test_load_explicit_file(tmp_path):
    path = _write_yaml(
        tmp_path / "heyzub.yaml",
        {"default_model": "test-model", "active_servers": ["test-server"]},
    )
    cfg = load_config(path)
    assert cfg.default_model == "test-model"
    assert cfg.active_servers == ["test-server"]
    assert cfg.source == path


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    assert find_config_file() is None

    cfg = load_config()
    assert cfg.default_model == DEFAULT_MODEL
    assert cfg.active_servers == []
    assert cfg.source is None


def test_discovers_file_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = _write_yaml(tmp_path / ".heyzub.yaml", {"default_model": "local"})
    assert find_config_file() == path
    assert load_config().default_model == "local"


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    cfg = load_config(path)
    assert cfg.default_model == DEFAULT_MODEL


def test_single_active_server_string(tmp_path):
    path = _write_yaml(tmp_path / "c.yaml", {"active_servers": "only-one"})
    assert load_config(path).active_servers == ["only-one"]


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("default_model: [unclosed")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_document(tmp_path):
    path = _write_yaml(tmp_path / "list.yaml", ["a", "b"])
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_resolve_registry_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("HEYZUB_CONFIG_DIR", raising=False)
    assert resolve_registry_dir() is None

    monkeypatch.setenv("HEYZUB_CONFIG_DIR", str(tmp_path / "env"))
    assert resolve_registry_dir() == tmp_path / "env"
    assert resolve_registry_dir(str(tmp_path / "opt")) == tmp_path / "opt"
