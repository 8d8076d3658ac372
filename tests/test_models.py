"""Tests for server data models."""

import dataclasses

import pytest

from heyzub.servers.models import (
    ServerConfig,
    ServerType,
    server_from_dict,
    server_to_dict,
)


def test_server_config_defaults():
    server = ServerConfig(name="db", type=ServerType.SQLITE, endpoint="localhost:1")
    assert server.id == ""
    assert server.active is False
    assert server.config == ""
    assert server.type_value == "sqlite"


def test_server_config_is_immutable():
    server = ServerConfig(name="db", type=ServerType.SQLITE, endpoint="localhost:1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        server.name = "other"


def test_legacy_openai_type_only_in_snapshots():
    with pytest.raises(ValueError):
        ServerType("openai")
    server = server_from_dict("ai", {"name": "AI", "type": "openai", "endpoint": "http://x"})
    assert server.type is ServerType.OPENAI_COMPATIBLE


def test_to_dict_omits_empty_config():
    data = server_to_dict(
        ServerConfig(id="a", name="A", type=ServerType.FILESYSTEM, endpoint="/srv")
    )
    assert data == {
        "id": "a",
        "name": "A",
        "type": "filesystem",
        "endpoint": "/srv",
        "active": False,
    }


def test_from_dict_uses_key_as_id():
    server = server_from_dict(
        "key-id",
        {"id": "stale", "name": "A", "type": "sqlite", "endpoint": "x", "config": "c"},
    )
    assert server.id == "key-id"
    assert server.type is ServerType.SQLITE
    assert server.config == "c"
    assert server.active is False


@pytest.mark.parametrize(
    "data",
    [
        {"type": "sqlite", "endpoint": "x"},
        {"name": "A", "type": "sqlite", "endpoint": "x", "active": "yes"},
        ["not", "an", "object"],
        {"name": None, "type": "sqlite", "endpoint": None},
        {"name": 42, "type": "sqlite", "endpoint": "x"},
        {"name": "A", "type": "sqlite", "endpoint": "x", "config": {"k": 1}},
        {"name": "A", "type": None, "endpoint": "x"},
    ],
)
def test_from_dict_rejects_malformed(data):
    with pytest.raises((KeyError, TypeError, ValueError)):
        server_from_dict("a", data)
