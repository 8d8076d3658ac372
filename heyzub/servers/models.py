"""Server data models — endpoint records and their snapshot encoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Older snapshots wrote the OpenAI type as plain "openai"
LEGACY_TYPE_NAMES = {"openai": "openai-compatible"}


class ServerType(Enum):
    """Kinds of MCP server the registry accepts."""

    SQLITE = "sqlite"
    FILESYSTEM = "filesystem"
    OPENAI_COMPATIBLE = "openai-compatible"


@dataclass(frozen=True)
class ServerConfig:
    """A single entry in the server catalog."""

    name: str = ""
    type: Union[ServerType, str] = ServerType.SQLITE
    endpoint: str = ""
    active: bool = False
    config: str = ""  # Opaque, type-specific settings
    id: str = ""

    @property
    def type_value(self) -> str:
        return self.type.value if isinstance(self.type, ServerType) else str(self.type)


def server_to_dict(server: ServerConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": server.id,
        "name": server.name,
        "type": server.type_value,
        "endpoint": server.endpoint,
        "active": server.active,
    }
    if server.config:
        data["config"] = server.config
    return data


def server_from_dict(server_id: str, data: dict[str, Any]) -> ServerConfig:
    """Build a record from its snapshot object.

    The snapshot key is the record's id. Raises ``ValueError``,
    ``KeyError`` or ``TypeError`` when the object is not a valid record.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Server '{server_id}' is not an object")
    active = data.get("active", False)
    if not isinstance(active, bool):
        raise TypeError(f"Server '{server_id}' has a non-boolean 'active' flag")

    fields = {"name": data["name"], "type": data["type"], "endpoint": data["endpoint"]}
    fields["config"] = data.get("config", "")
    for key, value in fields.items():
        if not isinstance(value, str):
            raise TypeError(f"Server '{server_id}' has a non-string '{key}'")

    return ServerConfig(
        id=server_id,
        name=fields["name"],
        type=ServerType(LEGACY_TYPE_NAMES.get(fields["type"], fields["type"])),
        endpoint=fields["endpoint"],
        active=active,
        config=fields["config"],
    )
