"""Validator — check server records before they enter the registry.

Validation is pure: no locking, no I/O. Type-specific checks are looked up
in ``TYPE_CHECKS``, which must hold an entry for every ``ServerType``.
"""

from __future__ import annotations

from typing import Callable

from heyzub.servers.errors import ValidationError
from heyzub.servers.models import ServerConfig, ServerType


def _check_sqlite(server: ServerConfig) -> None:
    pass


def _check_filesystem(server: ServerConfig) -> None:
    pass


def _check_openai_compatible(server: ServerConfig) -> None:
    pass


TYPE_CHECKS: dict[ServerType, Callable[[ServerConfig], None]] = {
    ServerType.SQLITE: _check_sqlite,
    ServerType.FILESYSTEM: _check_filesystem,
    ServerType.OPENAI_COMPATIBLE: _check_openai_compatible,
}

VALID_TYPES = sorted(t.value for t in ServerType)


def coerce_type(value: ServerType | str) -> ServerType:
    """Return ``value`` as a ServerType or raise ValidationError."""
    if isinstance(value, ServerType):
        return value
    try:
        return ServerType(value)
    except ValueError:
        raise ValidationError(
            f"Unsupported server type '{value}'. Must be one of: {', '.join(VALID_TYPES)}"
        ) from None


def validate_server(server: ServerConfig) -> ServerType:
    """Validate a server record and return its resolved type.

    Fails when the name is empty or the type is not a known ServerType.
    Endpoint reachability is not checked.
    """
    if not server.name:
        raise ValidationError("Server name cannot be empty")

    server_type = coerce_type(server.type)
    check = TYPE_CHECKS.get(server_type)
    if check is None:
        raise ValidationError(f"No validation rules for server type '{server_type.value}'")
    check(server)
    return server_type
