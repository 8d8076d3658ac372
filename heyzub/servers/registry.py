"""Local file-based server registry.

Keeps the server catalog in memory behind a reader/writer lock and mirrors
it to ``servers.json`` in the per-user configuration directory. Every
mutation rewrites the whole snapshot before the call returns.

Only one registry instance should own a snapshot file. Two processes
writing the same file are not coordinated; the last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from heyzub.servers.errors import (
    ConfigDirError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from heyzub.servers.models import (
    ServerConfig,
    ServerType,
    server_from_dict,
    server_to_dict,
)
from heyzub.servers.validator import validate_server
from heyzub.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

APP_DIR_NAME = "heyzub"

DEFAULT_SERVERS = (
    ServerConfig(
        id="local-sqlite",
        name="Local SQLite Server",
        type=ServerType.SQLITE,
        endpoint="localhost:8080",
        active=True,
    ),
    ServerConfig(
        id="local-filesystem",
        name="Local Filesystem Server",
        type=ServerType.FILESYSTEM,
        endpoint="/tmp/mcp-server",
        active=True,
    ),
)


def user_config_root() -> Path:
    """Return the platform's per-user configuration root.

    ``%APPDATA%`` on Windows, ``~/Library/Application Support`` on macOS,
    ``$XDG_CONFIG_HOME`` or ``~/.config`` elsewhere.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigDirError("%APPDATA% is not set")
        return Path(appdata)

    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigDirError(f"Could not determine home directory: {exc}") from exc

    if sys.platform == "darwin":
        return home / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config"


def default_config_dir() -> Path:
    return user_config_root() / APP_DIR_NAME


def generate_server_id() -> str:
    return f"server-{uuid.uuid4().hex[:12]}"


class ServerRegistry:
    """Concurrency-safe, disk-backed catalog of MCP servers."""

    SNAPSHOT_FILE = "servers.json"

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        self.config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigDirError(
                f"Could not create config directory {self.config_dir}: {exc}"
            ) from exc
        self.snapshot_path = self.config_dir / self.SNAPSHOT_FILE
        self._servers: dict[str, ServerConfig] = {}
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory catalog with the snapshot on disk.

        A missing snapshot is the first run: the built-in defaults are
        installed and written out. On a read or parse failure the catalog
        keeps whatever it held before.
        """
        with self._lock.write():
            try:
                text = self.snapshot_path.read_text(encoding="utf-8")
            except FileNotFoundError:
                defaults = {s.id: s for s in DEFAULT_SERVERS}
                self._save(defaults)
                self._servers = defaults
                logger.info("No server snapshot at %s; installed defaults", self.snapshot_path)
                return
            except (OSError, UnicodeDecodeError) as exc:
                raise StorageReadError(
                    f"Error reading server configuration {self.snapshot_path}: {exc}"
                ) from exc

            self._servers = _parse_snapshot(text, self.snapshot_path)
            logger.debug("Loaded %d servers from %s", len(self._servers), self.snapshot_path)

    def register(self, server: ServerConfig) -> ServerConfig:
        """Add a server, replacing any existing one with the same id.

        A missing id is generated. Returns the record as stored.
        """
        server_type = self.validate(server)
        if not server.endpoint:
            raise ValidationError("Server endpoint cannot be empty")

        with self._lock.write():
            server_id = server.id
            if not server_id:
                server_id = generate_server_id()
                while server_id in self._servers:
                    server_id = generate_server_id()
            stored = replace(server, id=server_id, type=server_type)

            updated = dict(self._servers)
            replaced = server_id in updated
            updated[server_id] = stored
            self._save(updated)
            self._servers = updated

        logger.info(
            "%s server %s (%s, %s)",
            "Replaced" if replaced else "Registered",
            stored.id,
            stored.type_value,
            stored.endpoint,
        )
        return stored

    def unregister(self, server_id: str) -> None:
        """Remove a server by id."""
        with self._lock.write():
            if server_id not in self._servers:
                raise NotFoundError(f"Server '{server_id}' not found")
            updated = {k: v for k, v in self._servers.items() if k != server_id}
            self._save(updated)
            self._servers = updated

        logger.info("Unregistered server %s", server_id)

    def list_servers(self) -> list[ServerConfig]:
        """Return every registered server. Order is not significant."""
        with self._lock.read():
            return list(self._servers.values())

    def get(self, server_id: str) -> ServerConfig | None:
        with self._lock.read():
            return self._servers.get(server_id)

    def validate(self, server: ServerConfig) -> ServerType:
        return validate_server(server)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _save(self, servers: dict[str, ServerConfig]) -> None:
        """Write ``servers`` as the new snapshot.

        Callers hold the write lock and only commit ``servers`` to memory
        once this returns.
        """
        data = {server_id: server_to_dict(s) for server_id, s in servers.items()}
        tmp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self.config_dir),
                prefix=".servers-",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.snapshot_path)
        except OSError as exc:
            logger.warning("Could not write server snapshot %s: %s", self.snapshot_path, exc)
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageWriteError(
                f"Error writing server configuration {self.snapshot_path}: {exc}"
            ) from exc


def _parse_snapshot(text: str, path: Path) -> dict[str, ServerConfig]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageReadError(f"Malformed server configuration {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise StorageReadError(f"Malformed server configuration {path}: expected an object")

    servers: dict[str, ServerConfig] = {}
    for server_id, data in raw.items():
        try:
            servers[server_id] = server_from_dict(server_id, data)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageReadError(
                f"Malformed server '{server_id}' in {path}: {exc}"
            ) from exc
    return servers
