# Tool directory and installed-server store for mcp-get
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mcpget.clients.base import load_or_default, write_json_file
from mcpget.models import ServerConfig
from mcpget.paths import app_config_dir, sanitize_server_name

logger = logging.getLogger(__name__)

# ABOUTME: Environment variable that relocates the whole mcp-get directory
CONFIG_DIR_ENV = "MCP_GET_CONFIG_DIR"

STORE_FILENAME = "servers.json"
PREFERENCES_FILENAME = "preferences.json"

SERVERS_KEY = "mcpServers"


def get_config_dir() -> Path:
    """Return the mcp-get config directory.

    ABOUTME: $MCP_GET_CONFIG_DIR wins; otherwise <user config dir>/mcp-get
    ABOUTME: Directory may not exist yet; writers create it

    Returns:
        Path to config directory
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return app_config_dir(sys.platform, Path.home(), os.environ) / "mcp-get"


def get_store_path() -> Path:
    """Return the path to the installed-server store (servers.json)."""
    return get_config_dir() / STORE_FILENAME


def get_preferences_path() -> Path:
    """Return the path to preferences.json."""
    return get_config_dir() / PREFERENCES_FILENAME


def load_store(path: Path) -> dict[str, Any]:
    """Load the installed-server store.

    ABOUTME: Missing or corrupt file -> {"mcpServers": {}}
    ABOUTME: Always returns a dict with a dict under "mcpServers"

    Args:
        path: Path to servers.json

    Returns:
        Store document
    """
    data = load_or_default(path, {SERVERS_KEY: {}})
    if not isinstance(data.get(SERVERS_KEY), dict):
        data[SERVERS_KEY] = {}
    return data


def server_to_entry(config: ServerConfig) -> dict[str, Any]:
    """Convert a ServerConfig to its store entry.

    ABOUTME: transport is only written when explicitly set
    """
    entry: dict[str, Any] = {
        "runtime": config.runtime,
        "command": config.command,
        "args": list(config.args),
        "env": dict(config.env),
    }
    if config.transport:
        entry["transport"] = config.transport
    return entry


def entry_to_server(name: str, entry: dict[str, Any]) -> ServerConfig:
    """Convert a store entry back into a ServerConfig.

    ABOUTME: Tolerates missing args/env; an entry without command is rejected

    Raises:
        ValueError: If the entry has no command
    """
    if not entry.get("command"):
        raise ValueError(f"Server '{name}' missing required 'command' field")

    return ServerConfig(
        name=name,
        command=entry["command"],
        runtime=entry.get("runtime"),
        args=list(entry.get("args") or []),
        env=dict(entry.get("env") or {}),
        transport=entry.get("transport"),
    )


def add_server_to_store(path: Path, config: ServerConfig) -> None:
    """Record a server in the store.

    ABOUTME: Overwrites any previous entry with the same name
    ABOUTME: Creates the store if it doesn't exist

    Raises:
        ConfigWriteError: If the store cannot be written
    """
    data = load_store(path)
    servers = dict(data[SERVERS_KEY])
    servers[config.name] = server_to_entry(config)
    data[SERVERS_KEY] = servers
    write_json_file(path, data)


def remove_server_from_store(path: Path, server_name: str) -> bool:
    """Remove a server from the store.

    ABOUTME: Returns True if server was found and removed
    ABOUTME: Returns False (and writes nothing) if it was not there
    """
    data = load_store(path)
    key = sanitize_server_name(server_name)
    if key not in data[SERVERS_KEY]:
        return False

    servers = dict(data[SERVERS_KEY])
    del servers[key]
    data[SERVERS_KEY] = servers
    write_json_file(path, data)
    return True


def get_stored_server(path: Path, server_name: str) -> ServerConfig | None:
    """Look up a stored server by package or server name."""
    key = sanitize_server_name(server_name)
    entry = load_store(path)[SERVERS_KEY].get(key)
    if not isinstance(entry, dict):
        return None
    try:
        return entry_to_server(key, entry)
    except ValueError as e:
        logger.warning(f"Ignoring invalid store entry: {e}")
        return None


def is_package_installed(path: Path, package_name: str) -> bool:
    """Whether mcp-get has installed a package (slashes in the name become dashes)."""
    return sanitize_server_name(package_name) in load_store(path)[SERVERS_KEY]
