# Claude Desktop client adapter
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mcpget.clients.base import (
    load_or_default,
    merge_server_entry,
    path_exists,
    read_document,
    remove_server_entry,
    write_json_file,
)
from mcpget.models import ClientConfig, ClientType, ServerConfig
from mcpget.paths import executable_paths, resolve_config_path
from mcpget.utils.validation import check_server_config

logger = logging.getLogger(__name__)

SERVERS_KEY = "mcpServers"


class ClaudeAdapter:
    """Adapter for Claude Desktop (claude_desktop_config.json).

    ABOUTME: Implements ClientAdapter protocol for Claude Desktop
    ABOUTME: Entries live under "mcpServers" keyed by server name
    ABOUTME: Entry fields: runtime, command, args, env

    Example document:
        {
          "mcpServers": {
            "my-server": {"runtime": "node", "command": "npx", "args": ["-y", "pkg"], "env": {}}
          }
        }
    """

    client_type = ClientType.CLAUDE
    supported_transports: tuple[str, ...] = ("stdio", "sse")

    def __init__(self, config: ClientConfig | None = None) -> None:
        """Initialize adapter with optional client config.

        ABOUTME: config.config_path, when set, replaces the platform default path
        """
        self._config = config or ClientConfig(type=ClientType.CLAUDE)

    @property
    def name(self) -> str:
        """Human-readable client name."""
        return self._config.name or "Claude Desktop"

    def get_config_path(self) -> Path:
        """Path to claude_desktop_config.json for this OS."""
        if self._config.config_path:
            return Path(self._config.config_path)
        return resolve_config_path(ClientType.CLAUDE, sys.platform, Path.home(), os.environ)

    def is_installed(self) -> bool:
        """Detect Claude Desktop.

        ABOUTME: Config file or its Claude/ directory counts on its own
        ABOUTME: Otherwise falls back to the desktop app executable
        """
        try:
            config_path = self.get_config_path()
            if path_exists(config_path) or path_exists(config_path.parent):
                return True
            candidates = executable_paths(ClientType.CLAUDE, sys.platform, Path.home(), os.environ)
            return any(path_exists(candidate) for candidate in candidates)
        except Exception as e:
            logger.debug(f"Claude Desktop detection failed: {e}")
            return False

    def read_config(self) -> dict[str, Any] | None:
        """Load the existing config document, None if missing or invalid."""
        return read_document(self.get_config_path())

    def validation_errors(self, config: ServerConfig) -> list[str]:
        return [error.message for error in check_server_config(config, self.supported_transports)]

    def validate_config(self, config: ServerConfig) -> bool:
        return not self.validation_errors(config)

    def write_config(self, config: ServerConfig) -> None:
        """Merge the server entry into mcpServers and write the file.

        ABOUTME: Creates the file (and directories) if missing
        ABOUTME: Preserves every other top-level key and every other server

        Raises:
            ConfigWriteError: If the file cannot be written
        """
        config_path = self.get_config_path()
        existing = load_or_default(config_path, {})

        entry: dict[str, Any] = {}
        if config.runtime is not None:
            entry["runtime"] = config.runtime
        entry.update(command=config.command, args=list(config.args), env=dict(config.env))
        updated = merge_server_entry(existing, [SERVERS_KEY], config.name, entry)

        write_json_file(config_path, updated)
        logger.debug(f"Wrote {config.name} to {config_path}")

    def remove_config(self, config: ServerConfig) -> bool:
        """Remove the server entry from mcpServers.

        ABOUTME: Leaves the file untouched when the server isn't there
        """
        config_path = self.get_config_path()
        existing = read_document(config_path)
        if existing is None:
            return False

        updated = remove_server_entry(existing, [SERVERS_KEY], config.name)
        if updated is None:
            return False

        write_json_file(config_path, updated)
        return True
