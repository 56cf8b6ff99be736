# Continue client adapter
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mcpget.clients.base import (
    glob_exists,
    load_or_default,
    path_exists,
    read_document,
    write_json_file,
)
from mcpget.models import ClientConfig, ClientType, ServerConfig
from mcpget.paths import extension_globs, resolve_config_path
from mcpget.utils.validation import check_server_config

logger = logging.getLogger(__name__)

EXPERIMENTAL_KEY = "experimental"
SERVER_KEY = "modelContextProtocolServer"


class ContinueAdapter:
    """Adapter for Continue (VS Code extension / JetBrains plugin).

    ABOUTME: Implements ClientAdapter protocol for Continue (~/.continue/config.json)
    ABOUTME: Server lives under experimental.modelContextProtocolServer
    ABOUTME: That slot holds one server only: the last write wins
    ABOUTME: Supports stdio, sse and websocket transports
    """

    client_type = ClientType.CONTINUE
    supported_transports: tuple[str, ...] = ("stdio", "sse", "websocket")

    def __init__(self, config: ClientConfig | None = None) -> None:
        self._config = config or ClientConfig(type=ClientType.CONTINUE)

    @property
    def name(self) -> str:
        """Human-readable client name."""
        return self._config.name or "Continue"

    def get_config_path(self) -> Path:
        """Path to ~/.continue/config.json."""
        if self._config.config_path:
            return Path(self._config.config_path)
        return resolve_config_path(ClientType.CONTINUE, sys.platform, Path.home(), os.environ)

    def is_installed(self) -> bool:
        """Detect Continue.

        ABOUTME: Config file counts on its own
        ABOUTME: Otherwise looks for a VS Code extension or JetBrains plugin directory
        """
        try:
            if path_exists(self.get_config_path()):
                return True
            patterns = extension_globs(ClientType.CONTINUE, sys.platform, Path.home(), os.environ)
            return any(glob_exists(pattern) for pattern in patterns)
        except Exception as e:
            logger.debug(f"Continue detection failed: {e}")
            return False

    def read_config(self) -> dict[str, Any] | None:
        return read_document(self.get_config_path())

    def validation_errors(self, config: ServerConfig) -> list[str]:
        return [error.message for error in check_server_config(config, self.supported_transports)]

    def validate_config(self, config: ServerConfig) -> bool:
        return not self.validation_errors(config)

    def write_config(self, config: ServerConfig) -> None:
        """Store the server in the experimental MCP slot.

        ABOUTME: Other experimental flags and top-level keys are preserved
        ABOUTME: Continue's entry has no name or env field

        Raises:
            ConfigWriteError: If the file cannot be written
        """
        config_path = self.get_config_path()
        existing = load_or_default(config_path, {})

        experimental = existing.get(EXPERIMENTAL_KEY)
        experimental = dict(experimental) if isinstance(experimental, dict) else {}
        experimental[SERVER_KEY] = {
            "transport": config.effective_transport,
            "command": config.command,
            "args": list(config.args),
        }

        updated = {**existing, EXPERIMENTAL_KEY: experimental}
        write_json_file(config_path, updated)
        logger.debug(f"Wrote {config.name} to {config_path}")

    def remove_config(self, config: ServerConfig) -> bool:
        """Clear the MCP slot if it currently holds this server.

        ABOUTME: The entry carries no name, so command + args identify it
        """
        config_path = self.get_config_path()
        existing = read_document(config_path)
        if existing is None:
            return False

        experimental = existing.get(EXPERIMENTAL_KEY)
        if not isinstance(experimental, dict):
            return False
        current = experimental.get(SERVER_KEY)
        if not isinstance(current, dict):
            return False
        if current.get("command") != config.command or current.get("args", []) != list(config.args):
            return False

        remaining = {k: v for k, v in experimental.items() if k != SERVER_KEY}
        write_json_file(config_path, {**existing, EXPERIMENTAL_KEY: remaining})
        return True
