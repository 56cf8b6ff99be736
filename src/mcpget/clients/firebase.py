# Firebase Genkit client adapter
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mcpget.clients.base import (
    load_or_default,
    path_exists,
    probe_command,
    read_document,
    write_json_file,
)
from mcpget.models import ClientConfig, ClientType, ServerConfig
from mcpget.paths import resolve_config_path
from mcpget.utils.validation import check_server_config

logger = logging.getLogger(__name__)

# ABOUTME: Keys owned by the server entry in the flat document
SERVER_KEYS = ("name", "serverProcess", "transport")

# ABOUTME: Project marker that must sit in the working directory
PROJECT_MARKER = "firebase.json"

VERSION_COMMAND = ("firebase", "--version")


class FirebaseAdapter:
    """Adapter for Firebase Genkit (~/.firebase/mcp-config.json).

    ABOUTME: Implements ClientAdapter protocol for Firebase Genkit
    ABOUTME: Flat document: one file describes exactly one server
    ABOUTME: Installing a second server overwrites the first

    Example document:
        {
          "name": "my-server",
          "serverProcess": {"command": "npx", "args": ["-y", "pkg"], "env": {}},
          "transport": "stdio"
        }
    """

    client_type = ClientType.FIREBASE
    supported_transports: tuple[str, ...] = ("stdio", "sse")

    def __init__(self, config: ClientConfig | None = None) -> None:
        self._config = config or ClientConfig(type=ClientType.FIREBASE)

    @property
    def name(self) -> str:
        """Human-readable client name."""
        return self._config.name or "Firebase Genkit"

    def get_config_path(self) -> Path:
        """Path to ~/.firebase/mcp-config.json."""
        if self._config.config_path:
            return Path(self._config.config_path)
        return resolve_config_path(ClientType.FIREBASE, sys.platform, Path.home(), os.environ)

    def is_installed(self) -> bool:
        """Detect Firebase Genkit.

        ABOUTME: Existing mcp-config.json counts on its own
        ABOUTME: Otherwise needs a working `firebase` CLI (bounded by a timeout)
        ABOUTME: and a firebase.json project marker in the working directory
        """
        try:
            if path_exists(self.get_config_path()):
                return True
            if not path_exists(Path.cwd() / PROJECT_MARKER):
                return False
            return probe_command(VERSION_COMMAND)
        except Exception as e:
            logger.debug(f"Firebase detection failed: {e}")
            return False

    def read_config(self) -> dict[str, Any] | None:
        return read_document(self.get_config_path())

    def validation_errors(self, config: ServerConfig) -> list[str]:
        return [error.message for error in check_server_config(config, self.supported_transports)]

    def validate_config(self, config: ServerConfig) -> bool:
        return not self.validation_errors(config)

    def write_config(self, config: ServerConfig) -> None:
        """Write the server as the whole (flat) document.

        ABOUTME: Replaces name/serverProcess/transport; unrelated top-level keys stay

        Raises:
            ConfigWriteError: If the file cannot be written
        """
        config_path = self.get_config_path()
        existing = load_or_default(config_path, {})

        updated = {
            "name": config.name,
            "serverProcess": {
                "command": config.command,
                "args": list(config.args),
                "env": dict(config.env),
            },
            "transport": config.effective_transport,
        }
        for key, value in existing.items():
            if key not in SERVER_KEYS:
                updated[key] = value

        write_json_file(config_path, updated)
        logger.debug(f"Wrote {config.name} to {config_path}")

    def remove_config(self, config: ServerConfig) -> bool:
        """Drop the server keys if the document describes this server.

        ABOUTME: The file itself is kept, with any unrelated keys
        """
        config_path = self.get_config_path()
        existing = read_document(config_path)
        if existing is None or existing.get("name") != config.name:
            return False

        remaining = {k: v for k, v in existing.items() if k not in SERVER_KEYS}
        write_json_file(config_path, remaining)
        return True
