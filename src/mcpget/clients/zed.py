# Zed editor client adapter
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mcpget.clients.base import (
    load_or_default,
    merge_server_entry,
    parse_jsonc,
    parse_toml,
    path_exists,
    read_document,
    remove_server_entry,
    write_json_file,
    write_toml_file,
)
from mcpget.errors import ConfigWriteError
from mcpget.models import ClientConfig, ClientType, ServerConfig
from mcpget.paths import executable_paths, resolve_config_path, zed_extension_path
from mcpget.utils.validation import check_server_config

logger = logging.getLogger(__name__)

# ABOUTME: settings.json nesting: {"mcp": {"servers": {name: {...}}}}
SETTINGS_KEYS = ("mcp", "servers")

# ABOUTME: extension.toml nesting: [context-servers.<name>]
EXTENSION_KEYS = ("context-servers",)


class ZedAdapter:
    """Adapter for the Zed editor.

    ABOUTME: Implements ClientAdapter protocol for Zed
    ABOUTME: Two files per install: extension.toml manifest + settings.json (JSONC)
    ABOUTME: settings.json may contain comments; they are stripped before parsing
    ABOUTME: Only stdio transport is supported
    """

    client_type = ClientType.ZED
    supported_transports: tuple[str, ...] = ("stdio",)

    def __init__(self, config: ClientConfig | None = None) -> None:
        """Initialize adapter with optional client config.

        ABOUTME: config.config_path overrides settings.json; the extension
        ABOUTME: manifest is always resolved next to it
        """
        self._config = config or ClientConfig(type=ClientType.ZED)

    @property
    def name(self) -> str:
        """Human-readable client name."""
        return self._config.name or "Zed"

    def get_config_path(self) -> Path:
        """Path to Zed's settings.json for this OS."""
        if self._config.config_path:
            return Path(self._config.config_path)
        return resolve_config_path(ClientType.ZED, sys.platform, Path.home(), os.environ)

    def get_extension_path(self) -> Path:
        """Path to the MCP extension manifest (extension.toml)."""
        return zed_extension_path(self.get_config_path())

    def is_installed(self) -> bool:
        """Detect Zed via its settings file or its executable."""
        try:
            if path_exists(self.get_config_path()):
                return True
            candidates = executable_paths(ClientType.ZED, sys.platform, Path.home(), os.environ)
            return any(path_exists(candidate) for candidate in candidates)
        except Exception as e:
            logger.debug(f"Zed detection failed: {e}")
            return False

    def read_config(self) -> dict[str, Any] | None:
        """Load settings.json (comments stripped), None if missing or invalid."""
        return read_document(self.get_config_path(), parse_jsonc)

    def read_extension(self) -> dict[str, Any] | None:
        """Load extension.toml, None if missing or invalid."""
        return read_document(self.get_extension_path(), parse_toml)

    def validation_errors(self, config: ServerConfig) -> list[str]:
        return [error.message for error in check_server_config(config, self.supported_transports)]

    def validate_config(self, config: ServerConfig) -> bool:
        return not self.validation_errors(config)

    def write_config(self, config: ServerConfig) -> None:
        """Write the server to both the extension manifest and settings.json.

        ABOUTME: Each file is read-merged-written on its own
        ABOUTME: A failure on one file doesn't stop the other; both are reported

        Raises:
            ConfigWriteError: If either file cannot be written
        """
        failures: list[str] = []
        for write in (self._write_extension, self._write_settings):
            try:
                write(config)
            except ConfigWriteError as e:
                failures.append(str(e))

        if failures:
            raise ConfigWriteError("; ".join(failures))

    def _write_extension(self, config: ServerConfig) -> None:
        path = self.get_extension_path()
        existing = load_or_default(path, {}, parse_toml)
        entry = {
            "transport": config.effective_transport,
            "command": config.command,
            "args": list(config.args),
            "env": dict(config.env),
        }
        write_toml_file(path, merge_server_entry(existing, EXTENSION_KEYS, config.name, entry))
        logger.debug(f"Wrote {config.name} to {path}")

    def _write_settings(self, config: ServerConfig) -> None:
        path = self.get_config_path()
        existing = load_or_default(path, {"mcp": {"servers": {}}}, parse_jsonc)
        entry = {
            "transport": config.effective_transport,
            "command": config.command,
            "args": list(config.args),
            "env": dict(config.env),
        }
        if config.runtime is not None:
            entry["runtime"] = config.runtime
        write_json_file(path, merge_server_entry(existing, SETTINGS_KEYS, config.name, entry))
        logger.debug(f"Wrote {config.name} to {path}")

    def remove_config(self, config: ServerConfig) -> bool:
        """Remove the server from both files.

        ABOUTME: Returns True if either file changed

        Raises:
            ConfigWriteError: If either file cannot be rewritten
        """
        changed = False
        failures: list[str] = []
        targets = (
            (self.get_extension_path(), parse_toml, EXTENSION_KEYS, write_toml_file),
            (self.get_config_path(), parse_jsonc, SETTINGS_KEYS, write_json_file),
        )
        for path, parser, keys, writer in targets:
            existing = read_document(path, parser)
            if existing is None:
                continue
            updated = remove_server_entry(existing, keys, config.name)
            if updated is None:
                continue
            try:
                writer(path, updated)
                changed = True
            except ConfigWriteError as e:
                failures.append(str(e))

        if failures:
            raise ConfigWriteError("; ".join(failures))
        return changed
