# User preferences for mcp-get
# ABOUTME: Small JSON file: {"defaultClients": [...], "allowAnalytics": bool}
# ABOUTME: Reads never raise; a missing or corrupt file means "no preferences"
import logging
from pathlib import Path
from typing import Any

from mcpget.clients import get_all_clients
from mcpget.clients.base import load_or_default, write_json_file
from mcpget.config import get_preferences_path, get_store_path, load_store
from mcpget.errors import UnsupportedClientError
from mcpget.models import ClientAdapter, ClientType

logger = logging.getLogger(__name__)

DEFAULT_CLIENTS_KEY = "defaultClients"
ALLOW_ANALYTICS_KEY = "allowAnalytics"


class Preferences:
    """File-backed preferences store.

    ABOUTME: Paths default to the mcp-get config dir; both can be injected for tests
    ABOUTME: Writes keep keys this class doesn't own
    """

    def __init__(
        self,
        path: Path | None = None,
        adapters: dict[ClientType, ClientAdapter] | None = None,
        store_path: Path | None = None,
    ) -> None:
        self.path = path or get_preferences_path()
        self.store_path = store_path or get_store_path()
        self._adapters = adapters

    def _load(self) -> dict[str, Any]:
        return load_or_default(self.path, {})

    def _save(self, updates: dict[str, Any]) -> None:
        data = self._load()
        data.update(updates)
        write_json_file(self.path, data)

    def get_default_clients(self) -> list[ClientType]:
        """Return the stored default client set.

        ABOUTME: Unknown identifiers in the file are dropped
        """
        stored = self._load().get(DEFAULT_CLIENTS_KEY)
        if not isinstance(stored, list):
            return []

        clients: list[ClientType] = []
        for value in stored:
            try:
                client = ClientType.parse(value)
            except UnsupportedClientError:
                logger.debug(f"Ignoring unknown default client {value!r} in {self.path}")
                continue
            if client not in clients:
                clients.append(client)
        return clients

    def set_default_clients(self, clients: list[ClientType]) -> None:
        """Persist the default client set.

        Raises:
            ConfigWriteError: If preferences.json cannot be written
        """
        values = [ClientType.parse(client).value for client in clients]
        self._save({DEFAULT_CLIENTS_KEY: values})

    def detect_installed_clients(self) -> list[ClientType]:
        """Return the clients whose adapters report an installation."""
        if self._adapters is None:
            self._adapters = get_all_clients()

        installed: list[ClientType] = []
        for client_type, adapter in self._adapters.items():
            try:
                if adapter.is_installed():
                    installed.append(client_type)
            except Exception as e:
                logger.debug(f"Detection of {client_type.value} failed: {e}")
        return installed

    def read_config(self) -> dict[str, Any]:
        """Return the installed-server store document ({"mcpServers": {...}})."""
        return load_store(self.store_path)

    def get_allow_analytics(self) -> bool | None:
        """Stored analytics opt-in, None when the user hasn't been asked."""
        value = self._load().get(ALLOW_ANALYTICS_KEY)
        return value if isinstance(value, bool) else None

    def set_allow_analytics(self, allow: bool) -> None:
        self._save({ALLOW_ANALYTICS_KEY: bool(allow)})
