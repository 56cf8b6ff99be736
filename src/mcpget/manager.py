# Multi-client configuration orchestration for mcp-get
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mcpget.clients import get_all_clients
from mcpget.config import (
    add_server_to_store,
    get_store_path,
    get_stored_server,
    is_package_installed,
    load_store,
    remove_server_from_store,
)
from mcpget.errors import (
    ConfigValidationError,
    McpGetError,
    NoClientsFoundError,
    NoValidClientsError,
    UnsupportedClientError,
)
from mcpget.models import ClientAdapter, ClientType, ServerConfig
from mcpget.package import Package, build_server_config
from mcpget.paths import sanitize_server_name
from mcpget.preferences import Preferences

logger = logging.getLogger(__name__)


@dataclass
class ConfigureReport:
    """Outcome of fanning one server out to several clients.

    ABOUTME: Tracks success/failure/skip per client
    ABOUTME: Failures are non-fatal, the remaining clients are still attempted
    """
    succeeded: list[ClientType] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    skipped: dict[str, str] = field(default_factory=dict)

    def add_success(self, client: ClientType) -> None:
        self.succeeded.append(client)

    def add_failure(self, client: str, reason: str) -> None:
        """Record a client that was attempted (or requested) and failed."""
        self.failed[client] = reason

    def add_skip(self, client: str, reason: str) -> None:
        """Record a client that was not attempted, e.g. not installed."""
        self.skipped[client] = reason

    @property
    def ok(self) -> bool:
        """True when every targeted client succeeded."""
        return bool(self.succeeded) and not self.failed

    @property
    def partial(self) -> bool:
        """True when some clients succeeded and some failed."""
        return bool(self.succeeded) and bool(self.failed)


class ConfigManager:
    """Coordinates client detection, selection and configuration.

    ABOUTME: Holds one adapter instance per registered client, built once
    ABOUTME: Adapters, preferences and store path are injectable for tests
    """

    def __init__(
        self,
        adapters: dict[ClientType, ClientAdapter] | None = None,
        preferences: Preferences | None = None,
        store_path: Path | None = None,
    ) -> None:
        if adapters is None:
            adapters = get_all_clients()
        self._adapters = adapters
        self.store_path = store_path or get_store_path()
        self.preferences = preferences or Preferences(adapters=adapters, store_path=self.store_path)

    @property
    def clients(self) -> list[ClientType]:
        """Registered clients in registry order."""
        return list(self._adapters)

    def get_client_adapter(self, client: ClientType | str) -> ClientAdapter:
        """Return the adapter for a client.

        Raises:
            UnsupportedClientError: If the client isn't registered
        """
        client_type = ClientType.parse(client)
        adapter = self._adapters.get(client_type)
        if adapter is None:
            raise UnsupportedClientError(f"No adapter registered for client: {client_type.value}")
        return adapter

    # ─── Detection & selection ──────────────────────────────────

    def _probe(self, client_type: ClientType) -> bool:
        try:
            return bool(self._adapters[client_type].is_installed())
        except Exception as e:
            logger.debug(f"Detection of {client_type.value} failed: {e}")
            return False

    def get_installed_clients(self) -> list[ClientType]:
        """Return installed clients, in registry order.

        ABOUTME: Probes run concurrently; they touch disjoint files
        ABOUTME: A probe that raises counts as "not installed"
        """
        clients = self.clients
        if not clients:
            return []
        with ThreadPoolExecutor(max_workers=len(clients)) as pool:
            results = list(pool.map(self._probe, clients))
        return [client for client, installed in zip(clients, results) if installed]

    def select_clients(self, installed: list[ClientType] | None = None) -> list[ClientType]:
        """Resolve the default target set.

        ABOUTME: 1. stored defaults that are still installed, if any
        ABOUTME: 2. otherwise every installed client; a single one becomes the default
        ABOUTME: More than one result is left to the caller to narrow interactively

        Args:
            installed: Result of an earlier get_installed_clients() to reuse

        Raises:
            NoClientsFoundError: If no supported client is installed
        """
        if installed is None:
            installed = self.get_installed_clients()

        defaults = [client for client in self.preferences.get_default_clients() if client in installed]
        if defaults:
            return defaults

        if not installed:
            raise NoClientsFoundError(
                "No supported MCP clients found. Install one of: "
                + ", ".join(client.value for client in self.clients)
            )

        if len(installed) == 1:
            try:
                self.preferences.set_default_clients(installed)
            except McpGetError as e:
                logger.warning(f"Could not save default client: {e}")

        return installed

    def _resolve_targets(
        self,
        target_clients: Iterable[ClientType | str] | None,
        report: ConfigureReport,
    ) -> list[ClientType]:
        """Turn requested clients into installed, known ones; record the rest."""
        detected: list[ClientType] | None = None
        if target_clients is None:
            detected = self.get_installed_clients()
            requested: list[ClientType | str] = list(self.select_clients(detected))
        else:
            requested = list(target_clients)

        known: list[ClientType] = []
        for client in requested:
            try:
                client_type = ClientType.parse(client)
                self.get_client_adapter(client_type)
            except UnsupportedClientError as e:
                report.add_failure(str(getattr(client, "value", client)), str(e))
                continue
            if client_type not in known:
                known.append(client_type)

        if known and detected is None:
            detected = self.get_installed_clients()
        installed = set(detected or [])
        targets: list[ClientType] = []
        for client_type in known:
            if client_type in installed:
                targets.append(client_type)
            else:
                report.add_skip(client_type.value, "not installed")

        if not targets:
            details = {**report.failed, **report.skipped}
            reasons = "; ".join(f"{client}: {reason}" for client, reason in details.items())
            message = "No valid clients for configuration"
            raise NoValidClientsError(f"{message} ({reasons})" if reasons else message)

        return targets

    # ─── Configuration ──────────────────────────────────────────

    def configure_clients(
        self,
        config: ServerConfig,
        target_clients: Iterable[ClientType | str] | None = None,
    ) -> ConfigureReport:
        """Validate and write a server config to each target client.

        ABOUTME: Targets: explicit list, else select_clients()
        ABOUTME: Unknown or not-installed targets are recorded and filtered out
        ABOUTME: Validation or write failures skip that client and continue

        Args:
            config: Server to register
            target_clients: Clients to configure (None = resolve automatically)

        Returns:
            ConfigureReport listing succeeded, failed and skipped clients

        Raises:
            NoClientsFoundError: If no target list was given and nothing is installed
            NoValidClientsError: If filtering leaves no client to configure
        """
        report = ConfigureReport()
        targets = self._resolve_targets(target_clients, report)

        for client_type in targets:
            adapter = self._adapters[client_type]

            errors = adapter.validation_errors(config)
            if errors:
                failure = ConfigValidationError(adapter.name, errors)
                logger.info(str(failure))
                report.add_failure(client_type.value, str(failure))
                continue

            try:
                adapter.write_config(config)
            except Exception as e:
                logger.warning(f"Failed to configure {adapter.name}: {e}")
                report.add_failure(client_type.value, str(e))
                continue

            report.add_success(client_type)

        return report

    def remove_from_clients(
        self,
        config: ServerConfig,
        target_clients: Iterable[ClientType | str] | None = None,
    ) -> ConfigureReport:
        """Remove a server entry from each target client.

        ABOUTME: Same target resolution as configure_clients()
        ABOUTME: A client that didn't hold the server still counts as a success
        """
        report = ConfigureReport()
        targets = self._resolve_targets(target_clients, report)

        for client_type in targets:
            adapter = self._adapters[client_type]
            try:
                changed = adapter.remove_config(config)
            except Exception as e:
                logger.warning(f"Failed to update {adapter.name}: {e}")
                report.add_failure(client_type.value, str(e))
                continue

            if not changed:
                logger.debug(f"{config.name} was not configured in {adapter.name}")
            report.add_success(client_type)

        return report

    # ─── Package flows ──────────────────────────────────────────

    def install_package(
        self,
        package: Package,
        env: dict[str, str] | None = None,
        target_clients: Iterable[ClientType | str] | None = None,
        transport: str | None = None,
    ) -> ConfigureReport:
        """Configure a package's server in the clients and record it.

        ABOUTME: The store is only updated if at least one client succeeded
        """
        config = build_server_config(package, env=env, transport=transport)
        report = self.configure_clients(config, target_clients)
        if report.succeeded:
            add_server_to_store(self.store_path, config)
        return report

    def uninstall_package(
        self,
        package_name: str,
        target_clients: Iterable[ClientType | str] | None = None,
    ) -> ConfigureReport:
        """Remove a package's server from the clients and from the store.

        ABOUTME: Falls back to a name-only config when the store has no entry,
        ABOUTME: which still removes it from clients keyed by name
        """
        config = get_stored_server(self.store_path, package_name)
        if config is None:
            config = ServerConfig(name=sanitize_server_name(package_name), command="")

        report = self.remove_from_clients(config, target_clients)
        if not report.failed:
            remove_server_from_store(self.store_path, package_name)
        return report

    # ─── Store ──────────────────────────────────────────────────

    def read_config(self) -> dict[str, Any]:
        """Return the installed-server store ({"mcpServers": {...}})."""
        return load_store(self.store_path)

    def is_package_installed(self, package_name: str) -> bool:
        """Whether mcp-get has installed this package, independent of client files."""
        return is_package_installed(self.store_path, package_name)
