# ABOUTME: Tests for ConfigManager orchestration
# ABOUTME: Real adapters pointed at tmp_path files; a few fakes inject failures
import json
from pathlib import Path

import pytest
import tomli

from mcpget.errors import ConfigWriteError, NoClientsFoundError, NoValidClientsError, UnsupportedClientError
from mcpget.manager import ConfigManager, ConfigureReport
from mcpget.models import ClientType, ServerConfig
from mcpget.package import Package
from mcpget.preferences import Preferences

TEST_SERVER = ServerConfig(
    name="test-server",
    runtime="node",
    command="node",
    args=["server.js"],
    env={},
    transport="stdio",
)


class BrokenAdapter:
    """Adapter whose probe or write raises."""

    client_type = ClientType.CLAUDE
    supported_transports = ("stdio",)
    name = "Broken"

    def __init__(self, fail_probe: bool = False) -> None:
        self.fail_probe = fail_probe
        self.writes = 0

    def is_installed(self) -> bool:
        if self.fail_probe:
            raise RuntimeError("probe exploded")
        return True

    def validation_errors(self, config: ServerConfig) -> list[str]:
        return []

    def write_config(self, config: ServerConfig) -> None:
        self.writes += 1
        raise ConfigWriteError("disk full")

    def remove_config(self, config: ServerConfig) -> bool:
        raise ConfigWriteError("disk full")


@pytest.fixture
def manager(tmp_path: Path, adapters) -> ConfigManager:
    prefs = Preferences(path=tmp_path / "prefs.json", adapters=adapters, store_path=tmp_path / "servers.json")
    return ConfigManager(adapters=adapters, preferences=prefs, store_path=tmp_path / "servers.json")


@pytest.fixture
def install_all(install_client):
    def _install_all() -> None:
        for client_type in ClientType:
            install_client(client_type)

    return _install_all


class TestConfigureReport:
    """Tests for ConfigureReport helpers."""

    def test_empty_report(self):
        report = ConfigureReport()
        assert report.ok is False
        assert report.partial is False

    def test_ok_and_partial(self):
        report = ConfigureReport()
        report.add_success(ClientType.CLAUDE)
        assert report.ok is True

        report.add_failure("zed", "bad transport")
        assert report.ok is False
        assert report.partial is True


class TestDetection:
    """Tests for adapter lookup, installed detection and selection."""

    def test_get_client_adapter(self, manager: ConfigManager):
        assert manager.get_client_adapter("zed").client_type is ClientType.ZED
        with pytest.raises(UnsupportedClientError):
            manager.get_client_adapter("cursor")

    def test_installed_in_registry_order(self, manager: ConfigManager, install_client):
        install_client(ClientType.FIREBASE)
        install_client(ClientType.CLAUDE)

        assert manager.get_installed_clients() == [ClientType.CLAUDE, ClientType.FIREBASE]

    def test_probe_failure_counts_as_not_installed(self, tmp_path: Path, adapters, install_client):
        install_client(ClientType.ZED)
        adapters[ClientType.CLAUDE] = BrokenAdapter(fail_probe=True)
        manager = ConfigManager(adapters=adapters, store_path=tmp_path / "servers.json")

        assert manager.get_installed_clients() == [ClientType.ZED]

    def test_select_none_installed(self, manager: ConfigManager):
        with pytest.raises(NoClientsFoundError, match="No supported MCP clients found"):
            manager.select_clients()

    def test_select_single_client_becomes_default(self, manager: ConfigManager, install_client):
        install_client(ClientType.CONTINUE)

        assert manager.select_clients() == [ClientType.CONTINUE]
        assert manager.preferences.get_default_clients() == [ClientType.CONTINUE]

    def test_select_multiple_not_persisted(self, manager: ConfigManager, install_client):
        install_client(ClientType.CLAUDE)
        install_client(ClientType.ZED)

        assert manager.select_clients() == [ClientType.CLAUDE, ClientType.ZED]
        assert manager.preferences.get_default_clients() == []

    def test_select_uses_installed_defaults(self, manager: ConfigManager, install_client):
        install_client(ClientType.CLAUDE)
        install_client(ClientType.ZED)
        manager.preferences.set_default_clients([ClientType.ZED, ClientType.FIREBASE])

        assert manager.select_clients() == [ClientType.ZED]


class TestConfigureClients:
    """Tests for configure_clients."""

    def test_four_clients_all_written(self, manager: ConfigManager, client_paths, install_all):
        install_all()

        report = manager.configure_clients(TEST_SERVER, list(ClientType))

        assert report.ok is True
        assert report.succeeded == list(ClientType)

        claude = json.loads(client_paths[ClientType.CLAUDE].read_text())
        assert claude["mcpServers"]["test-server"] == {
            "runtime": "node", "command": "node", "args": ["server.js"], "env": {}
        }

        zed_settings = json.loads(client_paths[ClientType.ZED].read_text())
        assert "test-server" in zed_settings["mcp"]["servers"]
        zed_adapter = manager.get_client_adapter(ClientType.ZED)
        zed_extension = tomli.loads(zed_adapter.get_extension_path().read_text())
        assert "test-server" in zed_extension["context-servers"]

        continue_doc = json.loads(client_paths[ClientType.CONTINUE].read_text())
        assert continue_doc["experimental"]["modelContextProtocolServer"]["command"] == "node"

        firebase = json.loads(client_paths[ClientType.FIREBASE].read_text())
        assert firebase["name"] == "test-server"

    def test_invalid_client_skipped_others_written(self, manager: ConfigManager, client_paths, install_all):
        """An sse server skips the stdio-only editor and still configures the rest."""
        install_all()
        zed_before = client_paths[ClientType.ZED].read_text()

        report = manager.configure_clients(
            ServerConfig(name="sse-server", runtime="node", command="node", transport="sse"),
            list(ClientType),
        )

        assert report.succeeded == [ClientType.CLAUDE, ClientType.CONTINUE, ClientType.FIREBASE]
        assert list(report.failed) == ["zed"]
        assert "Transport method 'sse' is not supported" in report.failed["zed"]
        assert report.partial is True
        assert client_paths[ClientType.ZED].read_text() == zed_before

    def test_write_failure_recorded(self, tmp_path: Path, adapters, install_client):
        install_client(ClientType.FIREBASE)
        broken = BrokenAdapter()
        adapters[ClientType.CLAUDE] = broken
        manager = ConfigManager(adapters=adapters, store_path=tmp_path / "servers.json")

        report = manager.configure_clients(TEST_SERVER, ["claude", "firebase"])

        assert broken.writes == 1
        assert report.failed == {"claude": "disk full"}
        assert report.succeeded == [ClientType.FIREBASE]

    def test_unknown_and_missing_clients_filtered(self, manager: ConfigManager, install_client):
        install_client(ClientType.CLAUDE)

        report = manager.configure_clients(TEST_SERVER, ["claude", "cursor", "zed"])

        assert report.succeeded == [ClientType.CLAUDE]
        assert "cursor" in report.failed
        assert report.skipped == {"zed": "not installed"}

    def test_no_valid_clients(self, manager: ConfigManager, client_paths):
        with pytest.raises(NoValidClientsError, match="No valid clients for configuration"):
            manager.configure_clients(TEST_SERVER, ["zed", "cursor"])

        assert not client_paths[ClientType.ZED].exists()

    def test_defaults_to_selected_clients(self, manager: ConfigManager, client_paths, install_client):
        install_client(ClientType.FIREBASE)

        report = manager.configure_clients(TEST_SERVER)

        assert report.succeeded == [ClientType.FIREBASE]
        assert json.loads(client_paths[ClientType.FIREBASE].read_text())["name"] == "test-server"

    def test_default_targets_detect_once(self, manager: ConfigManager, install_client, monkeypatch):
        install_client(ClientType.CLAUDE)
        detect = manager.get_installed_clients
        calls = []

        def counting_detect():
            calls.append(1)
            return detect()

        monkeypatch.setattr(manager, "get_installed_clients", counting_detect)

        report = manager.configure_clients(TEST_SERVER)

        assert report.succeeded == [ClientType.CLAUDE]
        assert len(calls) == 1

    def test_nothing_installed(self, manager: ConfigManager):
        with pytest.raises(NoClientsFoundError):
            manager.configure_clients(TEST_SERVER)

    def test_duplicate_targets_written_once(self, manager: ConfigManager, install_client):
        install_client(ClientType.CLAUDE)

        report = manager.configure_clients(TEST_SERVER, ["claude", ClientType.CLAUDE, "Claude"])

        assert report.succeeded == [ClientType.CLAUDE]


class TestPackageFlows:
    """Tests for install_package / uninstall_package and the store."""

    def test_install_records_store(self, manager: ConfigManager, client_paths, install_client):
        install_client(ClientType.CLAUDE)

        report = manager.install_package(
            Package(name="@modelcontextprotocol/server-github", runtime="node"),
            env={"GITHUB_TOKEN": "t"},
            target_clients=["claude"],
        )

        assert report.ok is True
        assert manager.is_package_installed("@modelcontextprotocol/server-github") is True
        store = manager.read_config()
        assert store["mcpServers"]["@modelcontextprotocol-server-github"]["args"] == [
            "-y", "@modelcontextprotocol/server-github"
        ]
        claude = json.loads(client_paths[ClientType.CLAUDE].read_text())
        assert claude["mcpServers"]["@modelcontextprotocol-server-github"]["env"] == {"GITHUB_TOKEN": "t"}

    def test_install_not_recorded_when_all_fail(self, manager: ConfigManager, install_client):
        install_client(ClientType.ZED)

        report = manager.install_package(
            Package(name="pkg", runtime="node"), target_clients=["zed"], transport="sse"
        )

        assert report.succeeded == []
        assert manager.is_package_installed("pkg") is False

    def test_uninstall(self, manager: ConfigManager, client_paths, install_client):
        install_client(ClientType.CLAUDE)
        install_client(ClientType.CONTINUE)
        package = Package(name="@scope/pkg", runtime="python")
        manager.install_package(package, target_clients=["claude", "continue"])

        report = manager.uninstall_package("@scope/pkg", target_clients=["claude", "continue"])

        assert report.ok is True
        assert manager.is_package_installed("@scope/pkg") is False
        claude = json.loads(client_paths[ClientType.CLAUDE].read_text())
        assert claude["mcpServers"] == {}
        continue_doc = json.loads(client_paths[ClientType.CONTINUE].read_text())
        assert continue_doc == {"experimental": {}}

    def test_uninstall_unknown_package(self, manager: ConfigManager, client_paths, install_client):
        install_client(ClientType.CLAUDE, json.dumps({"mcpServers": {"pkg": {"command": "npx"}}}))

        report = manager.uninstall_package("pkg", target_clients=["claude"])

        assert report.ok is True
        assert json.loads(client_paths[ClientType.CLAUDE].read_text()) == {"mcpServers": {}}

    def test_read_config_empty(self, manager: ConfigManager):
        assert manager.read_config() == {"mcpServers": {}}
