# ABOUTME: Shared fixtures for mcp-get tests
# ABOUTME: Every test runs with a throwaway HOME, config dirs and working directory
from pathlib import Path

import pytest

from mcpget.clients import CLIENT_ADAPTERS
from mcpget.models import ClientAdapter, ClientConfig, ClientType


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the home directory and every config location into tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData" / "Roaming"))
    monkeypatch.setenv("LOCALAPPDATA", str(home / "AppData" / "Local"))
    monkeypatch.setenv("MCP_GET_CONFIG_DIR", str(tmp_path / "mcp-get"))
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture
def client_paths(tmp_path: Path) -> dict[ClientType, Path]:
    """Per-client config file locations inside tmp_path."""
    return {
        ClientType.CLAUDE: tmp_path / "claude" / "claude_desktop_config.json",
        ClientType.ZED: tmp_path / "zed" / "settings.json",
        ClientType.CONTINUE: tmp_path / "continue" / "config.json",
        ClientType.FIREBASE: tmp_path / "firebase" / "mcp-config.json",
    }


@pytest.fixture
def adapters(client_paths: dict[ClientType, Path]) -> dict[ClientType, ClientAdapter]:
    """One adapter per client, each pointed at its tmp_path config file."""
    return {
        client_type: adapter_cls(ClientConfig(type=client_type, config_path=client_paths[client_type]))
        for client_type, adapter_cls in CLIENT_ADAPTERS.items()
    }


@pytest.fixture
def install_client(client_paths: dict[ClientType, Path]):
    """Create a client's config file so the client is detected as installed."""

    def _install(client_type: ClientType, content: str = "{}") -> Path:
        path = client_paths[client_type]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _install
