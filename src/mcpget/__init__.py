# mcp-get - Install MCP servers into every MCP client on this machine
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models and errors
from mcpget.errors import (
    ConfigValidationError,
    ConfigWriteError,
    McpGetError,
    NoClientsFoundError,
    NoValidClientsError,
    PackageError,
    UnsupportedClientError,
)
from mcpget.models import ClientAdapter, ClientConfig, ClientType, ServerConfig

# ABOUTME: Export orchestration entry points
from mcpget.manager import ConfigManager, ConfigureReport
from mcpget.package import Package, build_server_config
from mcpget.preferences import Preferences

__all__ = [
    "__version__",
    "ClientAdapter",
    "ClientConfig",
    "ClientType",
    "ServerConfig",
    "ConfigManager",
    "ConfigureReport",
    "Package",
    "build_server_config",
    "Preferences",
    "McpGetError",
    "UnsupportedClientError",
    "NoClientsFoundError",
    "NoValidClientsError",
    "ConfigValidationError",
    "ConfigWriteError",
    "PackageError",
]
