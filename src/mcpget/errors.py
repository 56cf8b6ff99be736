# Exception hierarchy for mcp-get
# ABOUTME: All exceptions inherit from McpGetError (single catch point)
# ABOUTME: Messages are written for the end user, no stack traces needed


class McpGetError(Exception):
    """Base exception for all mcp-get errors."""


class UnsupportedClientError(McpGetError):
    """Client identifier is not one of the supported clients."""


class NoClientsFoundError(McpGetError):
    """No supported MCP client is installed on this machine."""


class NoValidClientsError(McpGetError):
    """Every requested client was unknown or not installed."""


class ConfigValidationError(McpGetError):
    """Server configuration violates a client's constraints."""

    def __init__(self, client: str, errors: list[str]) -> None:
        self.client = client
        self.errors = list(errors)
        super().__init__(f"Invalid configuration for {client}: {'; '.join(self.errors)}")


class ConfigWriteError(McpGetError):
    """Error writing to a client or store config file."""


class PackageError(McpGetError):
    """Package descriptor cannot be turned into a server configuration."""
