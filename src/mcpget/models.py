# Core data models for mcp-get
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

from mcpget.errors import UnsupportedClientError

Runtime = Literal["node", "python"]
Transport = Literal["stdio", "sse", "websocket"]

RUNTIMES: tuple[str, ...] = ("node", "python")
TRANSPORTS: tuple[str, ...] = ("stdio", "sse", "websocket")

# ABOUTME: Transport assumed when a server config doesn't name one
DEFAULT_TRANSPORT = "stdio"


class ClientType(str, Enum):
    """Supported MCP client applications.

    ABOUTME: Closed set; adding a client means adding an adapter and a registry entry
    """

    CLAUDE = "claude"
    ZED = "zed"
    CONTINUE = "continue"
    FIREBASE = "firebase"

    @classmethod
    def parse(cls, value: "ClientType | str") -> "ClientType":
        """Turn a user-supplied identifier into a ClientType."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(c.value for c in cls)
            raise UnsupportedClientError(
                f"Unsupported client type: {value!r}. Supported clients: {supported}"
            ) from None


@dataclass(frozen=True)
class ServerConfig:
    """Immutable launch configuration for one MCP server.

    ABOUTME: Unit of configuration distributed to every targeted client
    ABOUTME: Adapters copy args/env into their own documents, never mutate these
    ABOUTME: runtime is optional here so validation can reject configs lacking it
    """
    name: str
    command: str
    runtime: Runtime | None = None
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    transport: Transport | None = None

    @property
    def effective_transport(self) -> str:
        """Transport the client will use, stdio when unset."""
        return self.transport or DEFAULT_TRANSPORT


@dataclass(frozen=True)
class ClientConfig:
    """Adapter construction parameters.

    ABOUTME: config_path overrides the computed platform default when set
    """
    type: ClientType
    name: str | None = None
    config_path: Path | None = None


@runtime_checkable
class ClientAdapter(Protocol):
    """Protocol for client-specific config adapters.

    ABOUTME: Defines interface all client adapters must implement
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    client_type: ClientType
    supported_transports: tuple[str, ...]

    @property
    def name(self) -> str:
        """Human-readable client name."""
        ...

    def get_config_path(self) -> Path:
        """Absolute path of the client's config file (pure computation)."""
        ...

    def is_installed(self) -> bool:
        """Whether the client is detectable on this machine. Never raises."""
        ...

    def read_config(self) -> dict[str, Any] | None:
        """Parsed existing document, or None if missing or unparsable."""
        ...

    def validation_errors(self, config: ServerConfig) -> list[str]:
        """Reasons this client can't accept the config (empty when valid)."""
        ...

    def validate_config(self, config: ServerConfig) -> bool:
        """Whether this client can accept the config. No I/O."""
        ...

    def write_config(self, config: ServerConfig) -> None:
        """Merge the server entry into the client's config and write it."""
        ...

    def remove_config(self, config: ServerConfig) -> bool:
        """Remove the server entry. Returns True if the file changed."""
        ...
