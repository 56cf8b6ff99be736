# Client adapter registry
from mcpget.clients.claude import ClaudeAdapter
from mcpget.clients.continue_dev import ContinueAdapter
from mcpget.clients.firebase import FirebaseAdapter
from mcpget.clients.zed import ZedAdapter
from mcpget.models import ClientAdapter, ClientConfig, ClientType

# Registry of all supported client adapters, in detection/report order
CLIENT_ADAPTERS: dict[ClientType, type[ClientAdapter]] = {
    ClientType.CLAUDE: ClaudeAdapter,
    ClientType.ZED: ZedAdapter,
    ClientType.CONTINUE: ContinueAdapter,
    ClientType.FIREBASE: FirebaseAdapter,
}

__all__ = [
    "ClientAdapter",
    "ClaudeAdapter",
    "ZedAdapter",
    "ContinueAdapter",
    "FirebaseAdapter",
    "CLIENT_ADAPTERS",
    "create_adapter",
    "get_all_clients",
]


def create_adapter(config: ClientConfig) -> ClientAdapter:
    """Instantiate the adapter registered for config.type.

    ABOUTME: Raises UnsupportedClientError for unknown client identifiers
    """
    client_type = ClientType.parse(config.type)
    return CLIENT_ADAPTERS[client_type](config)


def get_all_clients() -> dict[ClientType, ClientAdapter]:
    """Instantiate and return all client adapters.

    ABOUTME: Creates one instance per registered client
    ABOUTME: Returns dict keyed by ClientType, in registry order
    """
    return {
        client_type: adapter_cls(ClientConfig(type=client_type))
        for client_type, adapter_cls in CLIENT_ADAPTERS.items()
    }
