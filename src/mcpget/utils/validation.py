# ABOUTME: Validation utilities for MCP server configurations
# ABOUTME: Pure checks, no filesystem or subprocess access
from dataclasses import dataclass

from mcpget.models import RUNTIMES, ServerConfig


@dataclass(frozen=True)
class ValidationError:
    """Represents one validation problem.

    ABOUTME: Uses frozen dataclass for immutability
    ABOUTME: field names the offending ServerConfig attribute
    """
    field: str
    message: str


def check_transport(
    config: ServerConfig, supported_transports: tuple[str, ...]
) -> ValidationError | None:
    """Check the effective transport against a client's supported set.

    ABOUTME: Missing transport counts as stdio

    Examples:
        >>> check_transport(ServerConfig(name="a", command="node"), ("stdio",)) is None
        True
    """
    transport = config.effective_transport
    if transport in supported_transports:
        return None
    return ValidationError(
        field="transport",
        message=(
            f"Transport method '{transport}' is not supported. "
            f"Supported methods: {', '.join(supported_transports)}"
        ),
    )


def check_server_config(
    config: ServerConfig, supported_transports: tuple[str, ...]
) -> list[ValidationError]:
    """Validate a server configuration against one client's constraints.

    ABOUTME: Checks required fields (name, command, runtime) and transport support
    ABOUTME: Idempotent and side-effect free, safe to call before any write

    Args:
        config: Candidate server configuration
        supported_transports: Transports the target client accepts

    Returns:
        List of ValidationError instances (empty if valid)
    """
    errors: list[ValidationError] = []

    if not config.name or not config.name.strip():
        errors.append(ValidationError(field="name", message="Server name is required"))

    if not config.command:
        errors.append(ValidationError(field="command", message="Server command is required"))

    if not config.runtime:
        errors.append(
            ValidationError(field="runtime", message="Runtime must be specified (node or python)")
        )
    elif config.runtime not in RUNTIMES:
        errors.append(
            ValidationError(
                field="runtime",
                message=f"Unsupported runtime '{config.runtime}'. Must be 'node' or 'python'.",
            )
        )

    transport_error = check_transport(config, supported_transports)
    if transport_error:
        errors.append(transport_error)

    return errors
