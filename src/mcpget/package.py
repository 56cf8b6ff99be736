# Package descriptors handed over by the package resolver
from dataclasses import dataclass, field
from typing import Any

from mcpget.errors import PackageError
from mcpget.models import ServerConfig
from mcpget.paths import sanitize_server_name


@dataclass(frozen=True)
class Package:
    """Package descriptor as supplied by the resolver.

    ABOUTME: Only name, runtime and the optional command/args feed the ServerConfig
    ABOUTME: Remaining fields are carried for display
    """
    name: str
    runtime: str
    description: str = ""
    vendor: str = ""
    source_url: str = ""
    homepage: str = ""
    license: str = ""
    command: str | None = None
    args: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Package":
        """Build a Package from the resolver's JSON (camelCase keys accepted)."""
        if not data.get("name"):
            raise PackageError("Package descriptor missing required 'name' field")

        return cls(
            name=data["name"],
            runtime=data.get("runtime") or "node",
            description=data.get("description", ""),
            vendor=data.get("vendor", ""),
            source_url=data.get("sourceUrl", data.get("source_url", "")),
            homepage=data.get("homepage", ""),
            license=data.get("license", ""),
            command=data.get("command"),
            args=list(data.get("args") or []),
        )


def build_server_config(
    package: Package,
    env: dict[str, str] | None = None,
    transport: str | None = None,
) -> ServerConfig:
    """Turn a package descriptor into the ServerConfig sent to clients.

    ABOUTME: An explicit command (and args) on the package always wins
    ABOUTME: node -> npx -y <name>, python -> uvx <name>
    ABOUTME: Server name is the package name with slashes replaced by dashes

    Args:
        package: Descriptor from the resolver
        env: Environment variables to pass to the server
        transport: Optional transport override

    Returns:
        ServerConfig ready for ConfigManager.configure_clients()

    Raises:
        PackageError: If no command can be derived

    Examples:
        >>> build_server_config(Package(name="@scope/srv", runtime="node")).args
        ['-y', '@scope/srv']
    """
    if package.command:
        command = package.command
        args = list(package.args)
    elif package.runtime == "node":
        command = "npx"
        args = ["-y", package.name]
    elif package.runtime == "python":
        command = "uvx"
        args = [package.name]
    else:
        raise PackageError(
            f"Package '{package.name}' has runtime '{package.runtime}' and no command. "
            "Supported runtimes: node, python."
        )

    runtime = package.runtime if package.runtime in ("node", "python") else None

    return ServerConfig(
        name=sanitize_server_name(package.name),
        command=command,
        runtime=runtime,
        args=args,
        env=dict(env or {}),
        transport=transport,
    )
