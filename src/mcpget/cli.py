# CLI interface for mcp-get
import argparse
import logging
import sys

from mcpget import __version__
from mcpget.errors import (
    McpGetError,
    NoClientsFoundError,
    NoValidClientsError,
    PackageError,
    UnsupportedClientError,
)
from mcpget.manager import ConfigManager, ConfigureReport
from mcpget.models import RUNTIMES, TRANSPORTS, ClientType
from mcpget.package import Package
from mcpget.prompt import select_from_list

# ABOUTME: Exit codes
# 0 = success, 1 = partial success, 2 = config/selection error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class SelectionError(McpGetError):
    """Client selection needs user input that can't be given."""


def parse_env_pairs(value: str | None) -> dict[str, str]:
    """Parse comma-separated KEY=VALUE pairs; entries without '=' are ignored."""
    env_vars: dict[str, str] = {}
    if not value:
        return env_vars
    for env_pair in value.split(","):
        if "=" in env_pair:
            key, val = env_pair.split("=", 1)
            env_vars[key.strip()] = val.strip()
    return env_vars


def parse_arg_list(value: str | None) -> list[str]:
    """Parse comma-separated command arguments."""
    if not value:
        return []
    return [arg.strip() for arg in value.split(",") if arg.strip()]


def resolve_target_clients(
    manager: ConfigManager,
    requested: list[str] | None,
    non_interactive: bool,
) -> list[ClientType | str]:
    """Decide which clients a command targets.

    ABOUTME: --client wins; otherwise the manager's selection
    ABOUTME: Several installed clients and no installed stored default -> numbered prompt
    ABOUTME: The prompt's answer is saved as the new default set

    Raises:
        NoClientsFoundError: If nothing is installed
        SelectionError: If a prompt is needed in non-interactive mode or nothing was picked
    """
    if requested:
        return list(requested)

    candidates = manager.select_clients()
    # Saved defaults count only while one of them is still installed
    defaults = [client for client in manager.preferences.get_default_clients() if client in candidates]
    if len(candidates) <= 1 or defaults:
        return list(candidates)

    if non_interactive:
        names = ", ".join(client.value for client in candidates)
        raise SelectionError(
            f"Multiple MCP clients found ({names}). Use --client to choose."
        )

    labels = {client: manager.get_client_adapter(client).name for client in candidates}
    chosen = select_from_list(candidates, candidates, labels)
    if not chosen:
        raise SelectionError("No clients selected.")

    try:
        manager.preferences.set_default_clients(chosen)
    except McpGetError as e:
        print(f"  Warning: could not save default clients: {e}")
    return list(chosen)


def print_report(manager: ConfigManager, report: ConfigureReport) -> None:
    """Print one line per client from a ConfigureReport."""
    for client in report.succeeded:
        adapter = manager.get_client_adapter(client)
        print(f"  ✓ {adapter.name} ({adapter.get_config_path()})")
    for client, reason in report.skipped.items():
        print(f"  ⊘ {client} - skipped: {reason}")
    for client, reason in report.failed.items():
        print(f"  ✗ {client} - {reason}")


def report_exit_code(report: ConfigureReport) -> int:
    if report.ok and not report.skipped:
        return EXIT_SUCCESS
    if report.succeeded:
        return EXIT_PARTIAL
    return EXIT_CONFIG_ERROR


def cmd_install(args: argparse.Namespace, manager: ConfigManager | None = None) -> int:
    """Execute install command.

    ABOUTME: Builds the server config from the package and CLI flags
    ABOUTME: Configures every selected client, then records the server
    """
    print(f"mcp-get install v{__version__}")
    print()

    try:
        manager = manager or ConfigManager()
        package = Package(
            name=args.name,
            runtime=args.runtime,
            command=args.command,
            args=parse_arg_list(args.args),
        )

        if manager.is_package_installed(package.name):
            print(f"Warning: '{package.name}' is already installed. It will be reconfigured.")
            print()

        targets = resolve_target_clients(manager, args.client, args.non_interactive)

        print(f"Installing '{package.name}'...")
        report = manager.install_package(
            package,
            env=parse_env_pairs(args.env),
            target_clients=targets,
            transport=args.transport,
        )
        print_report(manager, report)
        print()

        code = report_exit_code(report)
        if code == EXIT_SUCCESS:
            print(f"Installed '{package.name}' in {len(report.succeeded)} client(s).")
        elif code == EXIT_PARTIAL:
            print(
                f"Installed '{package.name}' in {len(report.succeeded)} client(s), "
                f"{len(report.failed) + len(report.skipped)} not configured."
            )
        else:
            print(f"'{package.name}' was not installed in any client.")
        return code

    except (NoClientsFoundError, NoValidClientsError, UnsupportedClientError, SelectionError, PackageError) as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_uninstall(args: argparse.Namespace, manager: ConfigManager | None = None) -> int:
    """Execute uninstall command.

    ABOUTME: Removes the server from the selected clients and the store
    """
    print(f"mcp-get uninstall v{__version__}")
    print()

    try:
        manager = manager or ConfigManager()

        if not manager.is_package_installed(args.name):
            print(f"Note: '{args.name}' is not recorded as installed; cleaning up clients anyway.")
            print()

        targets = resolve_target_clients(manager, args.client, args.non_interactive)

        print(f"Uninstalling '{args.name}'...")
        report = manager.uninstall_package(args.name, target_clients=targets)
        print_report(manager, report)
        print()

        code = report_exit_code(report)
        if code == EXIT_SUCCESS:
            print(f"Uninstalled '{args.name}'.")
        else:
            print(f"'{args.name}' was only partly removed.")
        return code

    except (NoClientsFoundError, NoValidClientsError, UnsupportedClientError, SelectionError) as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_installed(args: argparse.Namespace, manager: ConfigManager | None = None) -> int:
    """Execute installed command.

    ABOUTME: Lists servers recorded in the mcp-get store
    """
    print(f"mcp-get installed v{__version__}")
    print()

    try:
        manager = manager or ConfigManager()
        servers = manager.read_config()["mcpServers"]

        if not servers:
            print("No MCP servers installed.")
            return EXIT_SUCCESS

        print(f"Installed MCP servers ({manager.store_path}):")
        print()
        for server_name, entry in servers.items():
            print(f"  {server_name}")
            if not isinstance(entry, dict):
                continue
            if entry.get("runtime"):
                print(f"    runtime: {entry['runtime']}")
            if entry.get("command"):
                command_line = " ".join([entry["command"], *entry.get("args", [])])
                print(f"    command: {command_line}")
            if entry.get("env"):
                print(f"    env: {', '.join(entry['env'])}")
            if entry.get("transport"):
                print(f"    transport: {entry['transport']}")

        print()
        print(f"Total: {len(servers)} server(s)")
        return EXIT_SUCCESS

    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_clients(args: argparse.Namespace, manager: ConfigManager | None = None) -> int:
    """Execute clients command.

    ABOUTME: Shows detection status and config path for every supported client
    """
    print(f"mcp-get clients v{__version__}")
    print()

    try:
        manager = manager or ConfigManager()
        installed = manager.get_installed_clients()
        defaults = manager.preferences.get_default_clients()

        for client in manager.clients:
            adapter = manager.get_client_adapter(client)
            mark = "✓" if client in installed else "✗"
            default = " [default]" if client in defaults else ""
            print(f"  {mark} {adapter.name} ({client.value}){default}")
            print(f"    config: {adapter.get_config_path()}")

        print()
        if not installed:
            print("No MCP clients detected.")
        else:
            print(f"{len(installed)} of {len(manager.clients)} client(s) detected.")
        return EXIT_SUCCESS

    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-get",
        description="Install MCP servers into Claude Desktop, Zed, Continue and Firebase Genkit"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcp-get v{__version__}"
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; fail instead when a choice is needed"
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", help="Available commands")

    # install command
    install_parser = subparsers.add_parser(
        "install",
        parents=[common],
        help="Install an MCP server into MCP clients"
    )
    install_parser.add_argument(
        "name",
        help="Package name (e.g., @modelcontextprotocol/server-github)"
    )
    install_parser.add_argument(
        "--runtime",
        choices=list(RUNTIMES),
        default="node",
        help="Package runtime (default: node)"
    )
    install_parser.add_argument(
        "--command",
        help="Command to run instead of npx/uvx"
    )
    install_parser.add_argument(
        "--args",
        help="Comma-separated arguments (used with --command)"
    )
    install_parser.add_argument(
        "--env",
        help="Comma-separated KEY=VALUE environment variables"
    )
    install_parser.add_argument(
        "--transport",
        choices=list(TRANSPORTS),
        help="Transport method (default: stdio)"
    )
    install_parser.add_argument(
        "--client",
        action="append",
        help="Client to configure (repeatable; default: detected clients)"
    )

    # uninstall command
    uninstall_parser = subparsers.add_parser(
        "uninstall",
        parents=[common],
        help="Remove an MCP server from MCP clients"
    )
    uninstall_parser.add_argument(
        "name",
        help="Package name to remove"
    )
    uninstall_parser.add_argument(
        "--client",
        action="append",
        help="Client to update (repeatable; default: detected clients)"
    )

    # installed command
    subparsers.add_parser(
        "installed",
        parents=[common],
        help="List MCP servers installed by mcp-get"
    )

    # clients command
    subparsers.add_parser(
        "clients",
        parents=[common],
        help="Show supported MCP clients and whether they are installed"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format=LOG_FORMAT,
    )

    if args.cmd == "install":
        return cmd_install(args)
    elif args.cmd == "uninstall":
        return cmd_uninstall(args)
    elif args.cmd == "installed":
        return cmd_installed(args)
    elif args.cmd == "clients":
        return cmd_clients(args)
    else:
        # No command specified, show help
        parser.print_help()
        return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
