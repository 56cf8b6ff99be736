# Platform-specific path resolution for client config files
# ABOUTME: Pure functions of (platform, home, environ), no process state read here
# ABOUTME: Adapters call these with sys.platform, Path.home() and os.environ
from collections.abc import Mapping
from pathlib import Path

from mcpget.models import ClientType


def app_config_dir(platform: str, home: Path, environ: Mapping[str, str]) -> Path:
    """Return the per-user application config directory for a platform.

    ABOUTME: Windows -> %APPDATA% (roaming), macOS -> ~/Library/Application Support
    ABOUTME: Everything else -> $XDG_CONFIG_HOME or ~/.config

    Args:
        platform: sys.platform style identifier ("win32", "darwin", "linux")
        home: User home directory
        environ: Environment variables to consult

    Returns:
        Base directory that client config folders live under
    """
    if platform == "win32":
        appdata = environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    if platform == "darwin":
        return home / "Library" / "Application Support"
    xdg = environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else home / ".config"


def local_programs_dir(home: Path, environ: Mapping[str, str]) -> Path:
    """Windows per-user installer location (%LOCALAPPDATA%/Programs)."""
    local = environ.get("LOCALAPPDATA")
    base = Path(local) if local else home / "AppData" / "Local"
    return base / "Programs"


def resolve_config_path(
    client_type: ClientType,
    platform: str,
    home: Path,
    environ: Mapping[str, str],
) -> Path:
    """Compute the default config file path for a client.

    ABOUTME: Deterministic for a given platform + home + environment
    ABOUTME: Zed keeps a capitalised folder on Windows/macOS and lowercase on Linux

    Examples:
        >>> resolve_config_path(ClientType.CONTINUE, "linux", Path("/home/u"), {})
        PosixPath('/home/u/.continue/config.json')
    """
    client_type = ClientType.parse(client_type)
    base = app_config_dir(platform, home, environ)

    if client_type is ClientType.CLAUDE:
        return base / "Claude" / "claude_desktop_config.json"
    if client_type is ClientType.ZED:
        folder = "Zed" if platform in ("win32", "darwin") else "zed"
        return base / folder / "settings.json"
    if client_type is ClientType.CONTINUE:
        return home / ".continue" / "config.json"
    return home / ".firebase" / "mcp-config.json"


def zed_extension_path(settings_path: Path) -> Path:
    """Return the MCP extension manifest that sits next to Zed's settings."""
    return settings_path.parent / "extensions" / "mcp" / "extension.toml"


def executable_paths(
    client_type: ClientType,
    platform: str,
    home: Path,
    environ: Mapping[str, str],
) -> list[Path]:
    """Conventional install locations of a client's application binary.

    ABOUTME: Secondary detection signal; empty for clients without a desktop binary
    """
    client_type = ClientType.parse(client_type)

    if client_type is ClientType.CLAUDE:
        if platform == "win32":
            return [local_programs_dir(home, environ) / "claude-desktop" / "Claude.exe"]
        if platform == "darwin":
            return [Path("/Applications/Claude.app"), home / "Applications" / "Claude.app"]
        return [home / ".local" / "share" / "claude-desktop" / "Claude"]

    if client_type is ClientType.ZED:
        if platform == "win32":
            return [local_programs_dir(home, environ) / "Zed" / "Zed.exe"]
        if platform == "darwin":
            return [Path("/Applications/Zed.app"), home / "Applications" / "Zed.app"]
        return [home / ".local" / "share" / "zed" / "Zed", home / ".local" / "bin" / "zed"]

    return []


def extension_globs(
    client_type: ClientType,
    platform: str,
    home: Path,
    environ: Mapping[str, str],
) -> list[str]:
    """Glob patterns matching editor extension or plugin directories.

    ABOUTME: Used for Continue, which ships as a VS Code extension or JetBrains plugin
    """
    client_type = ClientType.parse(client_type)
    if client_type is not ClientType.CONTINUE:
        return []

    patterns = [str(home / ".vscode" / "extensions" / "continue.continue-*")]
    if platform == "win32":
        jetbrains = app_config_dir(platform, home, environ) / "JetBrains"
        patterns.append(str(jetbrains / "*" / "plugins" / "continue"))
    elif platform == "darwin":
        jetbrains = home / "Library" / "Application Support" / "JetBrains"
        patterns.append(str(jetbrains / "*" / "plugins" / "continue"))
    else:
        patterns.append(str(home / ".local" / "share" / "JetBrains" / "*" / "continue"))
    return patterns


def sanitize_server_name(name: str) -> str:
    """Make a package name safe for use as a server key (slashes -> dashes).

    Examples:
        >>> sanitize_server_name("@modelcontextprotocol/server-github")
        '@modelcontextprotocol-server-github'
    """
    return name.replace("/", "-")
