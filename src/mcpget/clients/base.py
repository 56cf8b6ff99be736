# Client adapter base utilities
import contextlib
import copy
import glob
import json
import logging
import os
import shutil
import subprocess
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from mcpget.errors import ConfigWriteError
from mcpget.utils.jsonc import strip_jsonc

logger = logging.getLogger(__name__)

# ABOUTME: Upper bound for version-check style detection probes
PROBE_TIMEOUT_SECONDS = 5.0

Document = dict[str, Any]


# ─── Parsing ────────────────────────────────────────────────────


def parse_json(text: str) -> Any:
    return json.loads(text)


def parse_jsonc(text: str) -> Any:
    """Parse JSON that may carry // or /* */ comments and trailing commas."""
    return json.loads(strip_jsonc(text))


def parse_toml(text: str) -> Any:
    return tomli.loads(text)


def read_document(path: Path, parser: Callable[[str], Any] = parse_json) -> Document | None:
    """Read and parse a config document.

    ABOUTME: Returns None when the file is missing, unreadable, empty,
    ABOUTME: unparsable or not an object; failures are logged, never raised
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None

    if not text.strip():
        return None

    try:
        data = parser(text)
    except (ValueError, tomli.TOMLDecodeError) as e:
        logger.warning(f"Could not parse {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Expected an object at the top of {path}")
        return None

    return data


def load_or_default(
    path: Path,
    default: Document,
    parser: Callable[[str], Any] = parse_json,
) -> Document:
    """Read a config document, substituting a default when it can't be used.

    ABOUTME: Shared by every adapter's write path so a corrupt file never aborts a write

    Args:
        path: File to read
        default: Document to use when the file can't be used (deep-copied)
        parser: Text -> object parser (parse_json, parse_jsonc, parse_toml)

    Returns:
        Parsed document (always a dict)
    """
    data = read_document(path, parser)
    if data is None:
        return copy.deepcopy(default)
    return data


# ─── Writing ────────────────────────────────────────────────────


def write_json_file(path: Path, data: Document) -> None:
    """Write JSON file atomically.

    ABOUTME: Creates parent directories if needed
    ABOUTME: 2-space indentation, key order preserved, trailing newline
    """
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    _atomic_write(path, content)


def write_toml_file(path: Path, data: Document) -> None:
    """Write TOML file atomically using tomli_w."""
    _atomic_write(path, tomli_w.dumps(data))


def _atomic_write(path: Path, content: str) -> None:
    """Write to a unique temp file in the target directory, then rename over the target.

    ABOUTME: A symlinked target is written through to the file it points at
    ABOUTME: An existing file keeps its permission bits
    """
    fd = None
    tmp_path: str | None = None
    try:
        if path.is_symlink():
            path = Path(os.path.realpath(path))
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            suffix=".tmp",
            prefix=f".{path.stem}_",
        )
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = None
        if path.exists():
            shutil.copymode(str(path), tmp_path)
        os.replace(tmp_path, str(path))
        tmp_path = None
    except PermissionError as e:
        raise ConfigWriteError(f"Permission denied writing to {path}: {e}") from e
    except OSError as e:
        raise ConfigWriteError(f"Failed to write {path}: {e}") from e
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)


# ─── Merging ────────────────────────────────────────────────────


def merge_server_entry(
    document: Document,
    keys: Sequence[str],
    name: str,
    entry: Document,
) -> Document:
    """Place entry at document[keys...][name] without touching anything else.

    ABOUTME: Copies each dict on the path so the input document is not mutated
    ABOUTME: Non-dict values found on the path are replaced by fresh dicts

    Examples:
        >>> merge_server_entry({"theme": "dark"}, ["mcpServers"], "a", {"command": "x"})
        {'theme': 'dark', 'mcpServers': {'a': {'command': 'x'}}}
    """
    result = dict(document)
    node = result
    for key in keys:
        child = node.get(key)
        child = dict(child) if isinstance(child, dict) else {}
        node[key] = child
        node = child
    node[name] = entry
    return result


def remove_server_entry(
    document: Document,
    keys: Sequence[str],
    name: str,
) -> Document | None:
    """Return a copy of document without document[keys...][name].

    ABOUTME: Returns None when there is no such entry (nothing to write)
    """
    node: Any = document
    for key in keys:
        node = node.get(key) if isinstance(node, dict) else None
    if not isinstance(node, dict) or name not in node:
        return None

    result = dict(document)
    parent = result
    for key in keys:
        parent[key] = dict(parent[key])
        parent = parent[key]
    del parent[name]
    return result


# ─── Detection probes ───────────────────────────────────────────


def path_exists(path: Path) -> bool:
    """Existence check that treats any error (e.g. permission denied) as absent."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug(f"Could not probe {path}: {e}")
        return False


def glob_exists(pattern: str) -> bool:
    """Whether any filesystem entry matches a glob pattern."""
    try:
        return any(True for _ in glob.iglob(pattern))
    except OSError as e:
        logger.debug(f"Could not probe {pattern}: {e}")
        return False


def probe_command(argv: Sequence[str], timeout: float = PROBE_TIMEOUT_SECONDS) -> bool:
    """Run a version-check style command and report whether it succeeded.

    ABOUTME: Non-interactive: stdin is closed, output discarded
    ABOUTME: Missing binaries, non-zero exit and timeouts all count as failure
    """
    try:
        result = subprocess.run(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"Probe timed out after {timeout}s: {' '.join(argv)}")
        return False
    except OSError as e:
        logger.debug(f"Probe failed: {' '.join(argv)}: {e}")
        return False
    return result.returncode == 0
