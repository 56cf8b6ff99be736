# ABOUTME: Tests for shared adapter helpers (read, atomic write, merge, probes)
# ABOUTME: Uses real files under tmp_path and real subprocesses for probes
import json
import sys
from pathlib import Path

import pytest

from mcpget.clients.base import (
    glob_exists,
    load_or_default,
    merge_server_entry,
    parse_jsonc,
    parse_toml,
    path_exists,
    probe_command,
    read_document,
    remove_server_entry,
    write_json_file,
    write_toml_file,
)
from mcpget.errors import ConfigWriteError


class TestReadDocument:
    """Tests for read_document and load_or_default."""

    def test_missing_file(self, tmp_path: Path):
        assert read_document(tmp_path / "missing.json") is None

    @pytest.mark.parametrize("content", ["", "   \n", "{broken", "[]", '"text"'])
    def test_unusable_content(self, tmp_path: Path, content: str):
        path = tmp_path / "config.json"
        path.write_text(content)
        assert read_document(path) is None

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_bytes(b"\xff\xfe{")
        assert read_document(path) is None

    def test_valid_document(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"a": 1}')
        assert read_document(path) == {"a": 1}

    def test_toml_parser(self, tmp_path: Path):
        path = tmp_path / "extension.toml"
        path.write_text('[context-servers.a]\ncommand = "node"\n')
        assert read_document(path, parse_toml) == {"context-servers": {"a": {"command": "node"}}}

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "extension.toml"
        path.write_text("[unclosed\n")
        assert read_document(path, parse_toml) is None

    def test_jsonc_parser(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text('{"a": 1, // trailing\n}')
        assert read_document(path, parse_jsonc) == {"a": 1}

    def test_default_is_copied(self, tmp_path: Path):
        default = {"mcpServers": {}}
        data = load_or_default(tmp_path / "missing.json", default)
        data["mcpServers"]["x"] = {}

        assert default == {"mcpServers": {}}

    def test_parse_failure_is_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "config.json"
        path.write_text("{broken")

        with caplog.at_level("WARNING"):
            assert load_or_default(path, {}) == {}

        assert "Could not parse" in caplog.text


class TestWriteFiles:
    """Tests for atomic JSON/TOML writers."""

    def test_json_format(self, tmp_path: Path):
        path = tmp_path / "out" / "config.json"
        write_json_file(path, {"b": 1, "a": {"name": "café"}})

        assert path.read_text(encoding="utf-8") == '{\n  "b": 1,\n  "a": {\n    "name": "café"\n  }\n}\n'

    def test_no_temp_files_left(self, tmp_path: Path):
        path = tmp_path / "out" / "config.json"
        write_json_file(path, {"a": 1})
        write_json_file(path, {"a": 2})

        assert [p.name for p in path.parent.iterdir()] == ["config.json"]
        assert json.loads(path.read_text()) == {"a": 2}

    def test_toml_output(self, tmp_path: Path):
        path = tmp_path / "extension.toml"
        write_toml_file(path, {"context-servers": {"a": {"command": "node", "args": ["x"]}}})

        assert read_document(path, parse_toml) == {
            "context-servers": {"a": {"command": "node", "args": ["x"]}}
        }

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_write_through_symlink(self, tmp_path: Path):
        """A symlinked config stays a symlink and the file it points at is updated."""
        real_file = tmp_path / "dotfiles" / "claude.json"
        real_file.parent.mkdir()
        real_file.write_text('{"theme": "dark"}')
        link = tmp_path / "Claude" / "claude_desktop_config.json"
        link.parent.mkdir()
        link.symlink_to(real_file)

        write_json_file(link, {"theme": "light"})

        assert link.is_symlink()
        assert json.loads(real_file.read_text()) == {"theme": "light"}
        assert [p.name for p in link.parent.iterdir()] == ["claude_desktop_config.json"]
        assert [p.name for p in real_file.parent.iterdir()] == ["claude.json"]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_existing_mode_kept(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("{}")
        path.chmod(0o644)

        write_json_file(path, {"a": 1})

        assert path.stat().st_mode & 0o777 == 0o644

    def test_write_error_wrapped(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(ConfigWriteError) as exc_info:
            write_json_file(blocker / "config.json", {})

        assert "config.json" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)


class TestMergeServerEntry:
    """Tests for merge_server_entry and remove_server_entry."""

    def test_merge_into_empty(self):
        assert merge_server_entry({}, ["mcp", "servers"], "a", {"command": "x"}) == {
            "mcp": {"servers": {"a": {"command": "x"}}}
        }

    def test_merge_does_not_mutate_input(self):
        document = {"theme": "dark", "mcpServers": {"old": {"command": "y"}}}
        result = merge_server_entry(document, ["mcpServers"], "new", {"command": "x"})

        assert document == {"theme": "dark", "mcpServers": {"old": {"command": "y"}}}
        assert result["mcpServers"] == {"old": {"command": "y"}, "new": {"command": "x"}}
        assert result["theme"] == "dark"

    def test_merge_replaces_non_dict_on_path(self):
        result = merge_server_entry({"mcpServers": None}, ["mcpServers"], "a", {})
        assert result == {"mcpServers": {"a": {}}}

    def test_remove_existing(self):
        document = {"mcp": {"servers": {"a": {}, "b": {}}, "other": 1}}
        result = remove_server_entry(document, ["mcp", "servers"], "a")

        assert result == {"mcp": {"servers": {"b": {}}, "other": 1}}
        assert document["mcp"]["servers"] == {"a": {}, "b": {}}

    @pytest.mark.parametrize(
        "document",
        [{}, {"mcpServers": {}}, {"mcpServers": []}, {"mcpServers": {"b": {}}}],
    )
    def test_remove_absent(self, document):
        assert remove_server_entry(document, ["mcpServers"], "a") is None


class TestProbes:
    """Tests for detection probes."""

    def test_path_exists(self, tmp_path: Path):
        assert path_exists(tmp_path) is True
        assert path_exists(tmp_path / "missing") is False

    def test_glob_exists(self, tmp_path: Path):
        (tmp_path / "continue.continue-1.0.0").mkdir()
        assert glob_exists(str(tmp_path / "continue.continue-*")) is True
        assert glob_exists(str(tmp_path / "other-*")) is False

    def test_probe_success(self):
        assert probe_command([sys.executable, "-c", "pass"]) is True

    def test_probe_nonzero_exit(self):
        assert probe_command([sys.executable, "-c", "raise SystemExit(1)"]) is False

    def test_probe_missing_binary(self):
        assert probe_command(["definitely_not_a_real_command_xyz123", "--version"]) is False

    def test_probe_timeout(self):
        assert probe_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5) is False

    def test_probe_does_not_wait_for_input(self):
        """stdin is closed, so a command reading input sees EOF instead of hanging."""
        assert probe_command([sys.executable, "-c", "import sys; sys.stdin.read()"], timeout=5) is True
