from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tomlflags.cli.__main__ import app

runner = CliRunner()


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch) -> Path:
    """Run from a directory without a tomlflags.yaml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestFlattenCommand:
    """Test suite for the flatten command."""

    def test_text_output(self, testdata: Path, isolated):
        result = runner.invoke(app, ["flatten", str(testdata / "table.toml")])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "string.key=a string",
            "float.nested.key=1.23",
            "strings.nested.key=one",
            "strings.nested.key=two",
            "strings.nested.key=three",
            "skipped.more.new.key=skipped",
        ]

    def test_json_with_skip_and_delimiter(self, testdata: Path, isolated):
        result = runner.invoke(
            app,
            ["flatten", str(testdata / "table.toml"), "-d", "-", "--skip", "skipped-more", "--json"],
        )
        assert result.exit_code == 0, result.output
        pairs = json.loads(result.output)
        assert pairs[0] == ["string-key", "a string"]
        assert all(not k.startswith("skipped") for k, _ in pairs)
        assert len(pairs) == 5

    def test_skip_is_split_on_active_delimiter(self, testdata: Path, isolated):
        """With -d -, a dotted --skip value is a single segment and matches nothing."""
        result = runner.invoke(
            app,
            ["flatten", str(testdata / "table.toml"), "-d", "-", "--skip", "skipped.more"],
        )
        assert result.exit_code == 0, result.output
        assert "skipped-more-new-key=skipped" in result.output.splitlines()

    def test_skip_help_describes_segments(self):
        result = runner.invoke(app, ["flatten", "--help"])
        assert result.exit_code == 0
        assert "segments" in result.output

    def test_parse_error_exit_code(self, testdata: Path, isolated):
        result = runner.invoke(app, ["flatten", str(testdata / "bad.toml")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_encoding_error_exit_code(self, testdata: Path, isolated):
        result = runner.invoke(app, ["flatten", str(testdata / "nested_array.toml")])
        assert result.exit_code == 1
        assert "server.listeners" in result.output

    def test_encoding_error_uses_delimiter(self, testdata: Path, isolated):
        result = runner.invoke(
            app, ["flatten", str(testdata / "nested_array.toml"), "-d", "/"]
        )
        assert result.exit_code == 1
        assert "server/listeners" in result.output

    def test_missing_file(self, isolated: Path):
        result = runner.invoke(app, ["flatten", str(isolated / "missing.toml")])
        assert result.exit_code == 1


class TestArgsCommand:
    """Test suite for the args command."""

    def test_flag_tokens(self, testdata: Path, isolated):
        result = runner.invoke(app, ["args", str(testdata / "basic.toml")])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[:3] == ["--s=s", "--i=10", "--f=3.14e10"]
        assert result.output.splitlines()[-3:] == ["--x=1", "--x=a", "--x=👍"]


class TestProjectConfig:
    """Test suite for tomlflags.yaml defaults on the command line."""

    def test_defaults_applied(self, testdata: Path, tmp_path: Path):
        cfg = tmp_path / "tomlflags.yaml"
        cfg.write_text("delimiter: '-'\nskip:\n  - [strings]\n")
        result = runner.invoke(
            app, ["flatten", str(testdata / "table.toml"), "--config", str(cfg)]
        )
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "string-key=a string" in lines
        assert not any(line.startswith("strings") for line in lines)

    def test_cli_delimiter_overrides_config(self, testdata: Path, tmp_path: Path):
        cfg = tmp_path / "tomlflags.yaml"
        cfg.write_text("delimiter: '-'\n")
        result = runner.invoke(
            app, ["flatten", str(testdata / "table.toml"), "--config", str(cfg), "-d", "/"]
        )
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "string/key=a string"
