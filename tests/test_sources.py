from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import pytest

from tomlflags.core.errors import ParseError
from tomlflags.sources import (
    TomlFileSource,
    YamlFileSource,
    load_toml,
    load_yaml,
    loader_for,
    open_source,
)


class TestLoadToml:
    """Test suite for the TOML document parser."""

    def test_plain_containers(self):
        doc = load_toml('a = 1\n[t]\nlist = ["x", "y"]\nwhen = 1979-05-27\n')
        assert doc == {"a": 1, "t": {"list": ["x", "y"], "when": date(1979, 5, 27)}}
        assert type(doc) is dict
        assert type(doc["t"]) is dict
        assert type(doc["t"]["list"]) is list

    def test_bytes_with_bom(self):
        assert load_toml("\ufeffs = \"👍\"\n".encode("utf-8")) == {"s": "👍"}

    def test_offset_datetime(self):
        doc = load_toml("t = 1979-05-27T07:32:00Z\n")
        assert isinstance(doc["t"], datetime)
        assert doc["t"].utcoffset().total_seconds() == 0

    def test_empty(self):
        assert load_toml("") == {}

    def test_invalid(self):
        with pytest.raises(ParseError) as exc_info:
            load_toml("[table\nkey = 1\n", source="bad.toml")
        err = exc_info.value
        assert err.source == "bad.toml"
        assert str(err).startswith("bad.toml: ")
        assert isinstance(err, ValueError)

    def test_invalid_utf8(self):
        with pytest.raises(ParseError, match="UTF-8"):
            load_toml(b"s = \"\xff\"\n")


class TestLoadYaml:
    """Test suite for the YAML document parser."""

    def test_nested(self):
        assert load_yaml("a:\n  b: 1\n  c: [x, y]\n") == {"a": {"b": 1, "c": ["x", "y"]}}

    def test_empty(self):
        assert load_yaml("") == {}

    def test_invalid(self):
        with pytest.raises(ParseError) as exc_info:
            load_yaml("invalid: yaml: content: [")
        assert exc_info.value.line is not None

    def test_non_mapping_root(self):
        with pytest.raises(ParseError, match="root must be a mapping"):
            load_yaml("- a\n- b\n")


class TestFileSources:
    """Test suite for suffix dispatch and file sources."""

    def test_loader_for(self):
        assert loader_for("app.toml") is load_toml
        assert loader_for(Path("app.YAML")) is load_yaml
        assert loader_for("app.yml") is load_yaml
        with pytest.raises(ValueError, match="Unsupported document type"):
            loader_for("app.ini")

    def test_open_source(self, testdata: Path):
        src = open_source(testdata / "basic.toml")
        assert isinstance(src, TomlFileSource)
        assert src.name == "toml:basic.toml"
        assert src.id == str((testdata / "basic.toml").resolve())
        assert src.load()["x"] == ["1", "a", "👍"]

        ysrc = open_source(testdata / "basic.yaml", name="custom")
        assert isinstance(ysrc, YamlFileSource)
        assert ysrc.name == "custom"

        with pytest.raises(ValueError):
            open_source(testdata / "basic.json")

    def test_toml_and_yaml_agree(self, testdata: Path):
        assert open_source(testdata / "basic.toml").load() == open_source(
            testdata / "basic.yaml"
        ).load()

    def test_error_names_file(self, testdata: Path):
        with pytest.raises(ParseError) as exc_info:
            TomlFileSource(testdata / "bad.toml").load()
        assert exc_info.value.source.endswith("bad.toml")
