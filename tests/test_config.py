"""
Tests for ConverterConfig and properties files.
"""

from pathlib import Path

import pytest
from ccgchart.config import ConverterConfig, load_props
from ccgchart.errors import ArgumentError


class TestConverterConfig:

    def test_defaults(self):
        config = ConverterConfig(dialect="ja", input_path="train.ccgbank")
        assert config.dialect == "japanese"
        assert config.output == "derivation"
        assert config.strict is False
        assert config.output_path is None

    def test_from_props(self):
        config = ConverterConfig.from_props({
            "dialect": "en",
            "input": "wsj.auto",
            "kind": "sentence",
            "strict": "yes",
            "debug": "false",
        })
        assert config.dialect == "english"
        assert config.input_path == Path("wsj.auto")
        assert config.output == "sentence"
        assert config.strict is True
        assert config.debug is False

    def test_paths_are_path_objects(self):
        config = ConverterConfig(dialect="en", input_path="wsj.auto", output_path="out.jsonl.gz", log_file="run.log")
        assert isinstance(config.input_path, Path)
        assert config.output_path == Path("out.jsonl.gz")
        assert config.log_file == Path("run.log")

    def test_from_props_with_prefix(self):
        config = ConverterConfig.from_props(
            {"conv.dialect": "japanese", "conv.input": "a.txt", "dialect": "english"}, prefix="conv")
        assert config.dialect == "japanese"

    def test_missing_required_options_listed(self):
        with pytest.raises(ArgumentError) as excinfo:
            ConverterConfig.from_props({"kind": "tree"})
        message = str(excinfo.value)
        assert "Missing required option(s)" in message
        assert "dialect" in message
        assert "input" in message
        assert "(required)" in message

    def test_invalid_dialect(self):
        with pytest.raises(ArgumentError):
            ConverterConfig(dialect="klingon", input_path="x")

    def test_invalid_kind(self):
        with pytest.raises(ArgumentError):
            ConverterConfig.from_props({"dialect": "en", "input": "x", "kind": "graph"})

    def test_invalid_boolean(self):
        with pytest.raises(ArgumentError):
            ConverterConfig.from_props({"dialect": "en", "input": "x", "strict": "maybe"})

    def test_describe(self):
        text = ConverterConfig(dialect="en", input_path="wsj.auto").describe()
        assert "dialect" in text
        assert "[english]" in text
        assert "[wsj.auto]" in text


def test_load_props(tmp_path):
    path = tmp_path / "convert.properties"
    path.write_text("# conversion settings\ndialect = ja\ninput=train.ccgbank  # training set\n\n", encoding="utf-8")
    assert load_props(path) == {"dialect": "ja", "input": "train.ccgbank"}
    assert load_props(str(path)) == load_props(path)


def test_load_props_rejects_bad_line(tmp_path):
    path = tmp_path / "bad.properties"
    path.write_text("dialect ja\n", encoding="utf-8")
    with pytest.raises(ArgumentError):
        load_props(str(path))
