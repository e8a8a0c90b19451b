"""
Tests for batch conversion of treebank files.
"""
import io
import json
import logging

import pytest
from ccgchart.config import ConverterConfig
from ccgchart.converter import create_converter
from ccgchart.errors import FormatError
from ccgchart.pipeline import (
    ConversionStats,
    collect_statistics,
    convert_file,
    convert_lines,
    convert_tree,
)
from ccgchart.treebank import TreebankReader, read_japanese_tree

JAPANESE_LINES = [
    r"{< S {NP[ga,nm] 犬/犬/名詞-一般/_} {S\NP[ga,nm] 走る/走る/動詞-自立/_}}",
    "",
    "{NP 猫/猫/名詞-一般/_}",
    "{< S {NP 壊れた}}",
    r"{< S {NP[ga,nm] 猫/猫/名詞-一般/_} {S\NP[ga,nm] 寝る/寝る/動詞-自立/_}}",
]


@pytest.fixture
def converter():
    return create_converter("japanese")


@pytest.fixture
def reader():
    return TreebankReader("japanese")


class TestConvertTree:

    def test_derivation_record(self, converter):
        record = convert_tree(read_japanese_tree(JAPANESE_LINES[0]), converter, "derivation")
        assert record["length"] == 2
        assert record["roots"] == [{"begin": 0, "end": 2, "category": "S"}]
        assert len(record["entries"]) == 3
        assert record["sentence"]["words"] == ["犬", "走る"]

    def test_sentence_record(self, converter):
        record = convert_tree(read_japanese_tree(JAPANESE_LINES[0]), converter, "sentence")
        assert record["categories"] == ["NP[ga,nm]", "S\\NP[ga,nm]"]

    def test_tree_record(self, converter):
        record = convert_tree(read_japanese_tree(JAPANESE_LINES[0]), converter, "tree")
        assert record["rule_type"] == "<"
        assert record["head"] == "left"
        assert record["children"][1]["base_form"] == "走る"
        assert "children" not in record["children"][0]


class TestConvertLines:

    def test_skips_malformed_trees(self, converter, reader):
        stats = ConversionStats()
        results = list(convert_lines(JAPANESE_LINES, converter, reader, stats=stats))
        assert [line_no for line_no, _ in results] == [1, 3, 5]
        assert (stats.total, stats.converted, stats.failed) == (4, 3, 1)

    def test_strict_raises(self, converter, reader):
        with pytest.raises(FormatError):
            list(convert_lines(JAPANESE_LINES, converter, reader, strict=True))


def test_convert_file(tmp_path):
    source = tmp_path / "train.ccgbank"
    source.write_text("\n".join(JAPANESE_LINES) + "\n", encoding="utf-8")
    out = tmp_path / "train.jsonl"

    config = ConverterConfig(dialect="ja", input_path=str(source), output_path=str(out), output="sentence")
    stats = convert_file(config)

    assert (stats.total, stats.converted, stats.failed) == (4, 3, 1)
    records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [r["line"] for r in records] == [1, 3, 5]
    assert records[1]["words"] == ["猫"]


def test_collect_statistics(converter, reader):
    stats = collect_statistics(JAPANESE_LINES, converter, reader)
    assert stats.sentences == 3
    assert stats.tokens == 5
    assert stats.failed == 1
    assert stats.categories["NP[ga,nm]"] == 2
    assert stats.rule_types["<"] == 2


def test_convert_file_counts_trailing_failures(tmp_path, caplog):
    """Failures after the last converted tree still reach the progress log."""
    source = tmp_path / "train.ccgbank"
    source.write_text("\n".join([JAPANESE_LINES[0], "{< S {NP 壊れた}}", "{NP 欠けた}"]) + "\n",
                      encoding="utf-8")
    out = tmp_path / "train.jsonl"
    config = ConverterConfig(dialect="ja", input_path=source, output_path=out)

    with caplog.at_level(logging.INFO, logger="ccgchart.pipeline"):
        stats = convert_file(config)

    assert (stats.total, stats.converted, stats.failed) == (3, 1, 2)
    progress_lines = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Converting: ")]
    assert progress_lines[-1].startswith("Converting: 3/3 (100%) - 2 failed")


def test_convert_file_logs_options(tmp_path, caplog):
    source = tmp_path / "train.ccgbank"
    source.write_text(JAPANESE_LINES[0] + "\n", encoding="utf-8")
    config = ConverterConfig(dialect="ja", input_path=source, output_path=tmp_path / "out.jsonl")

    with caplog.at_level(logging.INFO, logger="ccgchart.pipeline"):
        convert_file(config)

    assert "Options:" in caplog.text
    assert "[japanese]" in caplog.text


def test_convert_file_from_stdin(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr("sys.stdin", io.StringIO("\n".join(JAPANESE_LINES) + "\n"))
    out = tmp_path / "stdin.jsonl"
    config = ConverterConfig(dialect="ja", input_path="-", output_path=out, output="sentence")

    with caplog.at_level(logging.INFO, logger="ccgchart.pipeline"):
        stats = convert_file(config)

    assert (stats.total, stats.converted, stats.failed) == (4, 3, 1)
    assert len(out.read_text(encoding="utf-8").splitlines()) == 3
    assert "Converting: 4 (done) - 1 failed" in caplog.text
