"""
Tests for plain and gzip-compressed line reading.
"""
import gzip
import io

from ccgchart.io_util import is_standard_stream, open_in, open_iterator, open_out, read_lines


def test_open_iterator_plain(tmp_path):
    path = tmp_path / "trees.txt"
    path.write_text("first\nsecond\n", encoding="utf-8")
    assert list(open_iterator(path)) == ["first", "second"]
    assert list(open_iterator(str(path))) == ["first", "second"]


def test_open_iterator_gzip(tmp_path):
    path = tmp_path / "trees.txt.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("犬\n猫\n")
    assert list(open_iterator(path)) == ["犬", "猫"]


def test_open_out_round_trip_gzip(tmp_path):
    path = tmp_path / "out.jsonl.gz"
    with open_out(path) as f:
        f.write("{}\n")
    with gzip.open(path, "rt", encoding="utf-8") as f:
        assert f.read() == "{}\n"
    with open_in(str(path)) as f:
        assert f.readline() == "{}\n"


def test_read_lines_dash_is_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("{NP 犬/犬/名詞/_}\n"))
    assert is_standard_stream("-")
    assert list(read_lines("-")) == ["{NP 犬/犬/名詞/_}"]


def test_read_lines_file(tmp_path):
    path = tmp_path / "trees.txt"
    path.write_text("a\n", encoding="utf-8")
    assert not is_standard_stream(path)
    assert list(read_lines(path)) == ["a"]
