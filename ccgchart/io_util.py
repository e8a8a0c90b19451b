"""
Line-oriented file access with transparent gzip support.

The path "-" stands for stdin when reading and stdout when writing.
"""
import gzip
import sys
from pathlib import Path
from typing import IO, Iterator, Union

STANDARD_STREAM = "-"

PathLike = Union[str, Path]


def is_standard_stream(path: PathLike) -> bool:
    return str(path) == STANDARD_STREAM


def open_in(path: PathLike, encoding: str = 'utf-8') -> IO[str]:
    """Open a text file for reading; paths ending in .gz are decompressed."""
    path = Path(path)
    if path.suffix == '.gz':
        return gzip.open(path, 'rt', encoding=encoding)
    return path.open('r', encoding=encoding)


def open_out(path: PathLike, encoding: str = 'utf-8') -> IO[str]:
    """Open a text file for writing; paths ending in .gz are compressed."""
    path = Path(path)
    if path.suffix == '.gz':
        return gzip.open(path, 'wt', encoding=encoding)
    return path.open('w', encoding=encoding)


def input_iterator(stream: IO[str]) -> Iterator[str]:
    for line in stream:
        yield line.rstrip('\n')


def open_iterator(path: PathLike) -> Iterator[str]:
    """Yield the lines of `path` without trailing newlines."""
    with open_in(path) as f:
        yield from input_iterator(f)


def open_standard_iterator() -> Iterator[str]:
    return input_iterator(sys.stdin)


def read_lines(path: PathLike) -> Iterator[str]:
    """Lines of `path`, or of stdin when `path` is "-"."""
    if is_standard_stream(path):
        return open_standard_iterator()
    return open_iterator(path)
