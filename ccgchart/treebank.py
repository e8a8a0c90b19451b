"""
Readers for bracketed CCGbank trees.

Japanese CCGbank uses braces, with the node string first and the children
after it:

    {< S[mod=nm] {NP[ga,nm] 犬/犬/名詞-一般/_} {S\\NP[ga,nm] 走る/走る/動詞-自立/_}}

English CCGbank (AUTO format) wraps each node string in angle brackets:

    (<T S[dcl] 1 2> (<L NP NNP NNP John NP>) (<L S[dcl]\\NP VBZ VBZ runs S[dcl]\\NP>))

Both readers produce a ParseTree[str] whose labels are the raw node strings,
ready to be handed to a ParseTreeConverter.
"""
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List

from .errors import FormatError
from .labels import JAPANESE, normalize_dialect
from .tree import BinaryTree, LeafTree, ParseTree, UnaryTree


def _make_node(label: str, children: List[ParseTree[str]], line: str) -> ParseTree[str]:
    if not children:
        return LeafTree(label)
    if len(children) == 1:
        return UnaryTree(children[0], label)
    if len(children) == 2:
        return BinaryTree(children[0], children[1], label)
    raise FormatError(f"node '{label}' has {len(children)} children", line)


class _LineReader(ABC):
    """Recursive-descent reader over one bracketed line."""

    def __init__(self, line: str, open_char: str, close_char: str):
        self.line = line
        self.index = 0
        self.open_char = open_char
        self.close_char = close_char

    def error(self, message: str) -> FormatError:
        return FormatError(f"{message} at position {self.index}", self.line)

    def skip_spaces(self):
        while self.index < len(self.line) and self.line[self.index] == ' ':
            self.index += 1

    def peek(self) -> str:
        if self.index >= len(self.line):
            raise self.error("unexpected end of tree")
        return self.line[self.index]

    def expect(self, char: str):
        if self.peek() != char:
            raise self.error(f"expected '{char}'")
        self.index += 1

    def read_until(self, stops: str) -> str:
        begin = self.index
        while self.index < len(self.line) and self.line[self.index] not in stops:
            self.index += 1
        return self.line[begin:self.index]

    @abstractmethod
    def read_label(self) -> str:
        pass

    def read_node(self) -> ParseTree[str]:
        self.skip_spaces()
        self.expect(self.open_char)
        label = self.read_label()
        children = []
        self.skip_spaces()
        while self.peek() == self.open_char:
            children.append(self.read_node())
            self.skip_spaces()
        self.expect(self.close_char)
        return _make_node(label, children, self.line)

    def parse(self) -> ParseTree[str]:
        tree = self.read_node()
        self.skip_spaces()
        if self.index != len(self.line):
            raise self.error("trailing characters after tree")
        return tree


class _JapaneseLineReader(_LineReader):
    def __init__(self, line: str):
        super().__init__(line, '{', '}')

    def read_label(self) -> str:
        label = self.read_until('{}').strip()
        if not label:
            raise self.error("empty node")
        return label


class _AutoLineReader(_LineReader):
    def __init__(self, line: str):
        super().__init__(line, '(', ')')

    def read_label(self) -> str:
        self.skip_spaces()
        self.expect('<')
        label = self.read_until('>')
        self.expect('>')
        return label.strip()


def read_japanese_tree(line: str) -> ParseTree[str]:
    """Read one Japanese CCGbank tree."""
    return _JapaneseLineReader(line.strip()).parse()


def read_auto_tree(line: str) -> ParseTree[str]:
    """Read one English CCGbank AUTO tree."""
    return _AutoLineReader(line.strip()).parse()


class TreebankReader:
    """
    Reads tree lines of one dialect.

    Example:
        >>> reader = TreebankReader("english")
        >>> tree = reader.read_tree("(<L N NN NN dog N>)")
        >>> tree.label
        'L N NN NN dog N'
    """

    def __init__(self, dialect: str):
        self.dialect = normalize_dialect(dialect)
        self._read = read_japanese_tree if self.dialect == JAPANESE else read_auto_tree

    def read_tree(self, line: str) -> ParseTree[str]:
        return self._read(line)

    @staticmethod
    def is_tree_line(line: str) -> bool:
        stripped = line.strip()
        return bool(stripped) and not stripped.startswith("ID=")

    def read_trees(self, lines: Iterable[str]) -> Iterator[ParseTree[str]]:
        """Yield a tree per tree line, skipping blank lines and ID= headers."""
        for line in lines:
            if self.is_tree_line(line):
                yield self.read_tree(line)
