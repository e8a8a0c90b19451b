# This file makes the 'ccgchart' directory a Python package.

from ccgchart.dictionary import Category, Dictionary, PoS, Word
from ccgchart.labels import (
    Direction,
    JapaneseTerminalLabel,
    NonterminalLabel,
    SimpleTerminalLabel,
    TerminalLabel,
)
from ccgchart.tree import BinaryTree, LeafTree, ParseTree, Span, UnaryTree
from ccgchart.derivation import (
    AppliedRule,
    BinaryChildrenPoints,
    Derivation,
    GoldSuperTaggedSentence,
    NoneChildPoint,
    Point,
    UnaryChildPoint,
)
from ccgchart.converter import (
    EnglishParseTreeConverter,
    JapaneseParseTreeConverter,
    ParseTreeConverter,
    create_converter,
)
from ccgchart.treebank import TreebankReader, read_auto_tree, read_japanese_tree
from ccgchart.errors import ConversionError, FormatError, InternalConsistencyError

__all__ = [
    'Category',
    'Dictionary',
    'PoS',
    'Word',
    'Direction',
    'JapaneseTerminalLabel',
    'NonterminalLabel',
    'SimpleTerminalLabel',
    'TerminalLabel',
    'BinaryTree',
    'LeafTree',
    'ParseTree',
    'Span',
    'UnaryTree',
    'AppliedRule',
    'BinaryChildrenPoints',
    'Derivation',
    'GoldSuperTaggedSentence',
    'NoneChildPoint',
    'Point',
    'UnaryChildPoint',
    'EnglishParseTreeConverter',
    'JapaneseParseTreeConverter',
    'ParseTreeConverter',
    'create_converter',
    'TreebankReader',
    'read_auto_tree',
    'read_japanese_tree',
    'ConversionError',
    'FormatError',
    'InternalConsistencyError',
]
