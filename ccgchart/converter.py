"""
Conversion of raw treebank trees into labeled trees, sentences and
derivation charts.

    string tree --to_label_tree--> label tree --to_derivation--> Derivation
                                              +--to_sentence_from_label_tree--> GoldSuperTaggedSentence
"""
import logging
from typing import Sequence

from .derivation import (
    AppliedRule,
    BinaryChildrenPoints,
    Derivation,
    GoldSuperTaggedSentence,
    NoneChildPoint,
    Point,
    UnaryChildPoint,
    empty_chart,
)
from .dictionary import Dictionary
from .errors import InternalConsistencyError
from .labels import (
    JapaneseLabelParser,
    LabelParser,
    NodeLabel,
    NonterminalLabel,
    SimpleLabelParser,
    TerminalLabel,
    get_label_parser,
)
from .tree import BinaryTree, LeafTree, ParseTree, Span, UnaryTree

logger = logging.getLogger(__name__)


def _extract_span(span: Span):
    if span is None:
        raise InternalConsistencyError("Node has no span assigned")
    return span.begin, span.end


def _rule_type(label: NodeLabel) -> str:
    if not isinstance(label, NonterminalLabel):
        raise InternalConsistencyError(f"Interior node carries a non-nonterminal label: {label!r}")
    return label.rule_type


class ParseTreeConverter:
    """
    Converts trees of one treebank dialect.

    Args:
        label_parser: Strategy that parses terminal and nonterminal strings.
    """

    def __init__(self, label_parser: LabelParser):
        self.label_parser = label_parser

    @property
    def dictionary(self) -> Dictionary:
        return self.label_parser.dictionary

    def to_label_tree(self, string_tree: ParseTree[str]) -> ParseTree[NodeLabel]:
        def parse_label(node):
            if node.is_leaf:
                return self.label_parser.parse_terminal(node.label)
            return self.label_parser.parse_nonterminal(node.label)
        return string_tree.map_bottomup(parse_label)

    def to_sentence_from_string_tree(self, string_tree: ParseTree[str]) -> GoldSuperTaggedSentence:
        terminal_seq = [self.label_parser.parse_terminal(leaf.label) for leaf in string_tree.leaves()]
        return self.terminal_seq_to_sentence(terminal_seq)

    def to_sentence_from_label_tree(self, label_tree: ParseTree[NodeLabel]) -> GoldSuperTaggedSentence:
        terminal_seq = []
        for leaf in label_tree.leaves():
            if not isinstance(leaf.label, TerminalLabel):
                raise InternalConsistencyError("Labels of leaf nodes must all be TerminalLabel")
            terminal_seq.append(leaf.label)
        return self.terminal_seq_to_sentence(terminal_seq)

    @staticmethod
    def terminal_seq_to_sentence(terminal_seq: Sequence[TerminalLabel]) -> GoldSuperTaggedSentence:
        return GoldSuperTaggedSentence(
            tuple(t.word for t in terminal_seq),
            tuple(t.base_form for t in terminal_seq),
            tuple(t.pos for t in terminal_seq),
            tuple(t.category for t in terminal_seq))

    def to_derivation(self, label_tree: ParseTree[NodeLabel]) -> Derivation:
        """
        Build the derivation chart of a labeled tree.

        Spans are (re)assigned to every node first. Every node then gets
        exactly one chart entry at its own span and category, pointing at the
        entries of its children. A leaf is entered by its parent with a
        NoneChildPoint rule; a leaf builds nothing itself.
        """
        label_tree.set_spans(0)
        if label_tree.span is None or label_tree.span.begin != 0:
            raise InternalConsistencyError(f"set_spans error: root span is {label_tree.span}")
        length = label_tree.span.end
        chart = empty_chart(length)

        def add_entry(node: ParseTree[NodeLabel]) -> Point:
            begin, end = _extract_span(node.span)
            chart[begin][end][node.label.category] = build(node)
            return Point(begin, end, node.label.category)

        def build(node: ParseTree[NodeLabel]) -> AppliedRule:
            if isinstance(node, LeafTree):
                return AppliedRule(NoneChildPoint(), "")
            if isinstance(node, UnaryTree):
                child_point = add_entry(node.child)
                return AppliedRule(UnaryChildPoint(child_point), _rule_type(node.label))
            if isinstance(node, BinaryTree):
                left_point = add_entry(node.left)
                right_point = add_entry(node.right)
                return AppliedRule(BinaryChildrenPoints(left_point, right_point), _rule_type(node.label))
            raise InternalConsistencyError(f"Unknown tree node type: {type(node).__name__}")

        root_point = add_entry(label_tree)
        derivation = Derivation(chart, [root_point])
        logger.debug(f"Built derivation with {derivation.num_entries()} entries over {length} words")
        return derivation


class JapaneseParseTreeConverter(ParseTreeConverter):
    def __init__(self, dictionary: Dictionary):
        super().__init__(JapaneseLabelParser(dictionary))


class EnglishParseTreeConverter(ParseTreeConverter):
    def __init__(self, dictionary: Dictionary):
        super().__init__(SimpleLabelParser(dictionary))


def create_converter(dialect: str, dictionary: Dictionary = None) -> ParseTreeConverter:
    """Build a converter for `dialect` ("japanese"/"ja" or "english"/"en"/"simple")."""
    return ParseTreeConverter(get_label_parser(dialect, dictionary or Dictionary()))
