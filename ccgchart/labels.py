"""
Node labels of CCG parse trees and the parsers producing them.

Two treebank dialects are supported:

- Japanese CCGbank:
    terminal     "(NP[nc,nm]1／NP[nc,nm]1)＼NP[nc,nm] の/の/助詞-連体化/_"
    nonterminal  "< NP[ga,nm]"
- Simple (English CCGbank AUTO):
    terminal     "L N/N NNP NNP Dutch N_126/N_126"
    nonterminal  "T S[dcl] 0 2"

The parsers only split the token and intern the pieces through a Dictionary;
they never validate the categories themselves.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from .dictionary import Category, Dictionary, PoS, Word
from .errors import FormatError

JAPANESE = "japanese"
ENGLISH = "english"

DIALECT_ALIASES = {
    "japanese": JAPANESE,
    "ja": JAPANESE,
    "english": ENGLISH,
    "en": ENGLISH,
    "simple": ENGLISH,
}


class Direction(Enum):
    """Side of the head child of a nonterminal"""
    LEFT = "left"
    RIGHT = "right"


class NodeLabel:
    """Common base of terminal and nonterminal labels."""
    category: Category


class TerminalLabel(NodeLabel):
    word: Word
    base_form: Word
    pos: PoS


@dataclass(frozen=True)
class JapaneseTerminalLabel(TerminalLabel):
    """Terminal whose base form may differ from its surface form."""
    word: Word
    base_form: Word
    pos: PoS
    category: Category


@dataclass(frozen=True)
class SimpleTerminalLabel(TerminalLabel):
    """Terminal for languages without a separate base form."""
    word: Word
    pos: PoS
    category: Category

    @property
    def base_form(self) -> Word:
        return self.word


@dataclass(frozen=True)
class NonterminalLabel(NodeLabel):
    """
    Label of a rule application.

    Attributes:
        head: Which child is the head.
        category: Category produced by the rule.
        rule_type: Rule identifier such as "<" or ">B"; empty when unknown.
    """
    head: Direction
    category: Category
    rule_type: str = ""


def parse_japanese_terminal(terminal_str: str, dictionary: Dictionary) -> JapaneseTerminalLabel:
    """Parse a string like "(NP[nc,nm]1／NP[nc,nm]1)＼NP[nc,nm] の/の/助詞-連体化/_"."""
    fields = terminal_str.split(" ")
    if len(fields) != 2:
        raise FormatError("invalid form for JapaneseTerminalLabel", terminal_str)
    category_str, word_pos_str = fields

    sep1 = word_pos_str.find('/')
    sep2 = word_pos_str.find('/', sep1 + 1) if sep1 >= 0 else -1
    if sep2 < 0:
        raise FormatError("invalid form for JapaneseTerminalLabel", terminal_str)

    surface_form = dictionary.get_word_or_create(word_pos_str[:sep1])
    base_form = dictionary.get_word_or_create(word_pos_str[sep1 + 1:sep2])
    pos = dictionary.get_pos_or_create(word_pos_str[sep2 + 1:])
    category = dictionary.get_category_or_create(category_str)
    return JapaneseTerminalLabel(surface_form, base_form, pos, category)


def parse_simple_terminal(terminal_str: str, dictionary: Dictionary) -> SimpleTerminalLabel:
    """Parse a string like "L N/N NNP NNP Dutch N_126/N_126"."""
    fields = terminal_str.split(" ")
    if len(fields) != 6:
        raise FormatError("invalid form for SimpleTerminalLabel", terminal_str)
    # fields[2] is the modified PoS tag; the original tag is used for lookup
    category_str, orig_pos_str, word_str = fields[1], fields[3], fields[4]
    return SimpleTerminalLabel(
        dictionary.get_word_or_create(word_str),
        dictionary.get_pos_or_create(orig_pos_str),
        dictionary.get_category_or_create(category_str))


def parse_japanese_nonterminal(nonterm_str: str, dictionary: Dictionary) -> NonterminalLabel:
    """
    Parse a string like "< NP[ga,nm]".

    The Japanese format carries no head information at this level, so the
    head is always LEFT.
    """
    fields = nonterm_str.split(" ")
    if len(fields) != 2:
        raise FormatError("invalid form for NonterminalLabel", nonterm_str)
    rule_str, category_str = fields
    return NonterminalLabel(Direction.LEFT, dictionary.get_category_or_create(category_str), rule_str)


def parse_simple_nonterminal(nonterm_str: str, dictionary: Dictionary) -> NonterminalLabel:
    """Parse a string like "T S[dcl] 0 2"."""
    fields = nonterm_str.split(" ")
    if len(fields) != 4:
        raise FormatError("invalid form for NonterminalLabel", nonterm_str)
    category_str, direction_num = fields[1], fields[2]
    head = Direction.LEFT if direction_num == "0" else Direction.RIGHT
    return NonterminalLabel(head, dictionary.get_category_or_create(category_str), "")


class LabelParser(ABC):
    """Turns raw node strings of one dialect into labels."""

    dialect: str = None

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    @abstractmethod
    def parse_terminal(self, terminal_str: str) -> TerminalLabel:
        pass

    @abstractmethod
    def parse_nonterminal(self, nonterm_str: str) -> NonterminalLabel:
        pass


class JapaneseLabelParser(LabelParser):
    dialect = JAPANESE

    def parse_terminal(self, terminal_str: str) -> JapaneseTerminalLabel:
        return parse_japanese_terminal(terminal_str, self.dictionary)

    def parse_nonterminal(self, nonterm_str: str) -> NonterminalLabel:
        return parse_japanese_nonterminal(nonterm_str, self.dictionary)


class SimpleLabelParser(LabelParser):
    dialect = ENGLISH

    def parse_terminal(self, terminal_str: str) -> SimpleTerminalLabel:
        return parse_simple_terminal(terminal_str, self.dictionary)

    def parse_nonterminal(self, nonterm_str: str) -> NonterminalLabel:
        return parse_simple_nonterminal(nonterm_str, self.dictionary)


def normalize_dialect(dialect: str) -> str:
    """Map a dialect name or alias to JAPANESE or ENGLISH."""
    try:
        return DIALECT_ALIASES[dialect.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown dialect: {dialect!r} (expected one of {sorted(DIALECT_ALIASES)})")


def get_label_parser(dialect: str, dictionary: Dictionary) -> LabelParser:
    if normalize_dialect(dialect) == JAPANESE:
        return JapaneseLabelParser(dictionary)
    return SimpleLabelParser(dictionary)
