"""
Interning dictionary for words, parts of speech and categories.

Every textual key is mapped to a small immutable handle. The same key always
yields the same handle, so handles can be compared and hashed cheaply by the
derivation chart.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Word:
    id: int
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class PoS:
    id: int
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Category:
    id: int
    text: str

    def __str__(self) -> str:
        return self.text


class _InternTable:
    """Maps text to handles of one kind, allocating ids sequentially."""

    def __init__(self, handle_type, kind: str):
        self.handle_type = handle_type
        self.kind = kind
        self._table: Dict[str, object] = {}

    def get(self, text: str):
        return self._table.get(text)

    def get_or_create(self, text: str):
        handle = self._table.get(text)
        if handle is None:
            handle = self.handle_type(len(self._table), text)
            self._table[text] = handle
            logger.debug(f"New {self.kind} #{handle.id}: {text}")
        return handle

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self):
        return iter(self._table.values())


class Dictionary:
    """
    Holds the word, part-of-speech and category tables of one corpus.

    Example:
        >>> d = Dictionary()
        >>> d.get_category_or_create("NP") is d.get_category_or_create("NP")
        True
    """

    def __init__(self):
        self._words = _InternTable(Word, "word")
        self._pos = _InternTable(PoS, "pos")
        self._categories = _InternTable(Category, "category")

    def get_word_or_create(self, text: str) -> Word:
        return self._words.get_or_create(text)

    def get_pos_or_create(self, text: str) -> PoS:
        return self._pos.get_or_create(text)

    def get_category_or_create(self, text: str) -> Category:
        return self._categories.get_or_create(text)

    def get_word(self, text: str) -> Optional[Word]:
        return self._words.get(text)

    def get_pos(self, text: str) -> Optional[PoS]:
        return self._pos.get(text)

    def get_category(self, text: str) -> Optional[Category]:
        return self._categories.get(text)

    @property
    def num_words(self) -> int:
        return len(self._words)

    @property
    def num_pos(self) -> int:
        return len(self._pos)

    @property
    def num_categories(self) -> int:
        return len(self._categories)

    def categories(self):
        """Iterate over category handles in creation order."""
        return iter(self._categories)

    def __repr__(self) -> str:
        return (f"Dictionary(words={self.num_words}, pos={self.num_pos}, "
                f"categories={self.num_categories})")
