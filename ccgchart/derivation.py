"""
Derivation charts and gold supertagged sentences.

A Derivation records, for each span (begin, end) of a sentence and each
category built over that span, the AppliedRule that produced it: the rule
type plus pointers to the chart entries of its children.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .dictionary import Category, PoS, Word


@dataclass(frozen=True)
class Point:
    """Key of one chart entry."""
    begin: int
    end: int
    category: Category

    def to_dict(self) -> Dict[str, Any]:
        return {"begin": self.begin, "end": self.end, "category": self.category.text}


class ChildPoint:
    """Base of the three child-pointer shapes."""

    def points(self) -> List[Point]:
        return []


@dataclass(frozen=True)
class NoneChildPoint(ChildPoint):
    """A leaf: no rule was applied."""


@dataclass(frozen=True)
class UnaryChildPoint(ChildPoint):
    child: Point

    def points(self) -> List[Point]:
        return [self.child]


@dataclass(frozen=True)
class BinaryChildrenPoints(ChildPoint):
    left: Point
    right: Point

    def points(self) -> List[Point]:
        return [self.left, self.right]


@dataclass(frozen=True)
class AppliedRule:
    child_point: ChildPoint
    rule_type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_type": self.rule_type,
            "children": [p.to_dict() for p in self.child_point.points()],
        }


Chart = List[List[Dict[Category, AppliedRule]]]


def empty_chart(length: int) -> Chart:
    """An (length + 1) x (length + 1) table of empty cells."""
    return [[{} for _ in range(length + 1)] for _ in range(length + 1)]


class Derivation:
    """
    Span-indexed derivation chart of one sentence.

    Args:
        chart: chart[begin][end] maps each category at that span to the rule
            that built it, in insertion order.
        roots: Points of the entries spanning the whole sentence.
    """

    def __init__(self, chart: Chart, roots: Sequence[Point]):
        self.chart = chart
        self.roots = list(roots)

    @property
    def sentence_length(self) -> int:
        return len(self.chart) - 1

    def cell(self, begin: int, end: int) -> Dict[Category, AppliedRule]:
        return self.chart[begin][end]

    def get(self, point: Point) -> Optional[AppliedRule]:
        return self.chart[point.begin][point.end].get(point.category)

    def __contains__(self, point: Point) -> bool:
        return self.get(point) is not None

    def entries(self) -> Iterator[Tuple[Point, AppliedRule]]:
        """All entries, ordered by begin, then end, then insertion."""
        for begin, row in enumerate(self.chart):
            for end, cell in enumerate(row):
                for category, rule in cell.items():
                    yield Point(begin, end, category), rule

    def num_entries(self) -> int:
        return sum(len(cell) for row in self.chart for cell in row)

    def to_dict(self) -> Dict[str, Any]:
        entries = []
        for point, rule in self.entries():
            entry = point.to_dict()
            entry.update(rule.to_dict())
            entries.append(entry)
        return {
            "length": self.sentence_length,
            "roots": [root.to_dict() for root in self.roots],
            "entries": entries,
        }

    def render(self) -> str:
        """One line per chart entry, e.g. "[0,2] S -> [0,1] NP [1,2] S\\NP (<)"."""
        lines = []
        for point, rule in self.entries():
            children = " ".join(f"[{p.begin},{p.end}] {p.category}" for p in rule.child_point.points())
            rule_type = f" ({rule.rule_type})" if rule.rule_type else ""
            lines.append(f"[{point.begin},{point.end}] {point.category} -> {children}{rule_type}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Derivation(length={self.sentence_length}, entries={self.num_entries()}, roots={self.roots})"


@dataclass(frozen=True)
class GoldSuperTaggedSentence:
    """Parallel word, base form, PoS and category sequences of a sentence."""
    words: Tuple[Word, ...]
    base_forms: Tuple[Word, ...]
    pos: Tuple[PoS, ...]
    categories: Tuple[Category, ...]

    def __post_init__(self):
        sizes = {len(self.words), len(self.base_forms), len(self.pos), len(self.categories)}
        if len(sizes) != 1:
            raise ValueError(f"Sentence sequences differ in length: {sorted(sizes)}")

    @property
    def size(self) -> int:
        return len(self.words)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "words": [w.text for w in self.words],
            "base_forms": [w.text for w in self.base_forms],
            "pos": [p.text for p in self.pos],
            "categories": [c.text for c in self.categories],
        }
