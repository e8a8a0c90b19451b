"""
Generic binary-branching parse trees.

A tree is built from three node shapes: LeafTree, UnaryTree and BinaryTree.
Labels are arbitrary (raw strings straight from a treebank, or NodeLabel
objects after labeling). Each node can additionally carry a Span once
set_spans() has been run on the root.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from .errors import InternalConsistencyError

T = TypeVar('T')
U = TypeVar('U')


@dataclass(frozen=True)
class Span:
    """Half-open range [begin, end) over leaf positions."""
    begin: int
    end: int

    def __post_init__(self):
        if self.begin < 0 or self.begin > self.end:
            raise InternalConsistencyError(f"Invalid span ({self.begin}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.begin


class ParseTree(ABC, Generic[T]):
    """Base class of the three node shapes."""

    def __init__(self, label: T):
        self.label = label
        self.span: Optional[Span] = None

    @property
    def children(self) -> List['ParseTree[T]']:
        return []

    @property
    def is_leaf(self) -> bool:
        return False

    @abstractmethod
    def map_bottomup(self, fn: Callable[['ParseTree[T]'], U]) -> 'ParseTree[U]':
        """
        Build a tree of the same shape with new labels.

        Children are mapped first; `fn` is then called with the original node
        and returns the label of the new node.
        """

    def leaves(self) -> List['ParseTree[T]']:
        """Leaf nodes in left-to-right order."""
        result = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                result.append(node)
            else:
                stack.extend(reversed(node.children))
        return result

    def nodes(self) -> Iterator['ParseTree[T]']:
        """All nodes in post-order (children before parents)."""
        for child in self.children:
            yield from child.nodes()
        yield self

    @abstractmethod
    def set_spans(self, start: int = 0) -> int:
        """
        Assign spans to this node and every descendant.

        The k-th leaf from `start` gets (start + k, start + k + 1); interior
        nodes cover their children. Returns the position after the last leaf.
        """

    def to_bracketed(self, show_spans: bool = False) -> str:
        inner = str(self.label)
        if show_spans and self.span is not None:
            inner = f"{inner} @{self.span.begin},{self.span.end}"
        parts = [inner] + [child.to_bracketed(show_spans) for child in self.children]
        return "(" + " ".join(parts) + ")"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_bracketed()})"


class LeafTree(ParseTree[T]):

    @property
    def is_leaf(self) -> bool:
        return True

    def map_bottomup(self, fn):
        return LeafTree(fn(self))

    def set_spans(self, start: int = 0) -> int:
        self.span = Span(start, start + 1)
        return start + 1


class UnaryTree(ParseTree[T]):

    def __init__(self, child: ParseTree[T], label: T):
        super().__init__(label)
        self.child = child

    @property
    def children(self) -> List[ParseTree[T]]:
        return [self.child]

    def map_bottomup(self, fn):
        child = self.child.map_bottomup(fn)
        return UnaryTree(child, fn(self))

    def set_spans(self, start: int = 0) -> int:
        end = self.child.set_spans(start)
        self.span = self.child.span
        return end


class BinaryTree(ParseTree[T]):

    def __init__(self, left: ParseTree[T], right: ParseTree[T], label: T):
        super().__init__(label)
        self.left = left
        self.right = right

    @property
    def children(self) -> List[ParseTree[T]]:
        return [self.left, self.right]

    def map_bottomup(self, fn):
        left = self.left.map_bottomup(fn)
        right = self.right.map_bottomup(fn)
        return BinaryTree(left, right, fn(self))

    def set_spans(self, start: int = 0) -> int:
        middle = self.left.set_spans(start)
        # the right child starts where the left one ends, so the two are adjacent
        end = self.right.set_spans(middle)
        self.span = Span(self.left.span.begin, self.right.span.end)
        return end
