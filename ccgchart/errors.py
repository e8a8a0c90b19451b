"""
Exceptions raised while converting treebank trees.

Two kinds of failure are distinguished:
- FormatError: a token does not match the selected treebank dialect.
- InternalConsistencyError: a tree violates a structural invariant
  (spans, leaf labels) that upstream code should have guaranteed.
"""


class ConversionError(Exception):
    """Base class for every error raised by ccgchart."""


class FormatError(ConversionError, ValueError):
    """A terminal, nonterminal or bracketed tree string is malformed."""

    def __init__(self, message: str, token: str = None):
        if token is not None:
            message = f"{message}: {token}"
        super().__init__(message)
        self.token = token


class InternalConsistencyError(ConversionError, RuntimeError):
    """A tree handed to the converter breaks a span or label invariant."""


class ArgumentError(ConversionError):
    """Invalid or missing configuration options."""
