"""Failure types raised by the file map."""

from __future__ import annotations


class InvariantViolationError(AssertionError):
    """Raised when stored metadata breaks the snapshot contract."""


class UnsupportedOperationError(NotImplementedError):
    """Raised by operations the file map deliberately does not provide."""


def invariant(condition: object, message: str) -> None:
    """Raise InvariantViolationError when condition is falsy.

    Unlike ``assert`` this check survives ``python -O``.
    """
    if not condition:
        raise InvariantViolationError(message)
