# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by http-message."""

from __future__ import annotations

__all__ = ["InvalidArgument", "StreamClosedError", "describe_type"]


def describe_type(value: object) -> str:
    """Return the type name used in argument error messages.

    Returns:
        ``"None"`` for ``None``, otherwise the qualified name of the value's type.

    """
    if value is None:
        return "None"
    return type(value).__qualname__


class InvalidArgument(TypeError, ValueError):
    """A public operation received a value of the wrong type or shape.

    Subclasses both ``TypeError`` and ``ValueError`` so callers catching
    either builtin still see it.
    """

    @classmethod
    def create(cls, position: int, name: str, expected: str, received: str) -> InvalidArgument:
        """Build the standard argument error.

        Args:
            position: 1-based position of the offending argument.
            name: Parameter name.
            expected: Human-readable description of the accepted type(s).
            received: Type name of the value actually passed
                (see :func:`describe_type`).

        Returns:
            ``InvalidArgument("Argument #1 (name) must be of type str, int given")``

        """
        return cls(f"Argument #{position} ({name}) must be of type {expected}, {received} given")


class StreamClosedError(RuntimeError):
    """Operation attempted on a stream whose buffer has been released."""
