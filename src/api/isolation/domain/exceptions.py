"""Domain exceptions for the Isolation bounded context.

There is a single error kind. It is raised when an identifier is malformed,
when a context would violate the hierarchy rules, or when a transition is
attempted without its hierarchy prerequisites. Callers decide how to surface
it (reject a header, fall back to a default context, return a 400).
"""

from __future__ import annotations

from typing import Any


class IsolationValidationError(ValueError):
    """Raised when isolation data violates a validation rule.

    Attributes:
        message: Human readable description of the violation.
        code: Stable machine-readable code naming the violated rule.
        details: Offending values and flags useful for building messages.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"IsolationValidationError(code={self.code!r}, message={self.message!r})"
