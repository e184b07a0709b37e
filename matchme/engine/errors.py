"""Engine error types."""

from __future__ import annotations

from pydantic import ValidationError


class InvalidInputError(ValueError):
    """Caller passed structurally invalid data to the engine."""


def invalid_input_from(exc: ValidationError, what: str) -> InvalidInputError:
    """Wrap a pydantic validation failure into an ``InvalidInputError``."""
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", str(exc))
    return InvalidInputError(f"Invalid {what}: {loc}: {msg}" if loc else f"Invalid {what}: {msg}")
