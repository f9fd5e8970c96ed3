"""Error classification: decide whether a failure is a cancellation.

Classification is shape based, not type based. A value counts as a
cancellation when it matches one of the recognized shapes:

- a ``name`` attribute (or mapping key) equal to ``"AbortError"``
- a numeric ``code`` attribute (or mapping key) equal to ``20``

Anything else, including ``None``, primitives and ordinary exceptions,
is not a cancellation.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import Any

ABORT_ERROR_NAME = "AbortError"
"""Recognized cancellation marker name."""

ABORT_ERROR_CODE = 20
"""Well-known abort code (DOMException.ABORT_ERR)."""

_MISSING = object()


def _field(value: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an attribute."""
    if isinstance(value, Mapping):
        return value.get(name, _MISSING)
    return getattr(value, name, _MISSING)


def is_cancellation(value: object) -> bool:
    """Check whether a raised value represents a cancellation or timeout.

    Args:
        value: Any raised/rejected value

    Returns:
        True if the value has a recognized cancellation shape
    """
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return False

    try:
        name = _field(value, "name")
        if isinstance(name, str) and name == ABORT_ERROR_NAME:
            return True

        code = _field(value, "code")
        if isinstance(code, Real) and not isinstance(code, bool):
            return bool(code == ABORT_ERROR_CODE)
    except Exception:
        return False

    return False
