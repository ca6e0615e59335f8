"""Adaptors between loosely typed inputs and the string validators."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from clustergate.exceptions import InvalidInputTypeError

T = TypeVar("T")


def require_string(value: Any) -> str:
    """Return value unchanged if it is a string.

    Parameters
    ----------
    value : Any
        Value taken from a flag, prompt or configuration file

    Returns
    -------
    str
        The same value

    Raises
    ------
    InvalidInputTypeError
        If value is not a string
    """
    if not isinstance(value, str):
        raise InvalidInputTypeError(f"can only validate strings, got {value!r}")
    return value


def accepts_any(validator: Callable[[str], T]) -> Callable[[Any], T]:
    """Wrap a string validator so it can be handed an arbitrary value.

    Parameters
    ----------
    validator : Callable[[str], T]
        Validator taking a string

    Returns
    -------
    Callable[[Any], T]
        Validator that type-checks its argument before delegating
    """

    def validate(value: Any) -> T:
        return validator(require_string(value))

    validate.__name__ = validator.__name__
    validate.__doc__ = validator.__doc__
    return validate
