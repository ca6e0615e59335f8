"""CLI argument parsing and parameter conversion utilities.

Fire converts arguments that look like literals, so "100" arrives as an
int and "a,b" as a tuple. These helpers turn them back into the strings
the validators expect.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from clustergate.exceptions import InvalidInputTypeError


def parse_disk_size_parameter(size: Any) -> Any:
    """Convert a Fire-parsed disk size back to its string form.

    Parameters
    ----------
    size : Any
        Disk size as typed, possibly converted to int by Fire

    Returns
    -------
    Any
        String for numeric input, the value unchanged otherwise
    """
    if isinstance(size, int) and not isinstance(size, bool):
        return str(size)
    return size


def parse_list_parameter(value: str | list[Any] | tuple[Any, ...]) -> list[str]:
    """Parse a comma-separated parameter into a list of strings.

    Parameters
    ----------
    value : str | list[Any] | tuple[Any, ...]
        Comma-separated string, list or tuple

    Returns
    -------
    list[str]
        Non-empty, stripped entries
    """
    if isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        items = str(value).split(",")

    return [item.strip() for item in items if item.strip()]


def parse_labels_parameter(labels: Any) -> Any:
    """Join a Fire-split label list back into the comma-separated form.

    Parameters
    ----------
    labels : Any
        Label keys as typed, possibly split into a tuple by Fire

    Returns
    -------
    Any
        Comma-separated string for list input, the value unchanged otherwise
    """
    if isinstance(labels, (list, tuple)):
        return ",".join(str(label) for label in labels)
    return labels


def parse_policy_document_parameter(document: Any) -> str | Mapping[str, Any]:
    """Accept a trust policy either encoded or already parsed by Fire.

    Fire turns a pasted JSON object into a dict, while URL-encoded text
    stays a string.

    Parameters
    ----------
    document : Any
        Trust policy as typed on the command line

    Returns
    -------
    str | Mapping[str, Any]
        The document unchanged

    Raises
    ------
    InvalidInputTypeError
        If the document is neither a string nor a JSON object
    """
    if isinstance(document, (str, Mapping)):
        return document

    raise InvalidInputTypeError(
        f"policy_document must be an encoded string or a JSON object, got {document!r}"
    )


def parse_bool_parameter(name: str, value: str | bool) -> bool:
    """Parse a boolean flag that may arrive as a string.

    Parameters
    ----------
    name : str
        Flag name used in the error message
    value : str | bool
        Boolean or "true"/"false" string

    Returns
    -------
    bool
        Parsed value

    Raises
    ------
    ValueError
        If string value is not "true" or "false"
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        value_lower = value.lower()

        if value_lower not in ("true", "false"):
            raise ValueError(f"{name} must be 'true' or 'false', got: {value}")

        return value_lower == "true"

    raise ValueError(f"Unexpected type for {name}: {type(value)}")


__all__ = [
    "parse_disk_size_parameter",
    "parse_list_parameter",
    "parse_labels_parameter",
    "parse_policy_document_parameter",
    "parse_bool_parameter",
]
