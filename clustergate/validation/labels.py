"""Kubernetes label key validation for cluster autoscaler balancing."""

from __future__ import annotations

import re

from clustergate.constants import LABEL_NAME_MAX_LENGTH, LABEL_PREFIX_MAX_LENGTH
from clustergate.exceptions import LabelKeyError

_QUALIFIED_NAME_FMT = "([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9]"
_QUALIFIED_NAME_PATTERN = re.compile(_QUALIFIED_NAME_FMT)

_DNS1123_LABEL_FMT = "[a-z0-9]([-a-z0-9]*[a-z0-9])?"
_DNS1123_SUBDOMAIN_FMT = f"{_DNS1123_LABEL_FMT}(\\.{_DNS1123_LABEL_FMT})*"
_DNS1123_SUBDOMAIN_PATTERN = re.compile(_DNS1123_SUBDOMAIN_FMT)


def _label_key_errors(key: str) -> list[str]:
    """Collect every grammar violation of a label key."""
    errors: list[str] = []
    parts = key.split("/")

    if len(parts) == 1:
        name = parts[0]
    elif len(parts) == 2:
        prefix, name = parts
        if not prefix:
            errors.append("prefix part must be non-empty")
        elif len(prefix) > LABEL_PREFIX_MAX_LENGTH:
            errors.append(f"prefix part must be no more than {LABEL_PREFIX_MAX_LENGTH} characters")
        elif not _DNS1123_SUBDOMAIN_PATTERN.fullmatch(prefix):
            errors.append(
                "prefix part a lowercase RFC 1123 subdomain must consist of lower case "
                "alphanumeric characters, '-' or '.', and must start and end with an "
                f"alphanumeric character (regex used for validation is '{_DNS1123_SUBDOMAIN_FMT}')"
            )
    else:
        return [
            "a qualified name must consist of alphanumeric characters, '-', '_' or '.', "
            "and must start and end with an alphanumeric character with an optional "
            "DNS subdomain prefix and '/' (e.g. 'example.com/MyName')"
        ]

    if not name:
        errors.append("name part must be non-empty")
    elif len(name) > LABEL_NAME_MAX_LENGTH:
        errors.append(f"name part must be no more than {LABEL_NAME_MAX_LENGTH} characters")

    if name and not _QUALIFIED_NAME_PATTERN.fullmatch(name):
        errors.append(
            "name part must consist of alphanumeric characters, '-', '_' or '.', and must "
            "start and end with an alphanumeric character "
            f"(regex used for validation is '{_QUALIFIED_NAME_FMT}')"
        )

    return errors


def validate_label_key(key: str) -> None:
    """Validate a single Kubernetes label key.

    Parameters
    ----------
    key : str
        Label key, optionally prefixed with a DNS subdomain and '/'

    Raises
    ------
    LabelKeyError
        If key is not a valid qualified name
    """
    errors = _label_key_errors(key)
    if errors:
        raise LabelKeyError(f"Invalid label key '{key}': {'; '.join(errors)}")


def validate_balancing_ignored_labels(labels: str) -> list[str]:
    """Validate a comma-separated list of label keys ignored when balancing node groups.

    Parameters
    ----------
    labels : str
        Comma-separated label keys, or an empty string

    Returns
    -------
    list[str]
        Validated label keys

    Raises
    ------
    LabelKeyError
        If any label key is invalid
    """
    if labels == "":
        return []

    keys = labels.split(",")
    for key in keys:
        validate_label_key(key)

    return keys
