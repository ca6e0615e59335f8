"""Validation errors raised by clustergate.

Every error subclasses ``ValidationError``, which is a ``ValueError`` so that
callers treating invalid configuration as a value error keep working.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Base class for client-side validation failures."""


class FormatError(ValidationError):
    """Input does not match the accepted grammar."""


class RangeError(ValidationError):
    """Numeric overflow while parsing or converting input."""


class SemanticMismatchError(ValidationError):
    """Well-formed input that fails a domain rule."""


class InvalidInputTypeError(ValidationError, TypeError):
    """Input is not of the expected representation."""


class DiskSizeFormatError(FormatError):
    """Disk size string has an unknown unit or a malformed magnitude."""


class DiskSizeRangeError(RangeError):
    """Disk size does not fit in a signed 64-bit integer."""


class PolicyDocumentError(FormatError):
    """Trust policy document cannot be decoded or lacks a federated principal."""


class LabelKeyError(FormatError):
    """Label key is not a valid Kubernetes qualified name."""


class HttpTokensError(SemanticMismatchError):
    """EC2 metadata HTTP tokens value is not a known mode."""


class IssuerMismatchError(SemanticMismatchError):
    """Operator role does not trust the expected OIDC issuer.

    Parameters
    ----------
    operator_role_arn : str
        ARN of the operator role that was checked
    issuer : str
        Expected issuer host, followed by its path when it has one
    """

    def __init__(self, operator_role_arn: str, issuer: str) -> None:
        self.operator_role_arn = operator_role_arn
        self.issuer = issuer
        super().__init__(
            f"Operator role '{operator_role_arn}' does not have trusted "
            f"relationship to '{issuer}' issuer URL"
        )


class SubnetCountError(SemanticMismatchError):
    """Number of subnets does not match the cluster topology.

    Parameters
    ----------
    az_mode : str
        Availability zone phrase, "multi-AZ" or "single AZ"
    link_mode : str
        Topology phrase, "private link cluster" or "cluster"
    expected : int
        Number of subnets the topology requires
    received : int
        Number of subnets supplied
    """

    def __init__(self, az_mode: str, link_mode: str, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"The number of subnets for a '{az_mode}' '{link_mode}' should be "
            f"'{expected}', instead received: '{received}'"
        )
