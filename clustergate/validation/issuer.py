"""Operator role trust policy checks against the cluster OIDC issuer.

Operator roles are assumed through web identity federation. The first
statement of a role's trust policy names the OIDC provider as its federated
principal, e.g.::

    arn:aws:iam::123456789012:oidc-provider/oidc.example.com/1a2b3c

The provider path after ``oidc-provider/`` must equal the issuer host, plus
the issuer path when the installer generated one.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import SplitResult, unquote, urlsplit

from clustergate.exceptions import IssuerMismatchError, PolicyDocumentError

logger = logging.getLogger(__name__)

OIDC_PROVIDER_MARKER = "oidc-provider/"


@dataclass(frozen=True)
class TrustPolicyStatement:
    """Single statement of an IAM trust policy."""

    effect: str | None = None
    action: Any = None
    principal: dict[str, Any] = field(default_factory=dict)
    condition: dict[str, Any] = field(default_factory=dict)

    @property
    def federated_principal(self) -> str | None:
        federated = self.principal.get("Federated")
        return federated if isinstance(federated, str) else None


@dataclass(frozen=True)
class TrustPolicyDocument:
    """Decoded IAM trust (assume role) policy document."""

    version: str | None
    statements: list[TrustPolicyStatement]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrustPolicyDocument:
        """Build a document from its JSON structure.

        Parameters
        ----------
        data : Mapping[str, Any]
            Decoded policy JSON

        Returns
        -------
        TrustPolicyDocument
            Parsed document

        Raises
        ------
        PolicyDocumentError
            If the structure is not a policy document
        """
        if not isinstance(data, Mapping):
            raise PolicyDocumentError("Trust policy document must be a JSON object")

        raw_statements = data.get("Statement", [])
        if isinstance(raw_statements, Mapping):
            raw_statements = [raw_statements]
        if not isinstance(raw_statements, list):
            raise PolicyDocumentError("Trust policy 'Statement' must be a list")

        statements = []
        for raw in raw_statements:
            if not isinstance(raw, Mapping):
                raise PolicyDocumentError("Trust policy statements must be JSON objects")
            principal = raw.get("Principal") or {}
            condition = raw.get("Condition") or {}
            if not isinstance(principal, Mapping) or not isinstance(condition, Mapping):
                raise PolicyDocumentError(
                    "Trust policy 'Principal' and 'Condition' must be JSON objects"
                )
            statements.append(
                TrustPolicyStatement(
                    effect=raw.get("Effect"),
                    action=raw.get("Action"),
                    principal=dict(principal),
                    condition=dict(condition),
                )
            )

        return cls(version=data.get("Version"), statements=statements)

    @property
    def federated_principal(self) -> str:
        """Federated principal ARN of the first statement.

        Raises
        ------
        PolicyDocumentError
            If there is no statement or it has no federated principal
        """
        if not self.statements:
            raise PolicyDocumentError("Trust policy document has no statements")

        federated = self.statements[0].federated_principal
        if federated is None:
            raise PolicyDocumentError(
                "Trust policy document has no federated principal in its first statement"
            )
        return federated


def decode_trust_policy(encoded_document: str) -> TrustPolicyDocument:
    """Percent-decode and parse a trust policy document as returned by IAM.

    Parameters
    ----------
    encoded_document : str
        URL-encoded JSON policy document

    Returns
    -------
    TrustPolicyDocument
        Parsed document

    Raises
    ------
    PolicyDocumentError
        If the document is not valid JSON
    """
    try:
        data = json.loads(unquote(encoded_document))
    except json.JSONDecodeError as e:
        raise PolicyDocumentError(f"Failed to decode trust policy document: {e}") from e

    return TrustPolicyDocument.from_dict(data)


def issuer_from_federated_principal(federated_arn: str) -> str:
    """Extract the OIDC issuer identifier from a federated principal ARN.

    Parameters
    ----------
    federated_arn : str
        ARN such as "arn:aws:iam::123456789012:oidc-provider/oidc.example.com"

    Returns
    -------
    str
        Issuer host and path, e.g. "oidc.example.com"

    Raises
    ------
    PolicyDocumentError
        If the ARN does not reference an OIDC provider
    """
    _, marker, issuer = federated_arn.partition(OIDC_PROVIDER_MARKER)
    if not marker:
        raise PolicyDocumentError(
            f"Federated principal '{federated_arn}' is not an OIDC provider ARN"
        )
    return issuer


def expected_issuer_key(issuer_url: str | SplitResult) -> str:
    """Build the issuer identifier an operator role must trust.

    Parameters
    ----------
    issuer_url : str | SplitResult
        Cluster OIDC issuer URL

    Returns
    -------
    str
        Host when the URL has no path, host followed by path otherwise
    """
    parsed = urlsplit(issuer_url) if isinstance(issuer_url, str) else issuer_url
    host = parsed.netloc.rpartition("@")[2]
    if not parsed.path:
        return host
    return host + parsed.path


def validate_issuer_url_matches_trust_policy(
    operator_role_arn: str,
    issuer_url: str | SplitResult,
    document: TrustPolicyDocument | Mapping[str, Any],
) -> None:
    """Validate that a decoded trust policy trusts the expected issuer.

    Parameters
    ----------
    operator_role_arn : str
        ARN of the operator role owning the policy
    issuer_url : str | SplitResult
        Cluster OIDC issuer URL
    document : TrustPolicyDocument | Mapping[str, Any]
        Decoded trust policy

    Raises
    ------
    PolicyDocumentError
        If the policy has no OIDC federated principal
    IssuerMismatchError
        If the federated principal references another issuer
    """
    if not isinstance(document, TrustPolicyDocument):
        document = TrustPolicyDocument.from_dict(document)

    trusted_issuer = issuer_from_federated_principal(document.federated_principal)
    expected_issuer = expected_issuer_key(issuer_url)

    if trusted_issuer != expected_issuer:
        logger.debug(
            "Operator role %s trusts issuer %s, expected %s",
            operator_role_arn,
            trusted_issuer,
            expected_issuer,
        )
        raise IssuerMismatchError(operator_role_arn, expected_issuer)


def validate_issuer_url_matches_assume_policy_document(
    operator_role_arn: str,
    issuer_url: str | SplitResult,
    policy_document: str,
) -> None:
    """Validate that an encoded assume role policy trusts the expected issuer.

    Parameters
    ----------
    operator_role_arn : str
        ARN of the operator role owning the policy
    issuer_url : str | SplitResult
        Cluster OIDC issuer URL
    policy_document : str
        URL-encoded JSON trust policy

    Raises
    ------
    PolicyDocumentError
        If the document cannot be decoded
    IssuerMismatchError
        If the federated principal references another issuer
    """
    validate_issuer_url_matches_trust_policy(
        operator_role_arn, issuer_url, decode_trust_policy(policy_document)
    )
