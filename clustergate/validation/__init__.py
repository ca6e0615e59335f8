"""Client-side validators for cluster provisioning settings."""

from __future__ import annotations

from clustergate.validation.adapters import accepts_any, require_string
from clustergate.validation.disk import parse_disk_size_to_gibibytes
from clustergate.validation.issuer import (
    TrustPolicyDocument,
    decode_trust_policy,
    expected_issuer_key,
    validate_issuer_url_matches_assume_policy_document,
    validate_issuer_url_matches_trust_policy,
)
from clustergate.validation.labels import validate_balancing_ignored_labels, validate_label_key
from clustergate.validation.metadata import validate_http_tokens_value
from clustergate.validation.network import expected_subnets_count, validate_subnets_count

__all__ = [
    "accepts_any",
    "require_string",
    "parse_disk_size_to_gibibytes",
    "TrustPolicyDocument",
    "decode_trust_policy",
    "expected_issuer_key",
    "validate_issuer_url_matches_assume_policy_document",
    "validate_issuer_url_matches_trust_policy",
    "validate_balancing_ignored_labels",
    "validate_label_key",
    "validate_http_tokens_value",
    "expected_subnets_count",
    "validate_subnets_count",
]
