"""IAM lookups for operator role trust checks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any
from urllib.parse import SplitResult

import boto3

from clustergate.providers.exceptions import ProviderAPIError
from clustergate.providers.aws.errors import handle_aws_errors
from clustergate.validation.issuer import (
    validate_issuer_url_matches_assume_policy_document,
    validate_issuer_url_matches_trust_policy,
)

logger = logging.getLogger(__name__)


def role_name_from_arn(role_arn: str) -> str:
    """Extract the role name from an IAM role ARN.

    Roles created under a path ("role/openshift/name") resolve to their
    last segment, which is what ``get_role`` expects.

    Parameters
    ----------
    role_arn : str
        ARN such as "arn:aws:iam::123456789012:role/my-role"

    Returns
    -------
    str
        Role name

    Raises
    ------
    ValueError
        If role_arn is not an IAM role ARN
    """
    parts = role_arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn" or parts[2] != "iam":
        raise ValueError(f"Invalid IAM role ARN: '{role_arn}'")

    resource = parts[5]
    if not resource.startswith("role/") or resource.endswith("/"):
        raise ValueError(f"Invalid IAM role ARN: '{role_arn}'")

    return resource.rsplit("/", 1)[-1]


class IAMRoleInspector:
    """Fetch operator roles from IAM and check their trust policies.

    Parameters
    ----------
    boto3_client_factory : Callable[..., Any] | None
        Factory used to create the IAM client, defaults to boto3.client
    region : str | None
        AWS region passed to the client factory
    """

    def __init__(
        self,
        boto3_client_factory: Callable[..., Any] | None = None,
        region: str | None = None,
    ) -> None:
        self.boto3_client_factory = boto3_client_factory or boto3.client
        self.region = region
        self._iam_client: Any = None

    @property
    def iam_client(self) -> Any:
        if self._iam_client is None:
            self._iam_client = self.boto3_client_factory("iam", region_name=self.region)
        return self._iam_client

    def get_assume_role_policy_document(self, role_arn: str) -> str | dict[str, Any]:
        """Fetch the trust policy of a role.

        Parameters
        ----------
        role_arn : str
            ARN of the role

        Returns
        -------
        str | dict[str, Any]
            Policy as returned by the SDK: botocore decodes it into a dict,
            raw API responses carry it URL-encoded

        Raises
        ------
        ProviderAPIError
            If the role does not exist or cannot be read
        """
        role_name = role_name_from_arn(role_arn)

        with handle_aws_errors():
            response = self.iam_client.get_role(RoleName=role_name)

        return response["Role"]["AssumeRolePolicyDocument"]

    def validate_operator_role_trust(self, role_arn: str, issuer_url: str | SplitResult) -> None:
        """Validate that an operator role trusts the cluster OIDC issuer.

        Parameters
        ----------
        role_arn : str
            ARN of the operator role
        issuer_url : str | SplitResult
            Cluster OIDC issuer URL

        Raises
        ------
        IssuerMismatchError
            If the role trusts another issuer
        PolicyDocumentError
            If the role's trust policy has no OIDC federated principal
        ProviderAPIError
            If the role cannot be fetched
        """
        document = self.get_assume_role_policy_document(role_arn)

        if isinstance(document, str):
            validate_issuer_url_matches_assume_policy_document(role_arn, issuer_url, document)
        else:
            validate_issuer_url_matches_trust_policy(role_arn, issuer_url, document)

        logger.debug("Operator role %s trusts issuer %s", role_arn, issuer_url)

    def validate_operator_roles(
        self, role_arns: Iterable[str], issuer_url: str | SplitResult
    ) -> list[ValueError | ProviderAPIError]:
        """Check every operator role and collect failures.

        A role that cannot be fetched, has no OIDC federated principal or
        trusts another issuer is reported without stopping the sweep.
        Credential and connection errors still propagate.

        Parameters
        ----------
        role_arns : Iterable[str]
            ARNs of the operator roles
        issuer_url : str | SplitResult
            Cluster OIDC issuer URL

        Returns
        -------
        list[ValueError | ProviderAPIError]
            One entry per failing role: IssuerMismatchError, PolicyDocumentError,
            ValueError for a malformed ARN, or ProviderAPIError
        """
        failures: list[ValueError | ProviderAPIError] = []

        for role_arn in role_arns:
            try:
                self.validate_operator_role_trust(role_arn, issuer_url)
            except (ValueError, ProviderAPIError) as e:
                logger.warning("Operator role %s: %s", role_arn, e)
                failures.append(e)

        return failures
