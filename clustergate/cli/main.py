"""CLI entry point for clustergate."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import fire

from clustergate.cli.parsing import (
    parse_bool_parameter,
    parse_disk_size_parameter,
    parse_labels_parameter,
    parse_list_parameter,
    parse_policy_document_parameter,
)
from clustergate.constants import EXIT_CONFIG_ERROR, EXIT_ERROR
from clustergate.core.config import ConfigLoader
from clustergate.logging import StreamFormatter, StreamRoutingFilter
from clustergate.providers import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)
from clustergate.providers.aws.iam import IAMRoleInspector
from clustergate.validation import (
    accepts_any,
    expected_issuer_key,
    parse_disk_size_to_gibibytes,
    validate_balancing_ignored_labels,
    validate_http_tokens_value,
    validate_issuer_url_matches_assume_policy_document,
    validate_issuer_url_matches_trust_policy,
    validate_subnets_count,
)

for _boto_module in ["botocore", "boto3", "urllib3"]:
    logging.getLogger(_boto_module).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


class ClusterGateCLI:
    """Validate cluster provisioning settings before calling the provider API.

    Parameters
    ----------
    config_loader : ConfigLoader | None
        Loader for cluster configuration files
    iam_inspector_factory : Callable[[str | None], IAMRoleInspector] | None
        Factory creating an IAMRoleInspector for a region
    """

    def __init__(
        self,
        config_loader: ConfigLoader | None = None,
        iam_inspector_factory: Callable[[str | None], IAMRoleInspector] | None = None,
    ) -> None:
        self._config_loader = config_loader or ConfigLoader()
        self._iam_inspector_factory = iam_inspector_factory or (
            lambda region: IAMRoleInspector(region=region)
        )

    def disk_size(self, size: Any) -> int:
        """Convert a disk size such as "300GiB" or "1 TB" to gibibytes.

        Parameters
        ----------
        size : Any
            Disk size with unit

        Returns
        -------
        int
            Size in gibibytes, 0 when no unit was given
        """
        return accepts_any(parse_disk_size_to_gibibytes)(parse_disk_size_parameter(size))

    def http_tokens(self, value: Any = "") -> str:
        """Validate an ec2-metadata-http-tokens value.

        Parameters
        ----------
        value : Any
            "required", "optional" or empty

        Returns
        -------
        str
            The validated value
        """
        accepts_any(validate_http_tokens_value)(value)
        return value

    def subnets(
        self,
        subnet_ids: str | list[Any] | tuple[Any, ...],
        multi_az: str | bool = False,
        private_link: str | bool = False,
    ) -> int:
        """Validate the number of subnets for a cluster topology.

        Parameters
        ----------
        subnet_ids : str | list[Any] | tuple[Any, ...]
            Comma-separated subnet ids
        multi_az : str | bool
            Whether the cluster spans multiple availability zones
        private_link : str | bool
            Whether the cluster only exposes private endpoints

        Returns
        -------
        int
            Number of subnets supplied
        """
        ids = parse_list_parameter(subnet_ids)
        validate_subnets_count(
            parse_bool_parameter("multi_az", multi_az),
            parse_bool_parameter("private_link", private_link),
            len(ids),
        )
        return len(ids)

    def labels(self, labels: Any = "") -> list[str]:
        """Validate label keys ignored when balancing node groups.

        Parameters
        ----------
        labels : Any
            Comma-separated label keys

        Returns
        -------
        list[str]
            Validated label keys
        """
        return accepts_any(validate_balancing_ignored_labels)(parse_labels_parameter(labels))

    def issuer(
        self,
        role_arn: str,
        issuer_url: str,
        policy_document: str | dict[str, Any] | None = None,
        region: str | None = None,
    ) -> str:
        """Check that an operator role trusts the cluster OIDC issuer.

        Parameters
        ----------
        role_arn : str
            ARN of the operator role
        issuer_url : str
            Cluster OIDC issuer URL
        policy_document : str | dict[str, Any] | None
            URL-encoded trust policy, or the JSON object Fire parsed from a
            pasted document. If None, the role is fetched from IAM
        region : str | None
            AWS region for the IAM client

        Returns
        -------
        str
            Issuer host and path the role trusts
        """
        if policy_document is not None:
            document = parse_policy_document_parameter(policy_document)
            if isinstance(document, str):
                validate_issuer_url_matches_assume_policy_document(role_arn, issuer_url, document)
            else:
                validate_issuer_url_matches_trust_policy(role_arn, issuer_url, document)
        else:
            self._iam_inspector_factory(region).validate_operator_role_trust(role_arn, issuer_url)

        logger.info(
            "Operator role %s trusts issuer %s",
            role_arn,
            issuer_url,
            extra={"stream": "stderr"},
        )
        return expected_issuer_key(issuer_url)

    def validate(
        self,
        cluster_name: str | None = None,
        config_path: str | None = None,
        check_roles: bool = False,
    ) -> dict[str, Any]:
        """Validate a cluster configuration file.

        Parameters
        ----------
        cluster_name : str | None
            Cluster section to validate, or None for defaults only
        config_path : str | None
            Path to the YAML file, defaults to CLUSTERGATE_CONFIG or clustergate.yaml
        check_roles : bool
            Also fetch operator roles from IAM and check their trust policies

        Returns
        -------
        dict[str, Any]
            Normalized configuration values

        Raises
        ------
        ValueError
            If the configuration is invalid or an operator role lacks trust
        """
        config = self._config_loader.load_config(config_path)
        cluster_config = self._config_loader.get_cluster_config(config, cluster_name)
        normalized = self._config_loader.validate_config(cluster_config)

        role_arns = cluster_config.get("operator_role_arns", [])
        if check_roles and role_arns:
            inspector = self._iam_inspector_factory(cluster_config.get("region"))
            failures = inspector.validate_operator_roles(
                role_arns, cluster_config["oidc_issuer_url"]
            )
            if failures:
                raise ValueError("\n".join(str(failure) for failure in failures))
            normalized["operator_roles_checked"] = len(role_arns)

        return normalized


def handle_credentials_error(debug_mode: bool) -> None:
    """Handle provider credentials error.

    Parameters
    ----------
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderCredentialsError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(
        "AWS credentials not found\n\n"
        "Configure your credentials:\n"
        "  aws configure\n\n"
        "Or set environment variables:\n"
        "  export AWS_ACCESS_KEY_ID=...\n"
        "  export AWS_SECRET_ACCESS_KEY=...",
        file=sys.stderr,
    )
    sys.exit(EXIT_ERROR)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle validation and configuration errors.

    Parameters
    ----------
    error : ValueError
        The value error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Validation error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_api_error(error: ProviderAPIError, debug_mode: bool) -> None:
    """Handle provider API error with context-specific messages.

    Parameters
    ----------
    error : ProviderAPIError
        The API error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderAPIError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    if error.error_code == "NoSuchEntity":
        print(f"Operator role not found: {error}", file=sys.stderr)
    elif error.error_code == "AccessDenied":
        print("Insufficient IAM permissions\n", file=sys.stderr)
        print("Your credentials need iam:GetRole on the operator roles.", file=sys.stderr)
    elif error.error_code in ["ExpiredToken", "RequestExpired", "ExpiredTokenException"]:
        print("Cloud credentials have expired\n", file=sys.stderr)
        print("Fix it:", file=sys.stderr)
        print("  aws sso login           # If using AWS SSO", file=sys.stderr)
        print("  aws configure           # Re-configure credentials", file=sys.stderr)
    else:
        print(f"Cloud API error: {error}", file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_connection_error(error: ProviderConnectionError, debug_mode: bool) -> None:
    """Handle provider connectivity error.

    Parameters
    ----------
    error : ProviderConnectionError
        The connection error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderConnectionError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Could not reach AWS: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def configure_logging(debug_mode: bool) -> None:
    """Route log records to stdout or stderr based on their stream extra.

    Parameters
    ----------
    debug_mode : bool
        Log at DEBUG level and tag each line with its stream
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(StreamFormatter("%(message)s", tag_streams=debug_mode))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StreamFormatter("%(message)s", tag_streams=debug_mode))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.INFO,
        handlers=[stdout_handler, stderr_handler],
    )


def main() -> None:
    """Entry point for Fire CLI with graceful error handling.

    Notes
    -----
    Fire maps ClusterGateCLI methods to commands, e.g.
    ``clustergate disk_size "100 GiB"`` or ``clustergate validate --check_roles``.
    """
    debug_mode = os.environ.get("CLUSTERGATE_DEBUG") == "1"
    configure_logging(debug_mode)

    try:
        fire.Fire(ClusterGateCLI())
    except ProviderCredentialsError:
        handle_credentials_error(debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except ProviderAPIError as e:
        handle_api_error(e, debug_mode)
    except ProviderConnectionError as e:
        handle_connection_error(e, debug_mode)
