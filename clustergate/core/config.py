"""Cluster configuration loading and validation."""

import copy
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

from clustergate.constants import DEFAULT_REGION
from clustergate.exceptions import InvalidInputTypeError
from clustergate.validation import (
    accepts_any,
    parse_disk_size_to_gibibytes,
    validate_balancing_ignored_labels,
    validate_http_tokens_value,
    validate_subnets_count,
)

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load, merge and validate YAML cluster configuration."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = {
            "region": DEFAULT_REGION,
            "multi_az": False,
            "private_link": False,
            "subnet_ids": [],
            "ec2_metadata_http_tokens": "",
            "worker_disk_size": "",
            "balancing_ignored_labels": "",
            "oidc_issuer_url": None,
            "operator_role_arns": [],
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks CLUSTERGATE_CONFIG env var,
            then falls back to clustergate.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with defaults and clusters sections,
            with all variable interpolations resolved

        Raises
        ------
        omegaconf.errors.InterpolationResolutionError
            If undefined variables are referenced or circular references exist
        """
        if config_path is None:
            config_path = os.environ.get("CLUSTERGATE_CONFIG", "clustergate.yaml")

        config_file = Path(config_path)

        if not config_file.exists():
            logger.debug("Config file %s not found, using built-in defaults", config_file)
            return {"defaults": {}}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {"defaults": {}}

        if "vars" in cfg:
            vars_dict = OmegaConf.to_container(cfg.vars, resolve=False)
            for key, value in vars_dict.items():
                if key not in cfg:
                    cfg[key] = value

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise
        except (ValueError, KeyError, AttributeError) as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        return config

    def get_cluster_config(
        self, config: dict[str, Any], cluster_name: str | None = None
    ) -> dict[str, Any]:
        """Get merged configuration for a specific cluster or defaults.

        Parameters
        ----------
        config : dict[str, Any]
            Full configuration from YAML
        cluster_name : str | None
            Name of cluster configuration to use, or None for defaults only

        Returns
        -------
        dict[str, Any]
            Merged configuration (built-in defaults + YAML defaults + cluster settings)
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        yaml_defaults = config.get("defaults") or {}
        for key, value in yaml_defaults.items():
            merged[key] = value

        if cluster_name is not None:
            clusters = config.get("clusters") or {}

            if cluster_name not in clusters:
                available = list(clusters.keys())

                if not available:
                    raise ValueError(
                        f"Cluster '{cluster_name}' not found in configuration. "
                        f"No clusters are defined in the config file."
                    )

                raise ValueError(
                    f"Cluster '{cluster_name}' not found in configuration. "
                    f"Available clusters: {available}"
                )

            for key, value in (clusters[cluster_name] or {}).items():
                merged[key] = value

        return merged

    def validate_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Validate cluster configuration and return normalized values.

        Parameters
        ----------
        config : dict[str, Any]
            Merged cluster configuration

        Returns
        -------
        dict[str, Any]
            Normalized values: worker_disk_size_gib, subnet_count,
            balancing_ignored_labels and ec2_metadata_http_tokens

        Raises
        ------
        ValueError
            If configuration is invalid
        """
        self._validate_field_types(config)

        normalized: dict[str, Any] = {}

        http_tokens = config.get("ec2_metadata_http_tokens", "")
        self._run_validator("ec2_metadata_http_tokens", validate_http_tokens_value, http_tokens)
        normalized["ec2_metadata_http_tokens"] = http_tokens

        normalized["worker_disk_size_gib"] = self._run_validator(
            "worker_disk_size",
            parse_disk_size_to_gibibytes,
            config.get("worker_disk_size", ""),
        )

        normalized["balancing_ignored_labels"] = self._run_validator(
            "balancing_ignored_labels",
            validate_balancing_ignored_labels,
            config.get("balancing_ignored_labels", ""),
        )

        normalized["subnet_count"] = self._validate_subnets(config)

        self._validate_oidc(config)

        return normalized

    def _run_validator(self, field: str, validator: Callable[[str], Any], value: Any) -> Any:
        """Run a string validator on a configuration value of unknown type."""
        try:
            return accepts_any(validator)(value)
        except InvalidInputTypeError as e:
            raise InvalidInputTypeError(f"{field}: {e}") from e

    def _validate_field_types(self, config: dict[str, Any]) -> None:
        """Validate configuration field types.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If a field has the wrong type
        """
        if not config.get("region"):
            raise ValueError("region is required")

        field_types = {
            "region": (str, "region must be a string"),
            "multi_az": (bool, "multi_az must be a boolean"),
            "private_link": (bool, "private_link must be a boolean"),
            "subnet_ids": (list, "subnet_ids must be a list"),
            "operator_role_arns": (list, "operator_role_arns must be a list"),
        }

        for field, (expected_type, type_msg) in field_types.items():
            if field in config and not isinstance(config[field], expected_type):
                raise ValueError(type_msg)

        for field in ("subnet_ids", "operator_role_arns"):
            for item in config.get(field, []):
                if not isinstance(item, str):
                    raise ValueError(f"{field} entries must be strings")

    def _validate_subnets(self, config: dict[str, Any]) -> int:
        """Validate subnet count when subnets are supplied or required.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Returns
        -------
        int
            Number of distinct subnets supplied

        Raises
        ------
        ValueError
            If subnet ids are duplicated or their number does not fit the topology
        """
        subnet_ids = config.get("subnet_ids", [])
        private_link = config.get("private_link", False)

        if len(set(subnet_ids)) != len(subnet_ids):
            raise ValueError("subnet_ids must not contain duplicates")

        if not subnet_ids and not private_link:
            return 0

        validate_subnets_count(config.get("multi_az", False), private_link, len(subnet_ids))
        return len(subnet_ids)

    def _validate_oidc(self, config: dict[str, Any]) -> None:
        """Validate OIDC issuer and operator role settings.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If operator roles are configured without a valid issuer URL
        """
        issuer_url = config.get("oidc_issuer_url")
        operator_role_arns = config.get("operator_role_arns", [])

        if issuer_url is None:
            if operator_role_arns:
                raise ValueError("operator_role_arns requires oidc_issuer_url to be set")
            return

        if not isinstance(issuer_url, str):
            raise ValueError("oidc_issuer_url must be a string")

        parsed = urlsplit(issuer_url)
        if parsed.scheme != "https" or not parsed.netloc:
            raise ValueError(f"oidc_issuer_url must be an https URL, got '{issuer_url}'")
