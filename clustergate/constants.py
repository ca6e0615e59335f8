"""Global constants for clustergate.

This module contains values shared by the validators, the configuration
loader and the CLI.
"""

from enum import Enum

MAX_INT64 = 2**63 - 1
"""Largest value of a signed 64-bit integer.

Disk sizes are submitted to the provider API as 64-bit integers, so both the
parsed magnitude and its byte count must stay within this bound.
"""

BYTES_PER_GIBIBYTE = 1024**3
"""Number of bytes in one gibibyte, the unit the provider API expects."""

DISK_SIZE_UNITS = {
    "g": 1000**3,
    "gb": 1000**3,
    "gi": 1024**3,
    "gib": 1024**3,
    "t": 1000**4,
    "tb": 1000**4,
    "ti": 1024**4,
    "tib": 1024**4,
}
"""Accepted disk size unit suffixes (lowercase) and their size in bytes."""

PRIVATE_LINK_MULTI_AZ_SUBNETS_COUNT = 3
"""Subnets required by a multi-AZ private link cluster (one private subnet per zone)."""

PRIVATE_LINK_SINGLE_AZ_SUBNETS_COUNT = 1
"""Subnets required by a single AZ private link cluster."""

BYO_VPC_MULTI_AZ_SUBNETS_COUNT = 6
"""Subnets required by a multi-AZ cluster in an existing VPC (public and private per zone)."""

BYO_VPC_SINGLE_AZ_SUBNETS_COUNT = 2
"""Subnets required by a single AZ cluster in an existing VPC."""

LABEL_NAME_MAX_LENGTH = 63
"""Maximum length of the name part of a Kubernetes label key."""

LABEL_PREFIX_MAX_LENGTH = 253
"""Maximum length of the DNS subdomain prefix of a Kubernetes label key."""

DEFAULT_REGION = "us-east-1"
"""Default AWS region used for IAM lookups when none is configured."""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating a provider or unexpected error."""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating a validation or configuration error."""


class Ec2MetadataHttpTokens(str, Enum):
    """EC2 instance metadata service token modes."""

    REQUIRED = "required"
    OPTIONAL = "optional"
