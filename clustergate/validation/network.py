"""Subnet count checks for cluster network topologies."""

from __future__ import annotations

from clustergate.constants import (
    BYO_VPC_MULTI_AZ_SUBNETS_COUNT,
    BYO_VPC_SINGLE_AZ_SUBNETS_COUNT,
    PRIVATE_LINK_MULTI_AZ_SUBNETS_COUNT,
    PRIVATE_LINK_SINGLE_AZ_SUBNETS_COUNT,
)
from clustergate.exceptions import SubnetCountError


def expected_subnets_count(multi_az: bool, private_link: bool) -> int:
    """Return the number of subnets a cluster topology requires.

    Parameters
    ----------
    multi_az : bool
        Whether the cluster spans multiple availability zones
    private_link : bool
        Whether the cluster only exposes private endpoints

    Returns
    -------
    int
        Required number of subnets
    """
    if private_link:
        if multi_az:
            return PRIVATE_LINK_MULTI_AZ_SUBNETS_COUNT
        return PRIVATE_LINK_SINGLE_AZ_SUBNETS_COUNT

    if multi_az:
        return BYO_VPC_MULTI_AZ_SUBNETS_COUNT
    return BYO_VPC_SINGLE_AZ_SUBNETS_COUNT


def validate_subnets_count(multi_az: bool, private_link: bool, subnets_input_count: int) -> None:
    """Validate the number of subnets supplied for a cluster.

    Parameters
    ----------
    multi_az : bool
        Whether the cluster spans multiple availability zones
    private_link : bool
        Whether the cluster only exposes private endpoints
    subnets_input_count : int
        Number of subnets supplied by the user

    Raises
    ------
    SubnetCountError
        If the count differs from what the topology requires
    """
    expected = expected_subnets_count(multi_az, private_link)
    if subnets_input_count == expected:
        return

    az_mode = "multi-AZ" if multi_az else "single AZ"
    link_mode = "private link cluster" if private_link else "cluster"
    raise SubnetCountError(az_mode, link_mode, expected, subnets_input_count)
