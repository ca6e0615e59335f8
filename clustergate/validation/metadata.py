"""EC2 instance metadata options validation."""

from __future__ import annotations

from clustergate.constants import Ec2MetadataHttpTokens
from clustergate.exceptions import HttpTokensError


def validate_http_tokens_value(value: str) -> None:
    """Validate the ec2-metadata-http-tokens setting.

    An empty value leaves the provider default in place.

    Parameters
    ----------
    value : str
        Token mode, "required", "optional" or empty

    Raises
    ------
    HttpTokensError
        If value is not one of the known token modes
    """
    if value == "":
        return

    if value not in (mode.value for mode in Ec2MetadataHttpTokens):
        raise HttpTokensError(
            f"ec2-metadata-http-tokens value should be one of "
            f"'{Ec2MetadataHttpTokens.REQUIRED.value}', "
            f"'{Ec2MetadataHttpTokens.OPTIONAL.value}'"
        )
