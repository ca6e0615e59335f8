"""Translation of botocore exceptions into provider exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
)

from clustergate.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)


@contextmanager
def handle_aws_errors() -> Iterator[None]:
    """Re-raise botocore exceptions as provider exceptions.

    Raises
    ------
    ProviderCredentialsError
        If AWS credentials are missing or incomplete
    ProviderConnectionError
        If the AWS endpoint cannot be reached
    ProviderAPIError
        If the AWS API returns an error response
    """
    try:
        yield
    except (NoCredentialsError, PartialCredentialsError) as e:
        raise ProviderCredentialsError(str(e)) from e
    except EndpointConnectionError as e:
        raise ProviderConnectionError(str(e)) from e
    except ClientError as e:
        error = e.response.get("Error", {})
        raise ProviderAPIError(
            message=error.get("Message", str(e)),
            error_code=error.get("Code"),
        ) from e
