"""Provider-agnostic exceptions for cloud API failures."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for cloud provider failures."""


class ProviderCredentialsError(ProviderError):
    """Cloud credentials are missing or invalid."""


class ProviderConnectionError(ProviderError):
    """Cloud API endpoint could not be reached."""


class ProviderAPIError(ProviderError):
    """Cloud API call returned an error.

    Parameters
    ----------
    message : str
        Human readable error message
    error_code : str | None
        Provider error code, e.g. "NoSuchEntity"
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code
