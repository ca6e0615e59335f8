"""Pytest configuration and fixtures for clustergate tests."""

import json
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from urllib.parse import quote

import pytest
import yaml

FAKE_ACCOUNT_ID = "765374464689"
FAKE_OPERATOR_ROLE_ARN = (
    f"arn:aws:iam::{FAKE_ACCOUNT_ID}:role/"
    "fake-arn-openshift-cluster-csi-drivers-ebs-cloud-credentials"
)


def build_trust_policy(issuer: str) -> dict[str, Any]:
    """Build an operator role trust policy federated to an OIDC issuer.

    Parameters
    ----------
    issuer : str
        Issuer host, followed by its path when it has one

    Returns
    -------
    dict[str, Any]
        Trust policy document
    """
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {
                    "Federated": f"arn:aws:iam::{FAKE_ACCOUNT_ID}:oidc-provider/{issuer}"
                },
                "Action": "sts:AssumeRoleWithWebIdentity",
                "Condition": {
                    "StringEquals": {
                        f"{issuer}:sub": [
                            "system:serviceaccount:openshift-image-registry:registry"
                        ]
                    }
                },
            }
        ],
    }


def encode_trust_policy(document: dict[str, Any]) -> str:
    """URL-encode a trust policy the way IAM returns it."""
    return quote(json.dumps(document), safe="")


@pytest.fixture
def operator_role_arn() -> str:
    """ARN of a fake operator role."""
    return FAKE_OPERATOR_ROLE_ARN


@pytest.fixture
def trust_policy_document_factory() -> Callable[[str], dict[str, Any]]:
    """Return a factory producing decoded trust policies for an issuer."""
    return build_trust_policy


@pytest.fixture
def trust_policy_factory() -> Callable[[str], str]:
    """Return a factory producing URL-encoded trust policies for an issuer."""
    return lambda issuer: encode_trust_policy(build_trust_policy(issuer))


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Sets mock AWS credentials in environment variables for the duration of the test,
    then restores the original environment state.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    old_values = {
        key: os.environ.get(key)
        for key in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_DEFAULT_REGION")
    }

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

    yield

    for key, value in old_values.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point CLUSTERGATE_CONFIG at a temporary config file path.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory path
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture

    Returns
    -------
    Path
        Path to temporary config file (not yet written)
    """
    config_path = tmp_path / "clustergate.yaml"
    monkeypatch.setenv("CLUSTERGATE_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def write_config(config_file: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes a config dict as YAML to config_file."""

    def _write(data: dict[str, Any]) -> Path:
        config_file.write_text(yaml.dump(data))
        return config_file

    return _write
