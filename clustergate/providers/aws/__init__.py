"""AWS provider implementation."""

from __future__ import annotations

from clustergate.providers.aws.errors import handle_aws_errors
from clustergate.providers.aws.iam import IAMRoleInspector, role_name_from_arn

__all__ = ["IAMRoleInspector", "handle_aws_errors", "role_name_from_arn"]
