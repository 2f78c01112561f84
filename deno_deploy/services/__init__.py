"""Services for the deployment engine."""

from deno_deploy.services.asset_encoder import encode_assets, encode_content, encode_path
from deno_deploy.services.deploy_client import BaseDeployClient, DeployClient
from deno_deploy.services.driver import DeploymentDriver, DeploymentOutcome, DeploymentProgress
from deno_deploy.services.reconciler import (
    format_rfc3339,
    reconcile_deployment,
    refresh_deployment,
)

__all__ = [
    "BaseDeployClient",
    "DeployClient",
    "DeploymentDriver",
    "DeploymentOutcome",
    "DeploymentProgress",
    "encode_assets",
    "encode_content",
    "encode_path",
    "format_rfc3339",
    "reconcile_deployment",
    "refresh_deployment",
]
