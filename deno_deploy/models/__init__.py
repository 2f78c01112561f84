"""Data models for the deployment engine."""

from deno_deploy.models.assets import (
    AssetDescriptor,
    AssetKind,
    FileAsset,
    SymlinkAsset,
    WireAsset,
    WireFileAsset,
    WireSymlinkAsset,
    to_typed_asset,
)
from deno_deploy.models.deployment import (
    BuildLogLine,
    CompilerOptions,
    DeploymentRecord,
    DeploymentRequest,
    DeploymentStatus,
    render_build_logs,
)
from deno_deploy.models.state import LocalDeploymentState, Timeouts, UploadedAsset

__all__ = [
    # Asset models
    "AssetDescriptor",
    "AssetKind",
    "FileAsset",
    "SymlinkAsset",
    "WireAsset",
    "WireFileAsset",
    "WireSymlinkAsset",
    "to_typed_asset",
    # Deployment models
    "BuildLogLine",
    "CompilerOptions",
    "DeploymentRecord",
    "DeploymentRequest",
    "DeploymentStatus",
    "render_build_logs",
    # State models
    "LocalDeploymentState",
    "Timeouts",
    "UploadedAsset",
]
