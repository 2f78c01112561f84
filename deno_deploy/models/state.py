"""Local state for a deployment resource."""

from pydantic import BaseModel, Field

from deno_deploy.models.assets import AssetDescriptor
from deno_deploy.models.deployment import CompilerOptions


class UploadedAsset(BaseModel):
    """An asset uploaded by a previous deployment.

    Reserved for skipping re-uploads of unchanged content; nothing populates
    it yet.
    """

    path: str
    git_sha1: str | None = None
    updated_at: str | None = None


class Timeouts(BaseModel):
    """Per-operation timeouts as duration strings (e.g. ``"10m"``)."""

    create: str | None = None


class LocalDeploymentState(BaseModel):
    """Reconciled view of one deployment resource."""

    # Computed
    deployment_id: str | None = None
    status: str | None = None
    domains: frozenset[str] = Field(default_factory=frozenset)
    uploaded_assets: dict[str, UploadedAsset] = Field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None

    # Declared
    project_id: str
    entry_point_url: str
    import_map_url: str | None = None
    lock_file_url: str | None = None
    compiler_options: CompilerOptions | None = None
    assets: dict[str, AssetDescriptor]
    env_vars: dict[str, str] = Field(default_factory=dict)
    timeouts: Timeouts | None = None
