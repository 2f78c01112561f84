"""Deployment data models."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from deno_deploy.models.assets import WireAsset


class DeploymentStatus(str, Enum):
    """Remote deployment status."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class CompilerOptions(BaseModel):
    """JSX compiler options applied at build time."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    jsx: str | None = None
    jsx_factory: str | None = None
    jsx_fragment_factory: str | None = None
    jsx_import_source: str | None = None


class DeploymentRequest(BaseModel):
    """Everything needed to create a deployment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_id: UUID
    assets: dict[str, WireAsset] = Field(..., min_length=1)
    entry_point_url: str
    import_map_url: str | None = None
    lock_file_url: str | None = None
    compiler_options: CompilerOptions | None = None
    env_vars: dict[str, str] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for the create deployment endpoint."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"project_id"},
            exclude_none=True,
        )


class DeploymentRecord(BaseModel):
    """A deployment as reported by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    project_id: str | None = None
    status: DeploymentStatus
    domains: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("domains", mode="before")
    @classmethod
    def _null_domains(cls, value: Any) -> Any:
        return [] if value is None else value


class BuildLogLine(BaseModel):
    """One line of build output."""

    model_config = ConfigDict(extra="ignore")

    level: str
    message: str

    def render(self) -> str:
        return f"[{self.level}] {self.message}"


def render_build_logs(lines: list[BuildLogLine]) -> str:
    """Join build log lines in their original order."""
    return "\n".join(line.render() for line in lines)
