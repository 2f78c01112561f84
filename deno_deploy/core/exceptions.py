"""Custom exceptions for the deployment engine.

Every exception carries a short ``title`` and a detailed ``message`` so it can
be surfaced to the caller as a :class:`Diagnostic`.
"""

from typing import Any

from deno_deploy.core.diagnostics import Diagnostic

CREATE_FAILED_TITLE = "Unable to Create Deployment"


class DeployError(Exception):
    """Base exception for the deployment engine."""

    title = "Deployment Error"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        title: str | None = None,
    ):
        self.message = message
        self.details = details or {}
        if title is not None:
            self.title = title
        super().__init__(message)

    def to_diagnostic(self) -> Diagnostic:
        """Render as an error diagnostic."""
        return Diagnostic.error(self.title, self.message)


class ConfigurationError(DeployError):
    """Provider configuration is missing or invalid."""

    title = "Invalid Deno Deploy Configuration"


# Asset encoding


class AssetError(DeployError):
    """Declared assets could not be turned into an upload payload."""

    title = CREATE_FAILED_TITLE


class InvalidAssetKindError(AssetError):
    """Asset declared with a kind outside the supported set."""

    def __init__(self, path: str, kind: str, allowed: tuple[str, ...] = ("file", "symlink")):
        allowed_text = ", ".join(f"`{k}`" for k in allowed)
        super().__init__(
            f"Invalid asset kind {kind} is found for {path}. Valid kinds are {allowed_text}",
            {"path": path, "kind": kind, "allowed": list(allowed)},
        )
        self.path = path
        self.kind = kind


class InvalidAssetError(AssetError):
    """Asset descriptor fields do not match its kind."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid asset definition for {path}: {reason}",
            {"path": path},
        )
        self.path = path


class FileReadError(AssetError):
    """File content could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not read file content for {path}: {reason}",
            {"path": path},
        )
        self.path = path


class NoAssetsError(AssetError):
    """No assets were declared."""

    def __init__(self):
        super().__init__("No assets are found. At least one asset is required.")


# Deployment driver


class InvalidProjectIdError(DeployError):
    """Project ID is not a UUID."""

    def __init__(self, project_id: str, reason: str):
        super().__init__(
            f"Could not parse project ID {project_id}: {reason}",
            {"project_id": project_id},
            title=f"{CREATE_FAILED_TITLE} for Project {project_id}",
        )
        self.project_id = project_id


class SubmissionError(DeployError):
    """Deployment request was rejected before an ID was assigned."""

    def __init__(self, project_id: str, error: str):
        super().__init__(
            error,
            {"project_id": project_id},
            title=f"{CREATE_FAILED_TITLE} for Project {project_id}",
        )
        self.project_id = project_id


class PostSubmissionError(DeployError):
    """The deployment was accepted, but a follow-up request failed."""

    STAGE_TITLES = {
        "build_logs": "Deployment Initiated, but Failed to Get Build Logs",
        "deployment": "Deployment Initiated, but Failed to Get Deployment Details",
    }

    def __init__(
        self,
        deployment_id: str,
        stage: str,
        error: str,
        build_logs: str | None = None,
    ):
        if build_logs is None:
            message = f"Deployment ID: {deployment_id}, Error: {error}"
        else:
            message = (
                f"Deployment ID: {deployment_id}\n"
                f"Error: {error}\n\n"
                f"Build logs:\n{build_logs}\n"
            )
        super().__init__(
            message,
            {"deployment_id": deployment_id, "stage": stage},
            title=self.STAGE_TITLES[stage],
        )
        self.deployment_id = deployment_id
        self.stage = stage
        self.build_logs = build_logs


class DeploymentFailedError(DeployError):
    """The build finished but the deployment did not succeed."""

    title = "Deployment Failed"

    def __init__(self, deployment_id: str, status: str, build_logs: str):
        super().__init__(
            f"Deployment ID: {deployment_id}\n"
            f"Status: {status}\n\n"
            f"Build logs:\n{build_logs}\n",
            {"deployment_id": deployment_id, "status": status},
        )
        self.deployment_id = deployment_id
        self.status = status
        self.build_logs = build_logs


# Lifecycle


class DeploymentNotFoundError(DeployError):
    """The deployment no longer exists remotely."""

    title = "Deployment Not Found"

    def __init__(self, deployment_id: str | None, error: str | None = None):
        message = f"Deployment ID: {deployment_id or '<unknown>'}"
        if error:
            message += f", Error: {error}"
        super().__init__(message, {"deployment_id": deployment_id})
        self.deployment_id = deployment_id


class DeploymentReadError(DeployError):
    """Deployment details could not be refreshed."""

    title = "Failed to Get Deployment Details"

    def __init__(self, deployment_id: str, error: str):
        super().__init__(
            f"Deployment ID: {deployment_id}, Error: {error}",
            {"deployment_id": deployment_id},
        )
        self.deployment_id = deployment_id


class OperationTimeoutError(DeployError):
    """The operation exceeded its configured timeout."""

    title = "Deployment Timed Out"

    def __init__(
        self,
        timeout_seconds: float,
        deployment_id: str | None = None,
        build_logs: str | None = None,
    ):
        message = f"Operation did not complete within {timeout_seconds:g} seconds."
        if deployment_id:
            message += (
                f"\nDeployment ID: {deployment_id}\n"
                "The deployment was left in whatever state it reached remotely."
            )
        if build_logs:
            message += f"\n\nBuild logs:\n{build_logs}\n"
        super().__init__(
            message,
            {"timeout_seconds": timeout_seconds, "deployment_id": deployment_id},
        )
        self.timeout_seconds = timeout_seconds
        self.deployment_id = deployment_id


class ProviderNotConfiguredError(DeployError):
    """The resource was used before a client was configured."""

    title = "Unconfigured Deno Deploy Client"

    def __init__(self):
        super().__init__(
            "Expected a configured Deno Deploy client. "
            "Please report this issue to the provider developers."
        )


# Transport


class ClientError(DeployError):
    """A request to the Deno Deploy API failed."""

    title = "Deno Deploy API Error"


class APIError(ClientError):
    """The API responded with an error status."""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        message: str,
        code: str | None = None,
        body: str | None = None,
    ):
        super().__init__(
            f"{status_text}: {message}",
            {"status_code": status_code, "code": code, "body": body},
        )
        self.status_code = status_code
        self.code = code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class APIConnectionError(ClientError):
    """The request could not be completed at the transport level."""


class APIResponseError(ClientError):
    """The API responded successfully with an unexpected body."""
