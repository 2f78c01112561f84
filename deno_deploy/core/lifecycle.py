"""Lifecycle Controller for the deployment resource.

Deployments are immutable snapshots:

- create: encode assets, deploy, reconcile the new record into state
- read: refresh status, domains and updated_at from the remote record
- update: same procedure as create; a brand-new deployment replaces the old
- delete: no-op; remote deployments are never deleted
"""

import asyncio
import os
from typing import Any
from uuid import UUID

from deno_deploy.config import Settings, settings as default_settings
from deno_deploy.core.diagnostics import Diagnostics
from deno_deploy.core.exceptions import (
    APIError,
    ClientError,
    ConfigurationError,
    DeployError,
    DeploymentNotFoundError,
    DeploymentReadError,
    InvalidProjectIdError,
    OperationTimeoutError,
    ProviderNotConfiguredError,
)
from deno_deploy.models.deployment import DeploymentRequest
from deno_deploy.models.state import LocalDeploymentState
from deno_deploy.provider import ProviderData
from deno_deploy.services.asset_encoder import encode_assets
from deno_deploy.services.deploy_client import BaseDeployClient
from deno_deploy.services.driver import DeploymentDriver, DeploymentProgress
from deno_deploy.services.reconciler import reconcile_deployment, refresh_deployment
from deno_deploy.utils.durations import parse_duration
from deno_deploy.utils.logging import get_logger

RESOURCE_TYPE_SUFFIX = "_deployment"


class DeploymentResource:
    """The deployment resource and its four lifecycle operations.

    Every operation returns diagnostics instead of raising, so a failure is
    reported with whatever context (deployment ID, build logs) was gathered.
    """

    def __init__(
        self,
        provider_data: ProviderData | None = None,
        base_dir: str | os.PathLike[str] = ".",
        settings: Settings | None = None,
    ):
        self.provider_data = provider_data
        self.base_dir = base_dir
        self.settings = settings or default_settings
        self.logger = get_logger("lifecycle")

    def metadata(self, provider_type_name: str) -> str:
        """Resource type name under the given provider."""
        return provider_type_name + RESOURCE_TYPE_SUFFIX

    def configure(self, provider_data: Any) -> Diagnostics:
        """Attach the provider's client to this resource."""
        diagnostics = Diagnostics()

        # Called before the provider itself is configured
        if provider_data is None:
            return diagnostics

        if not isinstance(provider_data, ProviderData):
            diagnostics.add_error(
                "Unexpected Resource Configure Type",
                f"Expected ProviderData, got: {type(provider_data).__name__}. "
                "Please report this issue to the provider developers.",
            )
            return diagnostics

        self.provider_data = provider_data
        return diagnostics

    async def create(
        self, desired: LocalDeploymentState
    ) -> tuple[LocalDeploymentState | None, Diagnostics]:
        """Create a deployment from the desired state.

        Returns the reconciled state, or ``None`` with error diagnostics if
        anything failed.
        """
        return await self._deploy(desired, operation="create")

    async def update(
        self, desired: LocalDeploymentState
    ) -> tuple[LocalDeploymentState | None, Diagnostics]:
        """Replace the deployment with a new one built from the desired state."""
        return await self._deploy(desired, operation="update")

    async def read(
        self, current: LocalDeploymentState
    ) -> tuple[LocalDeploymentState, Diagnostics]:
        """Refresh state from the remote deployment.

        On failure the current state is returned unchanged together with the
        error diagnostic.
        """
        diagnostics = Diagnostics()
        deployment_id = current.deployment_id

        if not deployment_id:
            diagnostics.append(
                DeploymentNotFoundError(None, "state has no deployment ID").to_diagnostic()
            )
            return current, diagnostics

        try:
            client = self._require_client()
            record = await client.get_deployment(deployment_id)
        except ClientError as e:
            if isinstance(e, APIError) and e.is_not_found:
                self.logger.warning("lifecycle.read.not_found", deployment_id=deployment_id)
                error: DeployError = DeploymentNotFoundError(deployment_id, e.message)
            else:
                self.logger.error(
                    "lifecycle.read.failed", deployment_id=deployment_id, error=e.message
                )
                error = DeploymentReadError(deployment_id, e.message)
            diagnostics.append(error.to_diagnostic())
            return current, diagnostics
        except DeployError as e:
            diagnostics.append(e.to_diagnostic())
            return current, diagnostics

        refreshed = refresh_deployment(current, record)
        self.logger.info(
            "lifecycle.read.completed",
            deployment_id=deployment_id,
            status=refreshed.status,
        )
        return refreshed, diagnostics

    async def delete(self, current: LocalDeploymentState | None) -> Diagnostics:
        """Forget the deployment locally; nothing is deleted remotely."""
        self.logger.info(
            "lifecycle.delete.noop",
            deployment_id=current.deployment_id if current else None,
        )
        return Diagnostics()

    async def _deploy(
        self, plan: LocalDeploymentState, operation: str
    ) -> tuple[LocalDeploymentState | None, Diagnostics]:
        diagnostics = Diagnostics()
        progress = DeploymentProgress()

        self.logger.info(
            f"lifecycle.{operation}.started",
            project_id=plan.project_id,
            entry_point=plan.entry_point_url,
        )

        try:
            client = self._require_client()
            request = self._build_request(plan)
            timeout = self._create_timeout(plan)
            driver = DeploymentDriver(client)
            try:
                outcome = await asyncio.wait_for(
                    driver.deploy(request, progress), timeout=timeout
                )
            except asyncio.TimeoutError:
                # The remote deployment, if any, is abandoned as-is
                raise OperationTimeoutError(
                    timeout, progress.deployment_id, progress.rendered_logs
                ) from None
        except DeployError as e:
            self.logger.error(
                f"lifecycle.{operation}.failed",
                project_id=plan.project_id,
                deployment_id=progress.deployment_id,
                error=e.title,
            )
            diagnostics.append(e.to_diagnostic())
            return None, diagnostics

        state = reconcile_deployment(plan, outcome.record)
        self.logger.info(
            f"lifecycle.{operation}.completed",
            project_id=plan.project_id,
            deployment_id=state.deployment_id,
            domains=sorted(state.domains),
        )
        return state, diagnostics

    def _require_client(self) -> BaseDeployClient:
        if self.provider_data is None:
            raise ProviderNotConfiguredError()
        return self.provider_data.client

    def _build_request(self, plan: LocalDeploymentState) -> DeploymentRequest:
        try:
            project_id = UUID(plan.project_id)
        except ValueError as e:
            raise InvalidProjectIdError(plan.project_id, str(e)) from e

        assets = encode_assets(plan.assets, self.base_dir)

        return DeploymentRequest(
            project_id=project_id,
            assets=assets,
            entry_point_url=plan.entry_point_url,
            import_map_url=plan.import_map_url,
            lock_file_url=plan.lock_file_url,
            compiler_options=plan.compiler_options,
            env_vars=plan.env_vars,
        )

    def _create_timeout(self, plan: LocalDeploymentState) -> float:
        if plan.timeouts is None or plan.timeouts.create is None:
            return self.settings.create_timeout_seconds
        try:
            return parse_duration(plan.timeouts.create).total_seconds()
        except ValueError as e:
            raise ConfigurationError(str(e), title="Invalid Create Timeout") from e
