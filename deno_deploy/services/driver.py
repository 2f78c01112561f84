"""Deployment Driver.

Submits a deployment and follows it to a terminal status, keeping the
deployment ID and build logs attached to every failure after submission.
"""

from dataclasses import dataclass, field

from deno_deploy.core.exceptions import (
    ClientError,
    DeploymentFailedError,
    PostSubmissionError,
    SubmissionError,
)
from deno_deploy.models.deployment import (
    BuildLogLine,
    DeploymentRecord,
    DeploymentRequest,
    DeploymentStatus,
    render_build_logs,
)
from deno_deploy.services.deploy_client import BaseDeployClient
from deno_deploy.utils.logging import get_logger


@dataclass
class DeploymentProgress:
    """What is known so far about an in-flight deployment."""

    deployment_id: str | None = None
    build_logs: list[BuildLogLine] | None = None

    @property
    def rendered_logs(self) -> str | None:
        if self.build_logs is None:
            return None
        return render_build_logs(self.build_logs)


@dataclass
class DeploymentOutcome:
    """A deployment that finished successfully."""

    record: DeploymentRecord
    build_logs: list[BuildLogLine] = field(default_factory=list)

    @property
    def rendered_logs(self) -> str:
        return render_build_logs(self.build_logs)


class DeploymentDriver:
    """Drives one deployment from submission to a terminal status.

    Steps:
    1. Submit the deployment request
    2. Fetch the build logs (blocks until the build finishes)
    3. Fetch the deployment record
    4. Require ``status == success``
    """

    def __init__(self, client: BaseDeployClient):
        self.client = client
        self.logger = get_logger("driver")

    async def deploy(
        self,
        request: DeploymentRequest,
        progress: DeploymentProgress | None = None,
    ) -> DeploymentOutcome:
        """Run the deployment.

        Args:
            request: The deployment to create
            progress: Optional accumulator updated as each step completes

        Returns:
            The successful deployment record and its build logs

        Raises:
            SubmissionError: If the deployment could not be created
            PostSubmissionError: If logs or details could not be fetched
            DeploymentFailedError: If the deployment did not succeed
        """
        progress = progress if progress is not None else DeploymentProgress()
        project_id = str(request.project_id)

        self.logger.info(
            "driver.submission.started",
            project_id=project_id,
            asset_count=len(request.assets),
            entry_point=request.entry_point_url,
        )
        try:
            submitted = await self.client.create_deployment(request)
        except ClientError as e:
            self.logger.error(
                "driver.submission.failed", project_id=project_id, error=e.message
            )
            raise SubmissionError(project_id, e.message) from e

        deployment_id = submitted.id
        progress.deployment_id = deployment_id
        self.logger.info(
            "driver.submission.accepted",
            project_id=project_id,
            deployment_id=deployment_id,
        )

        try:
            build_logs = await self.client.get_build_logs(deployment_id)
        except ClientError as e:
            self.logger.error(
                "driver.build_logs.failed", deployment_id=deployment_id, error=e.message
            )
            raise PostSubmissionError(deployment_id, "build_logs", e.message) from e

        progress.build_logs = build_logs
        rendered_logs = render_build_logs(build_logs)

        try:
            record = await self.client.get_deployment(deployment_id)
        except ClientError as e:
            self.logger.error(
                "driver.details.failed", deployment_id=deployment_id, error=e.message
            )
            raise PostSubmissionError(
                deployment_id, "deployment", e.message, build_logs=rendered_logs
            ) from e

        if record.status != DeploymentStatus.SUCCESS:
            self.logger.error(
                "driver.deployment.failed",
                deployment_id=deployment_id,
                status=record.status.value,
            )
            raise DeploymentFailedError(deployment_id, record.status.value, rendered_logs)

        self.logger.info(
            "driver.deployment.succeeded",
            deployment_id=deployment_id,
            domains=record.domains,
        )
        return DeploymentOutcome(record=record, build_logs=build_logs)
