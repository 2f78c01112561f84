"""Provider-wide client handle.

The client and organization are configured once and shared read-only by every
deployment resource.
"""

from dataclasses import dataclass
from uuid import UUID

from deno_deploy.config import Settings, settings as default_settings
from deno_deploy.core.exceptions import ConfigurationError
from deno_deploy.services.deploy_client import BaseDeployClient, DeployClient
from deno_deploy.utils.logging import configure_logging, get_logger


@dataclass(frozen=True)
class ProviderData:
    """Configured client and organization."""

    client: BaseDeployClient
    organization_id: UUID


def create_provider_data(settings: Settings | None = None) -> ProviderData:
    """Build provider data from settings.

    Raises:
        ConfigurationError: If the token is missing or the organization ID
            is not a UUID
    """
    settings = settings or default_settings
    configure_logging(settings)
    logger = get_logger("provider")

    if not settings.deno_deploy_token:
        raise ConfigurationError(
            "Missing access token. Set DENO_DEPLOY_TOKEN to a Deno Deploy access token.",
            {"setting": "deno_deploy_token"},
        )

    try:
        organization_id = UUID(settings.deno_deploy_organization_id)
    except ValueError:
        raise ConfigurationError(
            "DENO_DEPLOY_ORGANIZATION_ID must be a UUID, got "
            f"{settings.deno_deploy_organization_id!r}",
            {"setting": "deno_deploy_organization_id"},
        ) from None

    client = DeployClient(
        token=settings.deno_deploy_token,
        base_url=settings.deno_deploy_endpoint,
        timeout=settings.http_timeout_seconds,
    )
    logger.info(
        "provider.configured",
        endpoint=settings.deno_deploy_endpoint,
        organization_id=str(organization_id),
    )
    return ProviderData(client=client, organization_id=organization_id)
