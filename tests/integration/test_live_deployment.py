"""End-to-end test against the real Deno Deploy API.

Runs only when DENO_DEPLOY_TOKEN, DENO_DEPLOY_ORGANIZATION_ID and
DENO_DEPLOY_TEST_PROJECT_ID are set. Deployments are immutable, so nothing is
cleaned up afterwards.
"""

import asyncio
import os

import httpx
import pytest

from deno_deploy.config import Settings
from deno_deploy.core.lifecycle import DeploymentResource
from deno_deploy.models.assets import AssetDescriptor
from deno_deploy.models.state import LocalDeploymentState
from deno_deploy.provider import create_provider_data
from tests.conftest import TESTDATA_DIR

REQUIRED_ENV = (
    "DENO_DEPLOY_TOKEN",
    "DENO_DEPLOY_ORGANIZATION_ID",
    "DENO_DEPLOY_TEST_PROJECT_ID",
)

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(
        not all(os.environ.get(name) for name in REQUIRED_ENV),
        reason="live Deno Deploy credentials not configured",
    ),
]


async def fetch_domains(domains: frozenset[str]) -> dict[str, bytes]:
    # Give the domain mapping time to propagate
    await asyncio.sleep(3)
    async with httpx.AsyncClient(timeout=30.0) as client:
        bodies = {}
        for domain in domains:
            response = await client.get(f"https://{domain}")
            bodies[domain] = response.content
        return bodies


@pytest.fixture
async def resource() -> DeploymentResource:
    settings = Settings()
    provider_data = create_provider_data(settings)
    yield DeploymentResource(provider_data, base_dir=TESTDATA_DIR, settings=settings)
    await provider_data.client.aclose()


class TestLiveDeployment:
    """Deploy real assets and request them over HTTPS."""

    @pytest.mark.asyncio
    async def test_single_file(self, resource: DeploymentResource):
        desired = LocalDeploymentState(
            project_id=os.environ["DENO_DEPLOY_TEST_PROJECT_ID"],
            entry_point_url="single-file/main.ts",
            assets={"single-file/main.ts": AssetDescriptor(kind="file")},
            env_vars={},
        )

        state, diagnostics = await resource.create(desired)

        assert not diagnostics.has_error(), [str(d) for d in diagnostics]
        assert state is not None
        assert state.status == "success"
        assert len(state.domains) >= 1

        bodies = await fetch_domains(state.domains)
        assert all(body == b"Hello world" for body in bodies.values()), bodies

    @pytest.mark.asyncio
    async def test_multi_file_then_read(self, resource: DeploymentResource):
        desired = LocalDeploymentState(
            project_id=os.environ["DENO_DEPLOY_TEST_PROJECT_ID"],
            entry_point_url="multi-file/main.ts",
            assets={
                "multi-file/main.ts": AssetDescriptor(kind="file"),
                "multi-file/lib/sum.ts": AssetDescriptor(kind="file"),
            },
            env_vars={},
        )

        state, diagnostics = await resource.create(desired)
        assert not diagnostics.has_error(), [str(d) for d in diagnostics]
        assert state is not None

        refreshed, diagnostics = await resource.read(state)
        assert not diagnostics
        assert refreshed.deployment_id == state.deployment_id
        assert refreshed.created_at == state.created_at

        bodies = await fetch_domains(refreshed.domains)
        assert all(body == b"sum: 42" for body in bodies.values()), bodies
