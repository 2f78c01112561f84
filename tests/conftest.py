"""Pytest configuration and fixtures."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

import httpx
import pytest

from deno_deploy.core.exceptions import ClientError
from deno_deploy.models.deployment import (
    BuildLogLine,
    DeploymentRecord,
    DeploymentRequest,
    DeploymentStatus,
)
from deno_deploy.services.deploy_client import BaseDeployClient, DeployClient

TESTDATA_DIR = Path(__file__).parent / "testdata"
API_BASE_URL = "https://api.deno.test/v1"

CREATED_AT = datetime(2024, 5, 1, 10, 0, 0, 250000, tzinfo=timezone.utc)
UPDATED_AT = datetime(2024, 5, 1, 10, 5, 0, tzinfo=timezone.utc)

NOT_FOUND_BODY = {
    "code": "deploymentNotFound",
    "message": "The requested deployment was not found.",
}


def iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def make_record(
    deployment_id: str = "dpl123",
    status: str = "success",
    domains: list[str] | None = None,
    created_at: datetime = CREATED_AT,
    updated_at: datetime = UPDATED_AT,
) -> DeploymentRecord:
    """Build a deployment record as the API would return it."""
    return DeploymentRecord.model_validate(
        {
            "id": deployment_id,
            "projectId": str(uuid4()),
            "status": status,
            "domains": ["hello-dpl123.deno.dev"] if domains is None else domains,
            "createdAt": iso(created_at),
            "updatedAt": iso(updated_at),
        }
    )


class StubDeployClient(BaseDeployClient):
    """In-memory client whose responses and failures are set per test."""

    def __init__(
        self,
        record: DeploymentRecord | None = None,
        build_logs: list[BuildLogLine] | None = None,
    ):
        self.record = record or make_record()
        self.build_logs = build_logs if build_logs is not None else [
            BuildLogLine(level="info", message="Downloaded main.ts"),
            BuildLogLine(level="info", message="Deployment complete"),
        ]
        self.create_error: ClientError | None = None
        self.build_logs_error: ClientError | None = None
        self.deployment_error: ClientError | None = None
        self.calls: list[tuple[str, Any]] = []

    async def create_deployment(self, request: DeploymentRequest) -> DeploymentRecord:
        self.calls.append(("create_deployment", request))
        if self.create_error:
            raise self.create_error
        return self.record.model_copy(update={"status": DeploymentStatus.PENDING})

    async def get_build_logs(self, deployment_id: str) -> list[BuildLogLine]:
        self.calls.append(("get_build_logs", deployment_id))
        if self.build_logs_error:
            raise self.build_logs_error
        return self.build_logs

    async def get_deployment(self, deployment_id: str) -> DeploymentRecord:
        self.calls.append(("get_deployment", deployment_id))
        if self.deployment_error:
            raise self.deployment_error
        return self.record


class FakeDeployAPI:
    """Fake Deno Deploy API served through ``httpx.MockTransport``.

    Every deployment gets a new ID and creation time; builds finish with
    ``final_status``. Set ``failures[<endpoint>]`` to a response (or an
    exception) to fail ``create``, ``build_logs`` or ``deployment``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.deployments: dict[str, dict[str, Any]] = {}
        self.final_status = "success"
        self.build_logs = [
            {"level": "info", "message": "Downloaded main.ts"},
            {"level": "info", "message": "Deployment complete"},
        ]
        self.failures: dict[str, httpx.Response | Exception] = {}

    def _fail(self, endpoint: str) -> httpx.Response | None:
        failure = self.failures.get(endpoint)
        if isinstance(failure, Exception):
            raise failure
        return failure

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")[1:]  # drop "v1"

        if request.method == "POST" and len(parts) == 3 and parts[0] == "projects":
            return self._fail("create") or self._create(parts[1], request)

        if request.method == "GET" and parts[:1] == ["deployments"]:
            deployment_id = parts[1]
            if deployment_id not in self.deployments:
                return httpx.Response(404, json=NOT_FOUND_BODY)
            if parts[2:] == ["build_logs"]:
                return self._fail("build_logs") or httpx.Response(200, json=self.build_logs)
            if len(parts) == 2:
                return self._fail("deployment") or httpx.Response(
                    200, json=self.deployments[deployment_id]
                )

        return httpx.Response(404, json={"code": "notFound", "message": "Not found"})

    def _create(self, project_id: str, request: httpx.Request) -> httpx.Response:
        number = len(self.deployments) + 1
        deployment_id = f"dpl{number:04d}"
        self.deployments[deployment_id] = {
            "id": deployment_id,
            "projectId": project_id,
            "status": self.final_status,
            "domains": ["hello.deno.dev", f"hello-{project_id[:8]}.deno.dev"],
            "databases": {},
            "createdAt": iso(CREATED_AT + timedelta(minutes=number)),
            "updatedAt": iso(UPDATED_AT),
        }
        return httpx.Response(200, json={**self.deployments[deployment_id], "status": "pending"})

    def payloads(self) -> list[dict[str, Any]]:
        """JSON bodies of every create request so far."""
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def project_id() -> str:
    return str(uuid4())


@pytest.fixture
def stub_client() -> StubDeployClient:
    return StubDeployClient()


@pytest.fixture
def fake_api() -> FakeDeployAPI:
    return FakeDeployAPI()


@pytest.fixture
async def deploy_client(fake_api: FakeDeployAPI) -> DeployClient:
    """A real client wired to the fake API."""
    client = DeployClient(
        token="test-token",
        base_url=API_BASE_URL,
        transport=httpx.MockTransport(fake_api.handler),
    )
    yield client
    await client.aclose()


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """A small project tree with text and binary files."""
    (tmp_path / "sub").mkdir()
    (tmp_path / "main.ts").write_text('Deno.serve(() => new Response("Hello world"));\n')
    (tmp_path / "sub" / "util.ts").write_text("export const answer = 42;\n")
    (tmp_path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe")
    return tmp_path
