"""Deno Deploy API client.

A thin async wrapper over the REST API. Errors are raised as
:class:`ClientError` subclasses carrying a ``"<status>: <message>"`` detail.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from deno_deploy import __version__
from deno_deploy.core.exceptions import APIConnectionError, APIError, APIResponseError
from deno_deploy.models.deployment import BuildLogLine, DeploymentRecord, DeploymentRequest
from deno_deploy.utils.logging import get_logger

_build_logs_adapter = TypeAdapter(list[BuildLogLine])


class BaseDeployClient(ABC):
    """Operations the deployment engine needs from the API."""

    @abstractmethod
    async def create_deployment(self, request: DeploymentRequest) -> DeploymentRecord:
        """Submit a new deployment for a project."""

    @abstractmethod
    async def get_build_logs(self, deployment_id: str) -> list[BuildLogLine]:
        """Get the build logs of a deployment, waiting for the build to finish."""

    @abstractmethod
    async def get_deployment(self, deployment_id: str) -> DeploymentRecord:
        """Get the current details of a deployment."""


def api_error_detail(response: httpx.Response) -> APIError:
    """Build an :class:`APIError` from an error response.

    The API answers errors with a ``{"code", "message"}`` envelope. A response
    without one is reported as such, with the raw body attached.
    """
    status_text = f"{response.status_code} {response.reason_phrase}".strip()
    body = response.text

    try:
        envelope = response.json()
    except ValueError:
        envelope = None

    if isinstance(envelope, dict) and isinstance(envelope.get("message"), str):
        code = envelope.get("code")
        return APIError(
            response.status_code,
            status_text,
            envelope["message"],
            code=code if isinstance(code, str) else None,
            body=body,
        )

    return APIError(
        response.status_code,
        status_text,
        f"error response did not include a structured body (body: {body[:500]!r})",
        body=body,
    )


class DeployClient(BaseDeployClient):
    """Deno Deploy REST API client backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.deno.com/v1",
        timeout: float = 300.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("deploy_client")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": f"deno-deploy-engine/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "DeployClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self.logger.warning(
                "deploy_client.request_failed",
                method=method,
                url=url,
                error=str(e),
            )
            raise APIConnectionError(f"{method} {url}: {e}") from e

        self.logger.debug(
            "deploy_client.response",
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if response.is_error:
            raise api_error_detail(response)

        try:
            return response.json()
        except ValueError as e:
            raise APIResponseError(
                f"{method} {url}: response body is not valid JSON: {e}"
            ) from e

    async def create_deployment(self, request: DeploymentRequest) -> DeploymentRecord:
        data = await self._request(
            "POST",
            f"/projects/{request.project_id}/deployments",
            json=request.to_payload(),
        )
        return self._parse_record(data)

    async def get_build_logs(self, deployment_id: str) -> list[BuildLogLine]:
        data = await self._request(
            "GET",
            f"/deployments/{deployment_id}/build_logs",
            headers={"Accept": "application/json"},
        )
        try:
            return _build_logs_adapter.validate_python(data)
        except ValidationError as e:
            raise APIResponseError(f"unexpected build logs body: {e}") from e

    async def get_deployment(self, deployment_id: str) -> DeploymentRecord:
        data = await self._request("GET", f"/deployments/{deployment_id}")
        return self._parse_record(data)

    @staticmethod
    def _parse_record(data: Any) -> DeploymentRecord:
        try:
            return DeploymentRecord.model_validate(data)
        except ValidationError as e:
            raise APIResponseError(f"unexpected deployment body: {e}") from e
