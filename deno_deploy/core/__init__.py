"""Core functionality for the deployment engine."""

from deno_deploy.core.diagnostics import Diagnostic, Diagnostics, Severity
from deno_deploy.core.exceptions import (
    APIConnectionError,
    APIError,
    APIResponseError,
    AssetError,
    ClientError,
    ConfigurationError,
    DeployError,
    DeploymentFailedError,
    DeploymentNotFoundError,
    DeploymentReadError,
    FileReadError,
    InvalidAssetError,
    InvalidAssetKindError,
    InvalidProjectIdError,
    NoAssetsError,
    OperationTimeoutError,
    PostSubmissionError,
    ProviderNotConfiguredError,
    SubmissionError,
)

__all__ = [
    "Diagnostic",
    "Diagnostics",
    "Severity",
    "APIConnectionError",
    "APIError",
    "APIResponseError",
    "AssetError",
    "ClientError",
    "ConfigurationError",
    "DeployError",
    "DeploymentFailedError",
    "DeploymentNotFoundError",
    "DeploymentReadError",
    "FileReadError",
    "InvalidAssetError",
    "InvalidAssetKindError",
    "InvalidProjectIdError",
    "NoAssetsError",
    "OperationTimeoutError",
    "PostSubmissionError",
    "ProviderNotConfiguredError",
    "SubmissionError",
]
