"""Utility functions for the deployment engine."""

from deno_deploy.utils.durations import parse_duration
from deno_deploy.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "parse_duration",
]
