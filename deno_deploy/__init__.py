"""Deployment reconciliation engine for Deno Deploy."""

__version__ = "0.1.0"
