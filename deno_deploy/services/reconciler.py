"""State Reconciler.

Maps a remote deployment record onto local state.
"""

from datetime import datetime, timezone

from deno_deploy.models.deployment import DeploymentRecord
from deno_deploy.models.state import LocalDeploymentState


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC 3339 with second precision.

    UTC renders as ``Z``; naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def reconcile_deployment(
    state: LocalDeploymentState, record: DeploymentRecord
) -> LocalDeploymentState:
    """Apply a freshly created deployment to state."""
    return state.model_copy(
        update={
            "deployment_id": record.id,
            "status": record.status.value,
            "domains": frozenset(record.domains),
            "uploaded_assets": {},
            "created_at": format_rfc3339(record.created_at),
            "updated_at": format_rfc3339(record.updated_at),
        }
    )


def refresh_deployment(
    state: LocalDeploymentState, record: DeploymentRecord
) -> LocalDeploymentState:
    """Refresh computed fields from the current remote record.

    ``deployment_id`` and ``created_at`` never change after creation and are
    left as they are.
    """
    return state.model_copy(
        update={
            "status": record.status.value,
            "domains": frozenset(record.domains),
            "updated_at": format_rfc3339(record.updated_at),
        }
    )
