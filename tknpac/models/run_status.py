"""One PipelineRun outcome recorded on a Repository resource."""

import logging
from datetime import UTC, datetime
from typing import Any, Dict

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

LOG = logging.getLogger("tknpac.models.run_status")

_DATETIME = TypeAdapter(datetime)


def _timestamp(data: Dict[str, Any], key: str) -> datetime | None:
    """Parse one timestamp of a status entry; unparseable values count as absent."""
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        LOG.debug("Ignoring invalid %s %r on run %s", key, value, data.get("pipelineRunName"))
        return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class RunStatus(BaseModel):
    """Historical execution record as written by the reconciler.

    Read-only snapshot: the report layer reorders these but never changes
    them.
    """

    model_config = {"frozen": True}

    pipeline_run_name: str = Field(..., description="Name of the PipelineRun")
    condition_reason: str | None = Field(default=None, description="Reason of the Succeeded condition")
    condition_message: str | None = Field(default=None, description="Free text detail of the condition")
    start_time: datetime | None = Field(default=None, description="Absent when the run has not started")
    completion_time: datetime | None = Field(default=None, description="Absent when the run has not finished")
    sha: str | None = None
    sha_url: str | None = None
    title: str | None = None
    target_branch: str | None = None
    event_type: str | None = Field(default=None, description="pull_request, push, ...")

    @field_validator("start_time", "completion_time")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Naive and aware timestamps must stay comparable.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def from_resource(cls, data: Dict[str, Any]) -> "RunStatus":
        """Build from one entry of the resource's status list (camelCase and
        snake_case keys, as the CRD mixes both).

        A malformed field degrades to absent so one bad entry never hides the
        others.
        """
        conditions = data.get("conditions")
        condition = conditions[0] if isinstance(conditions, list) and conditions else {}
        if not isinstance(condition, dict):
            condition = {}
        return cls(
            pipeline_run_name=_text(data.get("pipelineRunName")) or "",
            condition_reason=_text(condition.get("reason")) or None,
            condition_message=_text(condition.get("message")) or None,
            start_time=_timestamp(data, "startTime"),
            completion_time=_timestamp(data, "completionTime"),
            sha=_text(data.get("sha")),
            sha_url=_text(data.get("sha_url")),
            title=_text(data.get("title")),
            target_branch=_text(data.get("target_branch")),
            event_type=_text(data.get("event_type")),
        )
