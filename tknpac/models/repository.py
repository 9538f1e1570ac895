"""Repository custom resource model."""

from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field

from tknpac.models.run_status import RunStatus

API_GROUP = "pipelinesascode.tekton.dev"
API_VERSION = "v1alpha1"
KIND = "Repository"
PLURAL = "repositories"


class Repository(BaseModel):
    """A Repository resource addressed by (name, namespace).

    ``runs`` keeps the order in which the reconciler stored the statuses,
    which is not guaranteed to be chronological.
    """

    model_config = {"frozen": True}

    name: str
    namespace: str
    url: str = Field(default="", description="Source repository URL (spec.url)")
    runs: Tuple[RunStatus, ...] = Field(default_factory=tuple)

    @classmethod
    def from_resource(cls, data: Dict[str, Any]) -> "Repository":
        """Build from the resource as returned by the API or a YAML manifest."""
        metadata = data.get("metadata") or {}
        spec = data.get("spec") or {}
        statuses = data.get("pipelinerun_status")
        if statuses is None:
            # older CRD versions stored the list directly under status
            statuses = data.get("status")
        if not isinstance(statuses, list):
            statuses = []
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            url=spec.get("url") or "",
            runs=tuple(RunStatus.from_resource(s) for s in statuses if isinstance(s, dict)),
        )
