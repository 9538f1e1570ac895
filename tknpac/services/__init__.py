"""Helpers used by the generate command (git lookup, PipelineRun scaffold)."""

from tknpac.services.git import GitError, git_top_level
from tknpac.services.scaffold import (
    DEFAULT_EVENT_TYPE,
    EVENT_TYPES,
    MAIN_BRANCH,
    TEKTON_DIR,
    pipelinerun_file_path,
    render_pipelinerun,
    sanitize_resource_name,
)

__all__ = [
    "DEFAULT_EVENT_TYPE",
    "EVENT_TYPES",
    "MAIN_BRANCH",
    "TEKTON_DIR",
    "GitError",
    "git_top_level",
    "pipelinerun_file_path",
    "render_pipelinerun",
    "sanitize_resource_name",
]
