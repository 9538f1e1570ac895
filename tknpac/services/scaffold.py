"""Starter PipelineRun written to .tekton/ by the generate command."""

import re
from pathlib import Path
from typing import Any

import yaml

EVENT_TYPES = {"pull_request": "Pull Request", "push": "Push to a Branch or a Tag"}
DEFAULT_EVENT_TYPE = "pull_request"
MAIN_BRANCH = "main"
TEKTON_DIR = ".tekton"
MAX_KEEP_RUNS = "5"
STEP_IMAGE = "registry.access.redhat.com/ubi8/ubi-micro"

ANNOTATION_PREFIX = "pipelinesascode.tekton.dev"

# Kubernetes names: lowercase alphanumerics and dashes
_INVALID_NAME_CHARS_RE = re.compile(r"[^a-z0-9\-]")
_DOUBLE_DASH_RE = re.compile(r"-+")


def sanitize_resource_name(text: str, max_length: int = 63) -> str:
    """Sanitize a string for use as a Kubernetes resource name.

    Lowercases, turns spaces, dots and underscores into dashes, drops other
    invalid characters, collapses dashes and truncates without leaving a
    trailing dash. May return an empty string.
    """
    if not text or not text.strip():
        return ""
    s = text.lower().strip()
    for char in " ._":
        s = s.replace(char, "-")
    s = _INVALID_NAME_CHARS_RE.sub("", s)
    s = _DOUBLE_DASH_RE.sub("-", s).strip("-")
    if len(s) > max_length:
        s = s[:max_length].rstrip("-")
    return s


def pipelinerun_file_path(top_level: Path, event_type: str) -> Path:
    """Path of the starter file, e.g. .tekton/pull-request.yaml."""
    fname = f"{event_type.replace('_', '-')}.yaml"
    return top_level / TEKTON_DIR / fname


def render_pipelinerun(repo_name: str, event_type: str, target_branch: str) -> str:
    """YAML text of a PipelineRun matching event_type on target_branch."""
    name = sanitize_resource_name(f"{repo_name}-{event_type}") or sanitize_resource_name(event_type)
    data: dict[str, Any] = {
        "apiVersion": "tekton.dev/v1beta1",
        "kind": "PipelineRun",
        "metadata": {
            "name": name,
            "annotations": {
                f"{ANNOTATION_PREFIX}/on-event": f"[{event_type}]",
                f"{ANNOTATION_PREFIX}/on-target-branch": f"[{target_branch}]",
                f"{ANNOTATION_PREFIX}/max-keep-runs": MAX_KEEP_RUNS,
            },
        },
        "spec": {
            "params": [
                {"name": "repo_url", "value": "{{ repo_url }}"},
                {"name": "revision", "value": "{{ revision }}"},
            ],
            "pipelineSpec": {
                "params": [{"name": "repo_url"}, {"name": "revision"}],
                "tasks": [
                    {
                        "name": "noop-task",
                        "taskSpec": {
                            "steps": [
                                {
                                    "name": "noop-task",
                                    "image": STEP_IMAGE,
                                    "script": "exit 0\n",
                                }
                            ]
                        },
                    }
                ],
            },
        },
    }
    return yaml.dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=1000,
    )
