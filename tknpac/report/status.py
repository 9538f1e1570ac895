"""Condition reason -> display state mapping.

The set of display states is closed. Reasons not listed here map to
Unknown so a new reconciler reason is never shown as a success or failure.
"""

from enum import Enum


class DisplayState(str, Enum):
    """What a run looks like in the report."""

    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    RUNNING = "Running"
    UNKNOWN = "Unknown"

    @property
    def icon(self) -> str:
        return ICONS[self]


ICONS = {
    DisplayState.SUCCEEDED: "✓",
    DisplayState.FAILED: "✗",
    DisplayState.RUNNING: "•",
    DisplayState.UNKNOWN: "?",
}

SUCCESS_REASONS = frozenset({"Succeeded", "Success", "Completed"})

FAILURE_REASONS = frozenset(
    {
        "Failed",
        "Failure",
        "PipelineRunTimeout",
        "PipelineRunCancelled",
        "Cancelled",
        "CouldntGetPipeline",
        "CouldntGetTask",
        "InvalidPipelineResourceBindings",
        "PipelineValidationFailed",
    }
)

RUNNING_REASONS = frozenset({"Running", "Started", "Pending", "PipelineRunPending"})


def classify(reason: str | None) -> DisplayState:
    """Map a condition reason to its display state.

    No reason at all means the reconciler has not reported a condition yet,
    which is shown as Running.
    """
    if not reason:
        return DisplayState.RUNNING
    if reason in SUCCESS_REASONS:
        return DisplayState.SUCCEEDED
    if reason in FAILURE_REASONS:
        return DisplayState.FAILED
    if reason in RUNNING_REASONS:
        return DisplayState.RUNNING
    return DisplayState.UNKNOWN
