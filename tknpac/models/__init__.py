"""Data models for Repository resources and their run statuses (Pydantic)."""

from tknpac.models.repository import Repository
from tknpac.models.run_status import RunStatus

__all__ = ["Repository", "RunStatus"]
