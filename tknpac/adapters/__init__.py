"""Repository fetch clients (base and implementations)."""

from tknpac.adapters.base import RepositoryClient, RepositoryClientError, RepositoryNotFoundError
from tknpac.adapters.file import FileRepositoryClient
from tknpac.adapters.kubernetes import KubernetesRepositoryClient
from tknpac.adapters.memory import InMemoryRepositoryClient

__all__ = [
    "RepositoryClient",
    "RepositoryClientError",
    "RepositoryNotFoundError",
    "FileRepositoryClient",
    "InMemoryRepositoryClient",
    "KubernetesRepositoryClient",
]
