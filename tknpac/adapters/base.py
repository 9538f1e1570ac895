"""Abstract base for Repository fetch clients."""

from abc import ABC, abstractmethod

from tknpac.models import Repository


class RepositoryClientError(Exception):
    """Raised when a Repository cannot be fetched (transport, auth, ...)."""

    pass


class RepositoryNotFoundError(RepositoryClientError):
    """Raised when no Repository exists for (name, namespace)."""

    def __init__(self, name: str, namespace: str) -> None:
        self.name = name
        self.namespace = namespace
        super().__init__(f'repository "{name}" not found in namespace "{namespace}"')


class RepositoryClient(ABC):
    """Fetches a Repository resource by its addressing key."""

    @abstractmethod
    def fetch(self, name: str, namespace: str) -> Repository:
        """Return the Repository or raise RepositoryNotFoundError."""
        ...

    def close(self) -> None:
        """Release resources held by the client."""
        pass

    def __enter__(self) -> "RepositoryClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
