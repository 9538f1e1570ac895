"""In-memory client, seeded with Repository objects."""

from typing import Dict, Iterable, Tuple

from tknpac.adapters.base import RepositoryClient, RepositoryNotFoundError
from tknpac.models import Repository


class InMemoryRepositoryClient(RepositoryClient):
    """Serves Repositories from a dict keyed by (namespace, name)."""

    def __init__(self, repositories: Iterable[Repository] = ()) -> None:
        self._repos: Dict[Tuple[str, str], Repository] = {}
        for repo in repositories:
            self.add(repo)

    def add(self, repo: Repository) -> None:
        """Store repo, replacing any previous one with the same key."""
        self._repos[(repo.namespace, repo.name)] = repo

    def fetch(self, name: str, namespace: str) -> Repository:
        try:
            return self._repos[(namespace, name)]
        except KeyError:
            raise RepositoryNotFoundError(name, namespace) from None
