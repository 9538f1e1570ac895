"""Client reading Repository manifests from a YAML file.

Accepts what `kubectl get repository -o yaml` prints: a single resource,
several documents separated by ---, or a `kind: List` with items.
"""

import logging
from pathlib import Path
from typing import Any, Iterator, List

import yaml

from tknpac.adapters.base import RepositoryClientError
from tknpac.adapters.memory import InMemoryRepositoryClient
from tknpac.models import Repository
from tknpac.models.repository import KIND

LOG = logging.getLogger("tknpac.adapters.file")


def _resources(doc: Any) -> Iterator[dict]:
    if not isinstance(doc, dict):
        return
    if doc.get("kind") == "List" or (doc.get("items") is not None and "kind" not in doc):
        for item in doc.get("items") or []:
            yield from _resources(item)
        return
    if doc.get("kind", KIND) == KIND:
        yield doc
    else:
        LOG.debug("Skipping %s document", doc.get("kind"))


def load_manifests(path: Path) -> List[Repository]:
    """Parse every Repository resource in the YAML file at path."""
    try:
        docs = list(yaml.safe_load_all(path.read_text(encoding="utf-8")))
    except OSError as e:
        raise RepositoryClientError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RepositoryClientError(f"invalid YAML in {path}: {e}") from e
    repos = []
    for doc in docs:
        for resource in _resources(doc):
            repos.append(Repository.from_resource(resource))
    LOG.debug("Loaded %d repositories from %s", len(repos), path)
    return repos


class FileRepositoryClient(InMemoryRepositoryClient):
    """In-memory client seeded from a manifest file.

    Resources without metadata.namespace are placed in default_namespace.
    """

    def __init__(self, path: Path, default_namespace: str = "") -> None:
        repos = []
        for repo in load_manifests(path):
            if not repo.namespace and default_namespace:
                repo = repo.model_copy(update={"namespace": default_namespace})
            repos.append(repo)
        super().__init__(repos)
