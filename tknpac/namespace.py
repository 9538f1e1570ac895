"""Effective namespace resolution."""

import logging
from pathlib import Path

from tknpac.config import KubeConfig
from tknpac.kubeconfig import SERVICE_ACCOUNT_NAMESPACE_FILE, load_kubeconfig

DEFAULT_NAMESPACE = "default"

LOG = logging.getLogger("tknpac.namespace")


def resolve_namespace(context_namespace: str, override_namespace: str) -> str:
    """Return the namespace used to address a resource.

    A non-empty override always wins over the context namespace. Existence
    is not checked here; the fetch call reports a missing namespace as not
    found.
    """
    if override_namespace:
        return override_namespace
    return context_namespace


def current_namespace(config: KubeConfig, service_account_file: Path = SERVICE_ACCOUNT_NAMESPACE_FILE) -> str:
    """Ambient namespace: config, then kubeconfig context, then in-cluster
    service account, then "default"."""
    if config.namespace:
        return config.namespace
    kube = load_kubeconfig(config.kubeconfig)
    if kube.namespace:
        return kube.namespace
    if service_account_file.is_file():
        try:
            ns = service_account_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            LOG.debug("Cannot read %s: %s", service_account_file, e)
            ns = ""
        if ns:
            return ns
    return DEFAULT_NAMESPACE
