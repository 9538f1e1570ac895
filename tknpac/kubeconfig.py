"""Minimal kubeconfig reader (current context only).

Only what the cluster client needs is extracted: namespace, API server,
CA bundle, TLS skip flag and a bearer token. Exec/auth-provider plugins and
client certificates are not supported.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")
SERVICE_ACCOUNT_NAMESPACE_FILE = SERVICE_ACCOUNT_DIR / "namespace"
SERVICE_ACCOUNT_TOKEN_FILE = SERVICE_ACCOUNT_DIR / "token"
SERVICE_ACCOUNT_CA_FILE = SERVICE_ACCOUNT_DIR / "ca.crt"

LOG = logging.getLogger("tknpac.kubeconfig")


class KubeContext(BaseModel):
    """Settings of the active kubeconfig context; every field may be empty."""

    name: str = ""
    namespace: str = ""
    server: str = ""
    certificate_authority: str | None = None
    certificate_authority_data: str | None = None
    insecure_skip_tls_verify: bool = False
    token: str | None = None


def default_kubeconfig_path() -> Path:
    """First entry of $KUBECONFIG, else ~/.kube/config."""
    env = os.environ.get("KUBECONFIG", "")
    for entry in env.split(os.pathsep):
        if entry.strip():
            return Path(entry.strip()).expanduser()
    return Path.home() / ".kube" / "config"


def _named(items: Any, name: str, key: str) -> Dict[str, Any]:
    if not isinstance(items, list):
        return {}
    for item in items:
        if isinstance(item, dict) and item.get("name") == name:
            return item.get(key) or {}
    return {}


def _read_token_file(path: str, base: Path) -> str | None:
    p = Path(path)
    if not p.is_absolute():
        p = base / p
    try:
        return p.read_text(encoding="utf-8").strip() or None
    except OSError as e:
        LOG.debug("Cannot read token file %s: %s", p, e)
        return None


def parse_kubeconfig(data: Dict[str, Any], base_dir: Path) -> KubeContext:
    """Extract the current context from a parsed kubeconfig document.

    Relative file references resolve against base_dir, as kubectl does.
    """
    current = data.get("current-context") or ""
    if not current:
        return KubeContext()
    context = _named(data.get("contexts"), current, "context")
    cluster = _named(data.get("clusters"), context.get("cluster", ""), "cluster")
    user = _named(data.get("users"), context.get("user", ""), "user")

    ca = cluster.get("certificate-authority")
    if ca and not Path(ca).is_absolute():
        ca = str(base_dir / ca)

    token = user.get("token")
    if not token and user.get("tokenFile"):
        token = _read_token_file(user["tokenFile"], base_dir)

    return KubeContext(
        name=current,
        namespace=context.get("namespace") or "",
        server=cluster.get("server") or "",
        certificate_authority=ca,
        certificate_authority_data=cluster.get("certificate-authority-data"),
        insecure_skip_tls_verify=bool(cluster.get("insecure-skip-tls-verify", False)),
        token=token,
    )


def load_kubeconfig(path: str | Path | None = None) -> KubeContext:
    """Load the current context from a kubeconfig file.

    Missing or unreadable files yield an empty KubeContext.
    """
    cfg_path = Path(path).expanduser() if path else default_kubeconfig_path()
    if not cfg_path.is_file():
        return KubeContext()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        LOG.warning("Failed to load kubeconfig %s: %s", cfg_path, e)
        return KubeContext()
    if not isinstance(data, dict):
        return KubeContext()
    return parse_kubeconfig(data, cfg_path.parent)


def in_cluster_server() -> str:
    """API server URL from the service environment when running in a pod."""
    host = os.environ.get("KUBERNETES_SERVICE_HOST", "")
    port = os.environ.get("KUBERNETES_SERVICE_PORT", "443")
    if not host:
        return ""
    if ":" in host:
        host = f"[{host}]"
    return f"https://{host}:{port}"
