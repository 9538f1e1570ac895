"""Kubernetes API client for Repository resources."""

import base64
import binascii
import logging
import os
import tempfile

import requests

from tknpac.adapters.base import RepositoryClient, RepositoryClientError, RepositoryNotFoundError
from tknpac.config import AppConfig
from tknpac.kubeconfig import (
    SERVICE_ACCOUNT_CA_FILE,
    SERVICE_ACCOUNT_TOKEN_FILE,
    in_cluster_server,
    load_kubeconfig,
)
from tknpac.models import Repository
from tknpac.models.repository import API_GROUP, API_VERSION, PLURAL

LOG = logging.getLogger("tknpac.adapters.kubernetes")


def _ca_data_file(data: str) -> str:
    """Write base64 CA data to a temp file; requests only takes a path.

    The caller owns the file and removes it (see KubernetesRepositoryClient.close).
    """
    try:
        pem = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise RepositoryClientError(f"invalid certificate-authority-data in kubeconfig: {e}") from e
    with tempfile.NamedTemporaryFile("wb", prefix="tknpac-ca-", suffix=".crt", delete=False) as fh:
        fh.write(pem)
        return fh.name


def _remove(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class KubernetesRepositoryClient(RepositoryClient):
    """Reads Repository custom resources through the Kubernetes REST API."""

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        verify: bool | str = True,
        timeout: int = 30,
    ) -> None:
        if not api_url:
            raise RepositoryClientError("no Kubernetes API server configured")
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Accept"] = "application/json"
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        self._session.verify = verify
        # CA bundle written from kubeconfig data, removed on close()
        self._ca_file: str | None = None

    @classmethod
    def from_config(cls, config: AppConfig) -> "KubernetesRepositoryClient":
        """Build a client from config, falling back to kubeconfig and then to
        the in-cluster service account."""
        kube = config.kube
        context = load_kubeconfig(kube.kubeconfig)
        in_cluster = not kube.api_url and not context.server

        api_url = kube.api_url or context.server or in_cluster_server()
        token = config.token_resolved or context.token
        if not token and in_cluster and SERVICE_ACCOUNT_TOKEN_FILE.is_file():
            token = SERVICE_ACCOUNT_TOKEN_FILE.read_text(encoding="utf-8").strip()

        ca_file: str | None = None
        verify: bool | str = kube.verify_ssl and not context.insecure_skip_tls_verify
        if verify:
            if kube.ca_cert:
                verify = kube.ca_cert
            elif context.certificate_authority:
                verify = context.certificate_authority
            elif context.certificate_authority_data:
                ca_file = verify = _ca_data_file(context.certificate_authority_data)
            elif in_cluster and SERVICE_ACCOUNT_CA_FILE.is_file():
                verify = str(SERVICE_ACCOUNT_CA_FILE)

        LOG.debug("Using API server %s (context=%s)", api_url, context.name or "-")
        try:
            client = cls(api_url, token=token, verify=verify, timeout=kube.timeout)
        except RepositoryClientError:
            if ca_file:
                _remove(ca_file)
            raise
        client._ca_file = ca_file
        return client

    def close(self) -> None:
        """Close the HTTP session and remove the temporary CA bundle, if any."""
        self._session.close()
        if self._ca_file:
            _remove(self._ca_file)
            self._ca_file = None

    def _path(self, name: str, namespace: str) -> str:
        return f"/apis/{API_GROUP}/{API_VERSION}/namespaces/{namespace}/{PLURAL}/{name}"

    def _request(self, method: str, path: str) -> requests.Response:
        url = f"{self._api_url}{path}"
        try:
            return self._session.request(method, url, timeout=self._timeout)
        except requests.RequestException as e:
            raise RepositoryClientError(f"cannot reach {self._api_url}: {e}") from e

    def fetch(self, name: str, namespace: str) -> Repository:
        path = self._path(name, namespace)
        LOG.debug("GET %s", path)
        resp = self._request("GET", path)
        if resp.status_code == 404:
            raise RepositoryNotFoundError(name, namespace)
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise RepositoryClientError(f"{resp.status_code}: {msg}")
        return Repository.from_resource(resp.json())
