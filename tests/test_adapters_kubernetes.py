"""Unit tests for the Kubernetes Repository client (mocked API)."""

import base64
import tempfile
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from tknpac.adapters import KubernetesRepositoryClient, RepositoryClientError, RepositoryNotFoundError
from tknpac.config import AppConfig, KubeConfig
from tknpac.models import Repository

RESOURCE = {
    "apiVersion": "pipelinesascode.tekton.dev/v1alpha1",
    "kind": "Repository",
    "metadata": {"name": "test-run", "namespace": "namespace"},
    "spec": {"url": "https://anurl.com"},
    "pipelinerun_status": [
        {
            "pipelineRunName": "pipelinerun1",
            "startTime": "2024-01-15T10:00:00Z",
            "completionTime": "2024-01-15T10:01:00Z",
            "conditions": [{"reason": "Succeeded"}],
        }
    ],
}


@pytest.fixture
def client() -> KubernetesRepositoryClient:
    return KubernetesRepositoryClient("https://api.example.com:6443/", token="test-token")


def test_fetch_success(client: KubernetesRepositoryClient) -> None:
    """fetch returns a Repository when the API returns 200."""
    mock_resp = Mock()
    mock_resp.status_code = 200
    mock_resp.json.return_value = RESOURCE

    with patch.object(client._session, "request", return_value=mock_resp) as req:
        repo = client.fetch("test-run", "namespace")

    assert isinstance(repo, Repository)
    assert repo.name == "test-run"
    assert repo.runs[0].pipeline_run_name == "pipelinerun1"
    req.assert_called_once()
    call_args = req.call_args
    assert call_args[0][0] == "GET"
    assert call_args[0][1] == (
        "https://api.example.com:6443/apis/pipelinesascode.tekton.dev/v1alpha1/namespaces/namespace/repositories/test-run"
    )
    assert call_args[1]["timeout"] == 30


def test_token_header(client: KubernetesRepositoryClient) -> None:
    """Bearer token is sent on every request."""
    assert client._session.headers["Authorization"] == "Bearer test-token"


def test_fetch_404_raises_not_found(client: KubernetesRepositoryClient) -> None:
    """404 becomes RepositoryNotFoundError naming the resource and namespace."""
    mock_resp = Mock()
    mock_resp.status_code = 404
    mock_resp.text = "Not Found"

    with patch.object(client._session, "request", return_value=mock_resp):
        with pytest.raises(RepositoryNotFoundError) as exc_info:
            client.fetch("missing", "ns")
    assert exc_info.value.name == "missing"
    assert exc_info.value.namespace == "ns"
    assert '"missing"' in str(exc_info.value)
    assert '"ns"' in str(exc_info.value)


def test_fetch_403_raises_client_error(client: KubernetesRepositoryClient) -> None:
    """Other API errors carry the API message."""
    mock_resp = Mock()
    mock_resp.status_code = 403
    mock_resp.text = "Forbidden"
    mock_resp.json.return_value = {"message": 'repositories "x" is forbidden'}

    with patch.object(client._session, "request", return_value=mock_resp):
        with pytest.raises(RepositoryClientError) as exc_info:
            client.fetch("x", "ns")
    assert not isinstance(exc_info.value, RepositoryNotFoundError)
    assert "403" in str(exc_info.value)
    assert "forbidden" in str(exc_info.value)


def test_fetch_non_json_error_body(client: KubernetesRepositoryClient) -> None:
    """Error bodies that are not JSON fall back to the response text."""
    mock_resp = Mock()
    mock_resp.status_code = 500
    mock_resp.text = "boom"
    mock_resp.json.side_effect = ValueError("no json")

    with patch.object(client._session, "request", return_value=mock_resp):
        with pytest.raises(RepositoryClientError, match="500: boom"):
            client.fetch("x", "ns")


def test_fetch_transport_error(client: KubernetesRepositoryClient) -> None:
    """Connection failures are wrapped in RepositoryClientError."""
    with patch.object(client._session, "request", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(RepositoryClientError, match="cannot reach"):
            client.fetch("x", "ns")


def test_requires_api_url() -> None:
    """A client without server URL cannot be built."""
    with pytest.raises(RepositoryClientError):
        KubernetesRepositoryClient("")


class TestFromConfig:
    """from_config merges config, kubeconfig and defaults."""

    def test_config_values_win(self, tmp_path: Path) -> None:
        """api_url, token and CA from config are used directly."""
        config = AppConfig(
            kube=KubeConfig(
                api_url="https://config.example.com",
                token="cfg-token",
                ca_cert="/etc/ca.pem",
                kubeconfig=str(tmp_path / "missing"),
            )
        )
        client = KubernetesRepositoryClient.from_config(config)
        assert client._api_url == "https://config.example.com"
        assert client._session.headers["Authorization"] == "Bearer cfg-token"
        assert client._session.verify == "/etc/ca.pem"

    def test_kubeconfig_fallback(self, tmp_path: Path) -> None:
        """Server, token and TLS flag come from the kubeconfig context."""
        kubeconfig = tmp_path / "config"
        kubeconfig.write_text(
            "current-context: dev\n"
            "contexts:\n"
            "- name: dev\n"
            "  context: {cluster: c1, user: u1}\n"
            "clusters:\n"
            "- name: c1\n"
            "  cluster: {server: 'https://kube.example.com', insecure-skip-tls-verify: true}\n"
            "users:\n"
            "- name: u1\n"
            "  user: {token: kube-token}\n",
            encoding="utf-8",
        )
        config = AppConfig(kube=KubeConfig(kubeconfig=str(kubeconfig)))
        with patch.dict("os.environ", {}, clear=True):
            client = KubernetesRepositoryClient.from_config(config)
        assert client._api_url == "https://kube.example.com"
        assert client._session.headers["Authorization"] == "Bearer kube-token"
        assert client._session.verify is False

    def test_no_server_anywhere(self, tmp_path: Path) -> None:
        """Without any server the client cannot be built."""
        config = AppConfig(kube=KubeConfig(kubeconfig=str(tmp_path / "missing")))
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(RepositoryClientError, match="no Kubernetes API server"):
                KubernetesRepositoryClient.from_config(config)

    def _ca_data_kubeconfig(self, tmp_path: Path, ca_data: str) -> Path:
        kubeconfig = tmp_path / "config"
        kubeconfig.write_text(
            "current-context: kind\n"
            "contexts:\n"
            "- name: kind\n"
            "  context: {cluster: kind, user: kind}\n"
            "clusters:\n"
            "- name: kind\n"
            "  cluster:\n"
            "    server: 'https://127.0.0.1:6443'\n"
            f"    certificate-authority-data: '{ca_data}'\n"
            "users:\n"
            "- name: kind\n"
            "  user: {token: kind-token}\n",
            encoding="utf-8",
        )
        return kubeconfig

    def test_ca_data_is_written_and_removed_on_close(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """certificate-authority-data becomes a CA file that close() deletes."""
        temp_dir = tmp_path / "tmp"
        temp_dir.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
        kubeconfig = self._ca_data_kubeconfig(tmp_path, base64.b64encode(b"CA-PEM").decode())

        with patch.dict("os.environ", {}, clear=True):
            client = KubernetesRepositoryClient.from_config(AppConfig(kube=KubeConfig(kubeconfig=str(kubeconfig))))
        ca_file = Path(client._session.verify)
        assert ca_file.parent == temp_dir
        assert ca_file.read_bytes() == b"CA-PEM"

        client.close()
        assert not ca_file.exists()
        assert list(temp_dir.iterdir()) == []
        client.close()

    def test_context_manager_closes(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Leaving the with block removes the CA file."""
        temp_dir = tmp_path / "tmp"
        temp_dir.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
        kubeconfig = self._ca_data_kubeconfig(tmp_path, base64.b64encode(b"CA-PEM").decode())

        with patch.dict("os.environ", {}, clear=True):
            config = AppConfig(kube=KubeConfig(kubeconfig=str(kubeconfig)))
            with KubernetesRepositoryClient.from_config(config) as client:
                assert Path(client._session.verify).is_file()
        assert list(temp_dir.iterdir()) == []

    def test_invalid_ca_data(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Undecodable CA data is a client error and leaves no file behind."""
        temp_dir = tmp_path / "tmp"
        temp_dir.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
        kubeconfig = self._ca_data_kubeconfig(tmp_path, "not base64!!")

        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(RepositoryClientError, match="certificate-authority-data"):
                KubernetesRepositoryClient.from_config(AppConfig(kube=KubeConfig(kubeconfig=str(kubeconfig))))
        assert list(temp_dir.iterdir()) == []
