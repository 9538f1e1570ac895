"""Tests for the tknpac entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from tknpac.main import main, parse_args

MANIFEST = """\
apiVersion: pipelinesascode.tekton.dev/v1alpha1
kind: Repository
metadata:
  name: test-run
  namespace: namespace
spec:
  url: https://anurl.com
"""


class TestParseArgs:
    """Global options and subcommand detection."""

    def test_describe_with_options(self) -> None:
        """Subcommand is removed and its options are kept in rest."""
        args = parse_args(["describe", "test-run", "-n", "ns"])
        assert args.subcommand == "describe"
        assert args.rest == ["test-run", "-n", "ns"]

    def test_global_options_and_alias(self) -> None:
        """--config and --verbose are global; gen is generate."""
        args = parse_args(["-v", "--config", "x.yaml", "gen", "--yes"])
        assert args.subcommand == "generate"
        assert args.verbose is True
        assert args.config == Path("x.yaml")
        assert args.rest == ["--yes"]

    def test_unknown_command(self) -> None:
        """Unknown command exits with usage error."""
        with pytest.raises(SystemExit):
            parse_args(["frobnicate"])

    def test_command_option_before_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        """describe's -n given before the command is rejected with a hint."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-n", "ns", "describe", "x"])
        assert exc_info.value.code == 2
        err = capsys.readouterr().err
        assert "-n" in err
        assert "command options go after the command" in err
        assert "unknown command" not in err

    def test_global_option_after_command(self) -> None:
        """--verbose is accepted after the command as well."""
        args = parse_args(["describe", "x", "-n", "ns", "--verbose"])
        assert args.subcommand == "describe"
        assert args.verbose is True
        assert args.rest == ["x", "-n", "ns"]

    def test_missing_command(self) -> None:
        """A command is required."""
        with pytest.raises(SystemExit):
            parse_args([])


def test_describe_from_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """tknpac describe NAME -f FILE prints the report and exits 0."""
    manifest = tmp_path / "repo.yaml"
    manifest.write_text(MANIFEST, encoding="utf-8")
    with patch.dict("os.environ", {"KUBE_NAMESPACE": "namespace"}):
        code = main(["--config", str(tmp_path / "none.yaml"), "describe", "test-run", "-f", str(manifest), "--no-color"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Name:      test-run" in captured.out
    assert "No runs recorded yet" in captured.out


def test_describe_not_found_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Missing repository exits non-zero with a message on stderr."""
    manifest = tmp_path / "repo.yaml"
    manifest.write_text(MANIFEST, encoding="utf-8")
    code = main(["-c", str(tmp_path / "none.yaml"), "describe", "other", "-n", "namespace", "-f", str(manifest)])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert 'repository "other" not found in namespace "namespace"' in captured.err


def test_generate_dispatch(tmp_path: Path) -> None:
    """generate subcommand is routed to run_generate."""
    with patch("tknpac.cli.generate.run_generate", return_value=0) as run:
        assert main(["-c", str(tmp_path / "none.yaml"), "generate", "--event-type", "push"]) == 0
    assert run.call_args[0][0].event_type == "push"
