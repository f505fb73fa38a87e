"""Tests for the Typer command line."""

import pytest
from typer.testing import CliRunner

import core.services.export_pipeline as export_pipeline
from adapters.http_client import build_async_client
from cli.main import app
from conftest import FakeVaultServer


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def use_server(monkeypatch, tmp_path):
    """Route the pipeline's HTTP client to a fake server."""
    # Keep AppSettings away from any .env in the working directory.
    monkeypatch.chdir(tmp_path)

    def _use(server: FakeVaultServer) -> FakeVaultServer:
        def _client(settings=None, **kwargs):
            kwargs["transport"] = server.transport
            return build_async_client(settings, **kwargs)

        monkeypatch.setattr(export_pipeline, "build_async_client", _client)
        return server

    return _use


class TestExportCommand:
    """Test the single export command."""

    def test_success(self, runner, use_server, config_file, output_dir):
        server = use_server(FakeVaultServer())
        result = runner.invoke(app, ["--config", str(config_file), str(output_dir)])

        assert result.exit_code == 0, result.output
        assert len(server.requests) == 4
        assert len(list(output_dir.iterdir())) == 4
        assert "Exported artifacts" in result.output

    def test_quiet_prints_nothing(self, runner, use_server, config_file, output_dir):
        use_server(FakeVaultServer())
        result = runner.invoke(app, ["--config", str(config_file), str(output_dir), "--quiet"])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_missing_config_field_makes_no_requests(
        self, runner, use_server, write_config, config_data, output_dir
    ):
        server = use_server(FakeVaultServer())
        data = dict(config_data)
        del data["client_secret"]
        path = write_config(data, name="incomplete.yaml")

        result = runner.invoke(app, ["--config", str(path), str(output_dir)])

        assert result.exit_code == 1
        assert "config failed" in result.output
        assert "client_secret" in result.output
        assert server.requests == []
        assert list(output_dir.iterdir()) == []

    def test_unreadable_config(self, runner, use_server, tmp_path, output_dir):
        server = use_server(FakeVaultServer())
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), str(output_dir)])
        assert result.exit_code == 1
        assert "config failed" in result.output
        assert server.requests == []

    def test_missing_access_token(self, runner, use_server, config_file, output_dir):
        server = use_server(FakeVaultServer({("POST", "/connect/token"): (200, {"scope": "api"})}))
        result = runner.invoke(app, ["--config", str(config_file), str(output_dir)])

        assert result.exit_code == 1
        assert "token failed" in result.output
        assert "access_token" in result.output
        assert len(server.requests) == 2

    def test_missing_output_directory(self, runner, use_server, config_file, tmp_path):
        use_server(FakeVaultServer())
        result = runner.invoke(app, ["--config", str(config_file), str(tmp_path / "absent")])
        assert result.exit_code == 1
        assert "prelogin failed" in result.output

    def test_config_option_is_required(self, runner, output_dir):
        result = runner.invoke(app, [str(output_dir)])
        assert result.exit_code == 2

    def test_output_dir_is_required(self, runner, config_file):
        result = runner.invoke(app, ["--config", str(config_file)])
        assert result.exit_code == 2

    def test_invalid_environment_setting(self, runner, use_server, monkeypatch, config_file, output_dir):
        """A bad BW_SNAPSHOT_* value is reported on one line, not as a traceback."""
        server = use_server(FakeVaultServer())
        monkeypatch.setenv("BW_SNAPSHOT_LOG_LEVEL", "verbose")
        result = runner.invoke(app, ["--config", str(config_file), str(output_dir)])

        assert result.exit_code == 1
        assert "settings failed" in result.output
        assert "BW_SNAPSHOT_LOG_LEVEL" in result.output
        assert "Traceback" not in result.output
        assert server.requests == []
