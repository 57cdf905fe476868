"""
Unit tests for the Typer CLI

The cluster client factory and webbrowser.open are replaced, so the commands
run end to end without kubectl or a browser.
"""

import webbrowser

import pytest
from typer.testing import CliRunner

from jx_dashboard import __version__
from jx_dashboard.cli.main import app
from jx_dashboard.collectors import base as collectors
from jx_dashboard.errors import ClientInitError

from fakes import FakeKubectlClient, secret_doc, service_doc

runner = CliRunner()


@pytest.fixture
def cluster(monkeypatch, fake_client):
    """Serve fake_client from the client factory; records factory arguments"""
    calls = []

    async def factory(namespace=None, context=None, timeout_seconds=10.0):
        calls.append({"namespace": namespace, "context": context, "timeout_seconds": timeout_seconds})
        return fake_client

    monkeypatch.setattr(collectors, "create_client", factory)
    return calls


@pytest.fixture
def browser(monkeypatch):
    opened = []
    monkeypatch.setattr(webbrowser, "open", lambda url: opened.append(url) or True)
    return opened


class TestDashboardCommand:
    """Tests for `jx-dashboard dashboard`"""

    def test_no_open_prints_url(self, cluster, browser, fake_client, dashboard_url):
        result = runner.invoke(app, ["dashboard", "--no-open"])

        assert result.exit_code == 0, result.output
        assert f"Jenkins X dashboard is running at: {dashboard_url}" in result.output
        assert browser == []
        assert fake_client.requested("secret") == []

    def test_dash_alias(self, cluster, browser, dashboard_url):
        result = runner.invoke(app, ["dash", "--no-open"])
        assert result.exit_code == 0, result.output
        assert dashboard_url in result.output

    def test_opens_browser_with_login(self, cluster, browser):
        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 0, result.output
        assert browser == ["http://u:p@dashboard.example.com/path"]
        assert "u:p@" not in result.output

    def test_flags_reach_client_factory(self, cluster, browser):
        result = runner.invoke(app, ["dashboard", "--no-open", "--namespace", "jx-staging", "--context", "prod"])

        assert result.exit_code == 0, result.output
        assert cluster == [{"namespace": "jx-staging", "context": "prod", "timeout_seconds": 10.0}]

    def test_name_and_secret_flags(self, monkeypatch, browser):
        client = FakeKubectlClient(objects={
            ("service", "my-dash"): service_doc(name="my-dash", annotations={"fabric8.io/exposeUrl": "http://my"}),
            ("secret", "my-login"): secret_doc(name="my-login", username="a", password="b"),
        })

        async def factory(**kwargs):
            return client

        monkeypatch.setattr(collectors, "create_client", factory)
        result = runner.invoke(app, ["dashboard", "-n", "my-dash", "-s", "my-login"])

        assert result.exit_code == 0, result.output
        assert browser == ["http://a:b@my"]

    def test_config_file_names(self, tmp_path, monkeypatch, browser):
        config_dir = tmp_path / ".jx-dashboard"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("dashboard:\n  service_name: from-config\n")
        client = FakeKubectlClient(objects={
            ("service", "from-config"): service_doc(
                name="from-config", annotations={"fabric8.io/exposeUrl": "http://cfg"}
            ),
        })

        async def factory(**kwargs):
            return client

        monkeypatch.setattr(collectors, "create_client", factory)
        result = runner.invoke(app, ["dashboard", "--no-open"])

        assert result.exit_code == 0, result.output
        assert "http://cfg" in result.output

    def test_quiet(self, cluster, browser, dashboard_url):
        result = runner.invoke(app, ["dashboard", "--quiet"])
        assert result.exit_code == 0, result.output
        assert "Jenkins X dashboard is running at:" not in result.output
        assert len(browser) == 1


class TestDashboardErrors:
    """Tests for exit codes"""

    def test_missing_service(self, monkeypatch):
        async def factory(**kwargs):
            return FakeKubectlClient()

        monkeypatch.setattr(collectors, "create_client", factory)
        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 1
        assert "jxgh/jx-pipelines-visualizer" in result.output

    def test_client_init_failure(self, monkeypatch):
        async def factory(**kwargs):
            raise ClientInitError("kubectl not found in PATH")

        monkeypatch.setattr(collectors, "create_client", factory)
        result = runner.invoke(app, ["dashboard", "--no-open"])

        assert result.exit_code == 1
        assert "kubectl not found in PATH" in result.output

    def test_browser_failure(self, cluster, monkeypatch):
        monkeypatch.setattr(webbrowser, "open", lambda url: False)
        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 1
        assert "failed to open browser" in result.output

    def test_unexpected_error_is_reported(self, cluster, monkeypatch):
        def broken_open(url):
            raise OSError("exec failed")

        monkeypatch.setattr(webbrowser, "open", broken_open)
        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 1
        assert "Error: exec failed" in result.output
        assert not isinstance(result.exception, OSError)

    def test_invalid_service_name(self, cluster):
        result = runner.invoke(app, ["dashboard", "--name", "Not_Valid"])
        assert result.exit_code == 2
        assert "Input validation error" in result.output
        assert cluster == []


class TestGlobalOptions:
    """Tests for the app callback"""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_debug_logging(self, cluster, browser):
        result = runner.invoke(app, ["--debug", "dashboard", "--no-open"])
        assert result.exit_code == 0, result.output
        assert "Jenkins X dashboard is running" in result.output


class TestOutputStreams:
    """stdout carries the URL line only; logs go to stderr"""

    def test_stdout_holds_only_url(self, cluster, capsys, dashboard_url):
        app(["dashboard", "--no-open"], standalone_mode=False)

        captured = capsys.readouterr()
        assert captured.out.splitlines() == [f"Jenkins X dashboard is running at: {dashboard_url}"]
        assert "Jenkins X dashboard is running" in captured.err

    def test_debug_logs_stay_on_stderr(self, cluster, capsys, dashboard_url):
        app(["--debug", "dashboard", "--no-open"], standalone_mode=False)

        captured = capsys.readouterr()
        assert captured.out.splitlines() == [f"Jenkins X dashboard is running at: {dashboard_url}"]
        assert "Config file not found" in captured.err
