"""
Pytest configuration and shared fixtures for jx-dashboard tests
"""

import logging
import os

import pytest
import structlog

from jx_dashboard import config as config_module

from fakes import FakeKubectlClient, RecordingOpener, secret_doc, service_doc


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep the user's config, env and logging setup out of the tests"""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("JX_DASHBOARD_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_global_config", None)

    yield

    # The CLI's --debug flag writes to os.environ directly
    os.environ.pop("JX_DASHBOARD_DEBUG", None)
    logging.getLogger().handlers = []
    logging.disable(logging.NOTSET)
    structlog.reset_defaults()


@pytest.fixture
def dashboard_url():
    return "http://dashboard.example.com/path"


@pytest.fixture
def fake_client(dashboard_url):
    """Cluster with the dashboard exposed through an annotation and a login Secret"""
    return FakeKubectlClient(objects={
        ("service", "jx-pipelines-visualizer"): service_doc(
            annotations={"fabric8.io/exposeUrl": dashboard_url}
        ),
        ("secret", "jx-basic-auth-user-password"): secret_doc(username="u", password="p"),
    })


@pytest.fixture
def recording_opener():
    return RecordingOpener()
