"""
Shared fixtures for the minipack tests.
"""

import pytest
import requests

from tests.minipack.helpers import FakeHttp, FakeRegistry


@pytest.fixture
def fake_http(monkeypatch):
    """Replace requests.get with an in-memory router."""
    http = FakeHttp()
    monkeypatch.setattr(requests, "get", http.get)
    return http


@pytest.fixture
def vue_registry():
    """A registry answering "vue@3.4" with two candidate versions, out of order."""
    return FakeRegistry(
        [
            {
                "name": "vue",
                "version": "3.4.1",
                "dist.tarball": "https://registry.npmjs.org/vue/-/vue-3.4.1.tgz",
            },
            {
                "name": "vue",
                "version": "3.4.0",
                "dist.tarball": "https://registry.npmjs.org/vue/-/vue-3.4.0.tgz",
            },
        ]
    )


@pytest.fixture
def dirs(tmp_path):
    """Output and scratch directories for a run."""
    out_dir = tmp_path / "vendor"
    temp_dir = tmp_path / "scratch"
    return {"out_dir": str(out_dir), "temp_dir": str(temp_dir)}
