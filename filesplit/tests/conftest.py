import builtins
import io
import json
import os

import pytest
import requests

from filesplit.nodes.node_storage import create_app

NODE_URL = "http://node.test"


@pytest.fixture
def make_file(tmp_path):
    def _make(name, data):
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)
    return _make


@pytest.fixture
def sample_bytes():
    return os.urandom(10_000)


class FailingClose:
    """Wraps a real file handle and fails on close after closing it."""

    def __init__(self, f, fail_read_on=None, fail_write=False):
        self._f = f
        self.name = f.name
        self.reads = 0
        self.fail_read_on = fail_read_on  # 1-based read call that fails
        self.fail_write = fail_write

    def read(self, *args):
        self.reads += 1
        if self.reads == self.fail_read_on:
            raise OSError("read failed")
        return self._f.read(*args)

    def write(self, data):
        if self.fail_write:
            raise OSError("write failed")
        return self._f.write(data)

    def close(self):
        self._f.close()
        raise OSError("close failed")


@pytest.fixture
def failing_close(monkeypatch):
    """Makes open() in the given module hand out FailingClose handles."""
    def _patch(module, **kwargs):
        def fake_open(path, mode):
            return FailingClose(builtins.open(path, mode), **kwargs)
        monkeypatch.setattr(module, "open", fake_open, raising=False)
    return _patch


class FakeResponse:
    def __init__(self, flask_response):
        self.status_code = flask_response.status_code
        self.content = flask_response.data

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def node_url():
    return NODE_URL


@pytest.fixture
def node(tmp_path, monkeypatch):
    """Routes requests calls for NODE_URL to a Flask test client. Yields the storage dir."""
    storage_dir = tmp_path / "node_storage"
    client = create_app(str(storage_dir)).test_client()

    def fake_post(url, files=None, data=None, timeout=None):
        form = dict(data or {})
        for field, f in (files or {}).items():
            form[field] = (io.BytesIO(f.read()), os.path.basename(f.name))
        return FakeResponse(client.post(url[len(NODE_URL):], data=form, content_type="multipart/form-data"))

    def fake_get(url, timeout=None):
        return FakeResponse(client.get(url[len(NODE_URL):]))

    monkeypatch.setattr(requests, "post", fake_post)
    monkeypatch.setattr(requests, "get", fake_get)
    return storage_dir
