import threading

import pytest
import requests

from fakes import make_pr
from relnote.releasenote.generator import assemble
from relnote.server import create_server


@pytest.fixture
def server():
    report = assemble([make_pr(1, "Add x", ["Type: Feature"])], org="grpc", repo="grpc-go", version="1.12")
    srv = create_server(report, "127.0.0.1", 0)
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{srv.server_address[1]}"
    srv.shutdown()
    srv.server_close()


def test_release_endpoint(server):
    resp = requests.get(f"{server}/release", timeout=5)
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"] == "1.12"
    assert data["sections"][0]["entries"][0]["title"] == "Add x (#1)"


def test_ping(server):
    assert requests.get(f"{server}/ping", timeout=5).json() == {"message": "pong"}


def test_unknown_path(server):
    assert requests.get(f"{server}/nope", timeout=5).status_code == 404
