import hashlib

import httpx
import pytest

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.exceptions import ArtifactDeployError, ArtifactResolutionError
from billsync.modules.artifacts.transport import MavenHttpTransport

REPO = Repository("nexus", "https://nexus.example.com/repository/releases/", "deployer", "secret")
COORD = Coordinate.parse("com.acme:core:1.0")
ARTIFACT_URL = "https://nexus.example.com/repository/releases/com/acme/core/1.0/core-1.0.jar"


def _make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_exists_uses_head_and_maps_404():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, str(request.url)))
        if request.url.path.endswith("core-1.0.jar"):
            return httpx.Response(200)
        return httpx.Response(404)

    transport = MavenHttpTransport(client=_make_client(handler))

    assert transport.exists(REPO, COORD)
    assert not transport.exists(REPO, Coordinate.parse("com.acme:missing:1.0"))
    assert seen[0] == ("HEAD", ARTIFACT_URL)


def test_exists_raises_on_server_error():
    transport = MavenHttpTransport(client=_make_client(lambda request: httpx.Response(503)))

    with pytest.raises(httpx.HTTPStatusError):
        transport.exists(REPO, COORD)


def test_get_returns_bytes_and_sends_credentials():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["authorization"] = request.headers.get("authorization")
        return httpx.Response(200, content=b"jar-bytes")

    transport = MavenHttpTransport(client=_make_client(handler))

    assert transport.get(REPO, COORD) == b"jar-bytes"
    assert captured["authorization"].startswith("Basic ")


def test_get_wraps_http_errors():
    transport = MavenHttpTransport(client=_make_client(lambda request: httpx.Response(404)))

    with pytest.raises(ArtifactResolutionError) as excinfo:
        transport.get(REPO, COORD)

    assert list(excinfo.value.causes) == ["nexus"]


def test_put_uploads_artifact_and_checksums():
    uploads = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PUT"
        uploads[str(request.url)] = request.content
        return httpx.Response(201)

    transport = MavenHttpTransport(client=_make_client(handler))
    transport.put(REPO, COORD, b"payload")

    assert uploads == {
        ARTIFACT_URL: b"payload",
        ARTIFACT_URL + ".sha1": hashlib.sha1(b"payload").hexdigest().encode("ascii"),
        ARTIFACT_URL + ".md5": hashlib.md5(b"payload").hexdigest().encode("ascii"),
    }


def test_put_rejection_raises_deploy_error():
    transport = MavenHttpTransport(client=_make_client(lambda request: httpx.Response(403)))

    with pytest.raises(ArtifactDeployError):
        transport.put(REPO, COORD, b"payload")
