import hashlib

import httpx
import pytest
from fastapi.testclient import TestClient

from artipub.factory import create_app
from artipub.modules.artifactdeploy.domain import ArtifactRecord, Credentials, PatternPair, PublishRequest
from artipub.modules.artifactdeploy.fileput import ArtifactoryClient
from artipub.modules.artifactdeploy.integration import AgentDispatcher, LocalDispatcher
from artipub.modules.artifactdeploy.util import ArtifactUploadError, InvalidPublishConfiguration, PublishError
from artipub.settings import Settings


def _client_with_repository(handler) -> TestClient:
    app = create_app(Settings(_env_file=None, log_level="WARNING"))

    def factory(url, username=None, password=None, **kwargs):
        http = httpx.Client(transport=httpx.MockTransport(handler))
        return ArtifactoryClient(url, username, password, client=http, **kwargs)

    app.state.container.local_dispatcher = LocalDispatcher(client_factory=factory)
    return TestClient(app)


def _request(workspace) -> PublishRequest:
    return PublishRequest(
        workspace=str(workspace),
        pattern_pairs=[PatternPair("*.jar", "libs/")],
        repository_key="libs-release-local",
        properties={"build.number": "3"},
        server_url="http://repo.example.com/artifactory",
        credentials=Credentials("deployer", "secret"),
    )


def test_health():
    client = _client_with_repository(lambda request: httpx.Response(201))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_agent_executes_request_in_its_workspace(tmp_path):
    (tmp_path / "core.jar").write_bytes(b"core")
    uploaded = []

    def handler(request: httpx.Request) -> httpx.Response:
        uploaded.append(request.url.path.split(";")[0])
        return httpx.Response(201)

    client = _client_with_repository(handler)

    artifacts = AgentDispatcher("http://testserver", client=client).dispatch(_request(tmp_path))

    assert artifacts == [
        ArtifactRecord("core.jar", hashlib.md5(b"core").hexdigest(), hashlib.sha1(b"core").hexdigest(), "jar")
    ]
    assert uploaded == ["/artifactory/libs-release-local/libs/core.jar"]


def test_upload_failure_maps_to_bad_gateway(tmp_path):
    (tmp_path / "core.jar").write_bytes(b"core")
    client = _client_with_repository(lambda request: httpx.Response(500))

    response = client.post(
        "/artifactdeploy/execute",
        content=_request(tmp_path).model_dump_json(),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 502

    with pytest.raises(ArtifactUploadError, match="HTTP 500"):
        AgentDispatcher("http://testserver", client=client).dispatch(_request(tmp_path))


def test_missing_workspace_maps_to_bad_request(tmp_path):
    client = _client_with_repository(lambda request: httpx.Response(201))

    with pytest.raises(InvalidPublishConfiguration, match="does not exist"):
        AgentDispatcher("http://testserver", client=client).dispatch(_request(tmp_path / "gone"))


def test_unreachable_agent_is_publish_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    dispatcher = AgentDispatcher("http://agent.local:9000", client=httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(PublishError) as excinfo:
        dispatcher.dispatch(_request("/ws"))

    assert "unreachable" in str(excinfo.value)


def test_unreadable_agent_reply_is_publish_error():
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>")))
    dispatcher = AgentDispatcher("http://agent.local:9000", client=http)

    with pytest.raises(PublishError, match="unreadable result"):
        dispatcher.dispatch(_request("/ws"))
