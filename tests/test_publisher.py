import pickle

import pytest

from artipub.modules.artifactdeploy.domain import (
    ArtifactRecord,
    BuildContext,
    Credentials,
    PatternPair,
    PropertyEncoding,
    PublishRequest,
)
from artipub.modules.artifactdeploy.service import ArtifactsPublisher, DeployerOverride
from artipub.modules.artifactdeploy.util import InvalidPublishConfiguration
from artipub.settings import Settings


class FakeDispatcher:
    def __init__(self, artifacts=None) -> None:
        self.requests = []
        self.artifacts = artifacts or []

    def dispatch(self, request):
        self.requests.append(request)
        return self.artifacts


def _settings(**overrides) -> Settings:
    values = {
        "server_url": "http://repo.example.com/artifactory/",
        "deployer_username": "deployer",
        "deployer_password": "secret",
        "repository_key": "libs-release-local",
        "deploy_pattern": "out/*.zip=>release/",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _context(**overrides) -> BuildContext:
    values = {"job_name": "team/app", "build_number": 5, "timestamp_millis": 1000, "env": {"GIT_COMMIT": "abc123"}}
    values.update(overrides)
    return BuildContext(**values)


def test_publish_dispatches_full_request(tmp_path):
    record = ArtifactRecord("app.zip", "m", "s", "zip")
    dispatcher = FakeDispatcher([record])
    publisher = ArtifactsPublisher(_settings(), dispatcher=dispatcher)

    assert publisher.publish(_context(), tmp_path) == [record]

    request = dispatcher.requests[0]
    assert request.workspace == str(tmp_path)
    assert request.pattern_pairs == [PatternPair("out/*.zip", "release/")]
    assert request.server_url == "http://repo.example.com/artifactory"
    assert request.credentials == Credentials("deployer", "secret")
    assert request.properties == {
        "build.name": "team :: app",
        "build.number": "5",
        "build.timestamp": "1000",
        "vcs.revision": "abc123",
    }
    assert request.property_encoding is PropertyEncoding.MATRIX


def test_blank_pattern_skips_dispatch(tmp_path):
    dispatcher = FakeDispatcher()
    publisher = ArtifactsPublisher(_settings(deploy_pattern="  \n"), dispatcher=dispatcher)

    assert publisher.publish(_context(), tmp_path) == []
    assert dispatcher.requests == []


def test_missing_repository_key_rejected_before_dispatch(tmp_path):
    dispatcher = FakeDispatcher()
    publisher = ArtifactsPublisher(_settings(repository_key=None), dispatcher=dispatcher)

    with pytest.raises(InvalidPublishConfiguration):
        publisher.publish(_context(), tmp_path)

    assert dispatcher.requests == []


def test_pattern_macros_expanded_from_build_env(tmp_path):
    publisher = ArtifactsPublisher(_settings(), dispatcher=FakeDispatcher())
    context = _context(env={"MODULE": "core"})

    request = publisher.build_request(context, tmp_path, deploy_pattern="${MODULE}/*.jar=>libs/$MODULE/")

    assert request.pattern_pairs == [PatternPair("core/*.jar", "libs/core/")]


def test_override_credentials_and_matrix_params(tmp_path):
    publisher = ArtifactsPublisher(_settings(), dispatcher=FakeDispatcher())
    override = DeployerOverride(True, Credentials("job-user", "job-pw"))

    request = publisher.build_request(_context(), tmp_path, matrix_params="qa=passed", override=override)

    assert request.credentials == Credentials("job-user", "job-pw")
    assert request.properties["qa"] == "passed"


def test_request_survives_serialization(tmp_path):
    publisher = ArtifactsPublisher(
        _settings(proxy_host="proxy.local", proxy_port=3128), dispatcher=FakeDispatcher()
    )
    request = publisher.build_request(_context(), tmp_path)

    assert PublishRequest.model_validate_json(request.model_dump_json()) == request
    assert pickle.loads(pickle.dumps(request)) == request
    assert request.proxy.port == 3128


def test_unknown_property_encoding_rejected(tmp_path):
    dispatcher = FakeDispatcher()
    publisher = ArtifactsPublisher(_settings(property_encoding="xml"), dispatcher=dispatcher)

    with pytest.raises(InvalidPublishConfiguration, match="xml"):
        publisher.publish(_context(), tmp_path)

    assert dispatcher.requests == []
