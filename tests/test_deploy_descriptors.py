import hashlib
from pathlib import Path

import pytest

from artipub.modules.artifactdeploy.domain import ArtifactRecord, DeployDescriptor
from artipub.modules.artifactdeploy.fileput import checksums as checksums_module
from artipub.modules.artifactdeploy.patterns import TargetPathToFiles
from artipub.modules.artifactdeploy.service import DeployDescriptorBuilder
from artipub.modules.artifactdeploy.util import InvalidPublishConfiguration

PROPERTIES = {"build.name": "demo", "build.number": "1"}


def _file(tmp_path: Path, name: str, content: bytes = b"X") -> Path:
    path = tmp_path / name
    path.write_bytes(content)
    return path


def test_descriptor_carries_path_checksums_and_properties(tmp_path):
    jar = _file(tmp_path, "app.jar")
    builder = DeployDescriptorBuilder("libs-release-local", PROPERTIES)

    descriptor = builder.build("/libs//", jar)

    assert descriptor.artifact_path == "libs/app.jar"
    assert descriptor.target_repository == "libs-release-local"
    assert descriptor.md5 == hashlib.md5(b"X").hexdigest()
    assert descriptor.sha1 == hashlib.sha1(b"X").hexdigest()
    assert descriptor.properties == PROPERTIES


def test_missing_md5_leaves_field_empty(tmp_path, monkeypatch):
    jar = _file(tmp_path, "app.jar")
    real_new = hashlib.new

    def fake_new(name, *args, **kwargs):
        if name == "md5":
            raise ValueError("unsupported hash type md5")
        return real_new(name, *args, **kwargs)

    monkeypatch.setattr(checksums_module.hashlib, "new", fake_new)

    descriptor = DeployDescriptorBuilder("repo", PROPERTIES).build("libs/", jar)

    assert descriptor.md5 is None
    assert descriptor.sha1 == hashlib.sha1(b"X").hexdigest()


def test_equal_descriptors_collapse(tmp_path):
    jar = _file(tmp_path, "app.jar")
    war = _file(tmp_path, "app.war")
    target_map = TargetPathToFiles()
    target_map.put("libs/", jar)
    target_map.put("libs//", jar)
    target_map.put("web/", war)

    descriptors = DeployDescriptorBuilder("repo", PROPERTIES).build_all(target_map)

    assert [d.artifact_path for d in descriptors] == ["libs/app.jar", "web/app.war"]


def test_descriptor_is_a_hashable_value(tmp_path):
    jar = _file(tmp_path, "app.jar")
    first = DeployDescriptor(jar, "a/app.jar", "repo", "m", "s", {"k": "v"})
    second = DeployDescriptor(jar, "a/app.jar", "repo", "m", "s", {"k": "v"})
    other = DeployDescriptor(jar, "a/app.jar", "repo", "m", "s", {"k": "w"})

    assert first == second
    assert len({first, second}) == 1
    assert first != other
    with pytest.raises(AttributeError):
        first.artifact_path = "b/app.jar"


def test_blank_repository_key_is_rejected():
    with pytest.raises(InvalidPublishConfiguration):
        DeployDescriptorBuilder("  ", PROPERTIES)


def test_non_regular_file_is_rejected(tmp_path):
    builder = DeployDescriptorBuilder("repo", PROPERTIES)

    with pytest.raises(FileNotFoundError):
        builder.build("libs/", tmp_path)


def test_artifact_record_type_from_extension(tmp_path):
    descriptor = DeployDescriptor(tmp_path / "bundle.tar.gz", "x/bundle.tar.gz", "repo", "m", "s")

    record = ArtifactRecord.from_descriptor(descriptor)

    assert record == ArtifactRecord(name="bundle.tar.gz", md5="m", sha1="s", type="gz")
    assert ArtifactRecord.from_descriptor(
        DeployDescriptor(tmp_path / "LICENSE", "LICENSE", "repo")
    ).type == ""


def test_two_files_on_one_artifact_path_rejected(tmp_path):
    first = _file(tmp_path, "a.jar")
    second = _file(tmp_path, "b.jar")
    target_map = TargetPathToFiles()
    target_map.put("libs/x.jar", first)
    target_map.put("libs/x.jar", second)
    builder = DeployDescriptorBuilder("repo", PROPERTIES)

    with pytest.raises(InvalidPublishConfiguration, match="both deploy to libs/x.jar"):
        builder.build_all(target_map)
