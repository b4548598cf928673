"""Workspace-side half of a publish: match, checksum, describe, upload."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from artipub.modules.artifactdeploy.domain import ArtifactRecord, PublishRequest
from artipub.modules.artifactdeploy.patterns import FileMatcher
from artipub.modules.artifactdeploy.service.descriptors import DeployDescriptorBuilder
from artipub.modules.artifactdeploy.service.uploader import ClientFactory, UploadExecutor
from artipub.modules.artifactdeploy.util.exceptions import InvalidPublishConfiguration, PublishError


def validate_request(request: PublishRequest) -> None:
    if not request.repository_key.strip():
        raise InvalidPublishConfiguration("repository key cannot be empty")
    if not request.server_url.strip():
        raise InvalidPublishConfiguration("server url cannot be empty")
    if not request.workspace.strip():
        raise InvalidPublishConfiguration("workspace cannot be empty")


class FilesDeployer:
    """Execute a PublishRequest on the host that owns ``request.workspace``."""

    def __init__(
        self,
        request: PublishRequest,
        *,
        client_factory: Optional[ClientFactory] = None,
        listener: Optional[logging.Logger] = None,
    ) -> None:
        self.request = request
        self.client_factory = client_factory
        self.listener = listener or logging.getLogger(self.__class__.__name__)

    def invoke(self) -> List[ArtifactRecord]:
        request = self.request
        if not request.pattern_pairs:
            return []
        validate_request(request)
        workspace = Path(request.workspace)
        if not workspace.is_dir():
            raise InvalidPublishConfiguration(f"workspace {workspace} does not exist")

        matcher = FileMatcher(workspace, listener=self.listener)
        builder = DeployDescriptorBuilder(request.repository_key, request.properties, listener=self.listener)
        try:
            target_path_to_files = matcher.build_target_path_to_files(request.pattern_pairs)
            descriptors = builder.build_all(target_path_to_files)
        except OSError as exc:
            raise PublishError(f"Failed to prepare artifacts in {workspace}: {exc}") from exc
        if not descriptors:
            return []

        executor = UploadExecutor(
            request.server_url,
            request.repository_key,
            request.credentials,
            timeout=request.timeout,
            proxy=request.proxy,
            bypass_proxy=request.bypass_proxy,
            property_encoding=request.property_encoding,
            client_factory=self.client_factory,
            listener=self.listener,
        )
        return executor.deploy(descriptors)
