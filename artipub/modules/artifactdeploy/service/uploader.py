"""Sequential, all-or-nothing upload of deploy descriptors."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

import httpx

from artipub.modules.artifactdeploy.domain import (
    ArtifactRecord,
    Credentials,
    DeployDescriptor,
    PropertyEncoding,
    ProxyConfig,
)
from artipub.modules.artifactdeploy.fileput import ArtifactoryClient, build_deployment_path
from artipub.modules.artifactdeploy.util.exceptions import ArtifactUploadError

ClientFactory = Callable[..., ArtifactoryClient]


class UploadExecutor:
    """Upload descriptors in order; the first failure aborts the rest.

    Files already uploaded stay on the server and nothing is retried.
    """

    def __init__(
        self,
        server_url: str,
        repository_key: str,
        credentials: Optional[Credentials] = None,
        *,
        timeout: float = 300,
        proxy: Optional[ProxyConfig] = None,
        bypass_proxy: bool = False,
        property_encoding: PropertyEncoding = PropertyEncoding.MATRIX,
        client_factory: Optional[ClientFactory] = None,
        listener: Optional[logging.Logger] = None,
    ) -> None:
        self.server_url = server_url.rstrip("/")
        self.repository_key = repository_key
        self.credentials = credentials or Credentials()
        self.timeout = timeout
        self.proxy = proxy
        self.bypass_proxy = bypass_proxy
        self.property_encoding = property_encoding
        self.client_factory = client_factory or ArtifactoryClient
        self.listener = listener or logging.getLogger(self.__class__.__name__)

    def effective_proxy(self) -> Optional[ProxyConfig]:
        if self.bypass_proxy or self.proxy is None or not self.proxy.is_usable:
            return None
        return self.proxy

    def create_client(self) -> ArtifactoryClient:
        return self.client_factory(
            self.server_url,
            self.credentials.username,
            self.credentials.password,
            timeout=self.timeout,
            proxy=self.effective_proxy(),
            property_encoding=self.property_encoding,
        )

    def deploy(self, descriptors: Sequence[DeployDescriptor]) -> List[ArtifactRecord]:
        client = self.create_client()
        try:
            for descriptor in descriptors:
                url = build_deployment_path(self.server_url, self.repository_key, descriptor.artifact_path)
                self.listener.info("Deploying artifact: %s", url)
                self._deploy_one(client, descriptor, url)
        finally:
            client.close()
        return [ArtifactRecord.from_descriptor(descriptor) for descriptor in descriptors]

    def _deploy_one(self, client: ArtifactoryClient, descriptor: DeployDescriptor, url: str) -> None:
        try:
            client.deploy_artifact(descriptor)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ArtifactUploadError(
                f"Failed to deploy {url}: server returned HTTP {status}",
                url=url,
                status_code=status,
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            raise ArtifactUploadError(f"Failed to deploy {url}: {exc}", url=url) from exc
