"""HTTP client that deploys files into an Artifactory-style repository."""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import quote

import httpx

from artipub.modules.artifactdeploy.domain import DeployDescriptor, PropertyEncoding, ProxyConfig
from artipub.modules.artifactdeploy.domain.constants import (
    CHECKSUM_MD5_HEADER,
    CHECKSUM_SHA1_HEADER,
    PROPERTIES_HEADER,
    PROPERTY_HEADER_PREFIX,
)


def _quote(value: str) -> str:
    return quote(str(value), safe="")


def build_deployment_path(server_url: str, repository_key: str, artifact_path: str) -> str:
    """``{server}/{repo}/{path}`` with exactly one separator before the path."""
    path = f"{server_url.rstrip('/')}/{repository_key}"
    if not artifact_path.startswith("/"):
        path += "/"
    return path + artifact_path


class ArtifactoryClient:
    """Upload artifacts with checksum and property metadata."""

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        timeout: float = 300,
        proxy: Optional[ProxyConfig] = None,
        property_encoding: PropertyEncoding = PropertyEncoding.MATRIX,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = url.rstrip("/")
        self.property_encoding = PropertyEncoding(property_encoding)
        self.log = logging.getLogger(self.__class__.__name__)
        auth = None
        if username:
            auth = (username, password or "")
        self._auth = auth
        self.proxy = proxy
        self._client = client or httpx.Client(timeout=timeout, verify=True, proxy=self._build_proxy(proxy))

    @staticmethod
    def _build_proxy(proxy: Optional[ProxyConfig]) -> Optional[httpx.Proxy]:
        if proxy is None or not proxy.is_usable:
            return None
        auth = None
        if proxy.username:
            auth = (proxy.username, proxy.password or "")
        return httpx.Proxy(proxy.url(), auth=auth)

    def deployment_url(self, descriptor: DeployDescriptor) -> str:
        return build_deployment_path(self.base_url, descriptor.target_repository, descriptor.artifact_path)

    def _build_upload_url(self, descriptor: DeployDescriptor) -> str:
        path = quote(descriptor.artifact_path.lstrip("/"), safe="/")
        url = f"{self.base_url}/{_quote(descriptor.target_repository)}/{path}"
        if self.property_encoding is PropertyEncoding.MATRIX and descriptor.properties:
            url += "".join(
                f";{_quote(key)}={_quote(value)}" for key, value in descriptor.properties.items()
            )
        return url

    def _build_headers(self, descriptor: DeployDescriptor) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Content-Type": "application/octet-stream",
            "Content-Length": str(descriptor.source_file.stat().st_size),
        }
        if descriptor.md5:
            headers[CHECKSUM_MD5_HEADER] = descriptor.md5
        if descriptor.sha1:
            headers[CHECKSUM_SHA1_HEADER] = descriptor.sha1
        if self.property_encoding is PropertyEncoding.HEADERS:
            for key, value in descriptor.properties.items():
                headers[f"{PROPERTY_HEADER_PREFIX}{_quote(key)}"] = _quote(value)
        elif self.property_encoding is PropertyEncoding.SINGLE and descriptor.properties:
            headers[PROPERTIES_HEADER] = ";".join(
                f"{_quote(key)}={_quote(value)}" for key, value in descriptor.properties.items()
            )
        return headers

    def deploy_artifact(self, descriptor: DeployDescriptor) -> httpx.Response:
        """PUT one file; raises ``httpx.HTTPError`` or ``OSError`` on failure."""
        url = self._build_upload_url(descriptor)
        headers = self._build_headers(descriptor)
        self.log.debug("PUT %s (%s bytes)", url, headers["Content-Length"])
        with open(descriptor.source_file, "rb") as fh:
            response = self._client.put(url, content=fh, headers=headers, auth=self._auth)
        response.raise_for_status()
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ArtifactoryClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
