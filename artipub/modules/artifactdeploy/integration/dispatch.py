"""Send a PublishRequest to wherever the workspace lives."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

import httpx

from artipub.modules.artifactdeploy.domain import ArtifactRecord, PublishRequest, PublishResult
from artipub.modules.artifactdeploy.service.deployer import FilesDeployer
from artipub.modules.artifactdeploy.service.uploader import ClientFactory
from artipub.modules.artifactdeploy.util.exceptions import (
    ArtifactUploadError,
    InvalidPublishConfiguration,
    PublishError,
)

log = logging.getLogger(__name__)

EXECUTE_PATH = "/artifactdeploy/execute"


class Dispatcher(Protocol):
    def dispatch(self, request: PublishRequest) -> List[ArtifactRecord]:  # pragma: no cover - interface
        ...


class LocalDispatcher:
    """The workspace is on this host: run the deploy in-process."""

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        listener: Optional[logging.Logger] = None,
    ) -> None:
        self.client_factory = client_factory
        self.listener = listener

    def dispatch(self, request: PublishRequest) -> List[ArtifactRecord]:
        deployer = FilesDeployer(request, client_factory=self.client_factory, listener=self.listener)
        return deployer.invoke()


class AgentDispatcher:
    """The workspace is on another host: hand the request to its agent."""

    def __init__(self, agent_url: str, timeout: float = 600.0, client: Optional[httpx.Client] = None) -> None:
        self.agent_url = agent_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self.log = logging.getLogger(self.__class__.__name__)

    def dispatch(self, request: PublishRequest) -> List[ArtifactRecord]:
        url = f"{self.agent_url}{EXECUTE_PATH}"
        client = self._client or httpx.Client(timeout=self.timeout)
        try:
            self.log.info("Dispatching publish of %s to agent %s", request.workspace, self.agent_url)
            response = client.post(
                url,
                content=request.model_dump_json(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise PublishError(f"agent {self.agent_url} unreachable: {exc}") from exc
        finally:
            if self._client is None:
                client.close()
        if response.status_code >= 400:
            raise self._error_from_response(response)
        try:
            return PublishResult.model_validate(response.json()).artifacts
        except ValueError as exc:
            raise PublishError(f"agent {self.agent_url} returned an unreadable result: {exc}") from exc

    @staticmethod
    def _error_from_response(response: httpx.Response) -> PublishError:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        detail = payload.get("detail") if isinstance(payload, dict) else None
        message = str(detail or response.text or f"agent returned HTTP {response.status_code}")
        if response.status_code == 400:
            return InvalidPublishConfiguration(message)
        if response.status_code == 502:
            return ArtifactUploadError(message)
        return PublishError(message)
