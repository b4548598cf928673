"""Wiring of the publishing services shared by the agent app."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from artipub.modules.artifactdeploy import ArtifactsPublisher
from artipub.modules.artifactdeploy.domain import ServerConfig
from artipub.modules.artifactdeploy.integration import LocalDispatcher
from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    server: ServerConfig = field(init=False)
    local_dispatcher: LocalDispatcher = field(init=False)
    publisher: ArtifactsPublisher = field(init=False)

    def __post_init__(self) -> None:
        self.server = ServerConfig.from_settings(self.settings)
        self.local_dispatcher = LocalDispatcher()
        self.publisher = ArtifactsPublisher(self.settings, server=self.server)


async def bootstrap_services(container: ServiceContainer) -> None:
    settings = container.settings
    log.info("...................RUN...................")
    log.info(
        "########### server=%s repository=%s agent=%s proxy=%s ############",
        container.server.url,
        settings.repository_key or "-",
        settings.agent_url or "local",
        "bypass" if container.server.bypass_proxy else (settings.proxy_host or "none"),
    )
