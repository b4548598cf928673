"""Orchestrating side of a publish: decide what to deploy, then dispatch it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from artipub.modules.artifactdeploy.domain import (
    ArtifactRecord,
    BuildContext,
    PropertyEncoding,
    ProxyConfig,
    PublishRequest,
    ServerConfig,
)
from artipub.modules.artifactdeploy.integration import AgentDispatcher, Dispatcher, LocalDispatcher
from artipub.modules.artifactdeploy.patterns import parse_pattern_pairs
from artipub.modules.artifactdeploy.service.credentials import DeployerOverride, preferred_deployer
from artipub.modules.artifactdeploy.service.properties import PropertySetBuilder, replace_macro
from artipub.modules.artifactdeploy.util.exceptions import InvalidPublishConfiguration
from artipub.settings import Settings


def default_dispatcher(settings: Settings) -> Dispatcher:
    if settings.agent_url:
        return AgentDispatcher(settings.agent_url, timeout=settings.agent_timeout)
    return LocalDispatcher()


class ArtifactsPublisher:
    """Publish a build's workspace files to the configured repository."""

    def __init__(
        self,
        settings: Settings,
        *,
        server: Optional[ServerConfig] = None,
        proxy: Optional[ProxyConfig] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self.settings = settings
        self.server = server or ServerConfig.from_settings(settings)
        self.proxy = proxy if proxy is not None else ProxyConfig.from_settings(settings)
        self.dispatcher = dispatcher or default_dispatcher(settings)
        self.log = logging.getLogger(self.__class__.__name__)

    def build_request(
        self,
        context: BuildContext,
        workspace: Union[str, Path],
        *,
        deploy_pattern: Optional[str] = None,
        repository_key: Optional[str] = None,
        matrix_params: Optional[str] = None,
        override: Optional[DeployerOverride] = None,
    ) -> Optional[PublishRequest]:
        """Return the request to dispatch, or None when there is nothing to deploy."""
        pattern = self.settings.deploy_pattern if deploy_pattern is None else deploy_pattern
        pairs = parse_pattern_pairs(replace_macro(pattern, context.env))
        if not pairs:
            return None

        repo = (repository_key if repository_key is not None else self.settings.repository_key) or ""
        if not repo.strip():
            raise InvalidPublishConfiguration("repository key cannot be empty")
        if not self.server.url:
            raise InvalidPublishConfiguration("server url cannot be empty")
        if not str(workspace).strip():
            raise InvalidPublishConfiguration("workspace cannot be empty")

        try:
            encoding = PropertyEncoding(self.settings.property_encoding)
        except ValueError as exc:
            raise InvalidPublishConfiguration(
                f"unknown property encoding {self.settings.property_encoding!r}"
            ) from exc

        matrix = self.settings.matrix_params if matrix_params is None else matrix_params
        properties = PropertySetBuilder(context, matrix).build()
        return PublishRequest(
            workspace=str(workspace),
            pattern_pairs=pairs,
            repository_key=repo.strip(),
            properties=properties,
            server_url=self.server.url,
            timeout=self.server.timeout,
            credentials=preferred_deployer(override, self.server),
            proxy=self.proxy,
            bypass_proxy=self.server.bypass_proxy,
            property_encoding=encoding,
        )

    def publish(
        self,
        context: BuildContext,
        workspace: Union[str, Path],
        **options,
    ) -> List[ArtifactRecord]:
        request = self.build_request(context, workspace, **options)
        if request is None:
            self.log.info("No deploy pattern configured for %s #%s", context.job_name, context.build_number)
            return []
        artifacts = self.dispatcher.dispatch(request)
        self.log.info(
            "Deployed %d artifacts of %s #%s to %s",
            len(artifacts),
            context.job_name,
            context.build_number,
            request.repository_key,
        )
        return artifacts
