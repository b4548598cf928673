"""Pick the credentials a publish call deploys with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from artipub.modules.artifactdeploy.domain import Credentials, ServerConfig


@dataclass
class DeployerOverride:
    """Per-job deployer credentials that replace the server's defaults."""

    override_credentials: bool = False
    credentials: Optional[Credentials] = None


def preferred_deployer(override: Optional[DeployerOverride], server: Optional[ServerConfig]) -> Credentials:
    if override is not None and override.override_credentials:
        return override.credentials or Credentials()
    if server is not None and server.deployer_credentials is not None:
        return server.deployer_credentials
    return Credentials()


def preferred_resolver(override: Optional[DeployerOverride], server: ServerConfig) -> Credentials:
    if override is not None and override.override_credentials:
        return override.credentials or Credentials()
    return server.resolving_credentials()
