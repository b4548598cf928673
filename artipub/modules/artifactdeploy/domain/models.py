"""Dataclasses describing one artifact publish call."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from artipub.settings import DEFAULT_CONNECTION_TIMEOUT, Settings


@dataclass(frozen=True)
class PatternPair:
    """A source glob and the target-path template its matches deploy to."""

    source_pattern: str
    target_template: str = ""


@dataclass(frozen=True)
class Credentials:
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.username


@dataclass(frozen=True)
class ProxyConfig:
    host: Optional[str] = None
    port: int = 0
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        return bool(self.host) and self.port > 0

    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["ProxyConfig"]:
        if not settings.proxy_host:
            return None
        return cls(
            host=settings.proxy_host,
            port=settings.proxy_port,
            username=settings.proxy_username,
            password=settings.proxy_password,
        )


@dataclass
class ServerConfig:
    """A repository server entry: base URL, timeout and its configured users."""

    url: str
    timeout: int = DEFAULT_CONNECTION_TIMEOUT
    bypass_proxy: bool = False
    deployer_credentials: Optional[Credentials] = None
    resolver_credentials: Optional[Credentials] = None

    def __post_init__(self) -> None:
        self.url = (self.url or "").strip().rstrip("/")
        if not self.timeout or self.timeout <= 0:
            self.timeout = DEFAULT_CONNECTION_TIMEOUT

    def resolving_credentials(self) -> Credentials:
        """Resolver credentials, falling back to the deployer; never None."""
        if self.resolver_credentials is not None:
            return self.resolver_credentials
        if self.deployer_credentials is not None:
            return self.deployer_credentials
        return Credentials()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServerConfig":
        deployer = None
        if settings.deployer_username:
            deployer = Credentials(settings.deployer_username, settings.deployer_password)
        resolver = None
        if settings.resolver_username:
            resolver = Credentials(settings.resolver_username, settings.resolver_password)
        return cls(
            url=settings.server_url,
            timeout=settings.timeout,
            bypass_proxy=settings.bypass_proxy,
            deployer_credentials=deployer,
            resolver_credentials=resolver,
        )


@dataclass(frozen=True)
class UpstreamCause:
    project: str
    build_number: int


@dataclass
class BuildContext:
    """What the CI server knows about the running build."""

    job_name: str
    build_number: int
    timestamp_millis: int
    env: Dict[str, str] = field(default_factory=dict)
    upstream: Optional[UpstreamCause] = None


@dataclass(frozen=True)
class DeployDescriptor:
    """One file to upload, where it goes and what travels with it.

    Properties take part in equality but not in the hash, so equal
    descriptors still hash equally while the mapping stays picklable.
    """

    source_file: Path
    artifact_path: str
    target_repository: str
    md5: Optional[str] = None
    sha1: Optional[str] = None
    properties: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", dict(self.properties))


@dataclass
class ArtifactRecord:
    """Manifest entry returned to the build-info layer."""

    name: str
    md5: Optional[str] = None
    sha1: Optional[str] = None
    type: str = ""

    @classmethod
    def from_descriptor(cls, descriptor: DeployDescriptor) -> "ArtifactRecord":
        name = descriptor.source_file.name
        _, dot, ext = name.rpartition(".")
        return cls(
            name=name,
            md5=descriptor.md5,
            sha1=descriptor.sha1,
            type=ext if dot else "",
        )
