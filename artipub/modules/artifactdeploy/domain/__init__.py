from .constants import PropertyEncoding
from .models import (
    ArtifactRecord,
    BuildContext,
    Credentials,
    DeployDescriptor,
    PatternPair,
    ProxyConfig,
    ServerConfig,
    UpstreamCause,
)
from .publish_request import PublishRequest, PublishResult

__all__ = [
    "ArtifactRecord",
    "BuildContext",
    "Credentials",
    "DeployDescriptor",
    "PatternPair",
    "PropertyEncoding",
    "ProxyConfig",
    "PublishRequest",
    "PublishResult",
    "ServerConfig",
    "UpstreamCause",
]
