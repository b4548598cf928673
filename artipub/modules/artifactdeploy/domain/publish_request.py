"""Serializable request/result passed to the host that owns the workspace."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .constants import PropertyEncoding
from .models import ArtifactRecord, Credentials, PatternPair, ProxyConfig


class PublishRequest(BaseModel):
    """Everything the match -> checksum -> descriptor -> upload run needs.

    Built by the orchestrating side and executed where ``workspace`` lives;
    nothing in it refers back to the orchestrator's process.
    """

    workspace: str
    pattern_pairs: List[PatternPair] = Field(default_factory=list)
    repository_key: str
    properties: Dict[str, str] = Field(default_factory=dict)
    server_url: str
    timeout: int = 300
    credentials: Credentials = Field(default_factory=Credentials)
    proxy: Optional[ProxyConfig] = None
    bypass_proxy: bool = False
    property_encoding: PropertyEncoding = PropertyEncoding.MATRIX


class PublishResult(BaseModel):
    artifacts: List[ArtifactRecord] = Field(default_factory=list)
