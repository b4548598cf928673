"""Artifact deploy module exports."""

from .service import ArtifactsPublisher
from .controller import router as artifactdeploy_router

__all__ = ["ArtifactsPublisher", "artifactdeploy_router"]
