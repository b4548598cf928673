"""Utility modules for artifactdeploy."""

from .exceptions import (
    ArtifactUploadError,
    ChecksumAlgorithmUnavailable,
    InvalidPublishConfiguration,
    PublishError,
)

__all__ = [
    "ArtifactUploadError",
    "ChecksumAlgorithmUnavailable",
    "InvalidPublishConfiguration",
    "PublishError",
]
