"""Errors raised by the artifact publishing pipeline."""

from __future__ import annotations

from typing import Optional


class PublishError(RuntimeError):
    """Terminal failure of one publish call."""


class InvalidPublishConfiguration(PublishError):
    """Raised before any matching or upload work when the config is unusable."""


class ArtifactUploadError(PublishError):
    """A single upload failed; the remaining uploads were not attempted."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ChecksumAlgorithmUnavailable(Exception):
    """The runtime cannot provide the requested digest algorithm."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Could not find checksum algorithm for {algorithm}")
        self.algorithm = algorithm
