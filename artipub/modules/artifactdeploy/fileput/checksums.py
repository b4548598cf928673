"""Single-pass MD5/SHA1 calculation over a file."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

from artipub.modules.artifactdeploy.domain.constants import MD5, SHA1
from artipub.modules.artifactdeploy.util.exceptions import ChecksumAlgorithmUnavailable

log = logging.getLogger(__name__)

CHUNK_SIZE = 65536
DEFAULT_ALGORITHMS = (SHA1, MD5)


def new_digest(algorithm: str):
    try:
        return hashlib.new(algorithm.lower())
    except (ValueError, TypeError) as exc:
        raise ChecksumAlgorithmUnavailable(algorithm) from exc


def calculate_checksums(path: Path, *algorithms: str) -> Dict[str, str]:
    """Return ``{algorithm: hexdigest}``; fails if any algorithm is missing."""
    digests = {name: new_digest(name) for name in (algorithms or DEFAULT_ALGORITHMS)}
    _feed(path, digests.values())
    return {name: digest.hexdigest() for name, digest in digests.items()}


def _feed(path: Path, digests) -> None:
    digests = list(digests)
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
            for digest in digests:
                digest.update(chunk)


class ChecksumCalculator:
    """Lenient calculator: a missing algorithm yields ``None`` for that entry."""

    def __init__(
        self,
        algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
        listener: Optional[logging.Logger] = None,
    ) -> None:
        self.algorithms = tuple(algorithms)
        self.listener = listener or log

    def calculate(self, path: Path) -> Dict[str, Optional[str]]:
        digests = {}
        result: Dict[str, Optional[str]] = {}
        for name in self.algorithms:
            try:
                digests[name] = new_digest(name)
            except ChecksumAlgorithmUnavailable as exc:
                self.listener.warning("%s", exc)
                result[name] = None
        if digests:
            _feed(path, digests.values())
        for name, digest in digests.items():
            result[name] = digest.hexdigest()
        return result
