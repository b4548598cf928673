"""Turn matched files into deploy descriptors."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from artipub.modules.artifactdeploy.domain import DeployDescriptor
from artipub.modules.artifactdeploy.domain.constants import MD5, SHA1
from artipub.modules.artifactdeploy.fileput.checksums import ChecksumCalculator
from artipub.modules.artifactdeploy.patterns import (
    TargetPathToFiles,
    calculate_artifact_path,
    normalize_artifact_path,
)
from artipub.modules.artifactdeploy.util.exceptions import InvalidPublishConfiguration


class DeployDescriptorBuilder:
    """Build one descriptor per (target path, file); equal ones collapse."""

    def __init__(
        self,
        repository_key: str,
        properties: Mapping[str, str],
        checksum_calculator: Optional[ChecksumCalculator] = None,
        listener: Optional[logging.Logger] = None,
    ) -> None:
        if not (repository_key or "").strip():
            raise InvalidPublishConfiguration("repository key cannot be empty")
        self.repository_key = repository_key.strip()
        self.properties = dict(properties)
        self.checksums = checksum_calculator or ChecksumCalculator(listener=listener)

    def build(self, target_path: str, artifact_file: Path) -> DeployDescriptor:
        if not artifact_file.is_file():
            raise FileNotFoundError(f"{artifact_file} is not a regular file")
        path = normalize_artifact_path(calculate_artifact_path(target_path, artifact_file))
        checksums = self.checksums.calculate(artifact_file)
        return DeployDescriptor(
            source_file=artifact_file,
            artifact_path=path,
            target_repository=self.repository_key,
            md5=checksums.get(MD5),
            sha1=checksums.get(SHA1),
            properties=self.properties,
        )

    def build_all(self, target_path_to_files: TargetPathToFiles) -> List[DeployDescriptor]:
        """Descriptors in first-seen order with duplicates removed.

        Raises InvalidPublishConfiguration when two different files resolve
        to the same artifact path.
        """
        descriptors: Dict[DeployDescriptor, None] = {}
        owners: Dict[str, Path] = {}
        for target_path, artifact_file in target_path_to_files.entries():
            descriptor = self.build(target_path, artifact_file)
            owner = owners.setdefault(descriptor.artifact_path, descriptor.source_file)
            if owner != descriptor.source_file:
                raise InvalidPublishConfiguration(
                    f"{owner} and {descriptor.source_file} both deploy to {descriptor.artifact_path}"
                )
            descriptors.setdefault(descriptor, None)
        return list(descriptors)
