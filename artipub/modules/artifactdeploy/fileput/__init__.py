from .artifactory_client import ArtifactoryClient, build_deployment_path
from .checksums import ChecksumCalculator, calculate_checksums

__all__ = [
    "ArtifactoryClient",
    "ChecksumCalculator",
    "build_deployment_path",
    "calculate_checksums",
]
