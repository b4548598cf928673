from .credentials import DeployerOverride, preferred_deployer, preferred_resolver
from .deployer import FilesDeployer
from .descriptors import DeployDescriptorBuilder
from .properties import PropertySetBuilder
from .publisher import ArtifactsPublisher
from .uploader import UploadExecutor

__all__ = [
    "ArtifactsPublisher",
    "DeployDescriptorBuilder",
    "DeployerOverride",
    "FilesDeployer",
    "PropertySetBuilder",
    "UploadExecutor",
    "preferred_deployer",
    "preferred_resolver",
]
