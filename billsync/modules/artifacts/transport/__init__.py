from .base import ArtifactDeployer, ArtifactResolver, checksums
from .filesystem import FileSystemTransport
from .http import MavenHttpTransport
from .resolver import RepositoryArtifactDeployer, RepositoryArtifactResolver

__all__ = [
    "ArtifactDeployer",
    "ArtifactResolver",
    "FileSystemTransport",
    "MavenHttpTransport",
    "RepositoryArtifactDeployer",
    "RepositoryArtifactResolver",
    "checksums",
]
