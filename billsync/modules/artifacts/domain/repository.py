"""Repository handles passed to resolvers and deployers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from billsync.settings import RemoteRepositoryConfig


@dataclass(frozen=True)
class Repository:
    """Opaque repository handle: an id plus a base URL (``http(s)://`` or ``file://``)."""

    id: str
    url: str
    username: Optional[str] = field(default=None, repr=False)
    password: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_config(cls, config: RemoteRepositoryConfig) -> "Repository":
        return cls(id=config.id, url=config.url.rstrip("/"), username=config.username, password=config.password)

    @classmethod
    def from_path(cls, path: Path, repo_id: str) -> "Repository":
        return cls(id=repo_id, url=path.resolve().as_uri())

    @property
    def is_local(self) -> bool:
        return urlparse(self.url).scheme == "file"

    @property
    def local_path(self) -> Path:
        if not self.is_local:
            raise ValueError(f"Repository {self.id} is not a filesystem repository: {self.url}")
        return Path(unquote(urlparse(self.url).path))

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        if self.username and self.password:
            return (self.username, self.password)
        return None

    def __str__(self) -> str:
        return f"{self.id} ({self.url})"
