"""
Protocols (Interfaces) for Dependency Inversion.

Small capability interfaces so validators and the orchestrator can be
exercised against fakes without touching a filesystem or a bucket.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class IFileLister(Protocol):
    """Lists every file below a directory, recursively, as a flat sequence."""

    async def __call__(self, directory: Path) -> List[Path]:
        ...


@runtime_checkable
class ITextReader(Protocol):
    """Reads a file as UTF-8 text."""

    async def __call__(self, path: Path) -> str:
        ...


@runtime_checkable
class IBytesReader(Protocol):
    """Reads a file as opaque bytes."""

    async def __call__(self, path: Path) -> bytes:
        ...


@runtime_checkable
class IObjectStorage(Protocol):
    """Interface for object storage writes."""

    name: str

    async def put_object(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: str,
        acl: Optional[str] = None,
    ) -> None:
        """Write body under key."""
        ...


@runtime_checkable
class IExtractor(Protocol):
    """Extracts an archive into a destination directory."""

    async def extract(self, archive: Path, destination: Path) -> None:
        ...


class IExporterValidator(ABC):
    """Accepts or rejects an extracted package."""

    @abstractmethod
    async def validate(self, package_basename: str, package_directory: Path) -> bool:
        """Return True or raise a ValidationError."""
        pass


class IClickthroughRewriter(ABC):
    """Rewrites clickthrough url literals in a markup string."""

    @abstractmethod
    def rewrite(self, markup: str) -> str:
        """Pure transform; absence of a match is a no-op."""
        pass
