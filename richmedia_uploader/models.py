"""
Models for the creative uploader.

Immutable dataclasses, except for the manifest which is built up
entry by entry during a single publish call.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union


class Exporter(Enum):
    """Authoring tool that produced a creative package."""
    GWD = "gwd"
    CONVERSIO = "conversio"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Exporter":
        """
        Map a raw identifier to an exporter.

        Only the exact tokens "gwd" and "conversio" are recognised; any
        other value, including differently cased ones, is UNSPECIFIED.
        """
        if isinstance(value, Exporter):
            return value
        for member in (cls.GWD, cls.CONVERSIO):
            if member.value == value:
                return member
        return cls.UNSPECIFIED


@dataclass(frozen=True)
class Package:
    """An extracted creative bundle."""
    basename: str
    root_directory: Path
    exporter: Exporter = Exporter.UNSPECIFIED


@dataclass(frozen=True)
class FileEntry:
    """One file of a package tree. Derived from a listing, never persisted."""
    path: Path
    relative_path: str

    @classmethod
    def from_listing(cls, path: Union[str, Path], root: Union[str, Path]) -> "FileEntry":
        rel = str(path)
        prefix = f"{str(root).rstrip('/')}/"
        if rel.startswith(prefix):
            rel = rel[len(prefix):]
        return cls(path=Path(path), relative_path=rel)


@dataclass(frozen=True)
class ManifestEntry:
    """One uploaded object."""
    key: str

    def to_dict(self) -> dict:
        return {"Key": self.key}


@dataclass
class UploadManifest:
    """Ordered storage keys produced for one published package."""
    campaign_id: str
    upload_id: str
    entries: List[ManifestEntry] = field(default_factory=list)

    def add(self, key: str) -> None:
        self.entries.append(ManifestEntry(key=key))

    @property
    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries]

    @property
    def root_markup_key(self) -> Optional[str]:
        """Key of the first uploaded markup file, used to build the CDN url."""
        for key in self.keys:
            if ".html" in key:
                return key
        return None

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class UploadConfig:
    """Immutable configuration for publish operations."""
    primary_bucket: str = ""
    acl: str = "public-read"
    default_content_type: str = "application/octet-stream"
    # Secondary uploads need both the feature flag and the config switch
    dual_upload_flag: bool = False
    upload_to_secondary: bool = False
    max_archive_size: int = 100 * 1024 * 1024
    upload_directory: Path = Path("/tmp/rich-media-markup-uploads")
    extract_directory: Path = Path("/tmp/rich-media-markup-extracted")

    @property
    def secondary_enabled(self) -> bool:
        return self.dual_upload_flag and self.upload_to_secondary


@dataclass(frozen=True)
class ArchiveInfo:
    """An uploaded archive waiting for extraction."""
    file_path: Path
    basename: str
    extension: str
    destination_directory: Path

    @property
    def is_zip(self) -> bool:
        return self.extension.lower() == ".zip"


@dataclass(frozen=True)
class PublishRequest:
    """A request to publish one or more archives for a campaign."""
    campaign_id: str
    archives: Sequence[Path]
    exporter: Exporter = Exporter.UNSPECIFIED


@dataclass(frozen=True)
class RequestResult:
    """Outcome of a successful publish request."""
    upload_id: str
    campaign_id: str
    manifests: List[UploadManifest]
    archive_basename: Optional[str] = None

    @property
    def root_markup_key(self) -> Optional[str]:
        if not self.manifests:
            return None
        return self.manifests[-1].root_markup_key

    @property
    def root_markup_basename(self) -> Optional[str]:
        key = self.root_markup_key
        if key is None:
            return None
        return key.split("/")[-1].split(".html")[0]
