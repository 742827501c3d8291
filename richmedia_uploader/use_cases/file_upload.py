"""Use cases for publishing a single package file."""
from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional, Sequence, Union

from richmedia_uploader.errors import PublishError
from richmedia_uploader.exporters.base import ROOT_MARKUP_MARKER
from richmedia_uploader.models import FileEntry, UploadConfig
from richmedia_uploader.protocols import (
    IBytesReader,
    IClickthroughRewriter,
    IObjectStorage,
    ITextReader,
)

PathLike = Union[str, Path]


class DeriveObjectKeyUseCase:
    """Build the storage key "{campaign}/{basename}_{upload}/{relative path}"."""

    @staticmethod
    def execute(
        file_path: PathLike,
        package_directory: PathLike,
        campaign_id: str,
        package_basename: str,
        upload_id: str,
    ) -> str:
        key_prefix = f"{campaign_id}/{package_basename}_{upload_id}/"
        relative = FileEntry.from_listing(file_path, package_directory).relative_path

        # Archives that nest their own basename collapse to a flat layout
        if relative.split("/")[0] == package_basename:
            relative = relative.replace(f"{package_basename}/", "", 1)

        return f"{key_prefix}{relative}"


def derive_key(
    file_path: PathLike,
    package_directory: PathLike,
    campaign_id: str,
    package_basename: str,
    upload_id: str,
) -> str:
    """Pure storage key derivation; never touches the filesystem."""
    return DeriveObjectKeyUseCase.execute(
        file_path, package_directory, campaign_id, package_basename, upload_id
    )


class ResolveContentTypeUseCase:
    """Content type from the file extension."""

    @staticmethod
    def execute(file_path: PathLike, default: str = "application/octet-stream") -> str:
        mimetype, _ = mimetypes.guess_type(str(file_path))
        return mimetype or default


class ReadPackageFileUseCase:
    """
    Read one package file for upload.

    Markup files are read as text and rewritten exactly once; everything
    else is read as opaque bytes.
    """

    def __init__(self, read_text: ITextReader, read_bytes: IBytesReader):
        self._read_text = read_text
        self._read_bytes = read_bytes

    @staticmethod
    def is_markup(file_path: PathLike) -> bool:
        return ROOT_MARKUP_MARKER in str(file_path)

    async def execute(
        self, file_path: PathLike, rewriter: IClickthroughRewriter
    ) -> Union[str, bytes]:
        if self.is_markup(file_path):
            markup = await self._read_text(Path(file_path))
            return rewriter.rewrite(markup)
        return await self._read_bytes(Path(file_path))


class UploadObjectUseCase:
    """Write one object to the secondary backend (if enabled) and then the primary."""

    async def execute(
        self,
        file_path: PathLike,
        primary: IObjectStorage,
        key: str,
        body: Union[str, bytes],
        content_type: str,
        config: UploadConfig,
        secondary: Optional[IObjectStorage] = None,
    ) -> Sequence[str]:
        """Returns the names of the backends written, in write order."""
        written = []
        if secondary is not None and config.secondary_enabled:
            await self._put(file_path, secondary, key, body, content_type, None)
            written.append(secondary.name)

        await self._put(file_path, primary, key, body, content_type, config.acl)
        written.append(primary.name)
        return written

    @staticmethod
    async def _put(
        file_path: PathLike,
        backend: IObjectStorage,
        key: str,
        body: Union[str, bytes],
        content_type: str,
        acl: Optional[str],
    ) -> None:
        try:
            await backend.put_object(key, body, content_type, acl=acl)
        except Exception as exc:
            raise PublishError(file_path, backend.name, exc) from exc
