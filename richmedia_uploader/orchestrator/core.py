"""Core orchestrator - publishes one validated package to storage."""
import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import PublishError
from ..exporters import get_exporter_policy
from ..models import Exporter, Package, UploadConfig, UploadManifest
from ..protocols import IBytesReader, IFileLister, ITextReader
from ..services.storage import StorageBackends
from ..use_cases.file_upload import (
    DeriveObjectKeyUseCase,
    ReadPackageFileUseCase,
    ResolveContentTypeUseCase,
    UploadObjectUseCase,
)
from .file_collector import list_files, read_bytes, read_text

logger = logging.getLogger(__name__)


class UploadOrchestrator:
    """
    Publishes the files of an extracted package.

    Files are processed strictly one after the other in listing order.
    The first failure aborts the package with a PublishError; objects
    written before the failure stay in the backend.

    Each markup file is read once and rewritten once. Rewriting is not
    idempotent, so the rewritten body is never fed back through the
    rewriter.

    Usage:
        orchestrator = UploadOrchestrator(config)
        manifest = await orchestrator.publish(
            package, campaign_id, upload_id, Exporter.GWD, backends
        )
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        file_lister: Optional[IFileLister] = None,
        text_reader: Optional[ITextReader] = None,
        bytes_reader: Optional[IBytesReader] = None,
        read_file: Optional[ReadPackageFileUseCase] = None,
        upload_object: Optional[UploadObjectUseCase] = None,
    ):
        """
        Initialize orchestrator with dependencies.

        Args:
            config: Upload configuration
            file_lister: Recursive directory listing (defaults to the filesystem)
            text_reader: Markup reader
            bytes_reader: Binary reader
            read_file: Read/rewrite step
            upload_object: Backend write step
        """
        self._config = config or UploadConfig()
        self._list_files = file_lister or list_files
        self._read_file = read_file or ReadPackageFileUseCase(
            text_reader or read_text, bytes_reader or read_bytes
        )
        self._upload_object = upload_object or UploadObjectUseCase()

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def publish(
        self,
        package: Package,
        campaign_id: str,
        upload_id: str,
        exporter: Union[Exporter, str, None],
        backends: StorageBackends,
    ) -> UploadManifest:
        """
        Upload every file of the package and return the ordered manifest.

        Raises:
            PublishError: on the first failed read, rewrite or write
        """
        policy = get_exporter_policy(exporter)
        package_directory = Path(package.root_directory)
        files = await self._list_files(package_directory)
        manifest = UploadManifest(campaign_id=campaign_id, upload_id=upload_id)

        logger.info(
            "Publishing package %s (%d files, exporter=%s, upload_id=%s)",
            package.basename,
            len(files),
            policy.exporter.value,
            upload_id,
        )

        for file_path in files:
            key = DeriveObjectKeyUseCase.execute(
                file_path, package_directory, campaign_id, package.basename, upload_id
            )

            try:
                body = await self._read_file.execute(file_path, policy.rewriter)
            except Exception as exc:
                logger.error("Failed to read %s: %s", file_path, exc, exc_info=True)
                raise PublishError(file_path, backends.primary.name, exc) from exc

            content_type = ResolveContentTypeUseCase.execute(
                file_path, self._config.default_content_type
            )

            try:
                written = await self._upload_object.execute(
                    file_path,
                    backends.primary,
                    key,
                    body,
                    content_type,
                    self._config,
                    secondary=backends.secondary,
                )
            except PublishError as exc:
                logger.error("Aborting package %s: %s", package.basename, exc, exc_info=True)
                raise

            logger.debug("Stored %s on %s", key, ", ".join(written))
            manifest.add(key)

        logger.info("Published package %s (%d objects)", package.basename, len(manifest))
        return manifest
