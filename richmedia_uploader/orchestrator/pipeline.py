"""Request pipeline - extract, validate and publish every archive of a request."""
import asyncio
import logging
import shutil
import uuid
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..errors import UnknownUploaderError, UploaderError, ValidationError
from ..exporters import get_exporter_policy
from ..models import ArchiveInfo, Exporter, Package, PublishRequest, RequestResult, UploadManifest
from ..protocols import IExtractor, IFileLister, ITextReader
from ..services.extractor import ZipExtractor
from ..services.storage import StorageBackends
from .core import UploadOrchestrator
from .file_collector import list_files, read_text

logger = logging.getLogger(__name__)


def new_upload_id() -> str:
    return str(uuid.uuid4())


def describe_archives(archives: Sequence[Path], extract_directory: Path) -> List[ArchiveInfo]:
    """Basename and extraction target for each uploaded archive."""
    infos = []
    for archive in archives:
        archive = Path(archive)
        infos.append(
            ArchiveInfo(
                file_path=archive,
                basename=archive.stem,
                extension=archive.suffix,
                destination_directory=Path(extract_directory) / archive.stem,
            )
        )
    return infos


class PublishPipeline:
    """
    Processes one publish request.

    All archives are extracted first, then each package is validated and
    published in order. Every package of the request shares one upload
    id. The first failure stops the request; extracted folders are
    removed whatever the outcome.

    Usage:
        pipeline = PublishPipeline(UploadOrchestrator(config), backends)
        result = await pipeline.process(PublishRequest(campaign_id, archives, exporter))
    """

    def __init__(
        self,
        orchestrator: UploadOrchestrator,
        backends: StorageBackends,
        extractor: Optional[IExtractor] = None,
        file_lister: Optional[IFileLister] = None,
        text_reader: Optional[ITextReader] = None,
        id_factory: Callable[[], str] = new_upload_id,
    ):
        self._orchestrator = orchestrator
        self._backends = backends
        self._extractor = extractor or ZipExtractor()
        self._list_files = file_lister or list_files
        self._read_text = text_reader or read_text
        self._id_factory = id_factory

    async def process(self, request: PublishRequest) -> RequestResult:
        """
        Raises:
            ValidationError: request or package rejected
            ExtractionError: an archive could not be extracted
            PublishError: a package file could not be stored
            UnknownUploaderError: anything else
        """
        config = self._orchestrator.config
        infos = describe_archives(request.archives, config.extract_directory)
        self._check_request(infos, config.max_archive_size)

        exporter = Exporter.parse(request.exporter)
        upload_id = self._id_factory()
        manifests: List[UploadManifest] = []

        try:
            await asyncio.to_thread(self._ensure_directories, config.upload_directory, config.extract_directory)

            for info in infos:
                await self._extractor.extract(info.file_path, info.destination_directory)

            policy = get_exporter_policy(exporter)
            validator = policy.build_validator(
                self._list_files, self._read_text, config.extract_directory
            )

            for info in infos:
                await validator.validate(info.basename, info.destination_directory)
                package = Package(
                    basename=info.basename,
                    root_directory=info.destination_directory,
                    exporter=exporter,
                )
                manifest = await self._orchestrator.publish(
                    package, request.campaign_id, upload_id, exporter, self._backends
                )
                manifests.append(manifest)
        except UploaderError:
            raise
        except Exception as exc:
            logger.error("Unexpected failure for campaign %s", request.campaign_id, exc_info=True)
            raise UnknownUploaderError() from exc
        finally:
            await asyncio.to_thread(self._remove_directories, infos)

        return RequestResult(
            upload_id=upload_id,
            campaign_id=request.campaign_id,
            manifests=manifests,
            archive_basename=infos[0].basename,
        )

    @staticmethod
    def _check_request(infos: Sequence[ArchiveInfo], max_size: int) -> None:
        if not infos:
            raise ValidationError("no files uploaded")
        if not all(info.is_zip for info in infos):
            raise ValidationError("unsupported file type")
        for info in infos:
            if info.file_path.exists() and info.file_path.stat().st_size > max_size:
                raise ValidationError(f"file too large: {info.file_path.name}")

    @staticmethod
    def _ensure_directories(*directories: Path) -> None:
        for directory in directories:
            Path(directory).mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _remove_directories(infos: Sequence[ArchiveInfo]) -> None:
        for info in infos:
            shutil.rmtree(info.destination_directory, ignore_errors=True)
