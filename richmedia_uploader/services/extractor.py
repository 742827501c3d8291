"""Zip extraction for uploaded creative archives."""
import asyncio
import logging
import zipfile
from pathlib import Path

from ..errors import ExtractionError

logger = logging.getLogger(__name__)


class ZipExtractor:
    """Extracts a zip archive into a destination directory."""

    @staticmethod
    def _extract(archive: Path, destination: Path) -> None:
        destination.mkdir(parents=True, exist_ok=True)
        root = destination.resolve()
        with zipfile.ZipFile(archive) as zf:
            for member in zf.namelist():
                target = (destination / member).resolve()
                if root != target and root not in target.parents:
                    raise ValueError(f"archive member escapes destination: {member}")
            zf.extractall(destination)

    async def extract(self, archive: Path, destination: Path) -> None:
        archive = Path(archive)
        try:
            await asyncio.to_thread(self._extract, archive, Path(destination))
        except (OSError, zipfile.BadZipFile, ValueError) as exc:
            raise ExtractionError(archive, exc) from exc
        logger.debug("Extracted %s into %s", archive.name, destination)
