"""Shared pieces for exporter validators and rewriters."""
import logging
from pathlib import Path
from typing import Optional, Sequence

from ..errors import EmptyRootHtml, MissingRootHtml
from ..protocols import IExporterValidator, IFileLister, ITextReader

logger = logging.getLogger(__name__)

ROOT_MARKUP_MARKER = ".html"

# Injected in front of every rewritten clickthrough literal
REDIRECT_EXPRESSION = "decodeURIComponent(window.location.href.split('?adserver=')[1])"


def find_root_markup(files: Sequence[Path]) -> Optional[Path]:
    """First listed path containing .html, in listing order."""
    for file_path in files:
        if ROOT_MARKUP_MARKER in str(file_path):
            return file_path
    return None


class PackageValidator(IExporterValidator):
    """
    Base validator holding the injected I/O capabilities.

    Args:
        list_files: Async callable listing a directory recursively
        read_text: Async callable reading a file as text
    """

    def __init__(self, list_files: IFileLister, read_text: ITextReader):
        self._list_files = list_files
        self._read_text = read_text

    async def _list_package(self, package_directory: Path) -> Sequence[Path]:
        return await self._list_files(Path(package_directory))

    @staticmethod
    def _require_root_markup(files: Sequence[Path]) -> Path:
        root_markup = find_root_markup(files)
        if root_markup is None:
            raise MissingRootHtml()
        return root_markup

    async def _read_root_markup(self, root_markup: Path) -> str:
        content = await self._read_text(root_markup)
        if len(content) < 1:
            raise EmptyRootHtml()
        return content
