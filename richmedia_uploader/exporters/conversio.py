"""Conversio packages."""
import logging
import re
from pathlib import Path
from typing import Optional

from ..errors import BasenameMismatch
from ..protocols import IClickthroughRewriter, IFileLister, ITextReader
from .base import REDIRECT_EXPRESSION, ROOT_MARKUP_MARKER, PackageValidator

logger = logging.getLogger(__name__)


def root_markup_basename(root_markup: Path, extract_root: str, package_basename: str) -> str:
    """
    Name of the root markup relative to its package folder.

    "<extract_root>/<package>/banner/index.html" -> "banner"
    """
    relative = str(root_markup).replace(f"{extract_root}/{package_basename}/", "", 1)
    return relative.split(ROOT_MARKUP_MARKER)[0].split("/")[0]


class ConversioValidator(PackageValidator):
    """
    Validates a Conversio export.

    The archive basename must contain the root markup basename, which
    tolerates duplicate suffixes such as "banner (1)".
    """

    def __init__(
        self,
        list_files: IFileLister,
        read_text: ITextReader,
        extract_root: Optional[Path] = None,
    ):
        super().__init__(list_files, read_text)
        self._extract_root = extract_root

    async def validate(self, package_basename: str, package_directory: Path) -> bool:
        files = await self._list_package(package_directory)
        root_markup = self._require_root_markup(files)

        extract_root = self._extract_root
        if extract_root is None:
            extract_root = Path(package_directory).parent
        root_basename = root_markup_basename(root_markup, str(extract_root), package_basename)

        if root_basename not in package_basename:
            raise BasenameMismatch(package_basename, root_basename)

        await self._read_root_markup(root_markup)

        logger.debug("Conversio package %s accepted (root=%s)", package_basename, root_markup)
        return True


class ConversioClickthroughRewriter(IClickthroughRewriter):
    """
    Prefixes clickTag declarations with the redirect expression.

    Keyword, identifier casing and spacing around "=" are kept; the
    literal is re-emitted with double quotes. Not safe to apply twice.
    """

    CLICK_TAG = re.compile(
        r"\b(?:var|let|const)\s+clickTag\s*=\s*[\"'](\S*)[\"']",
        re.IGNORECASE,
    )
    URL_LITERAL = re.compile(r"([\"']https?://[^\s]+[\"'])")

    def rewrite(self, markup: str) -> str:
        return self.CLICK_TAG.sub(self._rewrite_declaration, markup)

    def _rewrite_declaration(self, match: "re.Match") -> str:
        return self.URL_LITERAL.sub(self._rewrite_url, match.group(0))

    @staticmethod
    def _rewrite_url(match: "re.Match") -> str:
        url = match.group(0).strip("'").strip('"')
        return f'{REDIRECT_EXPRESSION} + "{url}"'
