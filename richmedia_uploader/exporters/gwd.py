"""Google Web Designer packages."""
import logging
import re
from pathlib import Path

from ..errors import MissingAssetsFolder, MissingGwdMetadata
from ..protocols import IClickthroughRewriter
from .base import REDIRECT_EXPRESSION, PackageValidator

logger = logging.getLogger(__name__)

GWD_METADATA_MARKER = 'name="generator" content="Google Web Designer'
ASSET_REFERENCE_MARKER = 'src="assets/'
ASSETS_FOLDER_MARKER = "assets/"


class GWDValidator(PackageValidator):
    """
    Validates a Google Web Designer export.

    The root markup must carry the GWD generator meta tag, and linked
    assets require an assets/ folder. The archive basename is not
    compared to the root markup name for GWD packages.
    """

    async def validate(self, package_basename: str, package_directory: Path) -> bool:
        files = await self._list_package(package_directory)
        root_markup = self._require_root_markup(files)
        content = await self._read_root_markup(root_markup)

        if GWD_METADATA_MARKER not in content:
            raise MissingGwdMetadata()

        has_assets = any(ASSETS_FOLDER_MARKER in str(f) for f in files)
        links_assets = ASSET_REFERENCE_MARKER in content
        if links_assets and not has_assets:
            raise MissingAssetsFolder()

        logger.debug("GWD package %s accepted (root=%s)", package_basename, root_markup)
        return True


class GWDClickthroughRewriter(IClickthroughRewriter):
    """
    Prefixes url arguments of gwdGoogleAd exit calls with the redirect expression.

    Not safe to apply twice to the same markup.
    """

    EXIT_CALL = re.compile(r".exit\([^)]+\)")
    URL_ARGUMENT = re.compile(r"([\"']https?://[^\s]+[\"'],)")

    def rewrite(self, markup: str) -> str:
        return self.EXIT_CALL.sub(self._rewrite_call, markup)

    def _rewrite_call(self, match: "re.Match") -> str:
        return self.URL_ARGUMENT.sub(self._rewrite_url, match.group(0))

    @staticmethod
    def _rewrite_url(match: "re.Match") -> str:
        url = match.group(0).lstrip("'").rstrip("',").lstrip('"').rstrip('",')
        return f"{REDIRECT_EXPRESSION} + '{url}',"
