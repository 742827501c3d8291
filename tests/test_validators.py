"""Tests for exporter package validators."""
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from richmedia_uploader.errors import (
    BasenameMismatch,
    EmptyRootHtml,
    MissingAssetsFolder,
    MissingGwdMetadata,
    MissingRootHtml,
    ValidationError,
)
from richmedia_uploader.exporters import ConversioValidator, GWDValidator, get_exporter_policy
from richmedia_uploader.exporters.conversio import root_markup_basename
from richmedia_uploader.models import Exporter

GWD_META = '<meta name="generator" content="Google Web Designer"/>'
GWD_WITH_ASSETS = f"""
    {GWD_META}
    <image src="assets/test-image.png"/>
"""


def _capabilities(files, content):
    return AsyncMock(return_value=files), AsyncMock(return_value=content)


class TestGWDValidator:
    @pytest.mark.asyncio
    async def test_calls_injected_dependencies(self):
        list_files, read_text = _capabilities(["testZipFile.html"], GWD_META)
        validator = GWDValidator(list_files, read_text)

        await validator.validate("testZipFile", Path("testUploadDirectory"))

        list_files.assert_awaited_once_with(Path("testUploadDirectory"))
        read_text.assert_awaited_once_with("testZipFile.html")

    @pytest.mark.asyncio
    async def test_accepts_valid_package(self):
        validator = GWDValidator(
            *_capabilities(["gwd-test-a.html", "assets/test-image.png"], GWD_WITH_ASSETS)
        )
        assert await validator.validate("gwd-test-a", Path("dir")) is True

    @pytest.mark.asyncio
    async def test_ignores_archive_basename(self):
        validator = GWDValidator(
            *_capabilities(["gwd-test-b.html", "assets/test-image.png"], GWD_WITH_ASSETS)
        )
        assert await validator.validate("gwd-test-a (1)", Path("dir")) is True

    @pytest.mark.asyncio
    async def test_rejects_missing_root_html(self):
        validator = GWDValidator(*_capabilities([], GWD_META))
        with pytest.raises(MissingRootHtml, match="Zip file does not contain a root .html file"):
            await validator.validate("gwd-test-a", Path("dir"))

    @pytest.mark.asyncio
    async def test_rejects_empty_root_html(self):
        validator = GWDValidator(*_capabilities(["gwd-test-a.html"], ""))
        with pytest.raises(EmptyRootHtml, match="Root .html file is missing content"):
            await validator.validate("gwd-test-a", Path("dir"))

    @pytest.mark.asyncio
    async def test_rejects_missing_metadata(self):
        validator = GWDValidator(*_capabilities(["gwd-test-a.html"], "<meta/>"))
        with pytest.raises(MissingGwdMetadata) as exc_info:
            await validator.validate("gwd-test-a", Path("dir"))
        assert str(exc_info.value) == "Root .html file does not contain Google Web Designer metadata"

    @pytest.mark.asyncio
    async def test_metadata_marker_makes_package_pass(self):
        files = ["index.html"]
        with pytest.raises(MissingGwdMetadata):
            await GWDValidator(*_capabilities(files, "<html></html>")).validate("x", Path("d"))
        assert await GWDValidator(*_capabilities(files, f"<html>{GWD_META}</html>")).validate(
            "x", Path("d")
        )

    @pytest.mark.asyncio
    async def test_rejects_linked_assets_without_folder(self):
        validator = GWDValidator(*_capabilities(["gwd-test-a.html"], GWD_WITH_ASSETS))
        with pytest.raises(MissingAssetsFolder, match="missing assets folder for linked assets"):
            await validator.validate("gwd-test-a", Path("dir"))

    @pytest.mark.asyncio
    async def test_any_assets_path_satisfies_asset_links(self):
        validator = GWDValidator(
            *_capabilities(["gwd-test-a.html", "nested/assets/logo.svg"], GWD_WITH_ASSETS)
        )
        assert await validator.validate("gwd-test-a", Path("dir")) is True

    @pytest.mark.asyncio
    async def test_reads_first_html_in_listing_order(self):
        list_files, read_text = _capabilities(["b.html", "a.html"], GWD_META)
        await GWDValidator(list_files, read_text).validate("pkg", Path("dir"))
        read_text.assert_awaited_once_with("b.html")


class TestConversioValidator:
    @pytest.mark.asyncio
    async def test_calls_injected_dependencies(self):
        list_files, read_text = _capabilities(["testZipFile.html"], GWD_META)
        await ConversioValidator(list_files, read_text).validate("testZipFile", Path("testUploadDirectory"))
        assert list_files.await_count == 1
        assert read_text.await_count == 1

    @pytest.mark.asyncio
    async def test_accepts_valid_package(self):
        validator = ConversioValidator(
            *_capabilities(
                ["conversio-test-a.html", "images/test-image.png"],
                '<image src="images/test-image.png"/>',
            )
        )
        assert await validator.validate("conversio-test-a", Path("dir")) is True

    @pytest.mark.asyncio
    async def test_accepts_parenthesised_duplicate_suffix(self):
        validator = ConversioValidator(
            *_capabilities(["conversio-test-a.html"], '<image src="images/test-image.png"/>')
        )
        assert await validator.validate("conversio-test-a (1)", Path("dir")) is True

    @pytest.mark.asyncio
    async def test_rejects_missing_root_html(self):
        validator = ConversioValidator(*_capabilities([], "<meta/>"))
        with pytest.raises(MissingRootHtml):
            await validator.validate("conversio-test-a", Path("dir"))

    @pytest.mark.asyncio
    async def test_rejects_empty_root_html(self):
        validator = ConversioValidator(*_capabilities(["conversio-test-a.html"], ""))
        with pytest.raises(EmptyRootHtml):
            await validator.validate("conversio-test-a", Path("dir"))

    @pytest.mark.asyncio
    async def test_rejects_basename_mismatch(self):
        list_files, read_text = _capabilities(["conversio-test-b.html"], "<html/>")
        validator = ConversioValidator(list_files, read_text)

        with pytest.raises(BasenameMismatch) as exc_info:
            await validator.validate("conversio-test-a (1)", Path("dir"))

        assert str(exc_info.value) == (
            "Zip file name 'conversio-test-a (1)' does not contain basename 'conversio-test-b'"
        )
        assert exc_info.value.archive_basename == "conversio-test-a (1)"
        assert exc_info.value.root_html_basename == "conversio-test-b"
        read_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foo_bar_examples(self):
        ok = ConversioValidator(*_capabilities(["foo.html"], "<html/>"))
        assert await ok.validate("foo (1)", Path("dir")) is True

        bad = ConversioValidator(*_capabilities(["bar.html"], "<html/>"))
        with pytest.raises(BasenameMismatch, match=r"'foo \(1\)' does not contain basename 'bar'"):
            await bad.validate("foo (1)", Path("dir"))

    @pytest.mark.asyncio
    async def test_strips_extract_root_and_nested_folders(self):
        files = ["/tmp/extracted/banner (2)/banner/index.html"]
        validator = ConversioValidator(
            *_capabilities(files, "<html/>"), extract_root=Path("/tmp/extracted")
        )
        assert await validator.validate("banner (2)", Path("/tmp/extracted/banner (2)")) is True

    @pytest.mark.asyncio
    async def test_defaults_extract_root_to_package_parent(self):
        files = ["/tmp/extracted/promo/other.html"]
        validator = ConversioValidator(*_capabilities(files, "<html/>"))
        with pytest.raises(BasenameMismatch, match="basename 'other'"):
            await validator.validate("promo", Path("/tmp/extracted/promo"))


def test_root_markup_basename_takes_first_segment():
    assert root_markup_basename(Path("/x/pkg/banner/index.html"), "/x", "pkg") == "banner"
    assert root_markup_basename(Path("/x/pkg/index.html"), "/x", "pkg") == "index"


class TestPolicyDispatch:
    def test_known_exporters(self):
        assert get_exporter_policy("gwd").exporter is Exporter.GWD
        assert get_exporter_policy("conversio").exporter is Exporter.CONVERSIO
        assert get_exporter_policy(Exporter.CONVERSIO).exporter is Exporter.CONVERSIO

    @pytest.mark.parametrize(
        "identifier",
        [None, "", "unknown", "GWD ", "Conversio", "CONVERSIO", " conversio", Exporter.UNSPECIFIED],
    )
    def test_unknown_exporters_fall_back_to_gwd(self, identifier):
        assert get_exporter_policy(identifier).exporter is Exporter.GWD

    @pytest.mark.asyncio
    async def test_missing_root_html_for_every_policy(self):
        for exporter in (Exporter.GWD, Exporter.CONVERSIO):
            validator = get_exporter_policy(exporter).build_validator(
                AsyncMock(return_value=["styles.css"]), AsyncMock(return_value="x")
            )
            with pytest.raises(ValidationError):
                await validator.validate("pkg", Path("dir"))
