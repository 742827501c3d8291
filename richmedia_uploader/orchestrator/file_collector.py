"""File collection utilities for extracted packages."""
import asyncio
import os
from pathlib import Path
from typing import List


class FileCollector:
    """Collects package files from extracted folders."""

    @staticmethod
    def collect_files(folder: Path) -> List[Path]:
        """
        Collect all files recursively.

        Order is the traversal order of the walk; it is not sorted, so
        validation and publishing must list the same tree the same way.

        Args:
            folder: Root folder to scan

        Returns:
            List of file paths, empty when the folder does not exist
        """
        folder = Path(folder)
        if not folder.is_dir():
            return []
        files = []
        for dirpath, _dirnames, filenames in os.walk(folder):
            for filename in filenames:
                files.append(Path(dirpath) / filename)
        return files


async def list_files(directory: Path) -> List[Path]:
    """Non-blocking recursive listing."""
    return await asyncio.to_thread(FileCollector.collect_files, Path(directory))


async def read_text(path: Path) -> str:
    """Read markup as utf-8; undecodable bytes become U+FFFD."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8", errors="replace")


async def read_bytes(path: Path) -> bytes:
    return await asyncio.to_thread(Path(path).read_bytes)
