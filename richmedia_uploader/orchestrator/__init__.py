"""Orchestrator package - coordinates publish workflows."""
from .core import UploadOrchestrator
from .file_collector import FileCollector, list_files, read_bytes, read_text
from .pipeline import PublishPipeline, describe_archives, new_upload_id

__all__ = [
    "FileCollector",
    "PublishPipeline",
    "UploadOrchestrator",
    "describe_archives",
    "list_files",
    "new_upload_id",
    "read_bytes",
    "read_text",
]
