"""Services for the creative uploader."""
from .extractor import ZipExtractor
from .storage import GCSStorageBackend, S3StorageBackend, StorageBackends, build_backends

__all__ = [
    "GCSStorageBackend",
    "S3StorageBackend",
    "StorageBackends",
    "ZipExtractor",
    "build_backends",
]
