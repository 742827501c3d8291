"""Application use cases for package publishing."""

from .file_upload import (
    DeriveObjectKeyUseCase,
    ReadPackageFileUseCase,
    ResolveContentTypeUseCase,
    UploadObjectUseCase,
    derive_key,
)

__all__ = [
    "DeriveObjectKeyUseCase",
    "ReadPackageFileUseCase",
    "ResolveContentTypeUseCase",
    "UploadObjectUseCase",
    "derive_key",
]
