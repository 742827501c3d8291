"""
Error taxonomy for the creative upload pipeline.

ValidationError subclasses are user-correctable and their messages are
surfaced verbatim. Extraction and publish failures carry the offending
path; anything else is wrapped in UnknownUploaderError.
"""
from pathlib import Path
from typing import Optional, Union


class UploaderError(RuntimeError):
    """Base class for all pipeline failures."""


class ValidationError(UploaderError):
    """Package or request rejected; message is shown to the caller as-is."""


class MissingRootHtml(ValidationError):
    def __init__(self):
        super().__init__("Zip file does not contain a root .html file")


class EmptyRootHtml(ValidationError):
    def __init__(self):
        super().__init__("Root .html file is missing content")


class MissingGwdMetadata(ValidationError):
    def __init__(self):
        super().__init__("Root .html file does not contain Google Web Designer metadata")


class MissingAssetsFolder(ValidationError):
    def __init__(self):
        super().__init__("Zip file is missing assets folder for linked assets")


class BasenameMismatch(ValidationError):
    def __init__(self, archive_basename: str, root_html_basename: str):
        self.archive_basename = archive_basename
        self.root_html_basename = root_html_basename
        super().__init__(
            f"Zip file name '{archive_basename}' does not contain basename '{root_html_basename}'"
        )


class ExtractionError(UploaderError):
    """Archive could not be extracted."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None):
        self.path = str(path)
        self.cause = cause
        message = f"failed to extract {self.path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class PublishError(UploaderError):
    """A read, rewrite or upload step failed for one package file."""

    def __init__(
        self,
        path: Union[str, Path],
        backend: str,
        cause: Optional[BaseException] = None,
    ):
        self.path = str(path)
        self.backend = backend
        self.cause = cause
        message = f"failed to upload {self.path} to {backend}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class UnknownUploaderError(UploaderError):
    """Unclassified server-side failure. Details live on __cause__ only."""

    def __init__(self, message: str = "internal error while processing upload"):
        super().__init__(message)
