"""
Rich-media uploader - validates creative packages and publishes them to object storage.

Usage:
    from richmedia_uploader import (
        PublishPipeline, PublishRequest, UploadOrchestrator, UploaderSettings, build_backends
    )

    settings = UploaderSettings.from_env()
    backends = build_backends(settings)
    pipeline = PublishPipeline(UploadOrchestrator(settings.upload_config()), backends)

    result = await pipeline.process(
        PublishRequest(campaign_id="123", archives=[Path("banner.zip")], exporter=Exporter.GWD)
    )
    print(result.manifests[0].keys)

    # Publish an already extracted package
    manifest = await UploadOrchestrator(config).publish(
        package, campaign_id, upload_id, "conversio", backends
    )
"""
from .config import UploaderSettings
from .errors import (
    BasenameMismatch,
    EmptyRootHtml,
    ExtractionError,
    MissingAssetsFolder,
    MissingGwdMetadata,
    MissingRootHtml,
    PublishError,
    UnknownUploaderError,
    UploaderError,
    ValidationError,
)
from .exporters import get_exporter_policy
from .models import Exporter, Package, PublishRequest, RequestResult, UploadConfig, UploadManifest
from .orchestrator import PublishPipeline, UploadOrchestrator
from .services import StorageBackends, build_backends
from .use_cases import derive_key

__version__ = "0.1.0"
__all__ = [
    # Main
    "PublishPipeline",
    "UploadOrchestrator",
    "get_exporter_policy",
    "derive_key",
    # Models
    "Exporter",
    "Package",
    "PublishRequest",
    "RequestResult",
    "UploadConfig",
    "UploadManifest",
    # Config / services
    "UploaderSettings",
    "StorageBackends",
    "build_backends",
    # Errors
    "UploaderError",
    "ValidationError",
    "MissingRootHtml",
    "EmptyRootHtml",
    "MissingGwdMetadata",
    "MissingAssetsFolder",
    "BasenameMismatch",
    "ExtractionError",
    "PublishError",
    "UnknownUploaderError",
]
