"""Settings read from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .models import UploadConfig

DEFAULT_TEMP_DIR = "/tmp"
UPLOAD_DIR_NAME = "rich-media-markup-uploads"
EXTRACT_DIR_NAME = "rich-media-markup-extracted"

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class UploaderSettings:
    """Deployment settings for storage and temp directories."""
    s3_bucket: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_region: str = ""
    gcs_bucket: str = ""
    upload_to_gcs: bool = False
    dual_upload_flag: bool = False
    temp_dir: Path = Path(DEFAULT_TEMP_DIR)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "UploaderSettings":
        env = os.environ if env is None else env
        return cls(
            s3_bucket=env.get("S3_CREATIVES_BUCKET", ""),
            s3_access_key_id=env.get("S3_ACCESS_KEY_ID", ""),
            s3_secret_access_key=env.get("S3_SECRET_ACCESS_KEY", ""),
            s3_region=env.get("S3_REGION", ""),
            gcs_bucket=env.get("GCS_CREATIVES_BUCKET", ""),
            upload_to_gcs=_as_bool(env.get("CREATIVES_UPLOAD_TO_GCS")),
            dual_upload_flag=_as_bool(env.get("UPLOAD_INTO_S3_AND_GCS")),
            temp_dir=Path(env.get("CREATIVES_TEMP_DIR") or DEFAULT_TEMP_DIR),
        )

    @property
    def upload_directory(self) -> Path:
        return self.temp_dir / UPLOAD_DIR_NAME

    @property
    def extract_directory(self) -> Path:
        return self.temp_dir / EXTRACT_DIR_NAME

    def upload_config(self) -> UploadConfig:
        return UploadConfig(
            primary_bucket=self.s3_bucket,
            dual_upload_flag=self.dual_upload_flag,
            upload_to_secondary=self.upload_to_gcs,
            upload_directory=self.upload_directory,
            extract_directory=self.extract_directory,
        )
