"""Command line interface for the rich-media uploader."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich.logging import RichHandler

from .cli_progress import render_configuration_summary, render_publish_result


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _resolve_log_level(debug: bool, log_level: Optional[str]) -> Optional[int]:
    """Effective level, or None when the CLI should stay silent."""
    if debug:
        return logging.DEBUG
    if log_level:
        return getattr(logging, log_level.upper(), logging.INFO)
    return None


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Route pipeline logs through rich.

    Silent unless --debug or --log-level is given; --silent wins over both.
    Returns the effective mode for the configuration summary.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    logging.disable(logging.NOTSET)

    level = None if silent else _resolve_log_level(debug, log_level)
    if level is None:
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    # markup off: archive names like "promo [v2].zip" are not rich tags
    handler = RichHandler(rich_tracebacks=True, markup=False, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _parse_env_line(raw_line: str) -> Optional[Tuple[str, str]]:
    """KEY=value pair from one .env line; comments and junk yield None."""
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, _strip_optional_quotes(value.strip())


def _load_env_file(path: Path, override: bool = False) -> int:
    """Apply a .env file to os.environ. Returns how many variables were set."""
    if not path.is_file():
        raise CLIError(f"env file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    applied = 0
    for pair in filter(None, map(_parse_env_line, content.splitlines())):
        key, value = pair
        if override or key not in os.environ:
            os.environ[key] = value
            applied += 1
    return applied


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.is_file() else None


async def _run_publish(
    archives: List[Path],
    campaign_id: str,
    exporter: Optional[str],
    upload_to_gcs: bool,
) -> int:
    from .config import UploaderSettings
    from .errors import UploaderError
    from .models import PublishRequest
    from .orchestrator import PublishPipeline, UploadOrchestrator
    from .services import build_backends

    settings = UploaderSettings.from_env()
    if upload_to_gcs:
        settings = replace(settings, upload_to_gcs=True, dual_upload_flag=True)
    if not settings.s3_bucket:
        raise CLIError("S3_CREATIVES_BUCKET environment variable is not set")

    backends = build_backends(settings)
    pipeline = PublishPipeline(UploadOrchestrator(settings.upload_config()), backends)

    try:
        result = await pipeline.process(
            PublishRequest(campaign_id=campaign_id, archives=archives, exporter=exporter)
        )
    except UploaderError as exc:
        raise CLIError(str(exc)) from exc

    render_publish_result(result)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="creative-up",
        description="Validate rich-media creative zip archives and publish them to object storage.",
    )
    parser.add_argument("archives", nargs="*", type=Path, help="Creative .zip archives")
    parser.add_argument(
        "-c",
        "--campaign-id",
        default=None,
        help="Campaign id used as the first storage key segment",
    )
    parser.add_argument(
        "-e",
        "--exporter",
        default=None,
        help="Authoring tool: gwd or conversio (anything else is treated as gwd)",
    )
    parser.add_argument(
        "--upload-to-gcs",
        action="store_true",
        help="Also mirror every object to GCS_CREATIVES_BUCKET",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Only print errors")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="creative-up (from richmedia_uploader)",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    env_summary = "-"
    if used_env_file is not None:
        try:
            applied = _load_env_file(Path(used_env_file))
            env_summary = f"{used_env_file} ({applied} set)"
        except CLIError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    effective_log_mode = _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    if not args.archives:
        parser.print_help()
        return 0

    if not args.campaign_id:
        print("ERROR: --campaign-id is required", file=sys.stderr)
        return 1

    archives = [Path(a).expanduser() for a in args.archives]
    missing = [a for a in archives if not a.exists()]
    if missing:
        print(f"ERROR: archive does not exist: {missing[0]}", file=sys.stderr)
        return 1

    render_configuration_summary(
        {
            "Archives": ", ".join(a.name for a in archives),
            "Campaign": args.campaign_id,
            "Exporter": args.exporter or "gwd (default)",
            "S3 Bucket": os.getenv("S3_CREATIVES_BUCKET") or "(missing)",
            "GCS Mirror": "yes" if args.upload_to_gcs else "from env",
            "Env File": env_summary,
            "Logging": effective_log_mode,
        }
    )

    try:
        return asyncio.run(
            _run_publish(
                archives=archives,
                campaign_id=args.campaign_id,
                exporter=args.exporter,
                upload_to_gcs=args.upload_to_gcs,
            )
        )
    except CLIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
