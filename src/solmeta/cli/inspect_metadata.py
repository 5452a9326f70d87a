"""CLI command that prints extracted package metadata as JSON."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from solmeta.metadata.config import ParserSettings, TrackingMode
from solmeta.metadata.record import MetadataLoadError, read_metadata


load_dotenv()

LOGGER = logging.getLogger(__name__)

_METADATA_FILENAMES = {"metadata.xml", "pspec.xml"}


def _collect_inputs(target: Path) -> list[Path]:
    if target.is_file():
        return [target]
    if target.is_dir():
        return sorted(path for path in target.rglob("*") if path.is_file() and path.name in _METADATA_FILENAMES)
    return []


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract package name and component from metadata.xml files")
    parser.add_argument("--path", required=True, help="metadata.xml file or directory to scan")
    parser.add_argument(
        "--tracking",
        choices=[mode.value for mode in TrackingMode],
        default=None,
        help="Override SOLMETA_TRACKING for nested element tracking",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics on stderr")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=args.log_level.upper(),
    )

    try:
        settings = ParserSettings.from_env()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2
    if args.tracking is not None:
        settings = replace(settings, tracking=TrackingMode(args.tracking))

    source_path = Path(args.path)
    results: list[dict[str, object]] = []
    errors: list[dict[str, str]] = []

    if not source_path.exists():
        errors.append({"source_path": str(source_path), "error": "Path does not exist"})

    for file_path in _collect_inputs(source_path):
        try:
            record = read_metadata(file_path, settings)
        except MetadataLoadError as exc:
            errors.append({"source_path": str(file_path), "error": str(exc)})
            continue

        results.append(
            {
                "source_path": str(file_path),
                "package_name": record.package_name,
                "component": record.component,
            }
        )

    payload = {
        "path": str(source_path),
        "processed": len(results),
        "results": results,
        "errors": errors,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
