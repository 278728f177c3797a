from __future__ import annotations

import argparse
from pathlib import Path

from common.config import yaml_config
from common.logger import get_logger
from ingestion.ingest_pipeline import (
    IndexBuildReport,
    build_course_index,
    write_manifest,
)

log = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Parse CED documents into units and rubric windows."
    )
    parser.add_argument(
        "--ceds_dir",
        type=str,
        default=str(yaml_config.app.ceds_dir),
        help="Folder with CED PDFs/TXT/MD",
    )
    parser.add_argument(
        "--manifest",
        type=str,
        default="",
        help="Where to write the JSON manifest (default: <cache_dir>/manifest_ceds.json)",
    )
    args = parser.parse_args()

    ceds_dir = Path(args.ceds_dir)
    if not ceds_dir.is_dir():
        log.error("CED directory does not exist: %s", ceds_dir)
        raise SystemExit(1)

    report = IndexBuildReport()
    index = build_course_index(ceds_dir=ceds_dir, report=report)

    for record in index:
        log.info(
            "%s: units=%s rubrics=%d hash=%s",
            record.course_id,
            sorted(record.units),
            len(record.rubrics),
            record.content_hash,
        )
    for source, reason in report.failed.items():
        log.warning("Skipped %s: %s", source, reason)

    write_manifest(index, Path(args.manifest) if args.manifest else None)
    if not len(index):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
