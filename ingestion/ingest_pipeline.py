from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import orjson
from tqdm import tqdm

from common.config import yaml_config
from common.errors import CedIndexError, DocumentParseError
from common.logger import get_logger
from courses.course_index import CourseIndex
from ingestion.chunkers import chunk_document
from ingestion.document_models import CourseRecord, SourceDocument
from ingestion.exam_overview import extract_exam_overview
from ingestion.loaders import discover_files, load_from_path
from ingestion.rubrics import extract_rubrics
from ingestion.segmenter import segment_units

log = get_logger(__name__)

Source = Union[Path, SourceDocument]


@dataclass
class IndexBuildReport:
    indexed: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)  # source -> reason


def parse_document(source: SourceDocument) -> CourseRecord:
    """
    Run the full parse for one document: chunk, segment into units, extract
    rubric windows and the exam overview. Touches no shared state.
    """
    try:
        chunks = chunk_document(source.text)
        units = segment_units(chunks)
        rubrics = extract_rubrics(chunks)
        overview = extract_exam_overview(source.text)
    except Exception as e:
        raise DocumentParseError(str(source.path), str(e)) from e

    return CourseRecord(
        course_id=source.course_id,
        chunks=tuple(chunks),
        units=units,
        rubrics=tuple(rubrics),
        full_text=source.text,
        exam_overview=overview,
        content_hash=source.content_hash,
        source_path=source.path,
    )


def _resolve(source: Source) -> SourceDocument:
    if isinstance(source, SourceDocument):
        return source
    return load_from_path(source)


def initialize_course(source: Source, index: CourseIndex) -> CourseRecord:
    """Parse one course on demand and insert it, replacing any previous record."""
    record = parse_document(_resolve(source))
    index.add(record)
    return record


def build_course_index(
    sources: Optional[Iterable[Source]] = None,
    index: Optional[CourseIndex] = None,
    ceds_dir: Optional[Path] = None,
    report: Optional[IndexBuildReport] = None,
) -> CourseIndex:
    """
    Index every CED document.
    - Loads each file (PDF/TXT/MD) or takes pre-loaded sources
    - Parses it in isolation
    - Inserts the finished record into the index

    A document that cannot be loaded or parsed is logged and skipped; the
    rest of the batch still gets indexed.
    """
    index = index if index is not None else CourseIndex()
    report = report if report is not None else IndexBuildReport()
    if sources is None:
        ceds_dir = Path(ceds_dir or yaml_config.app.ceds_dir)
        sources = discover_files(ceds_dir)
        log.info("Discovered %d CED files in %s", len(sources), ceds_dir)

    sources = list(sources)
    if not sources:
        log.warning("No CED documents found to index.")
        return index

    for source in tqdm(sources, desc="Parsing CEDs"):
        try:
            record = initialize_course(source, index)
        except CedIndexError as e:
            log.error("Failed to index %s: %s", e.source, e.reason, exc_info=True)
            report.failed[e.source] = e.reason
            continue
        report.indexed.append(record.course_id)

    log.info(
        "CED parsing complete: %d courses loaded, %d failed",
        len(report.indexed),
        len(report.failed),
    )
    return index


def write_manifest(index: CourseIndex, out: Optional[Path] = None) -> Path:
    """Write a per-course summary of the index as JSON (for audit/debug)."""
    manifest = [
        {
            "course_id": r.course_id,
            "source": str(r.source_path) if r.source_path else None,
            "content_hash": r.content_hash,
            "chunks": len(r.chunks),
            "units": {
                n: {"title": u.title, "chunk_refs": list(u.chunk_refs)}
                for n, u in r.units.items()
            },
            "rubrics": [w.summary() for w in r.rubrics],
            "exam_overview_len": len(r.exam_overview),
        }
        for r in index
    ]
    out = Path(out or yaml_config.app.cache_dir / "manifest_ceds.json")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(
        orjson.dumps(manifest, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS)
    )
    log.info("Wrote manifest to %s", out)
    return out
