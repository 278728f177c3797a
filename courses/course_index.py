from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from common.logger import get_logger
from courses.course_ids import normalize_course_id
from ingestion.document_models import CourseRecord, RubricWindow, UnitContent
from retrieval.retriever import RubricRetriever
from retrieval.scoring import RubricQuery

log = get_logger(__name__)


class CourseIndex:
    """
    Parsed CED artifacts keyed by document key.

    Records are inserted or replaced whole, never patched. Every lookup takes
    the human-facing course id and normalizes it; a course that failed to
    index simply answers "no data" (None, [] or "").
    """

    def __init__(self, retriever: Optional[RubricRetriever] = None):
        self._records: Dict[str, CourseRecord] = {}
        self.retriever = retriever or RubricRetriever()

    def add(self, record: CourseRecord) -> None:
        replaced = record.course_id in self._records
        self._records[record.course_id] = record
        log.info(
            "%s course '%s' (%d chunks, %d units, %d rubrics)",
            "Replaced" if replaced else "Indexed",
            record.course_id,
            len(record.chunks),
            len(record.units),
            len(record.rubrics),
        )

    def get(self, course_id: str) -> Optional[CourseRecord]:
        return self._records.get(normalize_course_id(course_id))

    def course_ids(self) -> List[str]:
        return sorted(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, course_id: object) -> bool:
        return isinstance(course_id, str) and self.has_course_data(course_id)

    def __iter__(self) -> Iterator[CourseRecord]:
        return iter(self._records[cid] for cid in self.course_ids())

    def has_course_data(self, course_id: str) -> bool:
        return normalize_course_id(course_id) in self._records

    def get_unit_content(self, course_id: str, unit_number: int) -> Optional[UnitContent]:
        record = self.get(course_id)
        if record is None:
            return None
        unit = record.units.get(unit_number)
        if unit is None:
            return None
        content = "\n\n".join(record.chunks[i].text for i in unit.chunk_refs)
        return UnitContent(
            content=content, title=unit.title, chunk_count=len(unit.chunk_refs)
        )

    def get_available_units(self, course_id: str) -> List[int]:
        record = self.get(course_id)
        return sorted(record.units) if record else []

    def get_exam_overview(self, course_id: str) -> str:
        record = self.get(course_id)
        return record.exam_overview if record else ""

    def get_rubric_segments(self, course_id: str) -> List[Dict[str, Any]]:
        record = self.get(course_id)
        return [r.summary() for r in record.rubrics] if record else []

    def find_relevant_rubrics(
        self, course_id: str, query: Optional[RubricQuery] = None
    ) -> List[RubricWindow]:
        record = self.get(course_id)
        if record is None:
            return []
        return self.retriever.find_relevant(record.rubrics, query)

    def get_content_hash(self, course_id: str) -> Optional[str]:
        record = self.get(course_id)
        return record.content_hash if record else None
