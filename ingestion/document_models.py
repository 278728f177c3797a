from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple


class QuestionType(str, Enum):
    DBQ = "dbq"
    LEQ = "leq"
    SAQ = "saq"
    ARGUMENT_ESSAY = "argument-essay"
    SYNTHESIS_ESSAY = "synthesis-essay"
    RHETORICAL_ANALYSIS = "rhetorical-analysis"
    RESEARCH_PRESENTATION = "research-presentation"
    PERFORMANCE_TASK = "performance-task"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["QuestionType"]:
        """Map a caller-supplied tag to a member; unknown tags map to None."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class SourceDocument:
    course_id: str  # normalized document key, e.g. "ap-world-history"
    path: Path
    text: str  # full extracted text
    content_hash: str  # md5 of the source bytes, opaque to the index


@dataclass(frozen=True)
class Chunk:
    index: int
    text: str
    start: int  # character offset in the source text


@dataclass(frozen=True)
class Unit:
    number: int
    title: str
    chunk_refs: Tuple[int, ...]


@dataclass(frozen=True)
class UnitContent:
    content: str
    title: str
    chunk_count: int


@dataclass(frozen=True)
class RubricWindow:
    id: str
    title: str
    question_types: Tuple[QuestionType, ...]
    content: str
    preview: str
    chunk_indices: Tuple[int, ...]
    keyword_set: FrozenSet[str] = field(repr=False)

    def has_type(self, question_type: QuestionType) -> bool:
        return question_type in self.question_types

    def summary(self) -> Dict[str, Any]:
        """Sanitized view handed to callers outside the index."""
        return {
            "id": self.id,
            "title": self.title,
            "questionTypes": [t.value for t in self.question_types],
            "chunkIndices": list(self.chunk_indices),
        }


@dataclass(frozen=True)
class CourseRecord:
    course_id: str
    chunks: Tuple[Chunk, ...]
    units: Dict[int, Unit]
    rubrics: Tuple[RubricWindow, ...]
    full_text: str
    exam_overview: str
    content_hash: str
    source_path: Optional[Path] = None
