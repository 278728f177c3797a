from typing import Sequence

import pytest

from ingestion.document_models import Chunk, QuestionType, RubricWindow
from ingestion.rubrics import build_keyword_set, generate_preview


@pytest.fixture
def make_chunks():
    """Chunks built directly from strings, one chunk per string."""

    def _make(texts: Sequence[str]):
        out = []
        offset = 0
        for i, t in enumerate(texts):
            out.append(Chunk(index=i, text=t, start=offset))
            offset += len(t)
        return out

    return _make


@pytest.fixture
def make_window():
    def _make(
        start: int,
        content: str,
        title: str = "Rubric Guidance",
        types: Sequence[QuestionType] = (QuestionType.GENERAL,),
        span: int = 1,
    ) -> RubricWindow:
        return RubricWindow(
            id=f"rubric-{start}",
            title=title,
            question_types=tuple(types),
            content=content,
            preview=generate_preview(content),
            chunk_indices=tuple(range(start, start + span)),
            keyword_set=build_keyword_set(content),
        )

    return _make
