from __future__ import annotations

import re
from typing import FrozenSet, List, Sequence, Set, Tuple

from common.config import yaml_config
from common.logger import get_logger
from ingestion.cleaners import collapse_whitespace, strip_bullets
from ingestion.document_models import Chunk, QuestionType, RubricWindow
from ingestion.vocabulary import (
    CONTINUATION_CUES,
    MIN_KEYWORD_LENGTH,
    QUESTION_TYPE_PATTERNS,
    RUBRIC_KEYWORDS,
    STOP_WORDS,
)

log = get_logger(__name__)

FALLBACK_TITLE = "Rubric Guidance"
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def is_trigger(text: str) -> bool:
    lowered = text.lower()
    return any(kw in lowered for kw in RUBRIC_KEYWORDS)


def is_continuation(text: str) -> bool:
    lowered = text.lower()
    return is_trigger(text) or any(cue in lowered for cue in CONTINUATION_CUES)


def build_keyword_set(text: str) -> FrozenSet[str]:
    """Lowercase alphanumeric tokens, minus short tokens and stop words."""
    tokens = _NON_ALNUM.sub(" ", text.lower()).split()
    return frozenset(
        t for t in tokens if len(t) >= MIN_KEYWORD_LENGTH and t not in STOP_WORDS
    )


def normalize_title(title: str) -> str:
    cleaned = strip_bullets(collapse_whitespace(title)).strip()
    if not cleaned:
        return FALLBACK_TITLE
    return cleaned[0].upper() + cleaned[1:]


def extract_rubric_title(content: str, max_length: int | None = None) -> str:
    max_length = max_length or yaml_config.rubrics.title_max_length
    for raw in content.split("\n"):
        line = raw.strip()
        if not line or len(line) > max_length:
            continue
        upper = line.upper()
        if "RUBRIC" in upper or "SCORING" in upper or "FREE-RESPONSE" in upper:
            return normalize_title(line)
    return FALLBACK_TITLE


def detect_question_types(content: str) -> Tuple[QuestionType, ...]:
    types = tuple(p.question_type for p in QUESTION_TYPE_PATTERNS if p.matches(content))
    return types or (QuestionType.GENERAL,)


def generate_preview(content: str, length: int | None = None) -> str:
    length = length or yaml_config.rubrics.preview_length
    cleaned = collapse_whitespace(content)
    if len(cleaned) <= length:
        return cleaned
    return cleaned[:length] + "…"


def _collect_window(chunks: Sequence[Chunk], start: int, reach: int) -> List[int]:
    """
    Indices making up the window opened by the trigger at `start`.

    The chunk right after the trigger always joins so the excerpt reads in
    context; chunks further out join only when they continue the rubric.
    """
    collected = [start]
    for offset in range(1, reach + 1):
        nxt = start + offset
        if nxt >= len(chunks):
            break
        if offset == 1 or is_continuation(chunks[nxt].text):
            collected.append(nxt)
    return collected


def extract_rubrics(chunks: Sequence[Chunk]) -> List[RubricWindow]:
    """
    Find scoring-guidance passages and wrap each in a RubricWindow.

    Chunks are scanned in order; a chunk already claimed by an earlier window
    is never reused, so windows are disjoint and in document order.
    """
    reach = yaml_config.rubrics.continuation_window
    used: Set[int] = set()
    rubrics: List[RubricWindow] = []

    for chunk in chunks:
        if chunk.index in used or not is_trigger(chunk.text):
            continue

        indices = _collect_window(chunks, chunk.index, reach)
        used.update(indices)

        content = "\n\n".join(chunks[i].text for i in indices)
        rubrics.append(
            RubricWindow(
                id=f"rubric-{chunk.index}",
                title=extract_rubric_title(content),
                question_types=detect_question_types(content),
                content=content,
                preview=generate_preview(content),
                chunk_indices=tuple(indices),
                keyword_set=build_keyword_set(content),
            )
        )

    log.debug("Extracted %d rubric windows from %d chunks", len(rubrics), len(chunks))
    return rubrics
