from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from common.config import ScoringWeights
from ingestion.document_models import QuestionType, RubricWindow
from ingestion.rubrics import build_keyword_set


@dataclass(frozen=True)
class RubricQuery:
    question_type: Optional[str] = None
    prompt: str = ""
    response_text: str = ""

    @property
    def parsed_type(self) -> Optional[QuestionType]:
        return QuestionType.parse(self.question_type)


def score_rubric(
    window: RubricWindow,
    query: RubricQuery,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """
    Relevance of one rubric window to a query.

    - question type: full weight on an exact tag match, a smaller weight when
      the window is general guidance
    - one point per distinct query keyword also in the window
    - bonus when the prompt and the window title contain one another
    - small per-chunk penalty so tighter windows win ties
    """
    w = weights or ScoringWeights()
    score = 0.0

    qtype = query.parsed_type
    if qtype is not None and window.has_type(qtype):
        score += w.question_type_match
    elif window.has_type(QuestionType.GENERAL):
        score += w.general_match

    query_keywords = build_keyword_set(f"{query.prompt or ''} {query.response_text or ''}")
    score += w.keyword_overlap * len(query_keywords & window.keyword_set)

    if query.prompt and window.title:
        prompt = query.prompt.lower()
        title = window.title.lower()
        if title in prompt or prompt in title:
            score += w.title_match

    score -= w.chunk_penalty * len(window.chunk_indices)
    return score
