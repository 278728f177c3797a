from __future__ import annotations

from typing import List, Optional, Sequence

from common.config import RetrievalConfig, yaml_config
from common.logger import get_logger
from ingestion.document_models import QuestionType, RubricWindow
from retrieval.filters import ArtifactFilter
from retrieval.scoring import RubricQuery, score_rubric

log = get_logger(__name__)

NO_RUBRIC_CONTEXT = "No rubric excerpts were available."


class RubricRetriever:
    """
    Ranks a course's rubric windows against a grading query.

    Selection never comes back empty while at least one window survives the
    artifact filter:
      1. the best windows scoring above zero (up to max_results)
      2. otherwise the first general-guidance windows in document order
      3. otherwise the first windows in document order
    """

    def __init__(
        self,
        config: Optional[RetrievalConfig] = None,
        artifact_filter: Optional[ArtifactFilter] = None,
    ):
        self.config = config or yaml_config.retrieval
        self.artifact_filter = artifact_filter or ArtifactFilter(
            self.config.artifact_phrases
        )

    def find_relevant(
        self, rubrics: Sequence[RubricWindow], query: Optional[RubricQuery] = None
    ) -> List[RubricWindow]:
        query = query or RubricQuery()
        candidates = self.artifact_filter(rubrics)
        if not candidates:
            return []

        scored = [
            (score_rubric(w, query, self.config.weights), w) for w in candidates
        ]
        # sorted() is stable, so equal scores keep document order
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
        top = [w for score, w in scored if score > 0][: self.config.max_results]
        if top:
            return top

        general = [w for w in candidates if w.has_type(QuestionType.GENERAL)]
        if general:
            log.debug("No positive rubric score, falling back to general guidance")
            return general[: self.config.fallback_results]

        log.debug("No positive rubric score, falling back to document order")
        return list(candidates[: self.config.fallback_results])


def format_rubric_context(windows: Sequence[RubricWindow]) -> str:
    """Render selected windows as numbered excerpts for a grading prompt."""
    if not windows:
        return NO_RUBRIC_CONTEXT
    blocks = []
    for i, w in enumerate(windows, 1):
        header = f"Rubric {i}: {w.title}" if w.title else f"Rubric {i}"
        blocks.append(f"{header}\n{w.content}")
    return "\n\n".join(blocks)
