from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from common.config import yaml_config
from ingestion.document_models import RubricWindow


class ArtifactFilter:
    """
    Drops rubric windows that are known PDF extraction artifacts: table of
    contents rows, cross-references to other publications, and similar
    boilerplate that happens to mention rubric vocabulary.

    Matching is a case-insensitive substring test against the window's title
    and content. The phrase list comes from config (retrieval.artifact_phrases)
    unless given explicitly, so it can be tuned per deployment.
    """

    def __init__(self, phrases: Optional[Iterable[str]] = None):
        if phrases is None:
            phrases = yaml_config.retrieval.artifact_phrases
        self.phrases: List[str] = [p.lower() for p in phrases if p]

    def is_artifact(self, window: RubricWindow) -> bool:
        title = window.title.lower()
        content = window.content.lower()
        return any(p in title or p in content for p in self.phrases)

    def __call__(self, windows: Sequence[RubricWindow]) -> List[RubricWindow]:
        return [w for w in windows if not self.is_artifact(w)]
