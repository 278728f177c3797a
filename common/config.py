from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from common.settings import settings

DEFAULT_ARTIFACT_PHRASES = [
    "Document-Based Question (DBQ) • Short-Answer Question (SAQ)",
    "Question, as well as scoring guidelines and student samples, is also available on",
    "Long Essay Question (LEQ) • General FRQ / Essay",
    "Change fostered by innovation",
    "This essay with full scoring guides and",
    "also for the score",
]


class AppConfig(BaseModel):
    ceds_dir: Path = Path("ceds")
    cache_dir: Path = Path("data/cache")
    allowed_exts: List[str] = [".pdf", ".txt", ".md"]
    max_pdf_pages: Optional[int] = None


class ChunkingConfig(BaseModel):
    chunk_size: int = Field(default=1500, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)
    separators: List[str] = ["\n\n", "\n", ". ", " ", ""]


class SegmentationConfig(BaseModel):
    min_unit: int = 1
    max_unit: int = 15
    # unit count used when no markers are found
    fallback_unit_count: int = Field(default=9, gt=0)
    title_max_length: int = 100


class RubricConfig(BaseModel):
    title_max_length: int = 120
    preview_length: int = 420
    continuation_window: int = Field(default=2, ge=1)


class ScoringWeights(BaseModel):
    question_type_match: float = 8.0
    general_match: float = 2.0
    keyword_overlap: float = 1.0
    title_match: float = 5.0
    chunk_penalty: float = 0.1


class RetrievalConfig(BaseModel):
    max_results: int = 3
    fallback_results: int = 2
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    artifact_phrases: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ARTIFACT_PHRASES)
    )


class GlobalYAMLConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    rubrics: RubricConfig = Field(default_factory=RubricConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)


def load_yaml_config(path: Path | None = None) -> GlobalYAMLConfig:
    """
    Read the YAML config file into typed sections.
    A missing file or missing sections fall back to the defaults above.
    """
    path = Path(path or settings.config_path)
    if not path.exists():
        return GlobalYAMLConfig()
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return GlobalYAMLConfig(**raw)


yaml_config = load_yaml_config()
if settings.ceds_dir is not None:
    yaml_config.app.ceds_dir = settings.ceds_dir
