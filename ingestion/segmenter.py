from __future__ import annotations

import math
import re
from typing import Dict, List, Sequence

from common.config import yaml_config
from common.logger import get_logger
from ingestion.document_models import Chunk, Unit

log = get_logger(__name__)

# Checked in this order for every chunk; all matches count.
UNIT_MARKER_PATTERNS = (
    re.compile(r"unit\s+(\d+)[\s:]", re.IGNORECASE),
    re.compile(r"chapter\s+(\d+)[\s:]", re.IGNORECASE),
    re.compile(r"part\s+(\d+)[\s:]", re.IGNORECASE),
    re.compile(r"section\s+(\d+)[\s:]", re.IGNORECASE),
)

UNIT_PREFIX = re.compile(r"unit\s+\d+[\s:]*", re.IGNORECASE)
DEFAULT_UNIT_TITLE = "Unit Content"


def _unit_title(text: str, match_start: int, max_length: int) -> str:
    """
    Title for a unit opened by a marker: the rest of the line holding the
    marker, with the "Unit N:" prefix removed.
    """
    line_start = text.rfind("\n", 0, match_start) + 1
    line_end = text.find("\n", match_start)
    if line_end == -1:
        line_end = len(text)
    line = text[line_start:line_end]
    title = UNIT_PREFIX.sub("", line).strip()[:max_length].strip()
    return title or DEFAULT_UNIT_TITLE


def uniform_partition(chunks: Sequence[Chunk], unit_count: int) -> Dict[int, Unit]:
    """
    Split the chunk sequence into `unit_count` contiguous groups of
    ceil(total / unit_count) chunks. Groups that would start past the end
    are dropped.
    """
    total = len(chunks)
    if total == 0:
        return {}
    per_unit = math.ceil(total / unit_count)
    units: Dict[int, Unit] = {}
    for number in range(1, unit_count + 1):
        start = (number - 1) * per_unit
        if start >= total:
            break
        end = min(start + per_unit, total)
        units[number] = Unit(
            number=number,
            title=f"Unit {number}",
            chunk_refs=tuple(c.index for c in chunks[start:end]),
        )
    return units


def segment_units(chunks: Sequence[Chunk]) -> Dict[int, Unit]:
    """
    Group chunks into curriculum units using "Unit N" / "Chapter N" /
    "Part N" / "Section N" markers.

    A chunk joins every unit it mentions, once per mention. When the document
    carries no usable marker at all the chunks are partitioned uniformly
    instead, so every document exposes some unit structure.
    """
    cfg = yaml_config.segmentation
    titles: Dict[int, str] = {}
    refs: Dict[int, List[int]] = {}

    for chunk in chunks:
        for pattern in UNIT_MARKER_PATTERNS:
            for m in pattern.finditer(chunk.text):
                number = int(m.group(1))
                if not cfg.min_unit <= number <= cfg.max_unit:
                    continue
                if number not in refs:
                    refs[number] = []
                    titles[number] = _unit_title(
                        chunk.text, m.start(), cfg.title_max_length
                    )
                refs[number].append(chunk.index)

    if not refs:
        log.info(
            "No unit markers in %d chunks, partitioning into %d units",
            len(chunks),
            cfg.fallback_unit_count,
        )
        return uniform_partition(chunks, cfg.fallback_unit_count)

    return {
        number: Unit(number=number, title=titles[number], chunk_refs=tuple(refs[number]))
        for number in sorted(refs)
    }
