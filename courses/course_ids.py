from __future__ import annotations

from pathlib import Path
from typing import Dict

# Frontend course ids whose CED file carries a different stem.
COURSE_ID_TO_CED_ID: Dict[str, str] = {
    "ap-psychology": "ap-psychology-ced",
    "ap-human-geography": "ap-human-geography-ced",
    "ap-macroeconomics": "ap-macroeconomics-ced",
    "ap-microeconomics": "ap-microeconomics-ced",
    "ap-us-government-and-politics": "ap-us-government-and-politics-ced",
    "ap-comparative-government-and-politics": "ap-comparative-government-and-politics-ced",
    "ap-united-states-history": "ap-united-states-history",
    "ap-world-history": "ap-world-history",
    "ap-european-history": "ap-european-history",
    "ap-english-language": "ap-english-language",
    "ap-english-literature": "ap-english-literature",
    "ap-art-history": "ap-art-history",
    "ap-drawing": "ap-drawing",
    "ap-studio-art-2d": "ap-studio-art-2d",
    "ap-studio-art-3d": "ap-studio-art-3d",
    "ap-music-theory": "ap-music-theory",
    "ap-research": "ap-research",
    "ap-seminar": "ap-seminar",
    "ap-african-american-studies": "ap-african-american-studies",
}


def normalize_course_id(course_id: str) -> str:
    """Map a human-facing course id to its document key; unknown ids pass through."""
    return COURSE_ID_TO_CED_ID.get(course_id, course_id)


def course_id_from_path(path: Path) -> str:
    """'AP-World-History.pdf' -> 'ap-world-history'"""
    return Path(path).stem.lower()
