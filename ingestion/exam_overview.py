from __future__ import annotations

import re

_STOP = r"(?=how the curriculum framework|how course content|course framework|unit)"

OVERVIEW_PATTERNS = (
    re.compile(r"exam overview.*?" + _STOP, re.IGNORECASE | re.DOTALL),
    re.compile(r"the exam.*?" + _STOP, re.IGNORECASE | re.DOTALL),
    re.compile(r"exam structure.*?" + _STOP, re.IGNORECASE | re.DOTALL),
    re.compile(r"assessment overview.*?" + _STOP, re.IGNORECASE | re.DOTALL),
)

EXAM_KEYWORDS = ("multiple choice", "free response", "section i", "section ii", "question")

MIN_SECTION_LENGTH = 100
MAX_FALLBACK_LENGTH = 3000


def extract_exam_overview(full_text: str) -> str:
    """
    Best-effort excerpt describing the exam.

    Tries an explicit overview section first (only the first hit of each
    pattern is considered, and it must be reasonably long). Otherwise falls
    back to the opening third of the document when it talks about the exam.
    """
    for pattern in OVERVIEW_PATTERNS:
        m = pattern.search(full_text)
        if m and len(m.group(0)) >= MIN_SECTION_LENGTH:
            return m.group(0)

    first_third = full_text[: len(full_text) // 3]
    lowered = first_third.lower()
    if any(kw in lowered for kw in EXAM_KEYWORDS):
        return first_third[:MAX_FALLBACK_LENGTH]
    return ""
