"""
Static vocabulary tables used by the rubric extractor and the scorer.

Each table is plain data: editing a phrase here changes which chunks open a
rubric window, which chunks extend one, which question types a window is
tagged with, and which tokens count as keywords.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Pattern, Tuple

from ingestion.document_models import QuestionType

# A chunk containing any of these (lowercased) opens a rubric window.
RUBRIC_KEYWORDS: Tuple[str, ...] = (
    "scoring rubric",
    "scoring guidelines",
    "free-response question",
    "frq rubric",
    "essay rubric",
    "long essay question",
    "document-based question",
    "dbq rubric",
    "leq rubric",
    "short-answer question",
    "saq rubric",
    "performance task rubric",
    "performance task scoring",
    "evaluation rubric",
    "analytic rubric",
    "holistic rubric",
)

# Cues that let the second chunk after a trigger join the window.
CONTINUATION_CUES: Tuple[str, ...] = (
    "score point",
    "score of",
    "points for",
    "earning",
)


@dataclass(frozen=True)
class QuestionTypePattern:
    question_type: QuestionType
    label: str
    patterns: Tuple[Pattern[str], ...]

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


QUESTION_TYPE_PATTERNS: Tuple[QuestionTypePattern, ...] = (
    QuestionTypePattern(
        QuestionType.DBQ,
        "Document-Based Question (DBQ)",
        _compile(r"document[-\s]*based question", r"\bdbq\b"),
    ),
    QuestionTypePattern(
        QuestionType.LEQ,
        "Long Essay Question (LEQ)",
        _compile(r"long essay question", r"\bleq\b"),
    ),
    QuestionTypePattern(
        QuestionType.SAQ,
        "Short-Answer Question (SAQ)",
        _compile(r"short[-\s]*answer question", r"\bsaq\b"),
    ),
    QuestionTypePattern(
        QuestionType.ARGUMENT_ESSAY,
        "Argument Essay",
        _compile(r"argument essay"),
    ),
    QuestionTypePattern(
        QuestionType.SYNTHESIS_ESSAY,
        "Synthesis Essay",
        _compile(r"synthesis essay"),
    ),
    QuestionTypePattern(
        QuestionType.RHETORICAL_ANALYSIS,
        "Rhetorical Analysis",
        _compile(r"rhetorical analysis"),
    ),
    QuestionTypePattern(
        QuestionType.RESEARCH_PRESENTATION,
        "Research Presentation",
        _compile(r"presentation rubric", r"research presentation"),
    ),
    QuestionTypePattern(
        QuestionType.PERFORMANCE_TASK,
        "Performance Task",
        _compile(r"performance task"),
    ),
    QuestionTypePattern(
        QuestionType.GENERAL,
        "General Free-Response Guidance",
        _compile(r"free-response", r"essay question", r"writing rubric"),
    ),
)

QUESTION_TYPE_LABELS = {p.question_type: p.label for p in QUESTION_TYPE_PATTERNS}

MIN_KEYWORD_LENGTH = 4

STOP_WORDS: FrozenSet[str] = frozenset(
    """
    the and for with that from this which their will into
    have include includes including such should must each students
    student score scoring points point criteria criterion may also
    use using used through your they them there where when what
    been being are were was has had but because about across
    within make makes made show shows provide provided provides
    demonstrate demonstrates demonstrated explain explains explained
    analysis analyze analyzes clearly adequate adequately related
    relevant support supports supporting evidence example examples
    """.split()
)
