from __future__ import annotations

import argparse
from pathlib import Path

from common.config import yaml_config
from common.logger import get_logger
from ingestion.document_models import QuestionType
from ingestion.vocabulary import QUESTION_TYPE_LABELS
from ingestion.ingest_pipeline import build_course_index
from retrieval.retriever import format_rubric_context
from retrieval.scoring import RubricQuery

log = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Look up unit content or grading rubrics for one course."
    )
    parser.add_argument("--ceds_dir", type=str, default=str(yaml_config.app.ceds_dir))
    parser.add_argument("--course", type=str, required=True, help="e.g. ap-world-history")
    parser.add_argument(
        "--question_type",
        type=str,
        default=None,
        choices=[t.value for t in QuestionType],
    )
    parser.add_argument("--prompt", type=str, default="")
    parser.add_argument("--response", type=str, default="", help="Student response text")
    parser.add_argument(
        "--unit", type=int, default=None, help="Print this unit instead of rubrics"
    )
    parser.add_argument(
        "--full", action="store_true", help="Print full rubric text, not previews"
    )
    args = parser.parse_args()

    index = build_course_index(ceds_dir=Path(args.ceds_dir))
    if not index.has_course_data(args.course):
        log.error("No CED data loaded for course %s", args.course)
        raise SystemExit(1)

    if args.unit is not None:
        unit = index.get_unit_content(args.course, args.unit)
        if unit is None:
            print(f"Unit {args.unit} not found. Available: {index.get_available_units(args.course)}")
            raise SystemExit(1)
        print(f"\n=== UNIT {args.unit}: {unit.title} ({unit.chunk_count} chunks) ===\n")
        print(unit.content)
        return

    query = RubricQuery(
        question_type=args.question_type,
        prompt=args.prompt,
        response_text=args.response,
    )
    rubrics = index.find_relevant_rubrics(args.course, query)

    if args.full:
        print(format_rubric_context(rubrics))
        return

    print("\n=== RUBRICS ===\n")
    for r in rubrics:
        types = ", ".join(QUESTION_TYPE_LABELS[t] for t in r.question_types)
        print(f"- {r.id} [{types}] {r.title}")
        print(f"  chunks: {list(r.chunk_indices)}")
        print(f"  preview: {r.preview}\n")


if __name__ == "__main__":
    main()
