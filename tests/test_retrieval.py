import pytest

from common.config import RetrievalConfig, ScoringWeights
from ingestion.document_models import QuestionType
from retrieval.filters import ArtifactFilter
from retrieval.retriever import NO_RUBRIC_CONTEXT, RubricRetriever, format_rubric_context
from retrieval.scoring import RubricQuery, score_rubric

DBQ = QuestionType.DBQ
LEQ = QuestionType.LEQ
SAQ = QuestionType.SAQ
GENERAL = QuestionType.GENERAL


@pytest.fixture
def retriever():
    return RubricRetriever(config=RetrievalConfig())


def test_type_match_outranks_general(make_window, retriever):
    general = make_window(0, "Free-response writing guidance", types=[GENERAL])
    dbq = make_window(5, "Document based scoring", types=[DBQ])

    assert score_rubric(dbq, RubricQuery(question_type="dbq")) == pytest.approx(7.9)
    assert score_rubric(general, RubricQuery(question_type="dbq")) == pytest.approx(1.9)

    result = retriever.find_relevant([general, dbq], RubricQuery(question_type="dbq"))
    assert [w.id for w in result] == ["rubric-5", "rubric-0"]


def test_keyword_overlap_counts_distinct_tokens(make_window):
    window = make_window(0, "thesis contextualization sourcing", types=[SAQ])
    once = RubricQuery(response_text="thesis")
    many = RubricQuery(response_text="thesis thesis THESIS")
    assert score_rubric(window, once) == pytest.approx(0.9)
    assert score_rubric(window, many) == score_rubric(window, once)


def test_adding_shared_keyword_never_lowers_score(make_window):
    window = make_window(
        0, "thesis contextualization sourcing complexity", types=[LEQ], span=3
    )
    query = RubricQuery(question_type="leq", prompt="Evaluate trade", response_text="thesis")
    before = score_rubric(window, query)
    after = score_rubric(
        window,
        RubricQuery(
            question_type="leq",
            prompt="Evaluate trade",
            response_text="thesis sourcing",
        ),
    )
    assert after >= before
    assert after == pytest.approx(before + 1)


def test_title_and_prompt_containment_bonus(make_window):
    window = make_window(0, "content", title="LEQ Rubric", types=[LEQ])
    hit = RubricQuery(prompt="Use the LEQ rubric to grade this")
    miss = RubricQuery(prompt="Something else")
    assert score_rubric(window, hit) - score_rubric(window, miss) == pytest.approx(5)


def test_focus_penalty_prefers_shorter_windows(make_window, retriever):
    long = make_window(0, "dbq guidance", types=[DBQ], span=3)
    short = make_window(10, "dbq guidance", types=[DBQ], span=1)
    result = retriever.find_relevant([long, short], RubricQuery(question_type="dbq"))
    assert [w.id for w in result] == ["rubric-10", "rubric-0"]


def test_ties_keep_document_order_and_cap_at_three(make_window, retriever):
    windows = [make_window(i * 3, "guidance text", types=[DBQ]) for i in range(5)]
    result = retriever.find_relevant(windows, RubricQuery(question_type="dbq"))
    assert [w.id for w in result] == ["rubric-0", "rubric-3", "rubric-6"]


def test_general_windows_returned_in_document_order(make_window, retriever):
    windows = [
        make_window(0, "first general", types=[GENERAL]),
        make_window(4, "second general", types=[GENERAL]),
    ]
    result = retriever.find_relevant(windows, RubricQuery(question_type="saq"))
    assert [w.id for w in result] == ["rubric-0", "rubric-4"]


def test_fallback_to_general_when_nothing_scores(make_window):
    config = RetrievalConfig(weights=ScoringWeights(general_match=0.0))
    retriever = RubricRetriever(config=config)
    windows = [
        make_window(0, "dbq only", types=[DBQ]),
        make_window(2, "general one", types=[GENERAL]),
        make_window(4, "general two", types=[GENERAL]),
        make_window(6, "general three", types=[GENERAL]),
    ]
    result = retriever.find_relevant(windows, RubricQuery(question_type="saq"))
    assert [w.id for w in result] == ["rubric-2", "rubric-4"]


def test_fallback_to_document_order(make_window, retriever):
    windows = [
        make_window(0, "dbq only", types=[DBQ]),
        make_window(2, "leq only", types=[LEQ]),
        make_window(4, "saq only", types=[SAQ]),
    ]
    result = retriever.find_relevant(windows, RubricQuery())
    assert [w.id for w in result] == ["rubric-0", "rubric-2"]


@pytest.mark.parametrize(
    "query",
    [
        None,
        RubricQuery(),
        RubricQuery(question_type="not-a-type"),
        RubricQuery(question_type="dbq", prompt="zzzz", response_text="qqqq"),
    ],
)
def test_never_empty_when_rubrics_exist(make_window, retriever, query):
    windows = [make_window(0, "leq only", types=[LEQ], span=2)]
    assert retriever.find_relevant(windows, query)


def test_artifacts_are_filtered_before_scoring(make_window, retriever):
    artifact = make_window(
        0, "See the DBQ, also for the score breakdown", types=[DBQ]
    )
    real = make_window(3, "Real guidance", types=[GENERAL])
    result = retriever.find_relevant([artifact, real], RubricQuery(question_type="dbq"))
    assert [w.id for w in result] == ["rubric-3"]


def test_only_artifacts_gives_nothing(make_window, retriever):
    artifact = make_window(0, "Change fostered by innovation", types=[DBQ])
    assert retriever.find_relevant([artifact], RubricQuery()) == []


def test_custom_artifact_filter(make_window):
    retriever = RubricRetriever(
        config=RetrievalConfig(), artifact_filter=ArtifactFilter(["table of contents"])
    )
    windows = [
        make_window(0, "TABLE OF CONTENTS scoring rubric", types=[GENERAL]),
        make_window(2, "also for the score", types=[GENERAL]),
    ]
    assert [w.id for w in retriever.find_relevant(windows)] == ["rubric-2"]


def test_empty_rubric_list(retriever):
    assert retriever.find_relevant([], RubricQuery(question_type="dbq")) == []


def test_format_rubric_context(make_window):
    windows = [make_window(0, "Body A", title="DBQ Rubric", types=[DBQ])]
    assert format_rubric_context(windows) == "Rubric 1: DBQ Rubric\nBody A"
    assert format_rubric_context([]) == NO_RUBRIC_CONTEXT
