import random

import pytest

from ingestion.chunkers import chunk_document, chunk_text

FRAGMENTS = ["\n", "\n\n", "\n\n\n", ". ", " ", "ab", "cd", "x", "word", "Page 3\n", "Scoring"]
SIZES = [(4, 2), (20, 5), (50, 10), (120, 40), (200, 0)]


def _numbered_prose(n: int) -> str:
    return " ".join(f"Sentence {i} covers topic {i} in detail." for i in range(n))


def _generated_text(seed: int) -> str:
    rng = random.Random(seed)
    return "".join(rng.choice(FRAGMENTS) for _ in range(rng.randint(40, 160)))


def _rebuild(chunks):
    assert chunks[0].start == 0
    rebuilt = chunks[0].text
    end = len(chunks[0].text)
    for c in chunks[1:]:
        assert c.start <= end
        rebuilt += c.text[end - c.start :]
        end = c.start + len(c.text)
    return rebuilt


def _paragraphs() -> str:
    return "\n\n".join(
        "\n".join(
            " ".join(f"Item {p}-{j}-{k} is described here." for k in range(4))
            for j in range(3)
        )
        for p in range(8)
    )


TEXTS = [_numbered_prose(60), _paragraphs()] + [_generated_text(seed) for seed in range(6)]


def test_empty_text_yields_no_chunks():
    assert chunk_text("", 100, 10) == []
    assert chunk_document("", 100, 10) == []


@pytest.mark.parametrize("text", TEXTS)
@pytest.mark.parametrize("size,overlap", SIZES)
def test_chunks_respect_size_and_overlap(text, size, overlap):
    chunks = chunk_document(text, chunk_size=size, chunk_overlap=overlap)

    assert [c.index for c in chunks] == list(range(len(chunks)))
    for c in chunks:
        assert 0 < len(c.text) <= size
        assert text[c.start : c.start + len(c.text)] == c.text

    for prev, cur in zip(chunks, chunks[1:]):
        shared = prev.start + len(prev.text) - cur.start
        assert 0 <= shared <= overlap
        assert prev.text[len(prev.text) - shared :] == cur.text[:shared]


@pytest.mark.parametrize("text", TEXTS)
@pytest.mark.parametrize("size,overlap", SIZES)
def test_chunks_cover_text_exactly_once_outside_overlap(text, size, overlap):
    chunks = chunk_document(text, chunk_size=size, chunk_overlap=overlap)
    assert _rebuild(chunks) == text
    assert [c.text for c in chunks] == chunk_text(text, size, overlap)


def test_offsets_with_repeated_blank_lines():
    text = "ab\n\n\ncd efgh"
    chunks = chunk_document(text, chunk_size=4, chunk_overlap=2)
    assert [(c.text, c.start) for c in chunks] == [
        ("ab\n\n", 0),
        ("\n", 4),
        ("cd ", 5),
        ("efgh", 8),
    ]
    assert _rebuild(chunks) == text


def test_offsets_with_repeated_page_headers():
    text = "Page 3\nPage 3\nPage 3\n" * 4
    chunks = chunk_document(text, chunk_size=10, chunk_overlap=7)
    for prev, cur in zip(chunks, chunks[1:]):
        assert cur.start <= prev.start + len(prev.text)
    assert _rebuild(chunks) == text


def test_prefers_paragraph_breaks():
    text = "First paragraph.\n\nSecond paragraph."
    assert chunk_text(text, chunk_size=20, chunk_overlap=0) == [
        "First paragraph.\n\n",
        "Second paragraph.",
    ]


def test_falls_back_to_character_breaks():
    chunks = chunk_text("x" * 1000, chunk_size=100, chunk_overlap=10)
    assert len(chunks) >= 10
    assert all(len(c) <= 100 for c in chunks)


def test_is_deterministic():
    text = _numbered_prose(40)
    assert chunk_text(text, 150, 30) == chunk_text(text, 150, 30)


@pytest.mark.parametrize("size,overlap", [(0, 0), (10, 10), (10, -1)])
def test_rejects_bad_parameters(size, overlap):
    with pytest.raises(ValueError):
        chunk_text("some text", size, overlap)
