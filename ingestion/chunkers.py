from __future__ import annotations

from typing import List, Sequence, Set, Tuple

from langchain_text_splitters import RecursiveCharacterTextSplitter

from common.config import yaml_config
from ingestion.document_models import Chunk


def build_splitter(
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
    separators: Sequence[str] | None = None,
) -> RecursiveCharacterTextSplitter:
    """
    Recursive splitter preferring paragraph, then line, sentence, word and
    finally raw character breaks.

    Separators stay attached to the end of the piece they close and
    whitespace is never stripped, so every piece is an exact substring of the
    input and consecutive pieces only share the configured overlap.
    """
    cfg = yaml_config.chunking
    chunk_size = cfg.chunk_size if chunk_size is None else chunk_size
    chunk_overlap = cfg.chunk_overlap if chunk_overlap is None else chunk_overlap
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not 0 <= chunk_overlap < chunk_size:
        raise ValueError("chunk_overlap must be in [0, chunk_size)")

    return RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        separators=list(separators or cfg.separators),
        keep_separator="end",
        strip_whitespace=False,
        length_function=len,
    )


def chunk_text(
    text: str,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
) -> List[str]:
    if not text:
        return []
    return build_splitter(chunk_size, chunk_overlap).split_text(text)


def _piece_offsets(text: str, pieces: Sequence[str], chunk_overlap: int) -> List[int]:
    """
    Character offset of each split piece in `text`.

    A piece starts inside the overlap window that closes the previous piece.
    Short or repeated pieces can fit at several places in that window, so the
    latest fit is tried first and a placement that cannot reach the end of the
    text is abandoned for the next one.
    """
    if not pieces:
        return []
    starts: List[int] = []
    options: List[List[int]] = [[0] if text.startswith(pieces[0]) else []]
    dead: Set[Tuple[int, int]] = set()

    while options:
        k = len(starts)
        if not options[k]:
            options.pop()
            if starts:
                dead.add((k - 1, starts.pop()))
            continue

        start = options[k].pop(0)
        starts.append(start)
        end = start + len(pieces[k])
        if k + 1 == len(pieces):
            if end == len(text):
                return starts
            dead.add((k, starts.pop()))
            continue

        nxt = pieces[k + 1]
        low = max(end - chunk_overlap, 0)
        options.append(
            [
                s
                for s in range(end, low - 1, -1)
                if (k + 1, s) not in dead and text.startswith(nxt, s)
            ]
        )

    raise ValueError("split pieces do not reassemble the source text")


def chunk_document(
    text: str,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
) -> List[Chunk]:
    """
    Split a document's full text into indexed chunks in reading order.
    Each chunk records its character offset in `text`.
    """
    if not text:
        return []
    if chunk_overlap is None:
        chunk_overlap = yaml_config.chunking.chunk_overlap
    pieces = build_splitter(chunk_size, chunk_overlap).split_text(text)
    starts = _piece_offsets(text, pieces, chunk_overlap)
    return [
        Chunk(index=i, text=piece, start=start)
        for i, (piece, start) in enumerate(zip(pieces, starts))
    ]
