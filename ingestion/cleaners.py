import re
import unicodedata

BULLET_GLYPHS = re.compile("[\u2022\u2023\u25e6\u2043\u2219]")


def normalize_text(s: str) -> str:
    s = unicodedata.normalize("NFKC", s)
    s = s.replace("\u00a0", " ").replace("\r\n", "\n").replace("\r", "\n")
    s = re.sub(r"[ \t]+", " ", s)
    # trailing spaces only; blank lines separate paragraphs
    s = re.sub(r" +\n", "\n", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s.strip()


def collapse_whitespace(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def strip_bullets(s: str) -> str:
    return BULLET_GLYPHS.sub("", s)
