from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import List, Optional

from pypdf import PdfReader

from common.config import yaml_config
from common.errors import SourceUnavailableError
from common.logger import get_logger
from courses.course_ids import course_id_from_path
from ingestion.cleaners import normalize_text
from ingestion.document_models import SourceDocument
from ingestion.hash_utils import md5_bytes, md5_text

log = get_logger(__name__)


def discover_files(root: Path, allowed_exts: Optional[List[str]] = None) -> List[Path]:
    """
    List the CED files directly inside `root`, sorted by name.
    A missing directory is created and yields nothing.
    """
    allowed = tuple(e.lower() for e in (allowed_exts or yaml_config.app.allowed_exts))
    root = Path(root)
    if not root.exists():
        log.info("CED directory %s does not exist, creating it", root)
        root.mkdir(parents=True, exist_ok=True)
        return []
    return sorted(
        p for p in root.iterdir() if p.is_file() and p.suffix.lower() in allowed
    )


def load_from_path(path: Path) -> SourceDocument:
    """Load a local CED (.pdf, .txt, .md) into a SourceDocument."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SourceUnavailableError(str(path), f"cannot read file: {e}") from e

    ext = path.suffix.lower()
    if ext == ".pdf":
        text = _extract_pdf_text(path, raw)
    elif ext in (".txt", ".md"):
        text = raw.decode("utf-8", errors="ignore")
    else:
        raise SourceUnavailableError(str(path), f"unsupported file type '{ext}'")

    text = normalize_text(text)
    if not text.strip():
        raise SourceUnavailableError(str(path), "no extractable text")

    return SourceDocument(
        course_id=course_id_from_path(path),
        path=path,
        text=text,
        content_hash=md5_bytes(raw),
    )


def _extract_pdf_text(path: Path, raw: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(raw))
        pages = reader.pages
        max_pages = yaml_config.app.max_pdf_pages or len(pages)
        texts = [page.extract_text() or "" for page in pages[:max_pages]]
    except Exception as e:
        raise SourceUnavailableError(str(path), f"failed to parse PDF: {e}") from e
    log.debug("Read %d pages from %s", len(texts), path.name)
    return "\n\n".join(texts)


def source_from_text(course_id: str, text: str, path: Optional[Path] = None) -> SourceDocument:
    """Wrap already-extracted text, e.g. from another loader, as a source."""
    return SourceDocument(
        course_id=course_id,
        path=Path(path or f"{course_id}.txt"),
        text=text,
        content_hash=md5_text(text),
    )
