"""Resume file loading (PDF, DOCX, TXT, MD) into plain text.

Binary extraction is best effort: layout, columns and images are not
reconstructed.
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 10 * 1024 * 1024
MAX_FILENAME_CHARS = 255
SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")

ICON_PATTERN = (
    r"[\U0001f4e7\U0001f4de\U0001f4cd\U0001f4bc\U0001f4c5\U0001f393"
    r"\U0001f3e2\U0001f4dd\U0001f4c4\U0001f517\U0001f310\U0001f4f1"
    r"☎✉✆✂]\s*"
)


def parse_resume(file_path: str | Path) -> str:
    """Parse a resume file and return clean plain text."""
    path = Path(file_path)
    _check_upload(path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        raw = _parse_pdf(path)
    elif suffix == ".docx":
        raw = _parse_docx(path)
    else:
        raw = path.read_text(encoding="utf-8")
    text = clean_resume_text(raw)
    logger.debug("Parsed %s: %d chars", path.name, len(text))
    return text


def _check_upload(path: Path) -> None:
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file format: {path.suffix}")
    if len(path.name) > MAX_FILENAME_CHARS:
        raise ValueError("File name too long")
    if path.stat().st_size > MAX_FILE_BYTES:
        raise ValueError("File size exceeds 10MB limit")


def clean_resume_text(text: str) -> str:
    """Normalize extracted resume text.

    Removes BOM/zero-width artifacts and contact icons, turns assorted bullet
    glyphs into "- ", collapses runs of spaces and limits blank lines to one.
    """
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = re.sub(ICON_PATTERN, "", text)

    text = re.sub(r"^(\s*)[●•◦◆■▪★○]\s*", r"\1- ", text, flags=re.MULTILINE)
    text = re.sub(r"^(\s*)\*\s{2,}", r"\1- ", text, flags=re.MULTILINE)

    lines = []
    for line in text.splitlines():
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)].replace("\t", "    ")
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).rstrip()
        lines.append(f"{indent}{stripped}" if stripped else "")
    text = "\n".join(lines)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_pdf(path: Path) -> str:
    import fitz  # pymupdf

    with fitz.open(str(path)) as doc:
        return "\n".join(page.get_text() for page in doc)


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
