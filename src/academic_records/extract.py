from __future__ import annotations

import io
import logging
from pathlib import Path

import pdfplumber

from academic_records.config import Settings, load_settings
from academic_records.models import InvalidDocumentError

logger = logging.getLogger(__name__)

PdfSource = str | Path | bytes


def extract_pages(source: PdfSource, kind: str, settings: Settings | None = None) -> list[str]:
    """Return the text of every page, or raise InvalidDocumentError.

    Nothing is returned if any page fails: the document is rejected as a whole.
    """
    settings = settings or load_settings()
    path = Path(source) if isinstance(source, (str, Path)) else None
    fp = io.BytesIO(source) if isinstance(source, bytes) else path
    try:
        with pdfplumber.open(fp) as pdf:
            pages = [
                page.extract_text(
                    x_tolerance=settings.x_tolerance, y_tolerance=settings.y_tolerance
                )
                or ""
                for page in pdf.pages
            ]
    except Exception as exc:
        logger.error("Text extraction failed (%s): %s", kind, exc)
        raise InvalidDocumentError(kind, path=path, detail=exc.__class__.__name__) from exc
    logger.info("Extracted %d pages (%s)", len(pages), kind)
    return pages


def extract_text(source: PdfSource, kind: str, settings: Settings | None = None) -> str:
    return "\n".join(extract_pages(source, kind, settings))
