"""Plain-text extraction from uploaded PDF résumés."""

import io
import logging

import pdfplumber

from services.errors import CorruptDocumentError, EmptyDocumentError

logger = logging.getLogger(__name__)


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file, one page per line block.

    Raises CorruptDocumentError when the bytes are not a readable PDF and
    EmptyDocumentError when no page carries any text (e.g. scanned images).
    """
    if not pdf_bytes:
        raise CorruptDocumentError("Document is empty")

    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.warning("Could not parse PDF: %s", e)
        raise CorruptDocumentError(f"Could not parse PDF file: {e}") from e

    text = "\n".join(pages).strip()
    if not text:
        raise EmptyDocumentError("No text content found in PDF")

    logger.info("Extracted %d characters from %d page(s)", len(text), len(pages))
    return text
