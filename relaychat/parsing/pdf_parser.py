"""PDF parsing module using pypdf.

Extracts per-page text content from PDF files with validation.
"""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from relaychat.errors import ExtractionFailure

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        ExtractionFailure: If validation fails.
    """
    if not file_content:
        raise ExtractionFailure("Empty file provided")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ExtractionFailure("Invalid PDF: file does not start with PDF header")


def extract_pdf_pages(file_content: bytes) -> list[str]:
    """Extract the text of every page of a PDF.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        One text segment per page, in page order. Pages without
        extractable text yield an empty string.

    Raises:
        ExtractionFailure: If the file is empty, not a PDF, corrupt, or has no pages.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise ExtractionFailure(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ExtractionFailure(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise ExtractionFailure("PDF contains no pages")

    segments: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            segments.append(page.extract_text() or "")
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            segments.append("")

    if not any(segment.strip() for segment in segments):
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return segments
