"""Office Open XML parsing with python-docx and python-pptx."""

import io
import logging

import docx
from pptx import Presentation

from relaychat.errors import ExtractionFailure

logger = logging.getLogger(__name__)


def extract_docx_text(file_content: bytes) -> list[str]:
    """Extract the body text of a Word document as a single segment.

    Paragraphs come first, then table cells row by row.

    Raises:
        ExtractionFailure: If the file is empty or not a valid .docx package.
    """
    if not file_content:
        raise ExtractionFailure("Empty file provided")

    try:
        document = docx.Document(io.BytesIO(file_content))
    except Exception as e:
        raise ExtractionFailure(f"Corrupt or invalid DOCX: {e}") from e

    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append("\t".join(cell.text for cell in row.cells))

    text = "\n".join(line for line in lines if line.strip())
    if not text:
        logger.warning("DOCX contains no extractable text")
    return [text]


def _slide_text(slide) -> str:
    parts: list[str] = []
    for shape in slide.shapes:
        if shape.has_text_frame:
            parts.append(shape.text_frame.text)
        elif shape.has_table:
            for row in shape.table.rows:
                parts.append("\t".join(cell.text for cell in row.cells))
    return "\n".join(part for part in parts if part.strip())


def extract_pptx_slides(file_content: bytes) -> list[str]:
    """Extract the text of every slide of a presentation.

    Returns:
        One segment per slide, in slide order.

    Raises:
        ExtractionFailure: If the file is empty, invalid, or has no slides.
    """
    if not file_content:
        raise ExtractionFailure("Empty file provided")

    try:
        presentation = Presentation(io.BytesIO(file_content))
    except Exception as e:
        raise ExtractionFailure(f"Corrupt or invalid PPTX: {e}") from e

    segments = [_slide_text(slide) for slide in presentation.slides]
    if not segments:
        raise ExtractionFailure("Presentation contains no slides")
    return segments
