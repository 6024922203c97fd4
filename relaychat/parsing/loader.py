"""Document loading: base64 decoding, MIME dispatch, and file loading."""

import base64
import binascii
import logging
import mimetypes
from collections.abc import Callable
from pathlib import Path

from relaychat.errors import BadRequest, ExtractionFailure, UnsupportedFileType
from relaychat.parsing.document import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    PPTX_MIME_TYPE,
    DocumentBlob,
    DocumentContent,
)
from relaychat.parsing.office_parser import extract_docx_text, extract_pptx_slides
from relaychat.parsing.pdf_parser import extract_pdf_pages

logger = logging.getLogger(__name__)

Extractor = Callable[[bytes], list[str]]

EXTRACTORS: dict[str, Extractor] = {
    PDF_MIME_TYPE: extract_pdf_pages,
    DOCX_MIME_TYPE: extract_docx_text,
    PPTX_MIME_TYPE: extract_pptx_slides,
}

EXTENSION_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
    ".pptx": PPTX_MIME_TYPE,
}


def split_data_url(payload: str) -> tuple[str | None, str]:
    """Split a ``data:<mime>;base64,<data>`` URL into media type and data.

    A payload without a comma is treated as bare base64.
    """
    header, sep, data = payload.partition(",")
    if not sep:
        return None, payload
    media_type = None
    if header.startswith("data:"):
        media_type = header[len("data:"):].split(";", 1)[0] or None
    return media_type, data


def decode_base64_file(data: str, max_bytes: int | None = None) -> bytes:
    """Decode base64 file data.

    Args:
        data: Base64 text, whitespace allowed.
        max_bytes: Optional upper bound on the decoded size.

    Returns:
        Decoded bytes.

    Raises:
        BadRequest: If the data is not valid base64, is empty, or is too large.
    """
    try:
        raw = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise BadRequest(f"File is not valid base64: {e}") from e

    if not raw:
        raise BadRequest("Empty file provided")

    if max_bytes is not None and len(raw) > max_bytes:
        size_mb = len(raw) / (1024 * 1024)
        limit_mb = max_bytes / (1024 * 1024)
        raise BadRequest(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    return raw


def get_extractor(mime_type: str | None) -> Extractor:
    """Return the extractor registered for a MIME type.

    Raises:
        UnsupportedFileType: If no extractor handles the type.
    """
    extractor = EXTRACTORS.get(mime_type or "")
    if extractor is None:
        raise UnsupportedFileType(mime_type)
    return extractor


def load_document(blob: DocumentBlob) -> DocumentContent:
    """Extract text segments from a typed blob.

    Raises:
        UnsupportedFileType: If the blob's MIME type has no extractor.
        ExtractionFailure: If the parser rejects the document.
    """
    extractor = get_extractor(blob.mime_type)
    segments = extractor(blob.data)
    logger.info(f"Extracted {len(segments)} segment(s) from {blob.mime_type} document")
    return DocumentContent(mime_type=blob.mime_type, segments=segments)


def load_document_from_base64(
    payload: str,
    file_type: str | None = None,
    max_bytes: int | None = None,
) -> DocumentContent:
    """Decode an uploaded file and extract its text.

    Args:
        payload: Base64 data URL or bare base64 string.
        file_type: Declared MIME type; falls back to the data URL media type.
        max_bytes: Optional upper bound on the decoded size.

    Returns:
        Extracted document content.
    """
    media_type, data = split_data_url(payload)
    mime_type = file_type or media_type

    # Reject unknown types before spending time on decoding
    get_extractor(mime_type)

    blob = DocumentBlob(data=decode_base64_file(data, max_bytes), mime_type=mime_type)
    return load_document(blob)


def guess_mime_type(path: Path) -> str | None:
    return EXTENSION_MIME_TYPES.get(path.suffix.lower()) or mimetypes.guess_type(path.name)[0]


def load_document_from_path(path: Path | None) -> DocumentContent:
    """Read a server-side document and extract its text.

    Raises:
        ExtractionFailure: If no path is configured or the file cannot be read.
        UnsupportedFileType: If the file extension maps to no extractor.
    """
    if path is None:
        raise ExtractionFailure(
            "No embedded document configured. Set EMBEDDED_DOCUMENT_PATH in your .env file."
        )

    mime_type = guess_mime_type(path)
    get_extractor(mime_type)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise ExtractionFailure(f"Failed to read embedded document {path.name}: {e}") from e

    return load_document(DocumentBlob(data=data, mime_type=mime_type))
