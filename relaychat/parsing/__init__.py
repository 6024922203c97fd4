"""Document parsing utilities for prompt context.

Turns uploaded or server-side documents into ordered text segments.

Responsibilities:
    - Base64 / data URL decoding with size limits
    - MIME type dispatch to a format-specific extractor
    - PDF text extraction with pypdf
    - DOCX and PPTX text extraction with python-docx / python-pptx

Parsing itself is delegated to the libraries; this package only validates
input and maps their failures onto the relay's error types.
"""

from relaychat.parsing.document import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    PPTX_MIME_TYPE,
    DocumentBlob,
    DocumentContent,
)
from relaychat.parsing.loader import (
    load_document,
    load_document_from_base64,
    load_document_from_path,
)

__all__ = [
    "DOCX_MIME_TYPE",
    "PDF_MIME_TYPE",
    "PPTX_MIME_TYPE",
    "DocumentBlob",
    "DocumentContent",
    "load_document",
    "load_document_from_base64",
    "load_document_from_path",
]
