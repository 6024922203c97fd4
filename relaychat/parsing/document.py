"""Document types shared by the extractors."""

from pydantic import BaseModel, ConfigDict, Field

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

# Segments are joined with a blank line when flattened into a prompt
SEGMENT_SEPARATOR = "\n\n"


class DocumentBlob(BaseModel):
    """Raw document bytes tagged with their MIME type."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str


class DocumentContent(BaseModel):
    """Text extracted from a document.

    Attributes:
        mime_type: MIME type the document was parsed as.
        segments: Page, section or slide texts in document order.
    """

    mime_type: str
    segments: list[str] = Field(..., min_length=1)

    @property
    def text(self) -> str:
        """All segments flattened into one string."""
        return SEGMENT_SEPARATOR.join(self.segments)
