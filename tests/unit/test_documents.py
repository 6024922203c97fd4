"""Unit tests for document extraction and MIME dispatch."""

import base64
from pathlib import Path

import pytest
import pytest_check as check

from relaychat.errors import BadRequest, ExtractionFailure, UnsupportedFileType
from relaychat.parsing import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    PPTX_MIME_TYPE,
    DocumentBlob,
    load_document,
    load_document_from_base64,
    load_document_from_path,
)
from relaychat.parsing.loader import decode_base64_file, split_data_url
from relaychat.parsing.office_parser import extract_docx_text, extract_pptx_slides
from relaychat.parsing.pdf_parser import extract_pdf_pages
from tests.conftest import build_pdf, build_pptx


def _data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode()}"


class TestExtractPdfPages:
    """Tests for PDF extraction."""

    def test_one_segment_per_page(self, pdf_bytes: bytes) -> None:
        pages = extract_pdf_pages(pdf_bytes)

        check.equal(len(pages), 2)
        check.is_in("Information security", pages[0])
        check.is_in("Access control", pages[1])

    def test_blank_page_yields_empty_segment(self) -> None:
        pages = extract_pdf_pages(build_pdf([""]))

        check.equal(len(pages), 1)
        check.equal(pages[0].strip(), "")

    def test_rejects_empty_bytes(self) -> None:
        with pytest.raises(ExtractionFailure, match="Empty file"):
            extract_pdf_pages(b"")

    def test_rejects_non_pdf_file(self) -> None:
        with pytest.raises(ExtractionFailure, match="Invalid PDF"):
            extract_pdf_pages(b"This is not a real PDF file")

    def test_rejects_truncated_pdf(self) -> None:
        with pytest.raises(ExtractionFailure, match="Corrupt|Failed"):
            extract_pdf_pages(b"%PDF-1.4\n1 0 obj\n<<")

    def test_rejects_pdf_without_pages(self) -> None:
        with pytest.raises(ExtractionFailure, match="no pages"):
            extract_pdf_pages(build_pdf([]))


class TestExtractOffice:
    """Tests for DOCX and PPTX extraction."""

    def test_docx_single_segment_with_all_paragraphs(self, docx_bytes: bytes) -> None:
        segments = extract_docx_text(docx_bytes)

        check.equal(len(segments), 1)
        check.is_in("Quarterly revenue grew", segments[0])
        check.is_in("Costs stayed flat", segments[0])

    def test_docx_rejects_garbage(self) -> None:
        with pytest.raises(ExtractionFailure, match="DOCX"):
            extract_docx_text(b"not a zip archive")

    def test_pptx_one_segment_per_slide(self, pptx_bytes: bytes) -> None:
        segments = extract_pptx_slides(pptx_bytes)

        check.equal(len(segments), 2)
        check.is_in("Roadmap overview", segments[0])
        check.is_in("Launch timeline", segments[1])

    def test_pptx_without_slides_fails(self) -> None:
        with pytest.raises(ExtractionFailure, match="no slides"):
            extract_pptx_slides(build_pptx([]))

    def test_pptx_rejects_garbage(self) -> None:
        with pytest.raises(ExtractionFailure, match="PPTX"):
            extract_pptx_slides(b"not a zip archive")


class TestLoadDocument:
    """Tests for MIME dispatch."""

    @pytest.mark.parametrize(
        ("fixture", "mime_type", "expected"),
        [
            ("pdf_bytes", PDF_MIME_TYPE, "Information security"),
            ("docx_bytes", DOCX_MIME_TYPE, "Quarterly revenue"),
            ("pptx_bytes", PPTX_MIME_TYPE, "Roadmap overview"),
        ],
    )
    def test_dispatches_by_mime_type(
        self,
        request: pytest.FixtureRequest,
        fixture: str,
        mime_type: str,
        expected: str,
    ) -> None:
        data = request.getfixturevalue(fixture)

        document = load_document(DocumentBlob(data=data, mime_type=mime_type))

        check.greater(len(document.segments), 0)
        check.equal(document.mime_type, mime_type)
        check.is_in(expected, document.text)

    @pytest.mark.parametrize("mime_type", ["text/csv", "image/png", ""])
    def test_unsupported_mime_type(self, mime_type: str) -> None:
        with pytest.raises(UnsupportedFileType):
            load_document(DocumentBlob(data=b"anything", mime_type=mime_type))

    def test_text_joins_segments_with_blank_line(self, pptx_bytes: bytes) -> None:
        document = load_document(DocumentBlob(data=pptx_bytes, mime_type=PPTX_MIME_TYPE))

        assert document.text == "Roadmap overview\n\nLaunch timeline"


class TestBase64Loading:
    """Tests for uploaded file decoding."""

    def test_split_data_url(self) -> None:
        check.equal(split_data_url("data:application/pdf;base64,QUJD"), ("application/pdf", "QUJD"))
        check.equal(split_data_url("QUJD"), (None, "QUJD"))

    def test_decode_ignores_whitespace(self) -> None:
        assert decode_base64_file("QU\nJD ") == b"ABC"

    def test_decode_rejects_invalid_base64(self) -> None:
        with pytest.raises(BadRequest, match="base64"):
            decode_base64_file("not*base64!")

    def test_decode_rejects_empty(self) -> None:
        with pytest.raises(BadRequest, match="Empty"):
            decode_base64_file("")

    def test_decode_enforces_size_limit(self) -> None:
        encoded = base64.b64encode(b"x" * 2048).decode()

        with pytest.raises(BadRequest, match="exceeds maximum"):
            decode_base64_file(encoded, max_bytes=1024)

    def test_loads_data_url(self, pdf_bytes: bytes) -> None:
        document = load_document_from_base64(_data_url(pdf_bytes, PDF_MIME_TYPE), PDF_MIME_TYPE)

        assert len(document.segments) == 2

    def test_file_type_falls_back_to_data_url(self, docx_bytes: bytes) -> None:
        document = load_document_from_base64(_data_url(docx_bytes, DOCX_MIME_TYPE))

        assert document.mime_type == DOCX_MIME_TYPE

    def test_declared_type_wins_over_data_url(self, pdf_bytes: bytes) -> None:
        with pytest.raises(UnsupportedFileType, match="text/plain"):
            load_document_from_base64(_data_url(pdf_bytes, PDF_MIME_TYPE), "text/plain")

    def test_unsupported_type_checked_before_decoding(self) -> None:
        with pytest.raises(UnsupportedFileType):
            load_document_from_base64("data:text/csv;base64,@@@not-base64@@@")


class TestLoadFromPath:
    """Tests for server-side documents."""

    def test_loads_by_extension(self, tmp_path: Path, pptx_bytes: bytes) -> None:
        path = tmp_path / "deck.pptx"
        path.write_bytes(pptx_bytes)

        document = load_document_from_path(path)

        assert document.mime_type == PPTX_MIME_TYPE

    def test_missing_configuration(self) -> None:
        with pytest.raises(ExtractionFailure, match="EMBEDDED_DOCUMENT_PATH"):
            load_document_from_path(None)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionFailure, match="Failed to read"):
            load_document_from_path(tmp_path / "absent.pdf")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.csv"
        path.write_text("a,b\n")

        with pytest.raises(UnsupportedFileType):
            load_document_from_path(path)
