"""Pytest fixtures and shared test configuration.

Fixtures:
    - providers: Fake provider factory recording every provider it builds
    - registry: ProviderRegistry serving fakes for openai and gemini
    - settings: Settings with dummy credentials
    - app / client: FastAPI app wired to the fakes, and an HTTPX client for it
    - pdf_bytes / docx_bytes / pptx_bytes: Small well-formed documents

Documents are generated in memory so the suite needs no binary fixtures.
"""

import io
from collections.abc import AsyncGenerator, Sequence

import docx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pptx import Presentation

from relaychat.api.app import create_app
from relaychat.config import Settings, get_settings
from relaychat.providers.base import ProviderRegistry, get_provider_registry
from relaychat.providers.config import ModelSpec


class FakeProvider:
    """Provider that replays fixed fragments, optionally failing partway."""

    def __init__(
        self,
        name: str,
        spec: ModelSpec,
        fragments: Sequence[str],
        fail_after: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.name = name
        self.spec = spec
        self.fragments = list(fragments)
        self.fail_after = fail_after
        self.error = error or RuntimeError("upstream exploded")
        self.prompts: list[str] = []
        self.closed = False

    async def stream_generate(self, prompt: str) -> AsyncGenerator[str]:
        self.prompts.append(prompt)
        try:
            for i, fragment in enumerate(self.fragments):
                if i == self.fail_after:
                    raise self.error
                yield fragment
            if self.fail_after == len(self.fragments):
                raise self.error
        finally:
            self.closed = True


class FakeProviders:
    """Builds FakeProviders and keeps every instance for assertions."""

    def __init__(self) -> None:
        self.fragments: list[str] = ["Hello", ", ", "world", "!"]
        self.fail_after: int | None = None
        self.error: Exception | None = None
        self.created: list[FakeProvider] = []

    def factory(self, name: str):
        def build(spec: ModelSpec, settings: Settings) -> FakeProvider:
            provider = FakeProvider(name, spec, self.fragments, self.fail_after, self.error)
            self.created.append(provider)
            return provider

        return build

    @property
    def last(self) -> FakeProvider:
        return self.created[-1]


def build_pdf(page_texts: Sequence[str]) -> bytes:
    """Build a minimal PDF with one Helvetica text line per page."""
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for pid, text in zip(page_ids, page_texts):
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>".encode()
        )
        stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


def build_docx(paragraphs: Sequence[str]) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def build_pptx(slide_titles: Sequence[str]) -> bytes:
    presentation = Presentation()
    title_only = presentation.slide_layouts[5]
    for title in slide_titles:
        slide = presentation.slides.add_slide(title_only)
        slide.shapes.title.text = title
    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    return build_pdf(["Information security policy", "Access control rules"])


@pytest.fixture
def docx_bytes() -> bytes:
    return build_docx(["Quarterly revenue grew by ten percent", "Costs stayed flat"])


@pytest.fixture
def pptx_bytes() -> bytes:
    return build_pptx(["Roadmap overview", "Launch timeline"])


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
def registry(providers: FakeProviders) -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.add("openai", providers.factory("openai"))
    registry.add("gemini", providers.factory("gemini"))
    return registry


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="sk-test-key",
        google_api_key="google-test-key",
        gemini_model="gemini-test",
        embedded_document_path=None,
        max_upload_bytes=10 * 1024 * 1024,
    )


@pytest.fixture
def app(registry: ProviderRegistry, settings: Settings) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_provider_registry] = lambda: registry
    application.dependency_overrides[get_settings] = lambda: settings
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with ASGI transport.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
