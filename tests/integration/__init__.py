"""Integration tests for the relay endpoints.

Requests go through the real FastAPI app over httpx ASGITransport, with
the provider registry overridden by fakes. Live LLM tests require
OPENAI_API_KEY and are skipped without it.
"""
