"""relaychat - streaming LLM chat relay with optional document context.

Combines FastAPI for HTTP streaming, Agno for model orchestration,
NiceGUI for the browser client, and Pydantic for data validation.

Components:
    - api: relay endpoints and error envelope
    - providers: OpenAI / Gemini model handles behind one streaming interface
    - relay: prompt templates, endpoint variants, stream forwarding
    - parsing: PDF / DOCX / PPTX text extraction
    - ui: web interface for chat interactions
    - models: request/response schemas
"""

__version__ = "0.1.0"
