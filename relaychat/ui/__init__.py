"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Variant and provider selection
    - Document attachment for the upload variant
    - Chat transcript with streamed assistant replies

The conversation state machine lives in ``session`` and talks to the relay
over HTTP only.
"""
