"""FastAPI endpoints for the chat relay.

Endpoints:
    - GET /health: Service health status
    - GET /api/variants: Available relay variants
    - POST /api/{variant}: Streamed chat relay (ex1 .. ex5)
"""
