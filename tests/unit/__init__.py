"""Unit tests for individual components in isolation.

Coverage:
    - relay/: prompt templates, intake validation, variants, stream forwarding
    - providers/: configuration, registry and Agno wrappers
    - parsing/: document extraction and dispatch
    - ui/: client session state machine
"""
