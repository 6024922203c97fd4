"""Test package for relaychat.

Structure:
    - unit/: Individual function and class tests
    - integration/: API endpoints and client driven end to end

Providers are replaced with in-process fakes except in tests marked
``requires_api_key``. Uses pytest-check for soft assertions.
"""
