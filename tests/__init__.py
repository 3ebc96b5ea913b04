"""Test package for the knowledge-base client.

Unit tests cover controller logic in isolation; integration tests run the
real gateway against an in-process fake backend.

Structure:
    - unit/: Controllers against a mocked gateway, config and schema validation
    - integration/: Gateway and controller workflows over ASGITransport
    - fake_backend.py: FastAPI stand-in for the knowledge-base backend

Leverages pytest with pytest-asyncio (auto mode) and pytest-check for soft assertions.
"""
