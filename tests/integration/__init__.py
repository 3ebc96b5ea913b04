"""Integration tests for the client stack working against a backend.

No mocks in the client - the real Gateway and httpx client talk to a FastAPI
fake backend through ASGITransport.

Coverage:
    - Endpoint contracts, error translation and payload normalisation
    - Conversation continuity and history selection
    - Fire-and-reload ingestion and deletion
    - Status aggregation with injected failures
"""
