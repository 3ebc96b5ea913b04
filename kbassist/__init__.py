"""Knowledge Assistant client - orchestration layer for a local-first knowledge base.

Talks to the knowledge-base backend over HTTP and keeps chat sessions,
document ingestion and status probes consistent with the server.

Components:
    - api: Transport gateway (httpx) with error translation and payload normalisation
    - models: Pydantic schemas for conversations, turns, documents and status
    - session: Chat session controller and conversation history source
    - knowledge: Document ingestion controller with busy-flag exclusion
    - status: Concurrent health/count probes with per-probe isolation
    - ui: NiceGUI pages bound to the controllers
"""

__version__ = "0.1.0"
