"""HTTP transport to the knowledge-base backend.

The gateway is the single place that touches the network. It owns the httpx
client, the timeout policy, error translation and payload normalisation.

Endpoints consumed:
    - POST /chat/rag, POST /chat/agent: Question answering
    - GET /chat/history: Past conversations
    - GET /kb/documents, DELETE /kb/documents/{id}: Indexed documents
    - POST /ingest/file, POST /ingest/url: Ingestion
    - GET /health: Backend status
"""

from kbassist.api.gateway import (
    CHAT_ENDPOINTS,
    DecodeError,
    Gateway,
    GatewayError,
    TransportError,
    close_gateway,
    get_gateway,
    init_gateway,
)

__all__ = [
    "CHAT_ENDPOINTS",
    "DecodeError",
    "Gateway",
    "GatewayError",
    "TransportError",
    "close_gateway",
    "get_gateway",
    "init_gateway",
]
