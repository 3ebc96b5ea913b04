"""Transport gateway for the knowledge-base backend.

The only module that performs network calls. Wraps a long-lived
httpx.AsyncClient bound to the configured base address and:

1. **Translates failures** - httpx errors, non-2xx statuses and undecodable
   bodies become GatewayError subclasses, so controllers never see httpx.

2. **Normalises payloads** - every decoded body goes through the pydantic
   schemas. List endpoints turn a non-list body into an empty list and skip
   malformed items, logging what was discarded.

3. **Bounds every request** - a connect timeout and an overall timeout from
   ClientConfig apply to all calls, so no caller waits forever.
"""

import logging
from typing import Any, BinaryIO, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from kbassist.config import ClientConfig, get_client_config
from kbassist.models.schemas import (
    ChatRequest,
    ChatResponse,
    Conversation,
    Document,
    HealthStatus,
    Mode,
)

logger = logging.getLogger(__name__)

CHAT_ENDPOINTS: dict[Mode, str] = {
    Mode.RETRIEVAL: "/chat/rag",
    Mode.AGENT: "/chat/agent",
}
HISTORY_PATH = "/chat/history"
DOCUMENTS_PATH = "/kb/documents"
INGEST_FILE_PATH = "/ingest/file"
INGEST_URL_PATH = "/ingest/url"
HEALTH_PATH = "/health"

ModelT = TypeVar("ModelT", bound=BaseModel)


class GatewayError(Exception):
    """Base class for failures surfaced by the gateway."""

    def __init__(self, message: str, *, method: str, path: str) -> None:
        self.message = message
        self.method = method
        self.path = path
        super().__init__(f"{message} ({method} {path})")


class TransportError(GatewayError):
    """Network unreachable, timed out, or the backend answered with an error status."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, method=method, path=path)


class DecodeError(GatewayError):
    """The response body was not JSON or did not have the required shape."""


class Gateway:
    """Async HTTP client for the knowledge-base backend endpoints."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Client configuration. Loads from environment if not provided.
            transport: Optional httpx transport (tests use ASGITransport/MockTransport).
        """
        self._config = config or get_client_config()
        self._client = httpx.AsyncClient(
            base_url=self._config.api_base,
            timeout=httpx.Timeout(
                self._config.timeout_s,
                connect=self._config.connect_timeout_s,
            ),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._config.api_base

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Gateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and return the successful response.

        Args:
            method: HTTP method.
            path: Path relative to the base address.
            **kwargs: Passed through to httpx (json, files, params).

        Returns:
            The response, guaranteed to have a 2xx status.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status.
        """
        logger.debug(f"{method} {path}")
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"{method} {path} failed with HTTP {status_code}: {e.response.text[:200]}")
            raise TransportError(
                f"HTTP {status_code}",
                method=method,
                path=path,
                status_code=status_code,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out: {e!r}")
            raise TransportError("Request timed out", method=method, path=path) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise TransportError("Backend unreachable", method=method, path=path) from e
        return response

    async def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode its JSON body.

        Raises:
            TransportError: See request().
            DecodeError: If the body is not valid JSON.
        """
        response = await self.request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned non-JSON body: {response.text[:200]!r}")
            raise DecodeError("Invalid JSON response", method=method, path=path) from e

    # --- normalisation -------------------------------------------------

    @staticmethod
    def _as_model(payload: Any, model: type[ModelT], *, method: str, path: str) -> ModelT:
        if not isinstance(payload, dict):
            logger.warning(f"{method} {path} expected an object, got {type(payload).__name__}")
            raise DecodeError("Unexpected response shape", method=method, path=path)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"{method} {path} response failed validation: {e}")
            raise DecodeError("Unexpected response shape", method=method, path=path) from e

    @staticmethod
    def _as_model_list(payload: Any, model: type[ModelT], *, path: str) -> list[ModelT]:
        if not isinstance(payload, list):
            # Discard rather than fail; callers show an empty collection
            logger.warning(
                f"GET {path} expected a list, got {type(payload).__name__}: {str(payload)[:200]}"
            )
            return []
        items: list[ModelT] = []
        for raw in payload:
            try:
                items.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"GET {path} skipping malformed {model.__name__}: {e.error_count()} error(s)")
        return items

    # --- endpoints -----------------------------------------------------

    async def chat(self, mode: Mode, request: ChatRequest) -> ChatResponse:
        """Ask a question in the given mode.

        Args:
            mode: Selects /chat/rag or /chat/agent.
            request: Question and conversation identifier.

        Returns:
            Normalised chat response.
        """
        path = CHAT_ENDPOINTS[mode]
        payload = await self.request_json("POST", path, json=request.model_dump())
        return self._as_model(payload, ChatResponse, method="POST", path=path)

    async def list_conversations(self) -> list[Conversation]:
        payload = await self.request_json("GET", HISTORY_PATH)
        return self._as_model_list(payload, Conversation, path=HISTORY_PATH)

    async def list_documents(self) -> list[Document]:
        payload = await self.request_json("GET", DOCUMENTS_PATH)
        return self._as_model_list(payload, Document, path=DOCUMENTS_PATH)

    async def health(self) -> HealthStatus:
        payload = await self.request_json("GET", HEALTH_PATH)
        return self._as_model(payload, HealthStatus, method="GET", path=HEALTH_PATH)

    async def upload_file(
        self,
        filename: str,
        content: bytes | BinaryIO,
        content_type: str | None = None,
    ) -> None:
        """Send a file for ingestion as multipart field ``file``.

        The response body is ignored; callers reload the document list.
        """
        file_tuple = (filename, content, content_type or "application/octet-stream")
        await self.request("POST", INGEST_FILE_PATH, files={"file": file_tuple})
        logger.info(f"Submitted file for ingestion: {filename}")

    async def ingest_url(self, url: str) -> None:
        """Ask the backend to fetch and index a URL. Response body is ignored."""
        await self.request("POST", INGEST_URL_PATH, json={"url": url})
        logger.info(f"Submitted URL for ingestion: {url}")

    async def delete_document(self, document_id: int) -> None:
        """Delete an indexed document. Response body is ignored."""
        await self.request("DELETE", f"{DOCUMENTS_PATH}/{document_id}")
        logger.info(f"Deleted document {document_id}")


# Module-level singleton instance
_gateway: Gateway | None = None


def init_gateway(config: ClientConfig) -> Gateway:
    """Create the process-wide gateway from an explicit configuration.

    Args:
        config: Configuration built once at startup.

    Returns:
        The new Gateway instance.
    """
    global _gateway
    _gateway = Gateway(config)
    return _gateway


def get_gateway() -> Gateway:
    """Get or create the process-wide gateway.

    Returns:
        The Gateway instance, built from the environment configuration.
    """
    global _gateway
    if _gateway is None:
        _gateway = Gateway()
    return _gateway


async def close_gateway() -> None:
    """Close the process-wide gateway if it was created."""
    global _gateway
    if _gateway is not None:
        await _gateway.aclose()
        _gateway = None
