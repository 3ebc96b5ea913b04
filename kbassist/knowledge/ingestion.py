"""Knowledge ingestion controller: document snapshot and its mutations.

Consistency rule: the local document list is only ever replaced by a full
read from the backend. Every upload, URL import and deletion ends with
load_documents(), whatever the mutation's own result was.

Uploads and URL imports are mutually exclusive through the ``busy`` flag,
which is checked and set before the first await. Deletion is not gated by
``busy``; the reload that follows it keeps the final snapshot correct.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import BinaryIO

from kbassist.api.gateway import Gateway, GatewayError
from kbassist.models.schemas import Document, MutationOutcome, SourceType

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load the document list."

ConfirmDelete = Callable[[Document | int], Awaitable[bool]]


class KnowledgeIngestionController:
    """Document collection view with ingestion and deletion.

    Attributes:
        documents: Last server-confirmed snapshot, in server order.
        loading: Whether a reload is in flight.
        busy: Whether an upload or URL import is in flight.
        error: User-facing error from the last reload, if it failed.
        pending_url: URL being composed for import.
        last_outcome: Result of the most recent mutation.
    """

    def __init__(self, gateway: Gateway, confirm_delete: ConfirmDelete | None = None) -> None:
        """Initialize the controller.

        Args:
            gateway: Transport gateway.
            confirm_delete: Asks the user to confirm a deletion. Without it,
                deletions are refused.
        """
        self._gateway = gateway
        self._confirm_delete = confirm_delete
        self.documents: list[Document] = []
        self.loading: bool = False
        self.busy: bool = False
        self.error: str | None = None
        self.pending_url: str = ""
        self.last_outcome: MutationOutcome | None = None

    @property
    def total(self) -> int:
        return len(self.documents)

    @property
    def url_count(self) -> int:
        return sum(1 for doc in self.documents if doc.source_type is SourceType.URL)

    @property
    def file_count(self) -> int:
        return sum(1 for doc in self.documents if doc.source_type is SourceType.FILE)

    @property
    def can_ingest_url(self) -> bool:
        return not self.busy and bool(self.pending_url.strip())

    async def load_documents(self) -> bool:
        """Replace the snapshot with a fresh read.

        On failure the previous snapshot stays visible and ``error`` is set.

        Returns:
            True if the snapshot was replaced.
        """
        self.loading = True
        self.error = None
        try:
            documents = await self._gateway.list_documents()
        except GatewayError as e:
            logger.warning(f"Loading documents failed: {e}")
            self.error = LOAD_ERROR_MESSAGE
            return False
        finally:
            self.loading = False
        self.documents = documents
        return True

    async def upload_file(
        self,
        filename: str,
        content: bytes | BinaryIO,
        content_type: str | None = None,
    ) -> MutationOutcome | None:
        """Upload a file for ingestion, then reload.

        Returns:
            The upload outcome, or None if another ingestion was in flight.
        """
        if self.busy:
            logger.debug(f"Ingestion in progress; rejecting upload of {filename}")
            return None
        self.busy = True
        try:
            try:
                await self._gateway.upload_file(filename, content, content_type)
            except GatewayError as e:
                logger.warning(f"Upload of {filename} failed: {e}")
                outcome = MutationOutcome(
                    action="upload", target=filename, ok=False, message=f"Upload of {filename} failed."
                )
            else:
                outcome = MutationOutcome(
                    action="upload", target=filename, ok=True, message=f"Uploaded {filename}."
                )
            self.last_outcome = outcome
            await self.load_documents()
        finally:
            self.busy = False
        return outcome

    async def ingest_url(self, url: str | None = None) -> MutationOutcome | None:
        """Import a URL, then reload.

        ``pending_url`` is cleared only when the backend accepts the import.
        An HTTP error status counts as a failure like a lost connection, so
        the text stays in place for a retry.

        Args:
            url: URL to import; defaults to ``pending_url``.

        Returns:
            The import outcome, or None if the URL was blank or another
            ingestion was in flight.
        """
        url = (self.pending_url if url is None else url).strip()
        if not url:
            return None
        if self.busy:
            logger.debug(f"Ingestion in progress; rejecting import of {url}")
            return None
        self.busy = True
        try:
            try:
                await self._gateway.ingest_url(url)
            except GatewayError as e:
                logger.warning(f"Import of {url} failed: {e}")
                outcome = MutationOutcome(
                    action="ingest_url", target=url, ok=False, message=f"Import of {url} failed."
                )
            else:
                # Kept on failure so the user can retry the same URL
                self.pending_url = ""
                outcome = MutationOutcome(
                    action="ingest_url", target=url, ok=True, message=f"Imported {url}."
                )
            self.last_outcome = outcome
            await self.load_documents()
        finally:
            self.busy = False
        return outcome

    async def delete_document(self, document: Document | int) -> MutationOutcome | None:
        """Delete a document after user confirmation, then reload.

        Args:
            document: The document or its identifier.

        Returns:
            The deletion outcome, or None if the user did not confirm.
        """
        document_id = document.id if isinstance(document, Document) else int(document)
        if self._confirm_delete is None:
            logger.warning(f"No confirmation handler; refusing to delete document {document_id}")
            return None
        if not await self._confirm_delete(document):
            return None

        try:
            await self._gateway.delete_document(document_id)
        except GatewayError as e:
            logger.warning(f"Deleting document {document_id} failed: {e}")
            outcome = MutationOutcome(
                action="delete",
                target=str(document_id),
                ok=False,
                message="Delete failed; the document list has been refreshed.",
            )
        else:
            outcome = MutationOutcome(
                action="delete", target=str(document_id), ok=True, message="Document deleted."
            )
        self.last_outcome = outcome
        await self.load_documents()
        return outcome
