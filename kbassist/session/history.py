"""Conversation history for the history view.

Fetches the full conversation list each time the view opens; nothing is
cached between opens. A failed load resets the list to empty and records an
error for the retry affordance.
"""

import logging
from collections.abc import Callable
from enum import Enum

from kbassist.api.gateway import Gateway, GatewayError
from kbassist.models.schemas import Conversation

logger = logging.getLogger(__name__)

HISTORY_ERROR_MESSAGE = "Failed to load conversation history."


class HistoryState(str, Enum):
    """What the history view should show."""

    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


class HistoryDataSource:
    """Read-only conversation list backing the history view.

    Attributes:
        is_open: Whether the history view is open.
        conversations: Last loaded list, empty while loading or after an error.
        loading: Whether a load is in flight.
        error: User-facing error message from the last load, if it failed.
    """

    def __init__(
        self,
        gateway: Gateway,
        on_select: Callable[[int], None] | None = None,
    ) -> None:
        """Initialize the data source.

        Args:
            gateway: Transport gateway.
            on_select: Receives the identifier of a selected conversation.
        """
        self._gateway = gateway
        self._on_select = on_select
        self.is_open: bool = False
        self.conversations: list[Conversation] = []
        self.loading: bool = False
        self.error: str | None = None

    @property
    def state(self) -> HistoryState:
        if self.loading:
            return HistoryState.LOADING
        if self.error is not None:
            return HistoryState.ERROR
        if not self.conversations:
            return HistoryState.EMPTY
        return HistoryState.READY

    async def open(self) -> None:
        """Open the view and fetch a fresh list."""
        self.is_open = True
        await self.load_history()

    def close(self) -> None:
        self.is_open = False

    async def load_history(self) -> None:
        """Fetch the conversation list. Never raises on network failure."""
        if not self.is_open:
            logger.debug("History view is closed; not loading")
            return
        self.loading = True
        self.error = None
        self.conversations = []
        try:
            self.conversations = await self._gateway.list_conversations()
        except GatewayError as e:
            logger.warning(f"Loading conversation history failed: {e}")
            self.error = HISTORY_ERROR_MESSAGE
        finally:
            self.loading = False

    def select(self, conversation_id: int) -> None:
        """Hand the selected identifier to the chat session and close the view."""
        if self._on_select is not None:
            self._on_select(conversation_id)
        self.close()
