"""Chat session controller: the compose, submit, await, render-or-retry cycle.

Owns the question being composed, the answer mode, the conversation
identifier and the turn on screen. Only one submission is in flight at a
time: submit() refuses to dispatch while the phase is SUBMITTING, and the
presentation layer also disables its trigger through ``can_submit``.
"""

import logging
from enum import Enum

from kbassist.api.gateway import Gateway, GatewayError
from kbassist.models.schemas import ChatRequest, ConversationTurn, Mode

logger = logging.getLogger(__name__)

SUBMIT_ERROR_MESSAGE = "Request failed. Check that the backend service and model configuration are available."

# Selecting a past conversation only continues it; no endpoint returns its earlier turns.
PRIOR_TURNS_UNAVAILABLE = "Earlier messages of this conversation are not shown. New questions continue it."


class Phase(str, Enum):
    """Lifecycle phase of the chat session."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    ERROR = "error"


class ChatSessionController:
    """State and operations for one chat session.

    Attributes:
        question: Text currently being composed.
        mode: Answer mode used for the next submission.
        conversation_id: Server-assigned conversation to continue, if any.
        turn: Last successful question/answer, None before the first one.
        phase: Current lifecycle phase.
        last_error: User-facing error message when phase is ERROR.
    """

    def __init__(self, gateway: Gateway, *, mode: Mode = Mode.RETRIEVAL) -> None:
        self._gateway = gateway
        self.question: str = ""
        self.mode: Mode = mode
        self.conversation_id: int | None = None
        self.turn: ConversationTurn | None = None
        self.phase: Phase = Phase.IDLE
        self.last_error: str | None = None
        self._failed_question: str | None = None

    @property
    def can_submit(self) -> bool:
        return self.phase is not Phase.SUBMITTING and bool(self.question.strip())

    @property
    def submitting(self) -> bool:
        return self.phase is Phase.SUBMITTING

    @property
    def show_empty_state(self) -> bool:
        return self.turn is None and self.phase is Phase.IDLE

    def set_mode(self, mode: Mode) -> None:
        """Change the mode for the next submission.

        An in-flight request keeps the endpoint it was dispatched to.
        """
        self.mode = Mode(mode)

    async def submit(self) -> bool:
        """Send the current question to the endpoint for the current mode.

        Clears the previous turn and error before sending. On success the
        response's chat_id (when present) replaces the local conversation id.
        On failure the phase becomes ERROR with a generic message; the
        transport detail is logged only.

        Returns:
            True if a request was dispatched, False if the question was blank
            or another submission is still in flight.
        """
        question = self.question
        if not question.strip():
            return False
        if self.phase is Phase.SUBMITTING:
            logger.debug("Submission already in flight; ignoring submit")
            return False

        # Endpoint and payload are bound here, before the first await
        mode = self.mode
        request = ChatRequest(question=question, chat_id=self.conversation_id)

        self.turn = None
        self.last_error = None
        self.phase = Phase.SUBMITTING
        try:
            response = await self._gateway.chat(mode, request)
        except GatewayError as e:
            logger.warning(f"Chat submission failed in {mode.value} mode: {e}")
            self._failed_question = question
            self.last_error = SUBMIT_ERROR_MESSAGE
            self.phase = Phase.ERROR
            return True

        if response.chat_id is not None:
            if response.chat_id != self.conversation_id:
                logger.info(f"Conversation id is now {response.chat_id}")
            self.conversation_id = response.chat_id
        self.turn = ConversationTurn(
            question=question,
            answer=response.answer,
            citations=response.citations,
            steps=response.steps,
        )
        self._failed_question = None
        self.phase = Phase.IDLE
        return True

    async def retry(self) -> bool:
        """Re-submit the question that last failed.

        Returns:
            True if a request was dispatched.
        """
        if self._failed_question is not None:
            self.question = self._failed_question
        return await self.submit()

    def select_conversation(self, conversation_id: int) -> None:
        """Continue a past conversation with the next submission.

        Only the identifier changes; earlier turns are not fetched (see
        PRIOR_TURNS_UNAVAILABLE).
        """
        self.conversation_id = conversation_id
        logger.info(f"Selected conversation {conversation_id}")

    def start_new_conversation(self) -> None:
        """Forget the conversation id so the next submission starts a new one."""
        if self.phase is Phase.SUBMITTING:
            return
        self.conversation_id = None
        self.turn = None
        self.last_error = None
        self._failed_question = None
        self.phase = Phase.IDLE
