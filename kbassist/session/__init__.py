"""Chat session state and conversation history.

Responsibilities:
    - Question submission in retrieval or agent mode
    - Conversation continuity through the server-assigned chat_id
    - Error state with retry of the failed question
    - History view loading and conversation selection

The history source hands a selected identifier to the chat session through a
callback; the two share no other state.
"""

from kbassist.session.chat import (
    PRIOR_TURNS_UNAVAILABLE,
    SUBMIT_ERROR_MESSAGE,
    ChatSessionController,
    Phase,
)
from kbassist.session.history import HISTORY_ERROR_MESSAGE, HistoryDataSource, HistoryState

__all__ = [
    "HISTORY_ERROR_MESSAGE",
    "PRIOR_TURNS_UNAVAILABLE",
    "SUBMIT_ERROR_MESSAGE",
    "ChatSessionController",
    "HistoryDataSource",
    "HistoryState",
    "Phase",
]
