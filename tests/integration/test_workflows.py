"""End-to-end controller workflows over the real Gateway and fake backend.

Exercises conversation continuity, history selection, fire-and-reload
ingestion and status aggregation without mocks in the client stack.
"""

from unittest.mock import AsyncMock

import pytest_check as check

from kbassist.api.gateway import Gateway
from kbassist.knowledge.ingestion import LOAD_ERROR_MESSAGE, KnowledgeIngestionController
from kbassist.models.schemas import Mode
from kbassist.session.chat import ChatSessionController, Phase
from kbassist.session.history import HistoryDataSource, HistoryState
from kbassist.status.aggregator import StatusAggregator
from tests.fake_backend import BackendState


class TestConversationFlow:
    async def test_first_turn_creates_conversation_and_second_continues_it(
        self, gateway: Gateway, backend_state: BackendState
    ) -> None:
        chat = ChatSessionController(gateway)
        chat.question = "first question"
        await chat.submit()
        first_id = chat.conversation_id

        chat.set_mode(Mode.AGENT)
        chat.question = "second question"
        await chat.submit()

        check.is_not_none(first_id)
        check.equal(chat.conversation_id, first_id)
        check.equal(len(backend_state.chats), 1)
        check.equal(backend_state.requests, ["POST /chat/rag", "POST /chat/agent"])
        check.equal(len(chat.turn.steps), 2)

    async def test_history_selection_continues_past_conversation(
        self, gateway: Gateway, backend_state: BackendState
    ) -> None:
        backend_state.chats = [
            {"id": 11, "title": "Old chat", "created_at": "2026-10-01T08:00:00"},
            {"id": 12, "title": "", "created_at": "2026-10-02T08:00:00"},
        ]
        chat = ChatSessionController(gateway)
        history = HistoryDataSource(gateway, on_select=chat.select_conversation)

        await history.open()
        check.equal(history.state, HistoryState.READY)
        check.equal(history.conversations[1].display_title, "Untitled conversation")
        history.select(11)

        chat.question = "continue"
        await chat.submit()

        check.is_false(history.is_open)
        check.equal(chat.conversation_id, 11)
        check.equal(len(backend_state.chats), 2)

    async def test_backend_failure_then_retry(self, gateway: Gateway, backend_state: BackendState) -> None:
        chat = ChatSessionController(gateway)
        backend_state.failing.add("POST /chat/rag")
        chat.question = "will fail"
        await chat.submit()
        check.equal(chat.phase, Phase.ERROR)

        backend_state.failing.clear()
        await chat.retry()

        check.equal(chat.phase, Phase.IDLE)
        check.equal(chat.turn.answer, "echo: will fail")

    async def test_non_list_history_shows_empty(self, gateway: Gateway, backend_state: BackendState) -> None:
        backend_state.history_override = "oops"
        history = HistoryDataSource(gateway)

        await history.open()

        check.equal(history.state, HistoryState.EMPTY)
        check.is_none(history.error)


class TestKnowledgeFlow:
    async def test_delete_then_reload_drops_id(self, gateway: Gateway, backend_state: BackendState) -> None:
        for doc_id in (3, 7, 9):
            backend_state.add_document(doc_id, f"doc {doc_id}")
        kb = KnowledgeIngestionController(gateway, confirm_delete=AsyncMock(return_value=True))
        await kb.load_documents()

        outcome = await kb.delete_document(7)

        check.is_true(outcome.ok)
        check.equal([d.id for d in kb.documents], [3, 9])
        check.equal(backend_state.requests[-2:], ["DELETE /kb/documents/7", "GET /kb/documents"])

    async def test_upload_and_url_show_up_after_reload(
        self, gateway: Gateway, backend_state: BackendState
    ) -> None:
        kb = KnowledgeIngestionController(gateway)

        await kb.upload_file("manual.txt", b"content", "text/plain")
        kb.pending_url = "https://example.com/guide"
        await kb.ingest_url()

        check.equal(kb.file_count, 1)
        check.equal(kb.url_count, 1)
        check.equal(kb.pending_url, "")
        check.equal(backend_state.count("GET /kb/documents"), 2)

    async def test_failed_upload_still_reloads(self, gateway: Gateway, backend_state: BackendState) -> None:
        backend_state.add_document(1, "existing.pdf")
        backend_state.failing.add("POST /ingest/file")
        kb = KnowledgeIngestionController(gateway)

        outcome = await kb.upload_file("broken.pdf", b"%PDF")

        check.is_false(outcome.ok)
        check.equal([d.id for d in kb.documents], [1])
        check.is_false(kb.busy)

    async def test_reload_failure_keeps_stale_list(self, gateway: Gateway, backend_state: BackendState) -> None:
        backend_state.add_document(1, "existing.pdf")
        kb = KnowledgeIngestionController(gateway)
        await kb.load_documents()
        backend_state.failing.add("GET /kb/documents")

        await kb.load_documents()

        check.equal(kb.error, LOAD_ERROR_MESSAGE)
        check.equal([d.id for d in kb.documents], [1])


class TestStatusFlow:
    async def test_health_failure_isolated(self, gateway: Gateway, backend_state: BackendState) -> None:
        for doc_id in range(5):
            backend_state.add_document(doc_id, f"doc {doc_id}")
        backend_state.chats = [{"id": 1, "title": "a"}, {"id": 2, "title": "b"}]
        backend_state.failing.add("GET /health")

        status = await StatusAggregator(gateway).refresh()

        check.is_false(status.online)
        check.equal(status.document_count, 5)
        check.equal(status.conversation_count, 2)

    async def test_all_online(self, gateway: Gateway, backend_state: BackendState) -> None:
        backend_state.mock_mode = False

        status = await StatusAggregator(gateway).refresh()

        check.is_true(status.online)
        check.equal(status.run_mode, "real")
        check.equal(status.document_count, 0)
