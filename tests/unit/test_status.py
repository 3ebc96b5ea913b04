"""Unit tests for StatusAggregator probe isolation."""

import asyncio
from unittest.mock import AsyncMock

import pytest_check as check

from kbassist.api.gateway import DecodeError, TransportError
from kbassist.models.schemas import Conversation, Document, HealthStatus, SourceType
from kbassist.status.aggregator import StatusAggregator


def documents(n: int) -> list[Document]:
    return [Document(id=i, title=str(i), source_type=SourceType.FILE) for i in range(n)]


def conversations(n: int) -> list[Conversation]:
    return [Conversation(id=i) for i in range(n)]


class TestStatusAggregator:
    async def test_all_probes_succeed(self, mock_gateway: AsyncMock) -> None:
        mock_gateway.health.return_value = HealthStatus(status="ok", mock_mode=True)
        mock_gateway.list_documents.return_value = documents(4)
        mock_gateway.list_conversations.return_value = conversations(1)

        status = await StatusAggregator(mock_gateway).refresh()

        check.is_true(status.online)
        check.equal(status.run_mode, "mock")
        check.equal(status.document_count, 4)
        check.equal(status.conversation_count, 1)

    async def test_health_failure_does_not_affect_counts(self, mock_gateway: AsyncMock) -> None:
        mock_gateway.health.side_effect = TransportError("Backend unreachable", method="GET", path="/health")
        mock_gateway.list_documents.return_value = documents(5)
        mock_gateway.list_conversations.return_value = conversations(2)

        status = await StatusAggregator(mock_gateway).refresh()

        check.is_false(status.online)
        check.is_none(status.health)
        check.equal(status.document_count, 5)
        check.equal(status.conversation_count, 2)

    async def test_count_failures_map_to_zero(self, mock_gateway: AsyncMock) -> None:
        mock_gateway.health.return_value = HealthStatus(status="ok")
        mock_gateway.list_documents.side_effect = DecodeError(
            "Invalid JSON response", method="GET", path="/kb/documents"
        )
        mock_gateway.list_conversations.side_effect = TransportError(
            "HTTP 500", method="GET", path="/chat/history", status_code=500
        )

        status = await StatusAggregator(mock_gateway).refresh()

        check.is_true(status.online)
        check.equal(status.document_count, 0)
        check.equal(status.conversation_count, 0)

    async def test_probes_run_concurrently(self, mock_gateway: AsyncMock) -> None:
        """Every probe is in flight before any of them completes."""
        started: list[str] = []
        release = asyncio.Event()

        def probe(name: str, result: object):
            async def run() -> object:
                started.append(name)
                await release.wait()
                return result

            return run

        mock_gateway.health.side_effect = probe("health", HealthStatus(status="ok"))
        mock_gateway.list_documents.side_effect = probe("documents", documents(1))
        mock_gateway.list_conversations.side_effect = probe("conversations", conversations(1))
        aggregator = StatusAggregator(mock_gateway)

        pending = asyncio.create_task(aggregator.refresh())
        # gather schedules the probe tasks; let each reach its first await
        for _ in range(3):
            await asyncio.sleep(0)
        check.equal(sorted(started), ["conversations", "documents", "health"])
        check.is_true(aggregator.refreshing)

        release.set()
        await pending
        check.is_false(aggregator.refreshing)
        check.equal(aggregator.status.document_count, 1)

    def test_exposes_configured_base(self, mock_gateway: AsyncMock) -> None:
        assert StatusAggregator(mock_gateway).api_base == "http://test"
