"""Status aggregator: concurrent read-only probes for the settings view.

Runs the health, document and conversation probes together and merges the
results. A probe failure maps to a neutral default for that probe only
(health absent, counts zero); the other probes are unaffected.
"""

import asyncio
import logging

from kbassist.api.gateway import Gateway, GatewayError
from kbassist.models.schemas import HealthStatus, SystemStatus

logger = logging.getLogger(__name__)


class StatusAggregator:
    """Fan-out/fan-in over the three status probes.

    Attributes:
        status: Result of the last completed refresh.
        refreshing: Whether a refresh is in flight.
    """

    def __init__(self, gateway: Gateway) -> None:
        self._gateway = gateway
        self.status: SystemStatus = SystemStatus()
        self.refreshing: bool = False

    @property
    def api_base(self) -> str:
        return self._gateway.base_url

    async def _probe_health(self) -> HealthStatus | None:
        try:
            return await self._gateway.health()
        except GatewayError as e:
            logger.warning(f"Health probe failed: {e}")
            return None

    async def _probe_document_count(self) -> int:
        try:
            return len(await self._gateway.list_documents())
        except GatewayError as e:
            logger.warning(f"Document count probe failed: {e}")
            return 0

    async def _probe_conversation_count(self) -> int:
        try:
            return len(await self._gateway.list_conversations())
        except GatewayError as e:
            logger.warning(f"Conversation count probe failed: {e}")
            return 0

    async def refresh(self) -> SystemStatus:
        """Run all probes concurrently and store the merged status.

        Returns:
            The merged status once every probe has settled.
        """
        self.refreshing = True
        try:
            health, document_count, conversation_count = await asyncio.gather(
                self._probe_health(),
                self._probe_document_count(),
                self._probe_conversation_count(),
            )
        finally:
            self.refreshing = False
        self.status = SystemStatus(
            health=health,
            document_count=document_count,
            conversation_count=conversation_count,
        )
        return self.status
