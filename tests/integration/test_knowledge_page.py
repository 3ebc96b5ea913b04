"""Integration tests for the knowledge page, driven through NiceGUI's simulated user.

The page talks to the in-process fake backend through the shared gateway.
"""

import pytest
import pytest_check as check
from nicegui.testing import user_simulation

from kbassist.api import gateway as gateway_module
from kbassist.api.gateway import Gateway
from kbassist.ui.knowledge_page import knowledge_page
from tests.fake_backend import BackendState


@pytest.fixture
def seeded(backend_state: BackendState, gateway: Gateway, monkeypatch: pytest.MonkeyPatch) -> BackendState:
    """Documents 3, 7 and 9, served to the page through the shared gateway."""
    for doc_id in (3, 7, 9):
        backend_state.add_document(doc_id, f"doc {doc_id}")
    monkeypatch.setattr(gateway_module, "_gateway", gateway)
    return backend_state


class TestDeleteFromPage:
    async def test_confirmed_delete_sends_request_and_reloads(self, seeded: BackendState) -> None:
        async with user_simulation(root=knowledge_page) as user:
            await user.open("/")
            await user.should_see(marker="delete-7", retries=20)

            user.find(marker="delete-7").click()
            await user.should_see("Delete 'doc 7' from the knowledge base?", retries=20)
            user.find(marker="confirm-delete").click()

            await user.should_not_see(marker="delete-7", retries=20)
            await user.should_see(marker="delete-3")

        check.is_in("DELETE /kb/documents/7", seeded.requests)
        check.equal(seeded.requests[-1], "GET /kb/documents")
        check.equal([d["id"] for d in seeded.documents], [3, 9])

    async def test_cancelled_delete_sends_nothing(self, seeded: BackendState) -> None:
        async with user_simulation(root=knowledge_page) as user:
            await user.open("/")
            await user.should_see(marker="delete-7", retries=20)

            user.find(marker="delete-7").click()
            await user.should_see("Delete 'doc 7' from the knowledge base?", retries=20)
            user.find("Cancel").click()

            await user.should_see(marker="delete-7")

        check.equal(seeded.count("DELETE /kb/documents/7"), 0)
        check.equal(len(seeded.documents), 3)
