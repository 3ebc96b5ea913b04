"""NiceGUI settings page: backend address and status probes."""

from collections.abc import Callable

from nicegui import ui

from kbassist import __version__
from kbassist.api.gateway import get_gateway
from kbassist.models.schemas import SystemStatus
from kbassist.status.aggregator import StatusAggregator
from kbassist.ui.layout import page_header


@ui.page("/settings")
def settings_page() -> None:
    """Configuration and system status page."""
    page_header("/settings")
    aggregator = StatusAggregator(get_gateway())

    def status_row(label: str, backward: Callable[[SystemStatus], str]) -> None:
        with ui.column().classes("gap-0"):
            ui.label(label).classes("text-xs text-gray-500")
            ui.label().bind_text_from(aggregator, "status", backward=backward).classes("font-medium")

    with ui.column().classes("w-full max-w-4xl mx-auto p-4 gap-4"):
        with ui.card().classes("w-full"):
            ui.label("API base URL").classes("text-lg font-semibold")
            ui.input(value=aggregator.api_base).props("readonly outlined dense").classes("w-full")
            ui.label(
                "Set KB_API_BASE in the environment or .env to change it. "
                "Model settings live in the backend."
            ).classes("text-xs text-gray-500")

        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("System status").classes("text-lg font-semibold")
                ui.button(icon="refresh", on_click=aggregator.refresh).props("flat round").bind_enabled_from(
                    aggregator, "refreshing", backward=lambda r: not r
                )
            with ui.grid(columns=4).classes("w-full gap-4"):
                status_row("Backend", lambda s: "Online" if s.online else "Offline")
                status_row("Run mode", lambda s: s.run_mode.capitalize())
                status_row("Documents", lambda s: str(s.document_count))
                status_row("Conversations", lambda s: str(s.conversation_count))

        with ui.card().classes("w-full"):
            ui.label("About").classes("text-lg font-semibold")
            ui.label(f"Local knowledge-base assistant v{__version__}")
            ui.label("Local-first: documents and conversations stay on this machine.").classes("text-xs text-gray-500")

    ui.timer(0.1, aggregator.refresh, once=True)
