"""Shared page chrome and helpers: stylesheet, navigation header, error banner."""

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Protocol, TypeVar

from nicegui import ui

T = TypeVar("T")


class Refreshable(Protocol):
    def refresh(self) -> None: ...


CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; }
    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .result-card { width: 100%; border-radius: 12px; }
    .citation-snippet { color: #4b5563; font-size: 0.85rem; }
    .step-label { font-weight: 600; color: #6b7280; }
    .active-conversation { background: #e0e7ff; border-color: #c7d2fe; }
</style>
"""

NAV_ITEMS = (
    ("/", "forum", "Chat"),
    ("/knowledge", "library_books", "Knowledge base"),
    ("/settings", "settings", "Settings"),
)


def page_header(active: str) -> None:
    """Render the stylesheet and the navigation bar.

    Args:
        active: Path of the current page.
    """
    ui.add_head_html(CUSTOM_CSS)
    with ui.row().classes("w-full header px-5 py-3 items-center justify-between"):
        with ui.row().classes("items-center gap-3"):
            ui.icon("auto_stories").classes("text-white text-3xl")
            ui.label("Knowledge Assistant").classes("text-lg font-semibold text-white")
        with ui.row().classes("gap-1"):
            for path, icon, label in NAV_ITEMS:
                button = ui.button(label, icon=icon, on_click=lambda p=path: ui.navigate.to(p))
                button.props("flat color=white" + (" outline" if path == active else ""))


def error_banner(message: str, on_retry: Callable[[], Awaitable[Any]]) -> None:
    """Inline error with a retry action."""
    with ui.row().classes("w-full items-center gap-3 bg-red-50 text-red-700 rounded-lg px-4 py-2"):
        ui.icon("error_outline")
        ui.label(message).classes("flex-grow")
        ui.button("Retry", on_click=on_retry).props("flat dense color=negative")


async def run_and_refresh(operation: Coroutine[Any, Any, T], *views: Refreshable) -> T:
    """Await a controller operation, refreshing views as it starts and ends.

    The operation runs as a task; yielding once lets it set its in-flight
    state (submitting, loading, busy) before the first refresh.
    """
    task = asyncio.create_task(operation)
    await asyncio.sleep(0)
    for view in views:
        view.refresh()
    try:
        return await task
    finally:
        for view in views:
            view.refresh()
