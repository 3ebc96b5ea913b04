"""NiceGUI chat page: question box, mode toggle, answer cards and history."""

from collections.abc import Coroutine
from typing import Any

from nicegui import ui

from kbassist.api.gateway import get_gateway
from kbassist.models.schemas import ConversationTurn, Mode
from kbassist.session.chat import (
    PRIOR_TURNS_UNAVAILABLE,
    SUBMIT_ERROR_MESSAGE,
    ChatSessionController,
    Phase,
)
from kbassist.session.history import HistoryDataSource, HistoryState
from kbassist.ui.layout import error_banner, page_header, run_and_refresh

MODE_LABELS = {Mode.RETRIEVAL: "RAG answer", Mode.AGENT: "Agent"}


def render_turn(turn: ConversationTurn) -> None:
    """Answer, agent steps and citations, in server order."""
    with ui.card().classes("result-card"):
        ui.label("Answer").classes("text-lg font-semibold")
        ui.markdown(turn.answer or "_No answer returned._")

    if turn.steps:
        with ui.card().classes("result-card"):
            ui.label("Reasoning steps").classes("text-lg font-semibold")
            for step in turn.steps:
                with ui.column().classes("w-full gap-1 border-l-4 border-indigo-300 pl-3 my-1"):
                    ui.badge(step.tool or "tool").props("color=indigo")
                    with ui.row().classes("gap-2"):
                        ui.label("Input:").classes("step-label")
                        ui.label(step.input)
                    with ui.row().classes("gap-2"):
                        ui.label("Output:").classes("step-label")
                        ui.label(step.output)

    if turn.citations:
        with ui.card().classes("result-card"):
            ui.label("Sources").classes("text-lg font-semibold")
            for citation in turn.citations:
                with ui.column().classes("w-full gap-0 my-1"):
                    with ui.row().classes("items-center gap-2"):
                        ui.icon("description").classes("text-gray-500")
                        ui.label(citation.source or "Unknown source").classes("font-medium")
                        if citation.page is not None:
                            ui.badge(f"P.{citation.page}").props("outline")
                    ui.label(citation.snippet).classes("citation-snippet")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    page_header("/")
    gateway = get_gateway()
    chat = ChatSessionController(gateway)
    history = HistoryDataSource(gateway, on_select=chat.select_conversation)

    @ui.refreshable
    def result_area() -> None:
        if chat.submitting:
            with ui.card().classes("result-card"):
                ui.label("Answer").classes("text-lg font-semibold")
                with ui.row().classes("items-center gap-2"):
                    ui.spinner("dots", size="lg")
                    ui.label("Thinking...").classes("text-gray-500 italic")
        elif chat.phase is Phase.ERROR:
            error_banner(chat.last_error or SUBMIT_ERROR_MESSAGE, retry)
        elif chat.show_empty_state:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("auto_awesome").classes("text-5xl text-gray-300")
                ui.label("Ready to answer your questions").classes("text-lg text-gray-400")
        else:
            render_turn(chat.turn)

    async def run(submission: Coroutine[Any, Any, bool]) -> None:
        if await run_and_refresh(submission, result_area) and chat.phase is Phase.ERROR:
            ui.notify(chat.last_error, type="negative")

    async def send() -> None:
        if chat.can_submit:
            await run(chat.submit())

    async def retry() -> None:
        await run(chat.retry())

    def new_conversation() -> None:
        chat.start_new_conversation()
        result_area.refresh()

    @ui.refreshable
    def history_list() -> None:
        state = history.state
        if state is HistoryState.LOADING:
            with ui.row().classes("w-full justify-center p-4"):
                ui.spinner(size="lg")
        elif state is HistoryState.ERROR:
            error_banner(history.error, reload_history)
        elif state is HistoryState.EMPTY:
            ui.label("No past conversations").classes("text-gray-400 p-4")
        else:
            for conversation in history.conversations:
                css = "active-conversation" if conversation.id == chat.conversation_id else ""
                with ui.card().classes(f"w-full cursor-pointer {css}").on(
                    "click", lambda c=conversation: select_conversation(c.id)
                ):
                    ui.label(conversation.display_title).classes("font-medium truncate")
                    ui.label(conversation.display_date).classes("text-xs text-gray-500")

    async def reload_history() -> None:
        await run_and_refresh(history.load_history(), history_list)

    async def open_history() -> None:
        history_dialog.open()
        await run_and_refresh(history.open(), history_list)

    def select_conversation(conversation_id: int) -> None:
        history.select(conversation_id)
        history_dialog.close()
        result_area.refresh()
        ui.notify(PRIOR_TURNS_UNAVAILABLE, type="info")

    with ui.dialog().on("hide", history.close) as history_dialog, ui.card().classes("w-96 max-h-[80vh]"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Conversation history").classes("text-lg font-semibold")
            ui.button(icon="close", on_click=history_dialog.close).props("flat round dense")
        with ui.scroll_area().classes("w-full h-96"):
            history_list()

    with ui.column().classes("w-full max-w-4xl mx-auto p-4 gap-4"):
        with ui.row().classes("w-full items-center justify-between"):
            with ui.row().classes("items-center gap-2"):
                ui.button("History", icon="history", on_click=open_history).props("outline")
                ui.button("New chat", icon="add", on_click=new_conversation).props(
                    "flat"
                ).bind_enabled_from(chat, "submitting", backward=lambda s: not s)
                ui.label().bind_text_from(
                    chat,
                    "conversation_id",
                    backward=lambda cid: f"Conversation #{cid}" if cid is not None else "New conversation",
                ).classes("text-xs text-gray-500 font-mono")
            ui.toggle(
                MODE_LABELS,
                value=chat.mode,
                on_change=lambda e: chat.set_mode(e.value),
            )

        with ui.row().classes("w-full items-end gap-3"):
            ui.textarea(placeholder="Ask a question... (Enter to send)").bind_value(
                chat, "question"
            ).props("autogrow outlined").classes("flex-grow").on("keydown.enter.prevent", send)
            ui.button(icon="send", on_click=send).props("round unelevated color=primary").bind_enabled_from(
                chat, "can_submit"
            )

        result_area()
