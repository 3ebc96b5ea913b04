"""NiceGUI knowledge-base page: counts, upload, URL import and document list."""

from nicegui import events, ui

from kbassist.api.gateway import get_gateway
from kbassist.knowledge.ingestion import ConfirmDelete, KnowledgeIngestionController
from kbassist.models.schemas import Document, MutationOutcome, SourceType
from kbassist.ui.layout import error_banner, page_header, run_and_refresh


def delete_confirmation() -> ConfirmDelete:
    """Build the page's delete dialog and return a callback that awaits it.

    The dialog lives at page level so it survives document list refreshes
    and can be opened from the controller's task.
    """
    with ui.dialog() as dialog, ui.card():
        prompt = ui.label()
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
            ui.button("Delete", on_click=lambda: dialog.submit(True)).props("color=negative").mark(
                "confirm-delete"
            )

    async def confirm(document: Document | int) -> bool:
        name = document.title if isinstance(document, Document) else f"#{document}"
        prompt.set_text(f"Delete '{name}' from the knowledge base?")
        return bool(await dialog)

    return confirm


def notify_outcome(outcome: MutationOutcome | None) -> None:
    if outcome is not None:
        ui.notify(outcome.message, type="positive" if outcome.ok else "negative")


@ui.page("/knowledge")
def knowledge_page() -> None:
    """Document management page."""
    page_header("/knowledge")
    kb = KnowledgeIngestionController(get_gateway(), confirm_delete=delete_confirmation())

    @ui.refreshable
    def document_list() -> None:
        if kb.error:
            error_banner(kb.error, reload)
        if kb.loading:
            ui.label("Loading...").classes("text-gray-500")
            return
        if not kb.documents:
            ui.label("No documents yet. Upload a file or import a URL.").classes("text-gray-400")
            return
        with ui.grid(columns=2).classes("w-full gap-3"):
            for document in kb.documents:
                with ui.card().classes("w-full"):
                    with ui.row().classes("w-full items-center no-wrap gap-3"):
                        ui.icon("language" if document.source_type is SourceType.URL else "description").classes(
                            "text-2xl text-indigo-500"
                        )
                        with ui.column().classes("flex-grow gap-0 min-w-0"):
                            ui.label(document.title).classes("font-medium truncate").tooltip(document.source_ref)
                            ui.label(f"{document.source_type.value} · {document.display_date}").classes(
                                "text-xs text-gray-500"
                            )
                        ui.button(icon="delete", on_click=lambda d=document: delete(d)).props(
                            "flat round color=negative"
                        ).tooltip("Delete").mark(f"delete-{document.id}")

    async def reload() -> None:
        await run_and_refresh(kb.load_documents(), document_list)

    async def delete(document: Document) -> None:
        notify_outcome(await run_and_refresh(kb.delete_document(document), document_list))

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        outcome = await run_and_refresh(
            kb.upload_file(e.file.name, content, e.file.content_type),
            document_list,
        )
        if outcome is None:
            ui.notify("Another ingestion is still running.", type="warning")
        notify_outcome(outcome)
        uploader.reset()

    async def import_url() -> None:
        notify_outcome(await run_and_refresh(kb.ingest_url(), document_list))

    with ui.column().classes("w-full max-w-4xl mx-auto p-4 gap-4"):
        with ui.row().classes("w-full gap-4"):
            for label, attribute in (("Documents", "total"), ("Files", "file_count"), ("Web pages", "url_count")):
                with ui.card().classes("flex-grow items-center"):
                    ui.label(label).classes("text-gray-500")
                    ui.label().bind_text_from(kb, attribute, backward=str).classes("text-3xl font-semibold")

        with ui.row().classes("w-full gap-4 no-wrap"):
            with ui.card().classes("w-1/2"):
                ui.label("Upload file").classes("text-lg font-semibold")
                ui.label("PDF / DOCX / TXT, parsed and indexed locally.").classes("text-xs text-gray-500")
                uploader = ui.upload(on_upload=handle_upload, auto_upload=True).props(
                    "accept=.pdf,.docx,.txt,.md flat bordered"
                ).classes("w-full").bind_enabled_from(kb, "busy", backward=lambda b: not b)

            with ui.card().classes("w-1/2"):
                ui.label("Import URL").classes("text-lg font-semibold")
                ui.label("Fetches the page text and adds it to the index.").classes("text-xs text-gray-500")
                with ui.row().classes("w-full items-center no-wrap"):
                    ui.input(placeholder="https://example.com").bind_value(kb, "pending_url").bind_enabled_from(
                        kb, "busy", backward=lambda b: not b
                    ).classes("flex-grow").on("keydown.enter", import_url)
                    ui.button("Import", on_click=import_url).bind_enabled_from(kb, "can_ingest_url")
                ui.spinner(size="sm").bind_visibility_from(kb, "busy")

        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Indexed documents").classes("text-lg font-semibold")
            ui.label().bind_text_from(kb, "total", backward=lambda n: f"{n} items").classes("text-gray-500")
        document_list()

    ui.timer(0.1, reload, once=True)
