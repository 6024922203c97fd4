"""NiceGUI chat page: variant picker, model toggle, document upload and streamed replies."""

import mimetypes

from nicegui import events, ui

from relaychat.parsing.loader import EXTENSION_MIME_TYPES
from relaychat.relay.variants import VARIANTS
from relaychat.ui.session import ChatSession, ClientState, stream_chat_response

MODEL_TYPES = ("openai", "gemini")

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .message-user { background: #4f46e5; color: white; border-radius: 18px 18px 4px 18px; }
    .message-assistant { background: #f3f4f6; color: #1f2937; border-radius: 18px 18px 18px 4px; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    response_view: ui.markdown | None = None
    input_field: ui.input
    send_btn: ui.button

    def render_message(msg: dict) -> ui.markdown | None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        ui.label(msg["content"]).classes("text-sm whitespace-pre-wrap")
                        view = None
                    else:
                        view = ui.markdown(msg["content"]).classes("text-sm")
                ui.label(msg["time"]).classes("text-[10px] text-gray-400")
        return view

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                ui.label("Start a conversation").classes("text-gray-400 self-center")
            for msg in session.messages:
                render_message(msg)

    def update_send_button() -> None:
        send_btn.set_enabled(session.can_submit(input_field.value or ""))

    @ui.refreshable
    def controls() -> None:
        with ui.row().classes("w-full items-center justify-between"):
            with ui.row().classes("gap-2"):
                for variant in VARIANTS.values():
                    ui.button(
                        variant.label,
                        on_click=lambda v=variant.name: change_variant(v),
                    ).props("unelevated" if variant.name == session.variant else "outline")
            if not session.provider_fixed:
                ui.toggle(
                    list(MODEL_TYPES),
                    value=session.model_type,
                    on_change=lambda e: session.select_model(e.value),
                )
        if session.requires_file:
            ui.upload(
                label="Document (PDF, DOCX, PPTX)",
                on_upload=handle_upload,
                auto_upload=True,
                max_files=1,
            ).props(f"accept={','.join(EXTENSION_MIME_TYPES)}").classes("w-full")
            if session.file is not None:
                ui.label(f"Attached: {session.file.name}").classes("text-xs text-gray-500")

    def change_variant(name: str) -> None:
        if session.is_busy:
            return
        session.select_variant(name)
        controls.refresh()
        update_send_button()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        mime_type = (
            e.file.content_type
            or mimetypes.guess_type(e.file.name)[0]
            or "application/octet-stream"
        )
        session.attach_file(e.file.name, data, mime_type)
        controls.refresh()
        update_send_button()

    async def send_message() -> None:
        nonlocal response_view
        text = (input_field.value or "").strip()
        if not session.can_submit(text):
            return

        input_field.value = ""
        session.begin_turn(text)
        send_btn.disable()
        refresh_messages()
        with messages_container:
            spinner = ui.spinner("dots").classes("self-start")

        def on_chunk(content: str) -> None:
            nonlocal response_view
            first = session.state is ClientState.AWAITING
            session.receive_chunk(content)
            if first:
                spinner.delete()
                with messages_container:
                    response_view = render_message(session.messages[-1])
            elif response_view is not None:
                response_view.set_content(session.messages[-1]["content"])

        def finish() -> None:
            refresh_messages()
            update_send_button()

        def on_complete() -> None:
            session.complete()
            finish()

        def on_error(error: str) -> None:
            session.fail(error)
            finish()
            ui.notify(error, type="negative")

        await stream_chat_response(session, on_chunk, on_complete, on_error)

    def new_chat() -> None:
        if session.is_busy:
            return
        session.messages.clear()
        refresh_messages()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto my-8 p-4 gap-4 app-container"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("AI Integration Presentation").classes("text-2xl font-bold")
            ui.button(icon="add", on_click=new_chat).props("flat round")

        controls()

        with ui.scroll_area().classes("w-full h-[60vh] bg-gray-50 rounded-lg"):
            messages_container = ui.column().classes("w-full gap-4 p-4")
            refresh_messages()

        with ui.row().classes("w-full items-center gap-2"):
            input_field = (
                ui.input(
                    placeholder="Type your question here...",
                    on_change=lambda _: update_send_button(),
                )
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            send_btn = ui.button("Submit", on_click=send_message)
            update_send_button()


def main() -> None:
    ui.run(title="relaychat", port=8080, reload=False)


if __name__ == "__main__":
    main()
