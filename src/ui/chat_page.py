"""NiceGUI chat page for MateTutor with streamed, math-aware replies."""

import logging

from nicegui import app, events, ui

from src.agent.chat_agent import ConversationSession, get_agent_service
from src.agent.prompts import GREETING_MESSAGE
from src.models.schemas import Role, Theme
from src.ui.attachments import AttachmentManager, read_upload
from src.ui.orchestrator import ChatOrchestrator
from src.ui.theme import ThemeController
from src.ui.transcript import MessageUnit, Transcript

logger = logging.getLogger(__name__)

PREFERS_DARK_JS = "window.matchMedia('(prefers-color-scheme: dark)').matches"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }
    body.body--dark { background: #111827; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .body--dark .app-container { background: #1f2937; }

    .header { background: linear-gradient(135deg, #f59e0b 0%, #ef4444 100%); }

    .message-user {
        background: linear-gradient(135deg, #f59e0b 0%, #ef4444 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-model {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .body--dark .message-model { background: #374151; color: #f9fafb; }

    .message-image { max-width: 240px; border-radius: 8px; margin-top: 0.5rem; }

    .avatar-user { background: linear-gradient(135deg, #f59e0b 0%, #ef4444 100%); }
    .avatar-model { background: #6b7280; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #f59e0b;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #f59e0b; }
    .body--dark .input-box { background: #111827; border-color: #374151; }

    .send-btn { background: linear-gradient(135deg, #f59e0b 0%, #ef4444 100%) !important; }

    .message-model math[display="block"] { margin: 0.5rem 0; font-size: 1.1em; }
</style>
"""


def render_avatar(is_user: bool) -> None:
    css = "avatar-user" if is_user else "avatar-model"
    icon = "person" if is_user else "school"
    avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
    with ui.element("div").classes(avatar_classes):
        ui.icon(icon).classes("text-white text-lg")


class TranscriptPanel:
    """Mirrors a Transcript into NiceGUI elements."""

    def __init__(self, container: ui.column, scroll_area: ui.scroll_area) -> None:
        self._container = container
        self._scroll_area = scroll_area
        self._rows: dict[int, ui.row] = {}
        self._bodies: dict[int, ui.html] = {}

    def on_append(self, unit: MessageUnit) -> None:
        is_user = unit.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-model"

        with self._container, ui.row().classes(f"w-full {align} gap-3 items-end") as row:
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if unit.role is Role.LOADING:
                        with ui.row().classes("gap-1 py-1"):
                            for _ in range(3):
                                ui.element("div").classes("typing-dot")
                    else:
                        self._bodies[unit.id] = ui.html(unit.html, sanitize=False).classes(
                            "text-sm leading-relaxed"
                        )
                        if unit.image:
                            ui.image(unit.image).classes("message-image")
            if is_user:
                render_avatar(True)

        self._rows[unit.id] = row
        self._scroll_to_bottom()

    def on_update(self, unit: MessageUnit) -> None:
        body = self._bodies.get(unit.id)
        if body is not None:
            body.set_content(unit.html)
            self._scroll_to_bottom()

    def on_remove(self, unit: MessageUnit) -> None:
        self._bodies.pop(unit.id, None)
        row = self._rows.pop(unit.id, None)
        if row is not None:
            row.delete()

    def _scroll_to_bottom(self) -> None:
        self._scroll_area.scroll_to(percent=1.0)


async def detect_prefers_dark() -> bool | None:
    """Ask the browser for its color scheme preference."""
    try:
        await ui.context.client.connected()
        return bool(await ui.run_javascript(PREFERS_DARK_JS))
    except TimeoutError:
        logger.warning("Browser did not report a color scheme preference")
        return None


@ui.page("/")
async def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    service = get_agent_service()
    session = ConversationSession(service)
    transcript = Transcript()

    preview_container: ui.row
    upload: ui.upload
    input_field: ui.textarea
    queue_label: ui.label

    def refresh_preview() -> None:
        preview_container.clear()
        attachment = attachments.current()
        preview_container.set_visibility(attachment is not None)
        if attachment is None:
            return
        with preview_container, ui.element("div").classes("relative"):
            if attachment.mime_type.startswith("image/"):
                ui.image(attachments.to_previewable()).classes("w-20 h-20 rounded-lg")
            else:
                ui.label(f"📎 {attachment.name}").classes("text-sm px-2 py-1")
            ui.button("×", on_click=remove_attachment).props(
                "round dense unelevated size=sm color=grey-8"
            ).classes("absolute -top-2 -right-2")

    def refresh_queue(queued: int) -> None:
        noun = "mensaje" if queued == 1 else "mensajes"
        queue_label.set_text(f"{queued} {noun} en espera")
        queue_label.set_visibility(queued > 0)

    attachments = AttachmentManager(on_change=refresh_preview)
    orchestrator = ChatOrchestrator(
        session,
        transcript,
        attachments,
        stream_timeout=service.config.stream_timeout,
        on_queue_change=refresh_queue,
    )

    dark = ui.dark_mode()
    theme = ThemeController(
        app.storage.user,
        apply=lambda t: dark.enable() if t is Theme.DARK else dark.disable(),
    )

    def remove_attachment() -> None:
        attachments.clear()
        upload.reset()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        attachments.set_attachment(await read_upload(e.file))
        upload.reset()

    async def send_message() -> None:
        text = input_field.value or ""
        input_field.value = ""
        await orchestrator.submit(text)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
            # Header
            with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
                with ui.row().classes("items-center gap-3"):
                    ui.icon("calculate").classes("text-white text-3xl")
                    ui.label("MateTutor").classes("text-lg font-semibold text-white")
                ui.button(icon="contrast", on_click=theme.toggle).props("flat round color=white")

            # Messages
            with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
                messages_container = ui.column().classes("w-full gap-4 p-5")

            # Attachment preview
            preview_container = ui.row().classes("px-4 pt-3 gap-2")
            preview_container.set_visibility(False)

            # Messages waiting behind the reply being streamed
            queue_label = ui.label().classes("px-5 pt-2 text-xs text-gray-500")
            queue_label.set_visibility(False)

            # Input
            with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
                upload = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props("flat dense hide-upload-btn")
                    .classes("w-40")
                )
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(placeholder="Escribe tu pregunta...")
                        .props("autogrow borderless dense rows=1")
                        .classes("w-full")
                        .on("keydown.enter.exact.prevent", send_message)
                    )
                (
                    ui.button(icon="send", on_click=send_message)
                    .props("round unelevated")
                    .classes("send-btn")
                )

    transcript.subscribe(TranscriptPanel(messages_container, scroll_area))
    transcript.append(Role.MODEL, GREETING_MESSAGE)

    theme.initialize(await detect_prefers_dark())
