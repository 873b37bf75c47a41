"""Chat turn orchestration between the page, the transcript and the tutor.

One ChatOrchestrator exists per page. It owns the page's pending
attachment and conversation session, and walks every turn through
IDLE -> COMPOSING -> SENDING -> STREAMING -> IDLE.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable, Sequence
from contextlib import aclosing
from typing import Protocol

from src.agent.prompts import FAILURE_MESSAGE
from src.models.schemas import (
    MessagePart,
    PendingAttachment,
    Role,
    TurnPhase,
    build_message_parts,
)
from src.rendering.latex import render_math_into
from src.ui.attachments import AttachmentManager
from src.ui.transcript import MessageUnit, Transcript

logger = logging.getLogger(__name__)


class ChatSessionLike(Protocol):
    session_id: str

    def send(self, parts: Sequence[MessagePart]) -> AsyncGenerator[str]: ...


class ChatOrchestrator:
    """Drives chat turns for a single page.

    Turns are serialized: a message submitted while a reply is still
    streaming waits for that turn to finish before it is shown and sent.
    """

    def __init__(
        self,
        session: ChatSessionLike,
        transcript: Transcript,
        attachments: AttachmentManager,
        *,
        failure_message: str = FAILURE_MESSAGE,
        stream_timeout: float | None = 60.0,
        on_queue_change: Callable[[int], None] | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            session: Conversation session shared by every turn of the page.
            transcript: Transcript the turns are rendered into.
            attachments: Pending attachment of the page.
            failure_message: Text shown as the tutor's reply when a turn fails.
            stream_timeout: Seconds to wait for each reply chunk (None waits forever).
            on_queue_change: Called with the number of submissions waiting
                behind the active turn whenever that number changes.
        """
        self._session = session
        self._transcript = transcript
        self._attachments = attachments
        self._failure_message = failure_message
        self._stream_timeout = stream_timeout
        self._turn_lock = asyncio.Lock()
        self._on_queue_change = on_queue_change
        self._queued = 0
        self.phase = TurnPhase.IDLE

    @property
    def busy(self) -> bool:
        return self._turn_lock.locked()

    @property
    def queued(self) -> int:
        return self._queued

    async def submit(self, text: str) -> bool:
        """Handle a form submission.

        The pending attachment is taken and cleared immediately, so files
        picked afterwards belong to the next message.

        Args:
            text: Raw text from the input field.

        Returns:
            False if there was nothing to send, True once the turn has ended.
        """
        text = text.strip()
        attachment = self._attachments.current()
        if not text and attachment is None:
            return False

        self._attachments.clear()
        parts = build_message_parts(text, attachment)

        waiting = self._turn_lock.locked()
        if waiting:
            self._set_queued(self._queued + 1)
        async with self._turn_lock:
            if waiting:
                self._set_queued(self._queued - 1)
            await self._run_turn(text, attachment, parts)
        return True

    async def _run_turn(
        self,
        text: str,
        attachment: PendingAttachment | None,
        parts: list[MessagePart],
    ) -> None:
        self.phase = TurnPhase.COMPOSING
        self._append_user_message(text, attachment)

        self.phase = TurnPhase.SENDING
        loading = self._transcript.append(Role.LOADING)
        model_unit: MessageUnit | None = None
        buffer = ""

        try:
            loop = asyncio.get_running_loop()
            async with (
                aclosing(self._session.send(parts)) as stream,
                asyncio.timeout(self._deadline(loop)) as deadline,
            ):
                async for chunk in stream:
                    if model_unit is None:
                        self._transcript.remove(loading)
                        model_unit = self._transcript.append(Role.MODEL)
                        self.phase = TurnPhase.STREAMING
                    buffer += chunk
                    # Full re-render: a later chunk may close an earlier $$ block
                    render_math_into(model_unit, buffer)
                    deadline.reschedule(self._deadline(loop))

            if model_unit is None:
                self._transcript.remove(loading)
                self._transcript.append(Role.MODEL)

        except Exception:
            logger.exception(
                f"Tutor reply failed in session {self._session.session_id[:8]}"
            )
            self._transcript.remove(loading)
            self._transcript.append(Role.MODEL, self._failure_message)

        finally:
            self.phase = TurnPhase.IDLE

    def _append_user_message(
        self, text: str, attachment: PendingAttachment | None
    ) -> MessageUnit:
        image = None
        if attachment is not None:
            if attachment.mime_type.startswith("image/"):
                image = attachment.data_url
            else:
                text = f"{text}\n📎 {attachment.name}" if text else f"📎 {attachment.name}"
        return self._transcript.append(Role.USER, text or None, image=image)

    def _set_queued(self, queued: int) -> None:
        self._queued = queued
        if self._on_queue_change is not None:
            self._on_queue_change(queued)

    def _deadline(self, loop: asyncio.AbstractEventLoop) -> float | None:
        if self._stream_timeout is None:
            return None
        return loop.time() + self._stream_timeout
