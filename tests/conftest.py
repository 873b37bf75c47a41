"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - async_client: HTTPX client for API testing
    - mock_session_id: Consistent session ID for tests
    - transcript / recorder: Transcript with a view recording every change
    - attachments: Empty attachment manager
    - sample_image: Small PNG attachment

Helpers:
    - ScriptedSession: Conversation session replaying a scripted reply
"""

import asyncio
from collections.abc import AsyncGenerator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import app
from src.models.schemas import MessagePart, PendingAttachment
from src.ui.attachments import AttachmentManager
from src.ui.transcript import MessageUnit, Transcript

# Tiny valid PNG header, enough for preview/data URL tests
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"

HANG = object()


class ScriptedSession:
    """Stands in for ConversationSession.

    Each script item is a chunk to yield, an exception to raise,
    an asyncio.Event to wait on, or HANG to block forever.
    """

    def __init__(self, script: Sequence[object] = (), session_id: str = "test-session-12345") -> None:
        self.script = list(script)
        self.session_id = session_id
        self.calls: list[list[MessagePart]] = []
        self.closed = False

    async def send(self, parts: Sequence[MessagePart]) -> AsyncGenerator[str]:
        self.calls.append(list(parts))
        try:
            for item in self.script:
                if item is HANG:
                    await asyncio.Event().wait()
                elif isinstance(item, asyncio.Event):
                    await item.wait()
                elif isinstance(item, BaseException):
                    raise item
                else:
                    yield item
        finally:
            self.closed = True


class RecordingView:
    """Transcript view that records (event, role, html) tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, str]] = []

    def on_append(self, unit: MessageUnit) -> None:
        self.events.append(("append", unit.role.value, unit.html))

    def on_update(self, unit: MessageUnit) -> None:
        self.events.append(("update", unit.role.value, unit.html))

    def on_remove(self, unit: MessageUnit) -> None:
        self.events.append(("remove", unit.role.value, unit.html))

    def updates(self) -> list[str]:
        return [html for event, _, html in self.events if event == "update"]


@pytest.fixture
def mock_session_id() -> str:
    """Generate consistent session ID for testing.

    Returns:
        Predictable session ID for test assertions.
    """
    return "test-session-12345"


@pytest.fixture
def recorder() -> RecordingView:
    return RecordingView()


@pytest.fixture
def transcript(recorder: RecordingView) -> Transcript:
    """Transcript with the recording view subscribed."""
    transcript = Transcript()
    transcript.subscribe(recorder)
    return transcript


@pytest.fixture
def attachments() -> AttachmentManager:
    return AttachmentManager()


@pytest.fixture
def sample_image() -> PendingAttachment:
    return PendingAttachment(name="pregunta.png", mime_type="image/png", data=PNG_BYTES)


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
