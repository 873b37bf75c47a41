"""Single pending attachment for the next outgoing message."""

import logging
import mimetypes
from collections.abc import Callable
from typing import Protocol

from src.models.schemas import PendingAttachment

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class UploadedFile(Protocol):
    """The parts of NiceGUI's FileUpload that we read."""

    name: str
    content_type: str

    async def read(self) -> bytes: ...


async def read_upload(file: UploadedFile) -> PendingAttachment:
    """Read an uploaded file to completion.

    Args:
        file: Upload handle from the browser.

    Returns:
        PendingAttachment holding the file bytes and its MIME type.
    """
    data = await file.read()
    mime_type = file.content_type or mimetypes.guess_type(file.name)[0] or DEFAULT_MIME_TYPE
    logger.info(f"Read attachment {file.name} ({mime_type}, {len(data)} bytes)")
    return PendingAttachment(name=file.name, mime_type=mime_type, data=data)


class AttachmentManager:
    """Holds at most one pending attachment and reports changes."""

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self._attachment: PendingAttachment | None = None
        self._on_change = on_change

    def set_attachment(self, attachment: PendingAttachment) -> None:
        """Replace any pending attachment with ``attachment``."""
        self._attachment = attachment
        self._changed()

    def clear(self) -> None:
        self._attachment = None
        self._changed()

    def current(self) -> PendingAttachment | None:
        return self._attachment

    def to_previewable(self) -> str | None:
        """Return a displayable image reference, or None when empty."""
        if self._attachment is None:
            return None
        return self._attachment.data_url

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
