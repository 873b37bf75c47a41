import base64
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Who a transcript entry belongs to."""

    USER = "user"
    MODEL = "model"
    LOADING = "loading"


class Theme(str, Enum):
    """Visual theme of the page."""

    LIGHT = "light"
    DARK = "dark"


class TurnPhase(str, Enum):
    """Lifecycle of a single chat turn."""

    IDLE = "idle"
    COMPOSING = "composing"
    SENDING = "sending"
    STREAMING = "streaming"


class TextPart(BaseModel):
    """A text fragment of an outgoing message."""

    text: str


class InlineDataPart(BaseModel):
    """Binary payload sent inline with an outgoing message.

    Attributes:
        data: Raw file bytes.
        mime_type: MIME type reported for the file.
    """

    data: bytes
    mime_type: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


MessagePart = TextPart | InlineDataPart


class PendingAttachment(BaseModel):
    """A file selected for the next outgoing message.

    Attributes:
        name: Original file name.
        mime_type: MIME type of the file.
        data: File content, read to completion.
    """

    name: str
    mime_type: str = Field(default="application/octet-stream")
    data: bytes

    @property
    def data_url(self) -> str:
        """Displayable reference for previews and the user message."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def to_part(self) -> InlineDataPart:
        return InlineDataPart(data=self.data, mime_type=self.mime_type)


def build_message_parts(
    text: str, attachment: PendingAttachment | None
) -> list[MessagePart]:
    """Compose the ordered parts of an outgoing message.

    Text comes first, followed by the attachment if one is pending.

    Args:
        text: Stripped user text (may be empty).
        attachment: Attachment captured at submit time.

    Returns:
        Parts to hand to the conversation session.
    """
    parts: list[MessagePart] = []
    if text:
        parts.append(TextPart(text=text))
    if attachment is not None:
        parts.append(attachment.to_part())
    return parts
