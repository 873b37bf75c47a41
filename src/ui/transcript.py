"""Append-only chat transcript shared by the orchestrator and the page.

The transcript holds the message units; views subscribe to it and mirror
every change into NiceGUI elements. Keeping the state here lets the chat
flow run and be tested without a browser.
"""

import itertools
from typing import Protocol

from src.models.schemas import Role
from src.rendering.latex import plain_text_to_html

_unit_ids = itertools.count(1)


class TranscriptView(Protocol):
    """Receives transcript changes, in the order they happen."""

    def on_append(self, unit: "MessageUnit") -> None: ...

    def on_update(self, unit: "MessageUnit") -> None: ...

    def on_remove(self, unit: "MessageUnit") -> None: ...


class MessageUnit:
    """A displayed message: role plus HTML content and an optional image."""

    def __init__(
        self,
        transcript: "Transcript",
        role: Role,
        html: str = "",
        image: str | None = None,
    ) -> None:
        self.id: int = next(_unit_ids)
        self.role = role
        self.html = html
        self.image = image
        self._transcript = transcript

    def set_html(self, html: str) -> None:
        """Replace the content and redraw the unit."""
        self.html = html
        self._transcript._notify("on_update", self)

    def __repr__(self) -> str:
        return f"MessageUnit(id={self.id}, role={self.role.value!r}, html={self.html!r})"


class Transcript:
    """Ordered, append-only list of message units."""

    def __init__(self) -> None:
        self._units: list[MessageUnit] = []
        self._views: list[TranscriptView] = []

    @property
    def units(self) -> tuple[MessageUnit, ...]:
        return tuple(self._units)

    def subscribe(self, view: TranscriptView) -> None:
        self._views.append(view)

    def append(
        self,
        role: Role,
        text: str | None = None,
        image: str | None = None,
    ) -> MessageUnit:
        """Append a message unit at the end of the transcript.

        Args:
            role: Owner of the message.
            text: Plain text, displayed as-is (never interpreted as markup).
            image: Displayable image reference shown under the text.

        Returns:
            Handle used to re-render or remove the unit later.
        """
        unit = MessageUnit(self, role, plain_text_to_html(text) if text else "", image)
        self._units.append(unit)
        self._notify("on_append", unit)
        return unit

    def remove(self, unit: MessageUnit) -> None:
        if unit in self._units:
            self._units.remove(unit)
            self._notify("on_remove", unit)

    def by_role(self, role: Role) -> list[MessageUnit]:
        return [unit for unit in self._units if unit.role is role]

    def _notify(self, event: str, unit: MessageUnit) -> None:
        for view in self._views:
            getattr(view, event)(unit)
