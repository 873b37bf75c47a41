"""Display-math post-processing for streamed tutor replies.

Turns ``$$...$$`` blocks into MathML with latex2mathml and escapes
everything else, so model text is never interpreted as markup.
"""

import html
import logging
import re
from collections.abc import Callable
from typing import Protocol
from xml.etree.ElementTree import Element, tostring
from xml.sax.saxutils import unescape

from latex2mathml.converter import convert_to_element

logger = logging.getLogger(__name__)

# Non-greedy so consecutive blocks stay separate; [\s\S] lets blocks span lines
BLOCK_MATH_PATTERN = re.compile(r"\$\$([\s\S]*?)\$\$")


class SupportsHtml(Protocol):
    def set_html(self, html: str) -> None: ...


def plain_text_to_html(text: str) -> str:
    """Escape text for inert display, keeping line breaks."""
    return html.escape(text, quote=False).replace("\n", "<br>")


def _neutralize_markup(math: Element) -> None:
    # Text nodes may carry entity references but never raw tags
    for node in math.iter():
        if node.text:
            node.text = node.text.replace("<", "&lt;").replace(">", "&gt;")
        if node.tail:
            node.tail = node.tail.replace("<", "&lt;").replace(">", "&gt;")


def typeset_block(latex: str) -> str:
    """Typeset LaTeX source as display-mode MathML.

    latex2mathml stores entity references such as ``&#x000A0;`` as literal
    node text and un-escapes its serialized output to restore them. Raw
    text arguments like ``\\text{...}`` would come back as live tags that
    way, so angle brackets in node text are escaped before serializing.
    """
    math = convert_to_element(latex, display="block")
    _neutralize_markup(math)
    return unescape(tostring(math, encoding="unicode"))


def render_math(text: str, typesetter: Callable[[str], str] = typeset_block) -> str:
    """Render text with its ``$$`` blocks typeset.

    A block that fails to typeset is kept as its original delimited text.
    An unclosed ``$$`` is left as plain text until a later call sees it
    closed, so this is safe to call on a partially streamed reply.

    Args:
        text: Full accumulated raw text.
        typesetter: Converts LaTeX source to markup.

    Returns:
        HTML string for display.
    """
    pieces: list[str] = []
    position = 0

    for match in BLOCK_MATH_PATTERN.finditer(text):
        pieces.append(plain_text_to_html(text[position : match.start()]))
        try:
            pieces.append(typesetter(match.group(1).strip()))
        except Exception as e:
            logger.debug(f"Keeping math block as text, typesetting failed: {e}")
            pieces.append(plain_text_to_html(match.group(0)))
        position = match.end()

    pieces.append(plain_text_to_html(text[position:]))
    return "".join(pieces)


def render_math_into(target: SupportsHtml, text: str) -> None:
    """Re-render ``target`` from the full raw text."""
    target.set_html(render_math(text))
