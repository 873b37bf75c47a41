"""Text rendering for the chat transcript.

Responsibilities:
    - Escaping plain text so it is displayed, never interpreted
    - Typesetting ``$$...$$`` display math blocks
    - Falling back to the raw block when a formula cannot be typeset
"""

from src.rendering.latex import (
    plain_text_to_html,
    render_math,
    render_math_into,
    typeset_block,
)

__all__ = ["plain_text_to_html", "render_math", "render_math_into", "typeset_block"]
