"""
Message rendering.

Turns a stored EventTemplate plus live member/guild data into a
MessagePayload (title, description, color, thumbnail, image). Pure functions
only, so the whole layer is testable without a Discord connection.
"""

from herald.render.colors import ANNOUNCE_COLOR, DEFAULT_COLORS, normalize_color, normalize_image
from herald.render.renderer import (
    GOODBYE_TITLE,
    WELCOME_TITLE,
    MessagePayload,
    RenderContext,
    render,
    render_announcement,
    substitute,
)

__all__ = [
    "ANNOUNCE_COLOR",
    "DEFAULT_COLORS",
    "GOODBYE_TITLE",
    "WELCOME_TITLE",
    "MessagePayload",
    "RenderContext",
    "normalize_color",
    "normalize_image",
    "render",
    "render_announcement",
    "substitute",
]
