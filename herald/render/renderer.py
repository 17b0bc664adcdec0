"""
Message renderer: template record + event context → message payload.

Everything in this module is pure: no I/O, no mutation of its inputs. The
Discord layer turns a MessagePayload into a ``discord.Embed`` at send time.

Placeholder handling is plain string substitution, not a
templating language: every literal ``{user}`` and ``{server}`` is replaced,
wherever it appears, in a single left-to-right pass. Braces cannot be
escaped.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field

from herald.render.colors import ANNOUNCE_COLOR, DEFAULT_COLORS, normalize_color, normalize_image
from herald.store.models import EventKind, EventTemplate

WELCOME_TITLE = "🎉 Welcome!"
GOODBYE_TITLE = "👋 Goodbye"

TITLES: dict[EventKind, str] = {
    EventKind.WELCOME: WELCOME_TITLE,
    EventKind.GOODBYE: GOODBYE_TITLE,
}

_PLACEHOLDER_RE = re.compile(r"\{user\}|\{server\}")


class RenderContext(BaseModel):
    """Live event data that fills a template."""

    mention_or_tag: str = Field(description="Replaces {user}: a mention on join, a tag on leave")
    guild_name: str = Field(description="Replaces {server}")
    avatar_url: str | None = Field(None, description="Member avatar, used as the welcome thumbnail")


class MessagePayload(BaseModel):
    """
    A fully rendered message.

    ``thumbnail`` and ``image`` are None when absent and are left out of the
    serialised forms entirely rather than emitted as null.
    """

    title: str
    description: str
    color: int = Field(ge=0, le=0xFFFFFF)
    thumbnail: str | None = None
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_embed_dict(self) -> dict[str, Any]:
        """Shape the payload as a Discord embed object (``discord.Embed.from_dict``)."""
        embed: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "color": self.color,
        }
        if self.thumbnail:
            embed["thumbnail"] = {"url": self.thumbnail}
        if self.image:
            embed["image"] = {"url": self.image}
        return embed


def substitute(template: str, user: str, server: str) -> str:
    """
    Replace every ``{user}`` and ``{server}`` token in one pass.

    Replacement values are not re-scanned, so a user name that happens to
    contain ``{server}`` is inserted verbatim.

    Example:
        >>> substitute("Hi {user}, welcome to {server}!", "<@123>", "Acme")
        'Hi <@123>, welcome to Acme!'
    """
    values = {"{user}": user, "{server}": server}
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(0)], template)


def render(template: EventTemplate, kind: EventKind, context: RenderContext) -> MessagePayload:
    """
    Render a membership event message.

    Args:
        template: Stored template record for this guild and event kind
        kind: WELCOME adds the avatar thumbnail; GOODBYE never has one
        context: Member mention/tag, guild name and optional avatar

    Returns:
        MessagePayload ready to send
    """
    thumbnail = context.avatar_url if kind is EventKind.WELCOME else None

    return MessagePayload(
        title=TITLES[kind],
        description=substitute(
            template.message_template, context.mention_or_tag, context.guild_name
        ),
        color=normalize_color(template.color_hex, DEFAULT_COLORS[kind]),
        thumbnail=thumbnail or None,
        image=normalize_image(template.image_url),
    )


def render_announcement(
    title: str,
    description: str,
    color: str | None = None,
    image: str | None = None,
) -> MessagePayload:
    """Build the one-shot /announce message. No placeholders, no thumbnail."""
    return MessagePayload(
        title=title,
        description=description,
        color=normalize_color(color, ANNOUNCE_COLOR),
        image=normalize_image(image),
    )
