"""
EventDispatcher: membership events → rendered message → send.

Fire and log: a guild with no template, a channel that can't be resolved
and a failed send all end quietly (with a log line for the latter two).
Nothing raised here reaches the gateway's event loop.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from herald.bot.gateway import MessageGateway, SendResult
from herald.config.logging import get_logger
from herald.render.renderer import RenderContext, render
from herald.store import ConfigStore, EventKind

logger = get_logger(__name__)


class MemberEvent(BaseModel):
    """A member joining or leaving a guild, stripped of platform types."""

    guild_id: str
    guild_name: str
    mention: str = Field(description="Live mention, e.g. <@42>")
    tag: str = Field(description="Durable name used once the member has left")
    avatar_url: str | None = None


class EventDispatcher:
    """
    Renders and delivers welcome/goodbye messages.

    Args:
        store: Guild configuration store shared with the CommandRouter
        gateway: Outbound collaborator
    """

    def __init__(self, store: ConfigStore, gateway: MessageGateway) -> None:
        self._store = store
        self._gateway = gateway

    async def member_joined(self, event: MemberEvent) -> SendResult | None:
        context = RenderContext(
            mention_or_tag=event.mention,
            guild_name=event.guild_name,
            avatar_url=event.avatar_url,
        )
        return await self._dispatch(EventKind.WELCOME, event, context)

    async def member_left(self, event: MemberEvent) -> SendResult | None:
        # The member is gone, so a mention would render as an unknown user
        context = RenderContext(mention_or_tag=event.tag, guild_name=event.guild_name)
        return await self._dispatch(EventKind.GOODBYE, event, context)

    async def _dispatch(
        self, kind: EventKind, event: MemberEvent, context: RenderContext
    ) -> SendResult | None:
        """
        Returns:
            The SendResult, or None when nothing was sent (no template or
            no reachable channel)
        """
        config = self._store.get(event.guild_id)
        template = config.slot(kind) if config else None
        if template is None:
            logger.debug(f"No {kind.value} template for guild {event.guild_id}")
            return None

        try:
            channel = await self._gateway.resolve_channel(event.guild_id, template.channel_id)
        except Exception as e:
            logger.warning(f"Resolving channel {template.channel_id} raised: {e}")
            channel = None
        if channel is None:
            logger.warning(
                f"Skipping {kind.value} for guild {event.guild_id}: "
                f"channel {template.channel_id} is unavailable"
            )
            return None

        payload = render(template, kind, context)

        try:
            result = await self._gateway.send(channel, payload)
        except Exception as e:
            result = SendResult.failure(f"{type(e).__name__}: {e}")

        if result.ok:
            logger.info(f"Sent {kind.value} for {event.tag} in guild {event.guild_id}")
        else:
            logger.warning(
                f"Failed to send {kind.value} to channel {template.channel_id} "
                f"in guild {event.guild_id}: {result.reason}"
            )
        return result
