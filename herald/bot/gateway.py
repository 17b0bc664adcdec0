"""
Outbound boundary to the chat platform.

The router and dispatcher only ever talk to a MessageGateway: resolve a
channel, send a payload, get a SendResult back. DiscordGateway is the real
implementation; tests substitute a fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import discord
from pydantic import BaseModel

from herald.config.logging import get_logger
from herald.render.renderer import MessagePayload

logger = get_logger(__name__)


class SendResult(BaseModel):
    """Outcome of a single outbound send."""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> SendResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> SendResult:
        return cls(ok=False, reason=reason)


class MessageGateway(ABC):
    """
    Abstract outbound collaborator.

    Implementations must not raise for platform-side problems: an
    unresolvable channel is ``None`` and a failed send is a failure result.
    """

    @abstractmethod
    async def resolve_channel(self, guild_id: str, channel_id: str) -> Any | None:
        """
        Look up a channel that belongs to ``guild_id``.

        Returns:
            An opaque channel handle accepted by send(), or None if the
            channel is gone, hidden from the bot, or not in that guild
        """

    @abstractmethod
    async def send(self, channel: Any, payload: MessagePayload) -> SendResult:
        """Deliver ``payload`` to a channel previously returned by resolve_channel()."""


class DiscordGateway(MessageGateway):
    """
    MessageGateway backed by a discord.py client.

    Args:
        client: Connected ``discord.Client`` (normally the HeraldBot itself)
    """

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def resolve_channel(self, guild_id: str, channel_id: str) -> Any | None:
        try:
            snowflake = int(channel_id)
        except (TypeError, ValueError):
            logger.debug(f"Channel id {channel_id!r} is not numeric")
            return None

        channel = self._client.get_channel(snowflake)
        if channel is None:
            try:
                channel = await self._client.fetch_channel(snowflake)
            except (discord.HTTPException, discord.InvalidData) as e:
                logger.debug(f"Could not fetch channel {channel_id}: {e}")
                return None

        channel_guild = getattr(channel, "guild", None)
        if channel_guild is None or str(channel_guild.id) != str(guild_id):
            logger.debug(f"Channel {channel_id} does not belong to guild {guild_id}")
            return None
        if not isinstance(channel, discord.abc.Messageable):
            logger.debug(f"Channel {channel_id} cannot receive messages")
            return None
        return channel

    async def send(self, channel: Any, payload: MessagePayload) -> SendResult:
        embed = discord.Embed.from_dict(payload.to_embed_dict())
        try:
            await channel.send(embed=embed)
        except discord.HTTPException as e:
            return SendResult.failure(f"{type(e).__name__}: {e}")
        return SendResult.success()
