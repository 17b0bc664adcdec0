"""
MembersCog: forwards member join/leave gateway events to the EventDispatcher.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from herald.bot.dispatcher import MemberEvent


def member_tag(user: discord.abc.User) -> str:
    """
    Durable display tag for a user.

    Accounts on the new username system report discriminator "0" and are
    shown by name alone; legacy accounts keep ``name#1234``.
    """
    discriminator = getattr(user, "discriminator", "0") or "0"
    if discriminator.strip("0") == "":
        return user.name
    return f"{user.name}#{discriminator}"


def member_event(member: discord.Member) -> MemberEvent:
    return MemberEvent(
        guild_id=str(member.guild.id),
        guild_name=member.guild.name,
        mention=member.mention,
        tag=member_tag(member),
        avatar_url=str(member.display_avatar.url),
    )


class MembersCog(commands.Cog):
    """Listens for on_member_join / on_member_remove."""

    def __init__(self, bot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_member_join(self, member: discord.Member) -> None:
        await self.bot.dispatcher.member_joined(member_event(member))

    @commands.Cog.listener()
    async def on_member_remove(self, member: discord.Member) -> None:
        await self.bot.dispatcher.member_left(member_event(member))
