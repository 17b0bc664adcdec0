"""
AdminCog: slash commands for configuring and broadcasting.

  /ping
  /setwelcome channel message [color] [gif]
  /setgoodbye channel message [color] [gif]
  /announce   channel title description [color] [image]

This is a thin adapter: each command packs Discord's options into the
router's typed argument model and lets the CommandRouter do the work
(including error handling and replies).
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from herald.bot.router import AnnounceArgs, InteractionResponder, TemplateArgs

# Anything a member can post in: text, voice-text and thread channels
TargetChannel = discord.TextChannel | discord.VoiceChannel | discord.StageChannel | discord.Thread


class AdminCog(commands.Cog):
    """Provides /ping, /setwelcome, /setgoodbye and /announce."""

    def __init__(self, bot) -> None:
        self.bot = bot

    async def _route(self, name: str, interaction: discord.Interaction, args=None) -> None:
        await self.bot.router.handle(
            name, interaction.guild_id, args, InteractionResponder(interaction)
        )

    @app_commands.command(name="ping", description="Check bot status")
    async def ping(self, interaction: discord.Interaction) -> None:
        await self._route("ping", interaction)

    @app_commands.command(name="setwelcome", description="Set welcome message")
    @app_commands.describe(
        channel="Welcome channel",
        message="Welcome message ({user} and {server} are filled in)",
        color="HEX color (ex: #00ff99)",
        gif="GIF or image URL",
    )
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_guild=True)
    async def setwelcome(
        self,
        interaction: discord.Interaction,
        channel: TargetChannel,
        message: str,
        color: str | None = None,
        gif: str | None = None,
    ) -> None:
        args = TemplateArgs(channel_id=str(channel.id), message=message, color=color, gif=gif)
        await self._route("setwelcome", interaction, args)

    @app_commands.command(name="setgoodbye", description="Set goodbye message")
    @app_commands.describe(
        channel="Goodbye channel",
        message="Goodbye message ({user} and {server} are filled in)",
        color="HEX color (ex: #ff5555)",
        gif="GIF or image URL",
    )
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_guild=True)
    async def setgoodbye(
        self,
        interaction: discord.Interaction,
        channel: TargetChannel,
        message: str,
        color: str | None = None,
        gif: str | None = None,
    ) -> None:
        args = TemplateArgs(channel_id=str(channel.id), message=message, color=color, gif=gif)
        await self._route("setgoodbye", interaction, args)

    @app_commands.command(name="announce", description="Send a styled announcement")
    @app_commands.describe(
        channel="Channel to post in",
        title="Announcement title",
        description="Announcement text",
        color="HEX color (ex: #5865f2)",
        image="Image URL",
    )
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_guild=True)
    async def announce(
        self,
        interaction: discord.Interaction,
        channel: TargetChannel,
        title: str,
        description: str,
        color: str | None = None,
        image: str | None = None,
    ) -> None:
        args = AnnounceArgs(
            channel_id=str(channel.id),
            title=title,
            description=description,
            color=color,
            image=image,
        )
        await self._route("announce", interaction, args)
