"""
HeraldBot: discord.py bot client.

Manages the full bot lifecycle:
- Opens the guild configuration store once at startup
- Builds the gateway, command router and event dispatcher around that store
- Loads the cogs (AdminCog, MembersCog)
- Starts the keep-alive status server (optional)
- Syncs slash commands (guild-local for dev, global for production)
- Cleans up all resources on shutdown via AsyncExitStack
"""

from __future__ import annotations

import time
from contextlib import AsyncExitStack

import discord
from discord.ext import commands
from pydantic import BaseModel

from herald.bot.dispatcher import EventDispatcher
from herald.bot.gateway import DiscordGateway, MessageGateway
from herald.bot.router import CommandRouter
from herald.bot.status import StatusServer
from herald.config.logging import get_logger
from herald.config.settings import Settings
from herald.store import ConfigStore

logger = get_logger(__name__)


class BotStatus(BaseModel):
    """Liveness snapshot exposed in-process and over /status."""

    ready: bool
    guild_count: int
    uptime_seconds: int


class HeraldBot(commands.Bot):
    """
    Per-guild welcome/goodbye notification bot.

    The store, router and dispatcher are attributes of the bot so cogs can
    reach them; tests can inject a memory-only store and a fake gateway.

    Args:
        settings: Full application settings
        store: Pre-built store (default: opened from settings.store.path in setup_hook)
        gateway: Outbound collaborator (default: DiscordGateway over this client)
    """

    def __init__(
        self,
        settings: Settings,
        store: ConfigStore | None = None,
        gateway: MessageGateway | None = None,
    ) -> None:
        intents = discord.Intents.default()
        intents.members = True  # Required for on_member_join / on_member_remove
        super().__init__(command_prefix=commands.when_mentioned, intents=intents)
        self.settings = settings
        self.store = store
        self.gateway = gateway
        self.router: CommandRouter | None = None
        self.dispatcher: EventDispatcher | None = None
        self._started_at = time.monotonic()
        self._exit_stack = AsyncExitStack()

    def build_services(self) -> None:
        """Create the store (if not injected), gateway, router and dispatcher."""
        if self.store is None:
            self.store = ConfigStore.open(self.settings.store.path)
        if self.gateway is None:
            self.gateway = DiscordGateway(self)
        self.router = CommandRouter(self.store, self.gateway)
        self.dispatcher = EventDispatcher(self.store, self.gateway)

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Builds services, loads cogs, starts the status server and syncs
        slash commands.
        """
        # --- 1. Store + core services ---
        self.build_services()
        logger.info(f"Config store ready ({len(self.store)} guild(s))")

        # --- 2. Load cogs ---
        from herald.bot.cogs.admin import AdminCog
        from herald.bot.cogs.members import MembersCog
        await self.add_cog(AdminCog(self))
        await self.add_cog(MembersCog(self))
        logger.info("Cogs loaded")

        # --- 3. Keep-alive status server ---
        if self.settings.status.enabled:
            await self.start_status_server()
        else:
            logger.info("Status server disabled")

        # --- 4. Sync slash commands ---
        try:
            if self.settings.bot.dev_guild_id:
                guild = discord.Object(id=self.settings.bot.dev_guild_id)
                self.tree.copy_global_to(guild=guild)
                await self.tree.sync(guild=guild)
                logger.info(f"Slash commands synced to dev guild {self.settings.bot.dev_guild_id} (instant)")
            else:
                await self.tree.sync()
                logger.info("Slash commands synced globally (may take up to 1 hour to propagate)")
        except discord.errors.Forbidden:
            logger.warning(
                "Could not sync slash commands (403 Forbidden). "
                "Re-invite the bot with both the 'bot' and 'applications.commands' scopes."
            )
        except Exception as e:
            logger.warning(f"Slash command sync failed: {e}. The bot will still start.")

    async def start_status_server(self) -> None:
        """Start the keep-alive server. A bind failure is logged, never fatal."""
        host, port = self.settings.status.host, self.settings.status.port
        server = StatusServer(self, host, port)
        try:
            await server.start()
        except OSError as e:
            logger.warning(f"Status server could not listen on {host}:{port}: {e}. The bot will still start.")
            await server.stop()
            return
        self._exit_stack.push_async_callback(server.stop)

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    def bot_status(self) -> BotStatus:
        ready = self.is_ready()
        return BotStatus(
            ready=ready,
            guild_count=len(self.guilds) if ready else 0,
            uptime_seconds=int(time.monotonic() - self._started_at),
        )

    async def close(self) -> None:
        """Graceful shutdown: stop the status server before disconnecting."""
        logger.info("Shutting down Herald...")
        await self._exit_stack.aclose()
        await super().close()
