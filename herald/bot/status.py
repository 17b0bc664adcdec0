"""
Keep-alive / status HTTP endpoint.

Hosting platforms that idle a process without inbound traffic ping ``/``;
``/status`` reports readiness, guild count and uptime from HeraldBot.bot_status().

  GET /        -> "Bot is alive"
  GET /status  -> {"ready": ..., "guild_count": ..., "uptime_seconds": ...}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aiohttp import web

from herald.config.logging import get_logger

if TYPE_CHECKING:
    from herald.bot.client import HeraldBot

logger = get_logger(__name__)


class StatusServer:
    """aiohttp server exposing liveness and status."""

    def __init__(self, bot: HeraldBot, host: str = "0.0.0.0", port: int = 3000) -> None:
        self.bot = bot
        self.host = host
        self.port = port
        self.app = web.Application()
        self.app.router.add_get("/", self.handle_root)
        self.app.router.add_get("/status", self.handle_status)
        self.runner: web.AppRunner | None = None

    async def handle_root(self, request: web.Request) -> web.Response:
        return web.Response(text="Bot is alive")

    async def handle_status(self, request: web.Request) -> web.Response:
        return web.json_response(self.bot.bot_status().model_dump())

    async def start(self) -> None:
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        site = web.TCPSite(self.runner, self.host, self.port)
        await site.start()
        logger.info(f"Status server listening on {self.host}:{self.port}")

    async def stop(self) -> None:
        if self.runner is None:
            return
        await self.runner.cleanup()
        self.runner = None
        logger.info("Status server stopped")
