"""
CommandRouter: administrative commands → store mutations or direct sends.

Commands:
  - ping                      reply with online status, no state access
  - setwelcome / setgoodbye   upsert the guild's template for that event kind
  - announce                  render and send a one-shot message right away;
                              never reads or writes the store

The router never sees Discord's option bag. The cog adapter builds a typed
argument model per command and hands the router a Responder for replies.

Any exception while handling a command stops at handle(): it is logged with
its traceback and, if nothing has been replied yet, the user gets a generic
acknowledgment with no error detail.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

import discord
from pydantic import BaseModel, ConfigDict

from herald.bot.gateway import MessageGateway
from herald.config.logging import get_logger
from herald.errors import ChannelUnavailableError, DeliveryError, HeraldError
from herald.render.renderer import render_announcement
from herald.store import ConfigStore, EventKind, EventTemplate

logger = get_logger(__name__)

PING_REPLY = "🟢 Bot online"
ANNOUNCE_REPLY = "📣 Announcement sent!"
ERROR_REPLY = "⚠️ Error handled safely"
SET_REPLIES: dict[EventKind, str] = {
    EventKind.WELCOME: "✅ Welcome message set!",
    EventKind.GOODBYE: "✅ Goodbye message set!",
}


class TemplateArgs(BaseModel):
    """Arguments for /setwelcome and /setgoodbye."""

    channel_id: str
    message: str
    color: str | None = None
    gif: str | None = None

    model_config = ConfigDict(frozen=True)


class AnnounceArgs(BaseModel):
    """Arguments for /announce."""

    channel_id: str
    title: str
    description: str
    color: str | None = None
    image: str | None = None

    model_config = ConfigDict(frozen=True)


CommandArgs = TemplateArgs | AnnounceArgs | None


class Responder(ABC):
    """Reply channel back to whoever invoked a command."""

    @property
    @abstractmethod
    def replied(self) -> bool:
        """True once a reply has been sent for this invocation."""

    @abstractmethod
    async def reply(self, text: str) -> None:
        """Send ``text`` back to the invoking user."""


class InteractionResponder(Responder):
    """Responder for a discord.py slash-command interaction."""

    def __init__(self, interaction: discord.Interaction, ephemeral: bool = False) -> None:
        self._interaction = interaction
        self._ephemeral = ephemeral

    @property
    def replied(self) -> bool:
        return self._interaction.response.is_done()

    async def reply(self, text: str) -> None:
        await self._interaction.response.send_message(text, ephemeral=self._ephemeral)


Handler = Callable[[str, CommandArgs, Responder], Awaitable[None]]


class CommandRouter:
    """
    Dispatches named commands for one guild at a time.

    Args:
        store: Guild configuration store shared with the EventDispatcher
        gateway: Outbound collaborator used by /announce
    """

    def __init__(self, store: ConfigStore, gateway: MessageGateway) -> None:
        self._store = store
        self._gateway = gateway
        self._handlers: dict[str, Handler] = {
            "ping": self._ping,
            "setwelcome": self._set_welcome,
            "setgoodbye": self._set_goodbye,
            "announce": self._announce,
        }

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    async def handle(
        self,
        name: str,
        guild_id: str | None,
        args: CommandArgs,
        responder: Responder,
    ) -> None:
        """
        Run command ``name``. Unknown names are ignored without a reply.

        Never raises: failures are logged and, when possible, answered with
        a generic acknowledgment.
        """
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug(f"Ignoring unknown command {name!r}")
            return

        try:
            await handler(str(guild_id) if guild_id is not None else None, args, responder)
        except HeraldError as e:
            logger.warning(f"/{name} failed in guild {guild_id}: {e}", exc_info=True)
            await self._fallback_reply(name, responder)
        except Exception as e:
            logger.exception(f"Unexpected error handling /{name} in guild {guild_id}: {e}")
            await self._fallback_reply(name, responder)

    async def _fallback_reply(self, name: str, responder: Responder) -> None:
        if responder.replied:
            return
        try:
            await responder.reply(ERROR_REPLY)
        except Exception as e:
            logger.warning(f"Could not send error acknowledgment for /{name}: {e}")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _ping(self, guild_id: str | None, args: CommandArgs, responder: Responder) -> None:
        await responder.reply(PING_REPLY)

    async def _set_welcome(self, guild_id: str | None, args: CommandArgs, responder: Responder) -> None:
        await self._set_template(EventKind.WELCOME, guild_id, args, responder)

    async def _set_goodbye(self, guild_id: str | None, args: CommandArgs, responder: Responder) -> None:
        await self._set_template(EventKind.GOODBYE, guild_id, args, responder)

    async def _set_template(
        self,
        kind: EventKind,
        guild_id: str | None,
        args: CommandArgs,
        responder: Responder,
    ) -> None:
        if guild_id is None:
            raise HeraldError(f"set{kind.value} used outside a guild")
        if not isinstance(args, TemplateArgs):
            raise TypeError(f"set{kind.value} expects TemplateArgs, got {type(args).__name__}")

        template = EventTemplate(
            channel_id=args.channel_id,
            message_template=args.message,
            color_hex=args.color,
            image_url=args.gif,
        )
        self._store.set_template(guild_id, kind, template)
        await responder.reply(SET_REPLIES[kind])

    async def _announce(self, guild_id: str | None, args: CommandArgs, responder: Responder) -> None:
        if guild_id is None:
            raise HeraldError("announce used outside a guild")
        if not isinstance(args, AnnounceArgs):
            raise TypeError(f"announce expects AnnounceArgs, got {type(args).__name__}")

        channel = await self._gateway.resolve_channel(guild_id, args.channel_id)
        if channel is None:
            raise ChannelUnavailableError(args.channel_id)

        payload = render_announcement(args.title, args.description, args.color, args.image)
        result = await self._gateway.send(channel, payload)
        if not result.ok:
            raise DeliveryError(args.channel_id, result.reason)

        logger.info(f"Announcement sent to channel {args.channel_id} in guild {guild_id}")
        await responder.reply(ANNOUNCE_REPLY)
