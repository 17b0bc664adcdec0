"""
Discord Bot Layer.

Wires the guild configuration store and renderer into discord.py: slash
commands go through the CommandRouter, member join/leave events through the
EventDispatcher, and every outbound message through a MessageGateway.
"""

from herald.bot.client import BotStatus, HeraldBot
from herald.bot.dispatcher import EventDispatcher, MemberEvent
from herald.bot.gateway import DiscordGateway, MessageGateway, SendResult
from herald.bot.router import AnnounceArgs, CommandRouter, Responder, TemplateArgs

__all__ = [
    "AnnounceArgs",
    "BotStatus",
    "CommandRouter",
    "DiscordGateway",
    "EventDispatcher",
    "HeraldBot",
    "MemberEvent",
    "MessageGateway",
    "Responder",
    "SendResult",
    "TemplateArgs",
]
