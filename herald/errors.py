"""
Exception hierarchy.

None of these are fatal to the process. The command router logs them as
warnings with their traceback and answers with a generic reply.
"""


class HeraldError(Exception):
    """Base class for errors raised by Herald."""


class ChannelUnavailableError(HeraldError):
    """A destination channel could not be resolved (deleted, hidden, or bad id)."""

    def __init__(self, channel_id: str):
        self.channel_id = channel_id
        super().__init__(f"Channel {channel_id} is unavailable")


class DeliveryError(HeraldError):
    """An outbound message send failed."""

    def __init__(self, channel_id: str, reason: str | None = None):
        self.channel_id = channel_id
        self.reason = reason
        super().__init__(f"Delivery to channel {channel_id} failed: {reason or 'unknown error'}")
