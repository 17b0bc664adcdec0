"""
Data structures for the guild configuration store.

- EventKind: which membership transition a template applies to
- EventTemplate: one persisted template record (channel, message, color, image)
- GuildConfig: the welcome/goodbye slots for a single guild

Field names are Pythonic; the aliases are the keys used in the persisted JSON
document (``channel``, ``message``, ``color``, ``gif``), which is what earlier
versions of the bot wrote.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """Membership lifecycle transition a template is attached to."""

    WELCOME = "welcome"
    GOODBYE = "goodbye"


class EventTemplate(BaseModel):
    """
    Template record for one event kind in one guild.

    ``color_hex`` is stored exactly as the administrator typed it, valid or
    not; it is resolved to a number at render time.

    Example:
        >>> EventTemplate(channel="1234", message="Hi {user}, welcome to {server}!")
    """

    channel_id: str = Field(alias="channel", description="Destination channel id")
    message_template: str = Field(
        alias="message", description="Message text with optional {user}/{server} tokens"
    )
    color_hex: str | None = Field(None, alias="color", description="Hex color, e.g. #00ff99")
    image_url: str | None = Field(None, alias="gif", description="GIF or image URL")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class GuildConfig(BaseModel):
    """
    Per-guild configuration: zero, one or two template slots.

    Slots are replaced wholesale; there is no per-field merge.
    """

    welcome: EventTemplate | None = None
    goodbye: EventTemplate | None = None

    model_config = ConfigDict(frozen=True)

    def slot(self, kind: EventKind) -> EventTemplate | None:
        """Return the template configured for ``kind``, if any."""
        return getattr(self, kind.value)

    def with_template(self, kind: EventKind, template: EventTemplate) -> "GuildConfig":
        """Return a copy with the ``kind`` slot replaced by ``template``."""
        return self.model_copy(update={kind.value: template})

    def to_document(self) -> dict:
        """Serialise to the persisted layout, omitting empty slots and fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


GuildConfigMap = dict[str, GuildConfig]
