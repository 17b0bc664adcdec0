"""
Tests for the message renderer.

Covers:
- Placeholder substitution (every occurrence, single pass, no escaping)
- Per-kind title, thumbnail and default color
- Optional image omission in the payload and embed dict
- /announce payloads
"""

from herald.render.renderer import (
    GOODBYE_TITLE,
    WELCOME_TITLE,
    MessagePayload,
    RenderContext,
    render,
    render_announcement,
    substitute,
)
from herald.store.models import EventKind, EventTemplate


def _template(**overrides) -> EventTemplate:
    defaults = dict(channel_id="C1", message_template="Hi {user}, welcome to {server}!")
    defaults.update(overrides)
    return EventTemplate(**defaults)


def _context(**overrides) -> RenderContext:
    defaults = dict(mention_or_tag="<@123>", guild_name="Acme", avatar_url="https://cdn/avatar.png")
    defaults.update(overrides)
    return RenderContext(**defaults)


class TestSubstitute:
    def test_replaces_both_tokens(self):
        assert substitute("Hi {user}, welcome to {server}!", "<@123>", "Acme") == "Hi <@123>, welcome to Acme!"

    def test_replaces_every_occurrence(self):
        assert substitute("{user} {user} {server}{server}", "a", "b") == "a a bb"

    def test_no_tokens_is_unchanged(self):
        assert substitute("Hello there", "a", "b") == "Hello there"

    def test_values_are_not_rescanned(self):
        """A user literally named {server} is inserted as-is."""
        assert substitute("{user} joined {server}", "{server}", "Acme") == "{server} joined Acme"

    def test_other_braces_are_untouched(self):
        assert substitute("{users} {Server} {user}", "a", "b") == "{users} {Server} a"


class TestRenderWelcome:
    def test_description_is_substituted(self):
        payload = render(_template(), EventKind.WELCOME, _context())
        assert payload.description == "Hi <@123>, welcome to Acme!"

    def test_title_and_thumbnail(self):
        payload = render(_template(), EventKind.WELCOME, _context())
        assert payload.title == WELCOME_TITLE
        assert payload.thumbnail == "https://cdn/avatar.png"

    def test_missing_avatar_means_no_thumbnail(self):
        payload = render(_template(), EventKind.WELCOME, _context(avatar_url=None))
        assert "thumbnail" not in payload.to_dict()

    def test_color_from_template(self):
        payload = render(_template(color_hex="#112233"), EventKind.WELCOME, _context())
        assert payload.color == 0x112233

    def test_invalid_color_uses_welcome_default(self):
        payload = render(_template(color_hex="nothex"), EventKind.WELCOME, _context())
        assert payload.color == 0x00FF99


class TestRenderGoodbye:
    def test_title_and_no_thumbnail_even_with_avatar(self):
        payload = render(_template(), EventKind.GOODBYE, _context(mention_or_tag="alice"))
        assert payload.title == GOODBYE_TITLE
        assert payload.thumbnail is None
        assert payload.description == "Hi alice, welcome to Acme!"

    def test_absent_color_uses_goodbye_default(self):
        payload = render(_template(), EventKind.GOODBYE, _context())
        assert payload.color == 0xFF5555


class TestImage:
    def test_image_included_when_set(self):
        payload = render(_template(image_url="https://x/wave.gif"), EventKind.WELCOME, _context())
        assert payload.to_dict()["image"] == "https://x/wave.gif"
        assert payload.to_embed_dict()["image"] == {"url": "https://x/wave.gif"}

    def test_image_key_omitted_when_absent(self):
        payload = render(_template(), EventKind.GOODBYE, _context())
        assert "image" not in payload.to_dict()
        assert "image" not in payload.to_embed_dict()
        assert "thumbnail" not in payload.to_embed_dict()

    def test_render_does_not_mutate_template(self):
        template = _template(color_hex="bad")
        render(template, EventKind.WELCOME, _context())
        assert template.color_hex == "bad"
        assert template.message_template == "Hi {user}, welcome to {server}!"


class TestEmbedDict:
    def test_full_shape(self):
        payload = MessagePayload(
            title="t", description="d", color=0x010203, thumbnail="https://th", image="https://im"
        )
        assert payload.to_embed_dict() == {
            "title": "t",
            "description": "d",
            "color": 0x010203,
            "thumbnail": {"url": "https://th"},
            "image": {"url": "https://im"},
        }


class TestRenderAnnouncement:
    def test_fields_pass_through_without_substitution(self):
        payload = render_announcement("News {server}", "Hello {user}", "#abcdef", "https://i.png")
        assert payload.title == "News {server}"
        assert payload.description == "Hello {user}"
        assert payload.color == 0xABCDEF
        assert payload.image == "https://i.png"
        assert payload.thumbnail is None

    def test_default_color_and_no_image(self):
        payload = render_announcement("t", "d")
        assert payload.color == 0x5865F2
        assert payload.to_dict() == {"title": "t", "description": "d", "color": 0x5865F2}
