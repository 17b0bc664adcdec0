"""
Normalization of user-supplied styling fields.

Nothing here rejects input: a color that doesn't parse resolves to the
caller's default.
"""

from __future__ import annotations

from herald.store.models import EventKind

MAX_COLOR = 0xFFFFFF

DEFAULT_COLORS: dict[EventKind, str] = {
    EventKind.WELCOME: "#00ff99",
    EventKind.GOODBYE: "#ff5555",
}

# Discord blurple, used by /announce when no color is given
ANNOUNCE_COLOR = "#5865f2"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _parse_hex(value: str | None) -> int | None:
    if not value:
        return None
    digits = value.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if not digits or not set(digits) <= _HEX_DIGITS:
        return None
    number = int(digits, 16)
    if number > MAX_COLOR:
        return None
    return number


def normalize_color(value: str | None, default: str) -> int:
    """
    Resolve a hex color string to a 24-bit integer.

    A single leading ``#`` is optional, so ``"00ff99"`` and ``"#00ff99"`` are
    equivalent. Absent, empty, non-hex or out-of-range input resolves to
    ``default`` instead.

    Args:
        value: Color as supplied by the user (may be None)
        default: Fallback hex color; must itself be valid

    Returns:
        Color as an integer in ``0..0xFFFFFF``

    Raises:
        ValueError: If ``default`` is not a valid color (a programming error)
    """
    parsed = _parse_hex(value)
    if parsed is not None:
        return parsed

    fallback = _parse_hex(default)
    if fallback is None:
        raise ValueError(f"Invalid default color: {default!r}")
    return fallback


def normalize_image(value: str | None) -> str | None:
    """Pass any non-empty image URL through unchanged; empty means no image."""
    return value or None
