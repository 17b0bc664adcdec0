"""
ConfigStore: durable guild id → GuildConfig mapping.

The whole map is loaded into memory once at startup and the full document is
rewritten after every mutation (write-through). There is no partial write, no
transaction log and no delete operation.

All access happens on the bot's event loop, and ``set_template`` persists
and swaps in the new map without awaiting in between, so no lock is taken.
Two commands for the same guild can still interleave at their own await
points; with human-paced admin commands that is accepted.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from herald.config.logging import get_logger
from herald.store.models import EventKind, EventTemplate, GuildConfig, GuildConfigMap

logger = get_logger(__name__)


class ConfigStore:
    """
    In-memory guild configuration backed by a single JSON document.

    A store created with ``path=None`` never touches disk, which makes it a
    drop-in fake for tests.

    Args:
        path: Location of the persisted JSON document, or None for memory-only
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._guilds: GuildConfigMap = {}

    @classmethod
    def open(cls, path: str | Path | None) -> ConfigStore:
        """Create a store and load whatever state was previously persisted."""
        store = cls(path)
        store._guilds = store.load()
        logger.info(f"Loaded configuration for {len(store)} guild(s)")
        return store

    @property
    def path(self) -> Path | None:
        return self._path

    def load(self) -> GuildConfigMap:
        """
        Read the full persisted map.

        A missing file means first run. An unreadable or malformed file is
        logged and treated the same way; startup never fails here.

        Returns:
            Mapping of guild id to GuildConfig (possibly empty)
        """
        if self._path is None or not self._path.exists():
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {self._path}, starting empty: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"Ignoring {self._path}: expected a JSON object, got {type(raw).__name__}")
            return {}

        guilds: GuildConfigMap = {}
        for guild_id, entry in raw.items():
            try:
                guilds[str(guild_id)] = GuildConfig.model_validate(entry or {})
            except ValidationError as e:
                logger.warning(f"Skipping malformed config for guild {guild_id}: {e}")
        return guilds

    def save(self, guilds: GuildConfigMap | None = None) -> None:
        """
        Overwrite the persisted document with ``guilds`` (default: current state).

        The document is written to a temp file in the same directory and then
        swapped in with ``os.replace``, so readers never see a half-written file.
        """
        if guilds is None:
            guilds = self._guilds
        if self._path is None:
            return

        document = {guild_id: config.to_document() for guild_id, config in guilds.items()}

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved configuration for {len(guilds)} guild(s) to {self._path}")

    def get(self, guild_id: str) -> GuildConfig | None:
        return self._guilds.get(str(guild_id))

    def set_template(self, guild_id: str, kind: EventKind, template: EventTemplate) -> None:
        """
        Create or fully replace the ``kind`` template for a guild, then persist.

        The guild entry is created if this is its first configuration. The
        other slot is left untouched. If persisting fails the in-memory
        state is unchanged and the error propagates.
        """
        guild_id = str(guild_id)
        current = self._guilds.get(guild_id) or GuildConfig()
        updated = {**self._guilds, guild_id: current.with_template(kind, template)}
        self.save(updated)
        self._guilds = updated
        logger.info(f"Set {kind.value} template for guild {guild_id} -> channel {template.channel_id}")

    def guild_ids(self) -> list[str]:
        return list(self._guilds)

    def __len__(self) -> int:
        return len(self._guilds)
