"""
Guild configuration store.

Maps guild ids to their welcome/goodbye template records and keeps the
persisted JSON document in sync after every change.
"""

from herald.store.config_store import ConfigStore
from herald.store.models import EventKind, EventTemplate, GuildConfig, GuildConfigMap

__all__ = [
    "ConfigStore",
    "EventKind",
    "EventTemplate",
    "GuildConfig",
    "GuildConfigMap",
]
