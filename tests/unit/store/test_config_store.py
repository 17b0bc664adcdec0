"""
Tests for ConfigStore.

Covers:
- load(): first run, malformed files, null/missing optional fields
- set_template(): exact replacement, slot independence, write-through
- save(): full-document overwrite, memory-only mode
"""

import json
import logging

import pytest

from herald.store import ConfigStore, EventKind, EventTemplate


def _template(**overrides) -> EventTemplate:
    defaults = dict(channel_id="C1", message_template="Welcome {user}")
    defaults.update(overrides)
    return EventTemplate(**defaults)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "welcomeConfig.json"


class TestLoad:
    def test_missing_file_is_empty(self, store_path):
        assert ConfigStore(store_path).load() == {}

    def test_memory_only_store_is_empty(self):
        assert ConfigStore().load() == {}

    def test_malformed_json_starts_empty(self, store_path, caplog):
        store_path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="herald"):
            store = ConfigStore.open(store_path)
        assert len(store) == 0
        assert "starting empty" in caplog.text

    def test_non_object_document_starts_empty(self, store_path):
        store_path.write_text("[1, 2, 3]")
        assert ConfigStore(store_path).load() == {}

    def test_malformed_guild_entry_is_skipped(self, store_path):
        store_path.write_text(json.dumps({
            "G1": {"welcome": {"channel": "C1", "message": "hi"}},
            "G2": {"welcome": {"message": "missing channel"}},
        }))
        guilds = ConfigStore(store_path).load()
        assert list(guilds) == ["G1"]

    def test_reads_legacy_layout_with_null_gif(self, store_path):
        store_path.write_text(json.dumps({
            "123": {
                "welcome": {"channel": "456", "message": "Hi {user}", "color": "#00ff99", "gif": None},
            }
        }))
        store = ConfigStore.open(store_path)
        welcome = store.get("123").slot(EventKind.WELCOME)
        assert welcome.channel_id == "456"
        assert welcome.image_url is None
        assert store.get("123").slot(EventKind.GOODBYE) is None


class TestSetTemplate:
    def test_get_returns_exactly_what_was_set(self):
        store = ConfigStore()
        template = _template(color_hex="#123456", image_url="https://a.gif")
        store.set_template("G1", EventKind.WELCOME, template)
        assert store.get("G1").slot(EventKind.WELCOME) == template

    def test_second_set_replaces_without_merge(self):
        store = ConfigStore()
        store.set_template("G1", EventKind.WELCOME, _template(color_hex="#123456", image_url="https://a.gif"))
        replacement = _template(channel_id="C2", message_template="Yo")
        store.set_template("G1", EventKind.WELCOME, replacement)
        assert store.get("G1").slot(EventKind.WELCOME) == replacement

    def test_slots_are_independent(self):
        store = ConfigStore()
        goodbye = _template(channel_id="C9", message_template="Bye {user}")
        store.set_template("G1", EventKind.GOODBYE, goodbye)
        store.set_template("G1", EventKind.WELCOME, _template())
        store.set_template("G1", EventKind.WELCOME, _template(channel_id="C3"))
        assert store.get("G1").slot(EventKind.GOODBYE) == goodbye

    def test_guilds_are_independent(self):
        store = ConfigStore()
        store.set_template("G1", EventKind.WELCOME, _template())
        assert store.get("G2") is None
        assert store.guild_ids() == ["G1"]

    def test_guild_ids_are_normalised_to_strings(self):
        store = ConfigStore()
        store.set_template(123, EventKind.WELCOME, _template())
        assert store.get("123") is not None
        assert store.get(123) is not None

    def test_writes_through_to_disk(self, store_path):
        store = ConfigStore(store_path)
        store.set_template("G1", EventKind.WELCOME, _template(color_hex="#112233"))

        document = json.loads(store_path.read_text())
        assert document == {
            "G1": {"welcome": {"channel": "C1", "message": "Welcome {user}", "color": "#112233"}}
        }

    def test_persistence_round_trip(self, store_path):
        first = ConfigStore(store_path)
        welcome = _template()
        goodbye = _template(channel_id="C2", message_template="Bye", image_url="https://b.gif")
        first.set_template("G1", EventKind.WELCOME, welcome)
        first.set_template("G1", EventKind.GOODBYE, goodbye)

        reopened = ConfigStore.open(store_path)

        assert reopened.get("G1").slot(EventKind.WELCOME) == welcome
        assert reopened.get("G1").slot(EventKind.GOODBYE) == goodbye
        # No spurious image appears after the round trip
        assert reopened.get("G1").slot(EventKind.WELCOME).image_url is None

    def test_failed_save_leaves_memory_unchanged(self, tmp_path):
        # A directory at the store path makes the final replace fail
        path = tmp_path / "welcomeConfig.json"
        path.mkdir()
        store = ConfigStore(path)

        with pytest.raises(OSError):
            store.set_template("G1", EventKind.WELCOME, _template())

        assert store.get("G1") is None
        assert len(store) == 0

    def test_failed_save_keeps_previous_template(self, store_path, monkeypatch):
        store = ConfigStore(store_path)
        original = _template()
        store.set_template("G1", EventKind.WELCOME, original)

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("herald.store.config_store.os.replace", fail_replace)
        with pytest.raises(OSError, match="disk full"):
            store.set_template("G1", EventKind.WELCOME, _template(message_template="changed"))

        assert store.get("G1").slot(EventKind.WELCOME) == original


class TestSave:
    def test_save_overwrites_whole_document(self, store_path):
        store_path.write_text(json.dumps({"stale": {"welcome": {"channel": "x", "message": "y"}}}))
        store = ConfigStore(store_path)
        store.set_template("G1", EventKind.WELCOME, _template())
        assert list(json.loads(store_path.read_text())) == ["G1"]

    def test_save_leaves_no_temp_files(self, store_path):
        store = ConfigStore(store_path)
        store.set_template("G1", EventKind.WELCOME, _template())
        assert [p.name for p in store_path.parent.iterdir()] == [store_path.name]

    def test_save_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        ConfigStore(path).set_template("G1", EventKind.WELCOME, _template())
        assert path.exists()

    def test_memory_only_store_never_writes(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        ConfigStore().set_template("G1", EventKind.WELCOME, _template())
        assert list(tmp_path.iterdir()) == []
