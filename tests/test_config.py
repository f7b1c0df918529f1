"""
Tests for configuration loading and the key:value file format
"""

import os

import pytest

from cmdbot.config import (
    BotConfig,
    DynamicCommandStore,
    load_config,
    parse_key_value_text,
    read_key_value_file,
    write_key_value_file,
)
from cmdbot.errors.internal import ConfigError


class TestKeyValueFormat:
    def test_split_on_first_colon(self):
        text = "pass:oauth:abc\nnick:bot\n"
        assert parse_key_value_text(text) == {"pass": "oauth:abc", "nick": "bot"}

    def test_blank_and_invalid_lines_skipped(self, caplog):
        text = "\n\nnot a pair\na:1\r\n"
        assert parse_key_value_text(text, source="x.ini") == {"a": "1"}
        assert any("x.ini" in r.getMessage() for r in caplog.records)

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "cmds.ini"
        write_key_value_file(path, {"b": "two words", "a": "x:y"})
        assert path.read_text(encoding="utf-8") == "b:two words\na:x:y\n"
        assert read_key_value_file(path) == {"b": "two words", "a": "x:y"}

    def test_only_newline_separates_entries(self):
        text = "a:one\u2028two\r\nb:three\x0cfour\n"
        assert parse_key_value_text(text) == {"a": "one\u2028two", "b": "three\x0cfour"}

    def test_write_keeps_backup(self, tmp_path):
        path = tmp_path / "cmds.ini"
        write_key_value_file(path, {"a": "1"})
        write_key_value_file(path, {"a": "2"})
        assert (tmp_path / "cmds.ini.bak").read_text(encoding="utf-8") == "a:1\n"
        assert not [p for p in os.listdir(tmp_path) if p.endswith(".tmp")]


class TestLoadConfig:
    def _write(self, tmp_path, text):
        path = tmp_path / "config.ini"
        path.write_text(text, encoding="utf-8")
        return path

    def test_valid_config_normalized(self, tmp_path):
        path = self._write(tmp_path, "nick:MyBot\npass:abc123\nchannel:SomeChannel\n")
        config = load_config(path)
        assert config == BotConfig(nick="mybot", password="oauth:abc123", channel="#somechannel")

    def test_oauth_prefix_kept(self, tmp_path):
        path = self._write(tmp_path, "nick:bot\npass:oauth:abc\nchannel:#room\n")
        config = load_config(path)
        assert config.password == "oauth:abc"
        assert config.channel == "#room"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="No configuration file"):
            load_config(tmp_path / "absent.ini")

    @pytest.mark.parametrize("missing", ["nick", "pass", "channel"])
    def test_missing_key(self, tmp_path, missing):
        entries = {"nick": "bot", "pass": "abc", "channel": "#room"}
        del entries[missing]
        path = tmp_path / "config.ini"
        write_key_value_file(path, entries)
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.data["key"] == missing

    def test_blank_channel_rejected(self, tmp_path):
        path = self._write(tmp_path, "nick:bot\npass:abc\nchannel:#\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)


class TestDynamicCommandStore:
    def test_load_creates_missing_file(self, tmp_path):
        store = DynamicCommandStore(tmp_path / "dynamic_cmds.ini")
        store.load()
        assert len(store) == 0
        assert (tmp_path / "dynamic_cmds.ini").exists()

    def test_load_existing(self, tmp_path):
        path = tmp_path / "dynamic_cmds.ini"
        path.write_text("discord:Join us: example.org\n", encoding="utf-8")
        store = DynamicCommandStore(path)
        store.load()
        assert store.get("discord") == "Join us: example.org"
        assert store.names() == ["discord"]

    def test_put_validates(self, tmp_path):
        store = DynamicCommandStore(tmp_path / "c.ini")
        with pytest.raises(ValueError):
            store.put("a:b", "x")
        with pytest.raises(ValueError):
            store.put("name", "two\nlines")
        with pytest.raises(ValueError):
            store.put("", "x")

    def test_remove(self, tmp_path):
        store = DynamicCommandStore(tmp_path / "c.ini")
        store.put("a", "1")
        assert store.remove("a") is True
        assert store.remove("a") is False

    @pytest.mark.asyncio
    async def test_async_save_persists(self, tmp_path):
        path = tmp_path / "c.ini"
        store = DynamicCommandStore(path)
        store.put("a", "1")
        store.put("b", "two words")
        await store.async_save()

        reloaded = DynamicCommandStore(path)
        reloaded.load()
        assert list(reloaded) == ["a", "b"]
        assert reloaded.get("b") == "two words"

    @pytest.mark.parametrize("reply", ["first\u2028second", "a\x85b", "a\x0cb", "a\x1eb", "ends\n"])
    def test_reply_with_line_boundary_rejected(self, tmp_path, reply):
        store = DynamicCommandStore(tmp_path / "c.ini")
        with pytest.raises(ValueError):
            store.put("x", reply)
        with pytest.raises(ValueError):
            store.put(f"x{reply}", "ok")

    def test_unicode_separators_survive_reload(self, tmp_path):
        path = tmp_path / "c.ini"
        write_key_value_file(path, {"x": "first\u2028second\x85third"})
        store = DynamicCommandStore(path)
        store.load()
        assert store.get("x") == "first\u2028second\x85third"
        assert store.names() == ["x"]
