"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from fixcsv.config import DEFAULT_CONFIG, EncoderConfig, get_default_config, load_config, load_config_file
from fixcsv.config.schema import EncoderConfigSchema
from fixcsv.errors import ConfigError


def test_defaults_match_model() -> None:
    assert get_default_config() == {
        "delimiter": "||",
        "strict": False,
        "tag_key": "fixcsv",
        "debug_logging": False,
    }
    assert load_config() == DEFAULT_CONFIG == EncoderConfig()


def test_overrides_are_applied() -> None:
    config = load_config({"delimiter": "|", "strict": "true"})
    assert config.delimiter == "|"
    assert config.strict is True
    assert config.delimiter_bytes == b"|"


def test_none_overrides_keep_defaults() -> None:
    assert load_config({"delimiter": None, "strict": None}) == DEFAULT_CONFIG


def test_debug_alias() -> None:
    assert load_config({"debug": True}).debug_logging is True


@pytest.mark.parametrize("delimiter", ["", "\n", "a\rb"])
def test_rejects_bad_delimiter(delimiter: str) -> None:
    with pytest.raises(ConfigError, match="delimiter"):
        load_config({"delimiter": delimiter})


def test_rejects_empty_tag_key() -> None:
    with pytest.raises(ConfigError, match="tag_key"):
        load_config({"tag_key": ""})


def test_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError, match="padding"):
        load_config({"padding": "left"})


def test_schema_builds_config() -> None:
    config = EncoderConfigSchema().load({"delimiter": ";"})
    assert isinstance(config, EncoderConfig)
    assert config.delimiter == ";"


def test_config_is_immutable_and_hashable() -> None:
    config = EncoderConfig(delimiter=";")
    with pytest.raises(AttributeError):
        config.delimiter = "|"  # type: ignore[misc]
    assert hash(config) == hash(EncoderConfig(delimiter=";"))


class TestConfigFile:
    def test_reads_table(self, tmp_path: Path) -> None:
        path = tmp_path / "fixcsv.toml"
        path.write_text('[fixcsv]\ndelimiter = "#"\nstrict = true\ndebug = true\n', encoding="utf-8")
        config = load_config_file(path)
        assert config == EncoderConfig(delimiter="#", strict=True, debug_logging=True)

    def test_missing_table_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "other.toml"
        path.write_text('[tool]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == DEFAULT_CONFIG

    def test_overrides_win(self, tmp_path: Path) -> None:
        path = tmp_path / "fixcsv.toml"
        path.write_text('[fixcsv]\ndelimiter = "#"\n', encoding="utf-8")
        assert load_config_file(path, {"delimiter": "@"}).delimiter == "@"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read"):
            load_config_file(tmp_path / "absent.toml")

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[fixcsv\ndelimiter = ", encoding="utf-8")
        with pytest.raises(ConfigError, match="malformed"):
            load_config_file(path)

    def test_table_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "scalar.toml"
        path.write_text("fixcsv = 3\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a table"):
            load_config_file(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "invalid.toml"
        path.write_text('[fixcsv]\ndelimiter = ""\n', encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(path)
