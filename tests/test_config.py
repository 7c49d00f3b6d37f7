"""Tests for loading and saving the TOML configuration."""

import pytest

from panekit.config import Config, load_config, save_config
from panekit.geometry import Direction
from panekit.layout import Leaf, Split
from panekit.models import PaneView


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PANEKIT_DEFAULT_PROFILE", "PANEKIT_DEBUG_LOGGING", "PANEKIT_RESTORE_LAYOUTS"):
        monkeypatch.delenv(name, raising=False)


WIDE_TOML = """
default_profile = "wide"
debug_logging = true

[profiles.wide]
split = "horizontal"
ratio = [1, 1]

[profiles.wide.first]
view = "terminal"
focused = true

[profiles.wide.second]
view = "source"
"""


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")
        assert config == Config()
        assert config.default_profile == "small"
        assert config.restore_layouts is True

    def test_reads_profiles(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(WIDE_TOML)
        config = load_config(path)
        assert config.default_profile == "wide"
        assert config.debug_logging is True
        assert config.profiles == {
            "wide": Split(Direction.HORIZONTAL, (1, 1), Leaf(PaneView.TERMINAL, focused=True), Leaf(PaneView.SOURCE)),
        }

    def test_invalid_profiles_are_skipped(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[profiles.bad]\nsplit = "diagonal"\n\n'
            '[profiles.small]\nview = "source"\n\n'
            '[profiles.ok]\nview = "trace"\n'
        )
        config = load_config(path)
        assert config.profiles == {"ok": Leaf(PaneView.TRACE)}

    def test_broken_toml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("default_profile = [unterminated")
        assert load_config(path) == Config()

    def test_profiles_not_a_table(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('profiles = "oops"\ndebug_logging = true\n')
        config = load_config(path)
        assert config.profiles == {}
        assert config.debug_logging is True

    def test_mistyped_scalars_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('default_profile = 3\nrestore_layouts = "no"\ndebug_logging = 1\n')
        assert load_config(path) == Config()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text(WIDE_TOML)
        monkeypatch.setenv("PANEKIT_DEFAULT_PROFILE", "large")
        monkeypatch.setenv("PANEKIT_DEBUG_LOGGING", "0")
        monkeypatch.setenv("PANEKIT_RESTORE_LAYOUTS", "no")
        config = load_config(path)
        assert config.default_profile == "large"
        assert config.debug_logging is False
        assert config.restore_layouts is False


class TestSaveConfig:
    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "config.toml"
        config = Config(
            default_profile="mine",
            debug_logging=True,
            restore_layouts=False,
            profiles={"mine": Split(Direction.VERTICAL, (2, 1), Leaf(PaneView.SOURCE), Leaf("disassembly"))},
        )
        save_config(config, path)
        assert load_config(path) == config

    def test_no_profiles_table_when_empty(self, tmp_path):
        path = tmp_path / "config.toml"
        save_config(Config(), path)
        assert "profiles" not in path.read_text()
