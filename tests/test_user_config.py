"""Tests for revcache.user_config module."""

import pytest
import yaml

from revcache.user_config import (
    DEFAULT_CONFIG,
    get_config_file,
    load_config,
    save_config,
    set_config_value,
)


class TestGetConfigFile:
    """Tests for get_config_file function."""

    def test_returns_correct_path(self, temp_dir):
        """Test that correct config path is returned."""
        config_file = get_config_file(temp_dir)
        assert config_file.name == "config.yaml"
        assert config_file.parent.name == ".revcache"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_if_missing(self, temp_dir):
        """Test that defaults apply without creating a file."""
        config = load_config(temp_dir)

        assert config == DEFAULT_CONFIG
        assert not get_config_file(temp_dir).exists()

    def test_loads_existing_config(self, temp_dir):
        """Test loading existing config file."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump({"rename_detection": False}, f)

        config = load_config(temp_dir)
        assert config["rename_detection"] is False

    def test_merges_with_defaults(self, temp_dir):
        """Test that missing keys are filled from defaults."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump({"other_key": "value"}, f)

        config = load_config(temp_dir)
        assert config["other_key"] == "value"
        assert config["include_untracked"] is True
        assert config["exclude_per_directory"] == ".gitignore"

    def test_handles_corrupted_config(self, temp_dir):
        """Test handling corrupted config file."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text("invalid: yaml: content: [")

        assert load_config(temp_dir) == DEFAULT_CONFIG

    def test_handles_non_mapping(self, temp_dir):
        """Test that a YAML list is ignored."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text("- a\n- b\n")

        assert load_config(temp_dir) == DEFAULT_CONFIG

    def test_returns_copy(self, temp_dir):
        """Test that callers cannot modify the defaults."""
        config = load_config(temp_dir)
        config["rename_detection"] = False
        assert DEFAULT_CONFIG["rename_detection"] is True


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, temp_dir):
        """Test saving then loading."""
        save_config(temp_dir, {**DEFAULT_CONFIG, "exclude_per_directory": ".ignore"})

        assert get_config_file(temp_dir).exists()
        assert load_config(temp_dir)["exclude_per_directory"] == ".ignore"

    def test_keeps_key_order(self, temp_dir):
        """Test that keys are written in the given order."""
        save_config(temp_dir, DEFAULT_CONFIG)
        text = get_config_file(temp_dir).read_text()
        assert text.index("rename_detection") < text.index("include_untracked")


class TestSetConfigValue:
    """Tests for set_config_value function."""

    def test_sets_known_key(self, temp_dir):
        """Test updating one key."""
        set_config_value(temp_dir, "include_untracked", False)
        assert load_config(temp_dir)["include_untracked"] is False

    def test_rejects_unknown_key(self, temp_dir):
        """Test that unknown keys raise KeyError."""
        with pytest.raises(KeyError):
            set_config_value(temp_dir, "colour", "blue")
