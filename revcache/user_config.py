"""Repository configuration management for revcache.

Handles reading and writing the .revcache/config.yaml file in each
repository. A missing or unreadable file means the defaults apply.
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


# Default configuration values
DEFAULT_CONFIG = {
    # Run diff-tree with -C, falling back to plain diff-tree if git fails
    "rename_detection": True,
    # Show untracked files in the working directory pseudo-commit
    "include_untracked": True,
    # Per-directory ignore file passed to git ls-files
    "exclude_per_directory": ".gitignore",
}


def get_config_dir(repo_root: Path) -> Path:
    """Get the repository config directory.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .revcache/
    """
    return repo_root / ".revcache"


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .revcache/config.yaml
    """
    return get_config_dir(repo_root) / "config.yaml"


def load_config(repo_root: Path) -> dict:
    """Load the revcache configuration from config.yaml.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Configuration dictionary, with defaults for any missing key.
    """
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_file, e)
        return DEFAULT_CONFIG.copy()

    if not isinstance(config, dict):
        logger.warning("Ignoring config %s: expected a mapping", config_file)
        return DEFAULT_CONFIG.copy()

    # Merge with defaults for any missing keys
    for key, value in DEFAULT_CONFIG.items():
        if key not in config:
            config[key] = value
    return config


def save_config(repo_root: Path, config: dict) -> None:
    """Save the configuration to config.yaml.

    Args:
        repo_root: The root directory of the git repository.
        config: Configuration dictionary to save.
    """
    config_file = get_config_file(repo_root)

    # Ensure directory exists
    config_file.parent.mkdir(exist_ok=True)

    with open(config_file, "w") as f:
        yaml.dump(
            config,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def set_config_value(repo_root: Path, key: str, value) -> None:
    """Set one configuration key and save.

    Args:
        repo_root: The root directory of the git repository.
        key: A key of DEFAULT_CONFIG.
        value: The new value.

    Raises:
        KeyError: If key is not a known configuration key.
    """
    if key not in DEFAULT_CONFIG:
        raise KeyError(key)
    config = load_config(repo_root)
    config[key] = value
    save_config(repo_root, config)
