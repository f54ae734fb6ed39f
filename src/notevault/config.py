"""Configuration management for notevault.

This module contains all configurable constants for the vault engine.
Magic numbers are documented here rather than scattered throughout the codebase.
"""

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when a configuration file is present but unusable."""

    pass


# Environment variable naming the vault root (explicit override)
VAULT_PATH_ENV = "OBSIDIAN_VAULT_PATH"

# Project-level config file discovered by walking up from the working directory
PROJECT_CONFIG_FILENAME = ".vaultconfig"

# Maximum directories to walk up when looking for .vaultconfig.
# Prevents runaway traversal on deep or unusual filesystems.
MAX_CONFIG_SEARCH_DEPTH = 10


def default_vault_root() -> Path:
    """Fallback vault location when nothing else is configured."""
    return Path.home() / "documents" / "mobile vault"


def get_vault_root() -> Path:
    """Get the vault root directory.

    Resolved at call time so tests and long-running servers pick up changes.

    Discovery order:
    1. OBSIDIAN_VAULT_PATH environment variable (explicit override)
    2. Walk up from cwd looking for .vaultconfig with a vault_path field
    3. ~/documents/mobile vault

    Raises:
        ConfigurationError: If a .vaultconfig file exists but is not valid YAML.
    """
    root = os.environ.get(VAULT_PATH_ENV)
    if root:
        return Path(root).expanduser()

    project_vault = _discover_project_config()
    if project_vault:
        return project_vault

    return default_vault_root()


def _discover_project_config(
    start_dir: Path | None = None, max_depth: int = MAX_CONFIG_SEARCH_DEPTH
) -> Path | None:
    """Walk up from start_dir looking for .vaultconfig with vault_path.

    Args:
        start_dir: Directory to start from (defaults to cwd).
        max_depth: Maximum directories to traverse up.

    Returns:
        Resolved vault path if a config names an existing directory, None otherwise.
    """
    import yaml

    current = Path(start_dir or os.getcwd()).resolve()

    for _ in range(max_depth):
        config_file = current / PROJECT_CONFIG_FILENAME
        if config_file.is_file():
            try:
                data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid {config_file}: {e}") from e
            except OSError as e:
                log.warning("Could not read %s: %s", config_file, e)
                data = {}

            vault_path = data.get("vault_path") if isinstance(data, dict) else None
            if vault_path:
                candidate = (current / Path(str(vault_path)).expanduser()).resolve()
                if candidate.is_dir():
                    return candidate
                log.warning("%s names a missing vault: %s", config_file, candidate)

        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    return None


# =============================================================================
# Note Format
# =============================================================================

# Only files with this suffix are notes
NOTE_EXTENSION = ".md"

# Line that opens and closes a frontmatter block
FRONTMATTER_DELIMITER = "---"

# Frontmatter key stamped with the current time on every update
UPDATED_KEY = "updated"


# =============================================================================
# Query Limits
# =============================================================================

# Default number of results returned by search
DEFAULT_SEARCH_LIMIT = 10

# Default number of notes returned by a tag lookup
DEFAULT_TAG_LIMIT = 20

# Default number of notes returned by the recency listing
DEFAULT_RECENT_LIMIT = 10

# Default folder tree depth: the folder's own listing plus one level of children
DEFAULT_TREE_DEPTH = 2

# Content matches captured per note before moving on
MAX_MATCHES_PER_NOTE = 3

# Lines of context kept on each side of a matching line
MATCH_CONTEXT_LINES = 1
