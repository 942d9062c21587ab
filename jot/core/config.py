"""Configuration management for Jot.

Repository-local (.jot/config) and global (~/.jotconfig) settings are
INI files read with configparser. Environment variables override both.
"""

import configparser
import os
from pathlib import Path
from typing import Dict, Optional

DEFAULTS = {
    ('core', 'compression'): '-1',
    ('init', 'defaultbranch'): 'main',
}


class Config:
    """
    Manages Jot configuration files.

    Lookup order (highest first): JOT_<SECTION>_<KEY> environment
    variable, repository config, global config, built-in default,
    caller fallback.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.jotconfig'

    def __init__(self, repo_config_path: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = repo_config_path
        self.global_config_path = global_config_path or self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None

    @staticmethod
    def _read(path: Optional[Path]) -> configparser.ConfigParser:
        parser = configparser.ConfigParser()
        if path and Path(path).exists():
            parser.read(path)
        return parser

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._read(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            section: Config section (e.g., 'core', 'init')
            key: Config key (e.g., 'compression'); case-insensitive
            fallback: Value returned if nothing else supplies one

        Returns:
            Configuration value or fallback
        """
        key = key.lower()

        env_value = os.environ.get(f"JOT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return DEFAULTS.get((section, key), fallback)

    def get_int(self, section: str, key: str, fallback: Optional[int] = None) -> Optional[int]:
        """
        Get a configuration value as an integer.

        Raises:
            ValueError: If the stored value is not an integer
        """
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Config {section}.{key} must be an integer, got {value!r}")

    def _target(self, global_config: bool):
        if global_config:
            return self.global_config, self.global_config_path
        if not self.repo_config_path:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        config, config_path = self._target(global_config)

        if not config.has_section(section):
            config.add_section(section)
        config.set(section, key.lower(), value)

        with open(config_path, 'w') as f:
            config.write(f)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        config, config_path = self._target(global_config)
        key = key.lower()

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)
        if not config.options(section):
            config.remove_section(section)

        with open(config_path, 'w') as f:
            config.write(f)

        return True

    def list_all(self) -> Dict[str, str]:
        """
        List explicitly configured values as dotted keys.

        Repository values override global ones.
        """
        result = {}
        sources = [self.global_config]
        if self.repo_config:
            sources.append(self.repo_config)

        for parser in sources:
            for section in parser.sections():
                for key, value in parser.items(section):
                    result[f"{section}.{key}"] = value

        return dict(sorted(result.items()))


def split_key(dotted: str):
    """
    Split 'section.key' into its parts.

    Raises:
        ValueError: If dotted has no section
    """
    section, sep, key = dotted.partition('.')
    if not sep or not section or not key:
        raise ValueError(f"Key must be in section.name form: {dotted}")
    return section, key


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
