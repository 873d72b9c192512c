"""Configuration loader module for the planners.

Reads the packaged ``default.yaml``, merges an optional user YAML file and in-code
overrides over it, and exposes the result through dot-notation paths such as
``config['movement.max_speed']``.
"""
import copy
from pathlib import Path

import yaml


class Config:
    """Configuration manager for the planners.

    Sections of the default config:
        movement: default movement profile of the agent.
        local_planner: expansion cap and excursion bound of the local search.
        rendezvous: calibration constants of the platform boarding computation.
        spatial: agent radius, ground probe length and obstacle tag used by walkability checks.
        logging: switches forwarded to the Logger.
    """
    def __init__(self, path: str = None, overrides: dict = None):
        """Initialize the config manager with default and user configs.

        Args:
            path: Optional path to a user config file. Values from this file are merged
                 over the default configuration.
            overrides: Optional nested dictionary merged last, mostly used by tests.

        Raises:
            FileNotFoundError: If the provided config path does not exist
            PermissionError: If the config file cannot be opened due to permission issues
        """
        default_path = Path(__file__).parent / 'default.yaml'
        config_path = Path(path) if path else default_path

        if path and not config_path.exists():
            raise FileNotFoundError(f'Config file not found: {config_path}')

        self.config = self._load_yaml(default_path, 'default')
        if config_path != default_path:
            self._merge_dicts(self.config, self._load_yaml(config_path, 'user'))
        if overrides:
            self._merge_dicts(self.config, copy.deepcopy(overrides))

    def get(self, key_path: str, default=None):
        """Get a configuration value by its dot-notation path.

        Args:
            key_path: Dot-notation path to the configuration value (e.g., 'rendezvous.min_wait').
            default: Value to return if the key is not found.

        Returns:
            The configuration value at the specified path, or the default value if not found.

        Raises:
            ValueError: If the key is not found and no default value is provided.
        """
        value = self.config
        for key in key_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                if default is not None:
                    return default
                raise ValueError(f'Key {key_path} not found in config')
            value = value[key]
        return value

    def set(self, key_path: str, value) -> None:
        """Set a configuration value, creating intermediate sections when needed.

        Args:
            key_path: Dot-notation path to the configuration value.
            value: New value.
        """
        *parents, leaf = key_path.split('.')
        section = self.config
        for key in parents:
            section = section.setdefault(key, {})
        section[leaf] = value

    def section(self, name: str) -> dict:
        """Return a copy of a whole top-level section.

        Raises:
            ValueError: If the section does not exist.
        """
        value = self.get(name)
        if not isinstance(value, dict):
            raise ValueError(f'Key {name} is not a config section')
        return dict(value)

    def __getitem__(self, key_path: str):
        """Access configuration values using dictionary-style syntax."""
        return self.get(key_path)

    def __contains__(self, key_path: str) -> bool:
        """Check whether a dot-notation path exists."""
        try:
            self.get(key_path)
        except ValueError:
            return False
        return True

    @staticmethod
    def _load_yaml(path: Path, label: str) -> dict:
        try:
            with open(path, 'r') as f:
                return yaml.safe_load(f) or {}
        except (PermissionError, IOError) as e:
            raise PermissionError(f'Cannot open {label} config file: {path}') from e

    def _merge_dicts(self, base, updates):
        """Recursively merge updates into base config.

        Args:
            base: Base dictionary to merge into.
            updates: Dictionary with updates to apply.
        """
        for k, v in updates.items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                self._merge_dicts(base[k], v)
            else:
                base[k] = v
