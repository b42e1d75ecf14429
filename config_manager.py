"""Configuration management for the region-queens benchmark and CLI.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize benchmark settings, timeouts, solver selection and the bundled
puzzle maps.

File format (high-level)
------------------------
- experiment_settings: board sizes, run counts, base seed and output directory.
- timeout_settings: per-run backtracking limit and per-N experiment timeout.
- bt_solvers: list of solver labels to benchmark (e.g., ["first", "mcv"]).
- maps: mapping key -> {"name", "size", "regions"} (see regionqueens.puzzle).

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return benchmark settings (sizes, runs, seed, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_timeout_settings(self):
        """Return the backtracking and experiment timeout settings."""
        return self.config.get("timeout_settings", {})

    def get_solver_labels(self):
        """Return the list of backtracking solver labels to benchmark."""
        return self.config.get("bt_solvers", ["first", "mcv"])

    def get_maps(self):
        """Return the raw ``{"maps": {...}}`` section for the puzzle loader."""
        return {"maps": self.config.get("maps", {})}

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
