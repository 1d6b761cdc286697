"""Configuration management for Team Draw."""

import re
from pathlib import Path
from typing import Dict, List

import yaml


COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

DEFAULT_HEADER = "🚨 *TIMES SORTEADOS!* 🚨"
DEFAULT_SIGNATURE = "By Marquinhos & Luquinhas App ©"
DEFAULT_PALETTE: List[Dict[str, str]] = [
    {'name': 'red', 'color': '#EF4444', 'emoji': '🔴'},
    {'name': 'blue', 'color': '#3B82F6', 'emoji': '🔵'},
    {'name': 'yellow', 'color': '#EAB308', 'emoji': '🟡'},
    {'name': 'green', 'color': '#22C55E', 'emoji': '🟢'},
    {'name': 'pink', 'color': '#EC4899', 'emoji': '🌸'},
]


class Config:
    """Configuration class for team draw settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.team_size: int = 4
        self.min_teams: int = 2
        self.max_repeat: int = 2
        self.header: str = DEFAULT_HEADER
        self.signature: str = DEFAULT_SIGNATURE
        self.palette: List[Dict[str, str]] = [dict(entry) for entry in DEFAULT_PALETTE]

    @property
    def min_players(self) -> int:
        """Smallest roster for which a draw is offered."""
        return self.team_size * self.min_teams

    def load_from_file(self, config_path: Path) -> None:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML file is invalid
            ValueError: If the configuration structure is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a YAML dictionary")

        team_config = config_data.get('team', {})
        if not isinstance(team_config, dict):
            raise ValueError("team must be a dictionary")

        for key, attr in (('size', 'team_size'), ('min_teams', 'min_teams')):
            if key in team_config:
                value = team_config[key]
                if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                    raise ValueError(f"team.{key} must be a positive integer")
                setattr(self, attr, value)

        if 'max_repeat' in team_config:
            max_repeat = team_config['max_repeat']
            if not isinstance(max_repeat, int) or isinstance(max_repeat, bool) or max_repeat < 0:
                raise ValueError("team.max_repeat must be a non-negative integer")
            self.max_repeat = max_repeat

        export_config = config_data.get('export', {})
        if not isinstance(export_config, dict):
            raise ValueError("export must be a dictionary")

        for key in ('header', 'signature'):
            if key in export_config:
                if not isinstance(export_config[key], str):
                    raise ValueError(f"export.{key} must be a string")
                setattr(self, key, export_config[key])

        # Load palette
        if 'palette' in export_config:
            palette = export_config['palette']
            if not isinstance(palette, list):
                raise ValueError("export.palette must be a list")

            self.palette = []
            for entry in palette:
                if not isinstance(entry, dict) or 'color' not in entry:
                    raise ValueError("Each palette entry must be a mapping with a color")
                if not COLOR_RE.match(str(entry['color'])):
                    raise ValueError(f"Palette color must look like #RRGGBB, got {entry['color']!r}")
                self.palette.append({
                    'name': str(entry.get('name', entry['color'])),
                    'color': str(entry['color']),
                    'emoji': str(entry.get('emoji', '')),
                })

    def to_dict(self) -> dict:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        return {
            'team': {
                'size': self.team_size,
                'min_teams': self.min_teams,
                'max_repeat': self.max_repeat,
            },
            'export': {
                'header': self.header,
                'signature': self.signature,
                'palette': [dict(entry) for entry in self.palette],
            },
        }

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path where to save the configuration
        """
        config_dict = self.to_dict()

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=True, allow_unicode=True)
