"""Configuration management for the journal reader and CLI."""

import json
import os
import yaml
from dataclasses import asdict
from typing import Dict, Any, Optional
import logging

from ..models.core import ParserConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages loading and validation of parser configuration"""

    SEARCH_PATHS = [
        'ledger_parser.json',
        'ledger_parser.yml',
        'ledger_parser.yaml',
        'config/ledger_parser.json',
        'config/ledger_parser.yml',
        'config/ledger_parser.yaml',
        '~/.ledger_parser/config.json',
        '~/.ledger_parser/config.yml',
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
        """
        self.config_path = config_path
        self._config_cache: Optional[ParserConfig] = None

    def load_config(self, force_reload: bool = False) -> ParserConfig:
        """Load parser configuration from file or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            ParserConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config_data = self._load_config_file()
        defaults = ParserConfig()

        self._config_cache = ParserConfig(
            journal_extensions=config_data.get('journal_extensions'),
            encoding=config_data.get('encoding', defaults.encoding),
            skip_invalid_entries=config_data.get('skip_invalid_entries', defaults.skip_invalid_entries),
            log_directory=config_data.get('log_directory', defaults.log_directory),
            export_directory=config_data.get('export_directory', defaults.export_directory),
        )
        logger.info(f"Configuration loaded from {self._find_config_file() or 'defaults'}")
        return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no file found
        """
        config_file = self._find_config_file()

        if not config_file or not os.path.exists(config_file):
            logger.info("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    return {}

            self._validate_config_data(data)
            return data

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Error reading configuration file {config_file}: {e}. Using defaults.")
            return {}

    def _find_config_file(self) -> Optional[str]:
        if self.config_path:
            return self.config_path

        for path in self.SEARCH_PATHS:
            path = os.path.expanduser(path)
            if os.path.exists(path):
                return path

        return None

    def _validate_config_data(self, data: Dict[str, Any]) -> None:
        """Validate configuration data structure

        Args:
            data: Configuration data to validate

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        for str_key in ['encoding', 'log_directory', 'export_directory']:
            if str_key in data:
                if not isinstance(data[str_key], str):
                    raise ValueError(f"{str_key} must be a string")
                if not data[str_key].strip():
                    raise ValueError(f"{str_key} cannot be empty")

        if 'skip_invalid_entries' in data and not isinstance(data['skip_invalid_entries'], bool):
            raise ValueError("skip_invalid_entries must be a boolean")

        if 'journal_extensions' in data:
            extensions = data['journal_extensions']
            if not isinstance(extensions, list):
                raise ValueError("journal_extensions must be a list")
            for ext in extensions:
                if not isinstance(ext, str) or not ext.startswith('.'):
                    raise ValueError("Journal extensions must be strings starting with '.'")

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        template = asdict(ParserConfig())

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if output_path.endswith(('.yml', '.yaml')):
                yaml.dump(template, f, default_flow_style=False, indent=2)
            else:
                json.dump(template, f, indent=2)

        logger.info(f"Configuration template saved to {output_path}")

    def update_config(self, updates: Dict[str, Any]) -> None:
        """Update configuration with new values

        Args:
            updates: Dictionary of configuration updates
        """
        if self._config_cache is None:
            self.load_config()

        for key, value in updates.items():
            if hasattr(self._config_cache, key):
                setattr(self._config_cache, key, value)
                logger.debug(f"Updated configuration: {key} = {value}")
            else:
                logger.warning(f"Unknown configuration key: {key}")

    def reset_config(self) -> None:
        """Reset configuration cache, forcing reload on next access"""
        self._config_cache = None
        logger.debug("Configuration cache reset")


def get_default_config_manager() -> ConfigManager:
    """Get a default configuration manager instance"""
    return ConfigManager()
