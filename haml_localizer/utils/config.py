"""
Configuration Manager
====================

Extractor settings and their JSON persistence.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from haml_localizer.core.exceptions import ConfigError

DEFAULT_TRANSLATABLE_ATTRIBUTES = ["title", "alt", "placeholder", "aria-label"]


@dataclass
class ExtractorSettings:
    """Settings shared by the key namer, replacer and translation store."""
    i18n_scope: str = "en"
    # Absolute keys carrying the template location instead of t('.key')
    add_filename_prefix: bool = False
    # Stripped from template paths when building prefixes and locale folders
    base_path: str = ""
    # Target locale document; derived from the scope when empty
    locale_file: str = ""
    max_key_length: int = 40
    translatable_attributes: List[str] = field(
        default_factory=lambda: list(DEFAULT_TRANSLATABLE_ATTRIBUTES)
    )
    # Indentation of the written locale document
    indent: int = 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractorSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown extractor settings: {', '.join(sorted(unknown))}")
        return cls(**data)


class ConfigManager:
    """Manages extractor configuration."""

    SECTION = "extractor_settings"

    def __init__(self, config_file: str = "haml_localizer.json"):
        self.logger = logging.getLogger(__name__)
        self.config_file = Path(config_file)
        self.extractor_settings = ExtractorSettings()

        self.load_config()

    def load_config(self) -> bool:
        """Load configuration from file; defaults are kept when it is missing."""
        if not self.config_file.exists():
            self.logger.info("Config file doesn't exist, using defaults")
            return False

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file {self.config_file}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"Config file {self.config_file} must hold a JSON object")

        if self.SECTION in config_data:
            section = config_data[self.SECTION]
            if not isinstance(section, dict):
                raise ConfigError(f"'{self.SECTION}' must be a JSON object")
            self.extractor_settings = ExtractorSettings.from_dict(section)

        self.logger.info("Configuration loaded successfully")
        return True

    def save_config(self, path: Optional[str] = None) -> Path:
        """Save configuration to file."""
        target = Path(path) if path else self.config_file
        config_data = {self.SECTION: asdict(self.extractor_settings)}

        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(config_data, f, indent=2, ensure_ascii=False)

        self.logger.info(f"Configuration saved to {target}")
        return target
