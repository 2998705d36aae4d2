"""
Spellcheck Configuration Module
===============================
Engine tuning and dictionary locations.

Configuration can be set via:
1. Config file (spellcheck_config.json)
2. Environment variables (SPELLCHECK_MAIN_DICTIONARY=/usr/share/dict/words)

Environment variables override the file; the engine itself never reads either.
"""

import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from config_logging import get_logger

__version__ = "1.0.0"

logger = get_logger('spellcheck.config')

# Default configuration path
CONFIG_FILE = Path.cwd() / "spellcheck_config.json"

# Hard ceiling on suggestions returned for one word
SUGGESTION_CAP = 5


@dataclass
class SpellcheckConfig:
    """Spellcheck engine configuration."""
    main_dictionary: Optional[str] = None
    user_dictionary: Optional[str] = None
    encoding: str = "utf-8"
    comment_prefix: str = "#"
    max_word_length: int = 255
    max_suggestions: int = SUGGESTION_CAP
    max_edit_distance: int = 2
    candidate_limit: int = 10

    def __post_init__(self):
        self.max_suggestions = min(self.max_suggestions, SUGGESTION_CAP)


# Global configuration instance
_config: Optional[SpellcheckConfig] = None


def get_config() -> SpellcheckConfig:
    """Get the global spellcheck configuration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def load_config(path: Optional[Path] = None) -> SpellcheckConfig:
    """Load configuration from file and environment."""
    config = SpellcheckConfig()
    path = Path(path) if path else CONFIG_FILE

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load config file: {e}", path=str(path))

    _apply_env_to_config(config)
    config.max_suggestions = min(config.max_suggestions, SUGGESTION_CAP)

    return config


def _apply_dict_to_config(config: SpellcheckConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for key, value in data.items():
        if hasattr(config, key):
            setattr(config, key, value)


def _apply_env_to_config(config: SpellcheckConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'SPELLCHECK_MAIN_DICTIONARY': ('main_dictionary', str),
        'SPELLCHECK_USER_DICTIONARY': ('user_dictionary', str),
        'SPELLCHECK_ENCODING': ('encoding', str),
        'SPELLCHECK_MAX_WORD_LENGTH': ('max_word_length', int),
        'SPELLCHECK_MAX_SUGGESTIONS': ('max_suggestions', int),
        'SPELLCHECK_MAX_EDIT_DISTANCE': ('max_edit_distance', int),
        'SPELLCHECK_CANDIDATE_LIMIT': ('candidate_limit', int),
    }

    for env_var, (key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                setattr(config, key, converter(value))
            except ValueError as e:
                logger.warning(f"Invalid env var {env_var}={value}: {e}")


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = SpellcheckConfig()
