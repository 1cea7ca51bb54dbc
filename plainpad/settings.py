"""Persisted editor defaults.

Defaults live in a JSON file in the user's config directory and are
overridden by command line flags. A missing or broken file never stops
the editor from starting; problems are logged and defaults are used.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "plainpad"


@dataclass
class Settings:
    page_size: int = EditorConstants.DEFAULT_PAGE_SIZE
    trim_whitespace: bool = True


def config_dir() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME))


def log_dir() -> Path:
    return Path(platformdirs.user_log_dir(APP_NAME))


def validate_setting(key: str, value: Any) -> bool:
    """Check a single setting value.

    Unknown keys are rejected so typos show up in the log.
    """
    if key == 'page_size':
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1
    if key == 'trim_whitespace':
        return isinstance(value, bool)
    return False


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings, falling back to defaults for anything missing or invalid.

    Args:
        path: Settings file; defaults to settings.json in the config directory

    Returns:
        Settings instance
    """
    settings_file = path or config_dir() / "settings.json"
    settings = Settings()
    if not settings_file.exists():
        return settings

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return settings

    for key, value in data.items():
        if validate_setting(key, value):
            setattr(settings, key, value)
        else:
            logger.warning(f"Ignoring invalid setting {key}={value!r}")
    return settings


def save_settings(settings: Settings, path: Optional[Path] = None) -> bool:
    """Save settings atomically.

    Returns:
        True if save was successful, False otherwise.
    """
    settings_file = path or config_dir() / "settings.json"
    temp_file = settings_file.with_suffix('.tmp')
    data: Dict[str, Any] = asdict(settings)
    try:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        temp_file.replace(settings_file)
        return True
    except OSError as e:
        logger.warning(f"Could not save settings to {settings_file}: {e}")
        try:
            if temp_file.exists():
                temp_file.unlink()
        except OSError:
            pass
        return False
