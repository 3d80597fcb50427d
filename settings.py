"""Persistent settings for Yahtzee.

Stores user preferences in ~/.yahtzee_settings.json.
No frontend dependency — any interface can load and save them.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULTS = {
    "confirm_zero": True,
    "show_potential": True,
    "dark_mode": False,
}


def _default_path():
    """Return the default path for the settings file."""
    return Path.home() / ".yahtzee_settings.json"


def load_settings(path=None):
    """Load settings from JSON file. Returns DEFAULTS on missing/corrupt.

    Merges with DEFAULTS so missing keys get default values.
    Unknown keys are ignored.
    """
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        data = json.loads(path.read_text())
        if not isinstance(data, dict):
            return dict(DEFAULTS)
        # Merge: only keep known keys, fill missing from defaults
        result = dict(DEFAULTS)
        for key in DEFAULTS:
            if key in data:
                result[key] = data[key]
        return result
    except FileNotFoundError:
        return dict(DEFAULTS)
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
        return dict(DEFAULTS)


def save_settings(settings, path=None):
    """Write settings dict to JSON. Write errors are logged and otherwise ignored."""
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        path.write_text(json.dumps(settings, indent=2))
    except OSError:
        logger.warning("Could not save settings to %s", path, exc_info=True)
