import json
import logging
import math

logger = logging.getLogger("putting.config")

DEFAULT_CONFIG = {
    # Logical field size; the real field is this scaled to fit the window
    "base_width": 400,
    "base_height": 600,
    "max_width": 460,
    "window_margin": 32,

    # Initial window width used to size the field at start-up
    "window_width": 492,

    "fps": 60,
    "caption": "Putting Green",
}


def load_config(filepath=None):
    """
    Loads the configuration from a JSON file on top of DEFAULT_CONFIG.
    Returns the default settings if no file is given or it is missing/invalid.
    """
    config = DEFAULT_CONFIG.copy()
    if not filepath:
        return config

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        logger.warning("Config %r not usable (%s), using default settings.", filepath, exc)
        return config

    if not isinstance(user_config, dict):
        logger.warning("Config %r is not a JSON object, using default settings.", filepath)
        return config

    for key, value in user_config.items():
        if key not in DEFAULT_CONFIG:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        config[key] = value
    return config


def field_size(window_width, config=None, margin=True):
    """
    Size of the playing field for a window of the given width.

    The field keeps the base aspect ratio and is capped at max_width.
    ``margin`` keeps window_margin free around the field; pass False when
    the window is the field itself (resizing).
    """
    config = config or DEFAULT_CONFIG
    usable = window_width - (config["window_margin"] if margin else 0)
    usable = min(usable, config["max_width"])
    # Multiply before dividing so a field refitted to its own width keeps it
    width = max(1, math.floor(config["base_width"] * usable / config["base_width"]))
    height = max(1, math.floor(config["base_height"] * usable / config["base_width"]))
    return width, height
