import os
import json
import logging

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tview")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "tview.log")

# default settings
EVENT_POLL_TIME_DEFAULT = 100
MAX_COLUMN_WIDTH_DEFAULT = 40
COLUMN_MARGIN_DEFAULT = 2
CLIPBOARD_INTERFACE_COMMAND_DEFAULT = None
LOG_LEVEL_DEFAULT = "INFO"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def default_config():
    return {
        "EVENT_POLL_TIME": EVENT_POLL_TIME_DEFAULT,
        "MAX_COLUMN_WIDTH": MAX_COLUMN_WIDTH_DEFAULT,
        "COLUMN_MARGIN": COLUMN_MARGIN_DEFAULT,
        "CLIPBOARD_INTERFACE_COMMAND": CLIPBOARD_INTERFACE_COMMAND_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }


def _positive_int(value, minimum=1):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < minimum:
        return None
    return value


def load_config():
    cfg = default_config()

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    poll = _positive_int(data.get("event_poll_time"))
    if poll is not None:
        cfg["EVENT_POLL_TIME"] = poll

    max_width = _positive_int(data.get("max_column_width"), minimum=4)
    if max_width is not None:
        cfg["MAX_COLUMN_WIDTH"] = max_width

    margin = _positive_int(data.get("column_margin"), minimum=0)
    if margin is not None:
        cfg["COLUMN_MARGIN"] = margin

    clip_cmd = data.get("clipboard_interface_command")
    if isinstance(clip_cmd, list) and clip_cmd and all(
        isinstance(item, str) for item in clip_cmd
    ):
        cfg["CLIPBOARD_INTERFACE_COMMAND"] = clip_cmd

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
