# secretmaker/config.py
"""
Simple settings for SecretMaker.
Settings are read from config.json in $SECRETMAKER_HOME, %APPDATA%/SecretMaker (Windows)
or ~/.secretmaker (fallback). Command line flags override them.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "default_length": 92,
    "default_count": 100,
    "log_level": "WARNING",
}

def _appdata_dir() -> str:
    home = os.getenv("SECRETMAKER_HOME")
    if home:
        return home
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "SecretMaker")
    return os.path.join(os.path.expanduser("~"), ".secretmaker")

def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")

def _valid(key: str, value: Any) -> bool:
    default = DEFAULTS[key]
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    out = DEFAULTS.copy()
    if not os.path.exists(p):
        return out
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config %s: %s", p, e)
        return out
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: expected a JSON object", p)
        return out
    # merge defaults, keeping only known keys of the right type
    for key, value in data.items():
        if key not in DEFAULTS:
            logger.debug("unknown config key %r", key)
        elif not _valid(key, value):
            logger.warning("config %s: bad value for %r, using default", p, key)
        else:
            out[key] = value
    return out
