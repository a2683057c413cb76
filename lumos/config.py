"""Location and persistence of the saved backlight interface."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIR = "lumos"
CONFIG_FILE = "config"

_MAX_LINE = 255


def config_path(environ=None):
    """Return the path of the configuration file for the given environment."""
    if environ is None:
        environ = os.environ
    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / CONFIG_DIR / CONFIG_FILE
    home = environ.get("HOME") or os.path.expanduser("~")
    return Path(home) / ".config" / CONFIG_DIR / CONFIG_FILE


def load_saved_interface(path=None):
    """Return the interface name stored in ``path``, or None if there is none."""
    if path is None:
        path = config_path()
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(_MAX_LINE)
    except OSError:
        return None
    if not line:
        return None
    return line.split("\n", 1)[0]


def save_interface(interface, path=None):
    """Store ``interface`` in ``path``, creating its directory if needed."""
    path = Path(config_path() if path is None else path)
    path.parent.mkdir(mode=0o755, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(f"{interface}\n")