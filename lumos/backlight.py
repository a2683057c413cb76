"""Discovery and control of sysfs backlight interfaces."""

from __future__ import annotations

import errno
import os
import re
from dataclasses import dataclass
from pathlib import Path

BACKLIGHT_BASE_PATH = Path("/sys/class/backlight")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class BacklightError(Exception):
    """Raised when a backlight interface cannot be found, read or written."""


def step_brightness(current, maximum, direction):
    """Return the brightness one tenth of ``maximum`` up or down, clamped."""
    step = maximum // 10
    if direction == "up":
        target = current + step
    elif direction == "down":
        target = current - step
    else:
        raise ValueError(f"Invalid adjust '{direction}' (use up/down)")
    return min(max(target, 0), maximum)


def _usable(brightness_path: Path, max_brightness_path: Path) -> bool:
    return os.access(brightness_path, os.R_OK | os.W_OK) and os.access(
        max_brightness_path, os.R_OK
    )


@dataclass(frozen=True)
class Backlight:
    """A backlight interface given by its brightness and max_brightness files."""

    brightness_path: Path
    max_brightness_path: Path

    @staticmethod
    def _read_int(path: Path) -> int:
        try:
            with open(path, encoding="ascii", errors="replace") as handle:
                text = handle.read()
        except OSError as exc:
            raise BacklightError(f"Error opening {path}: {exc.strerror}") from exc
        match = _LEADING_INT.match(text)
        if match is None:
            raise BacklightError(f"Error reading {path}")
        return int(match.group(1))

    def current(self):
        """Current raw brightness."""
        return self._read_int(self.brightness_path)

    def maximum(self):
        """Maximum raw brightness."""
        return self._read_int(self.max_brightness_path)

    def write(self, value):
        """Write a raw brightness value."""
        try:
            with open(self.brightness_path, "w", encoding="ascii") as handle:
                handle.write(f"{value}\n")
        except OSError as exc:
            raise BacklightError(
                f"Error writing {self.brightness_path}: {exc.strerror}"
            ) from exc

    def set(self, value, raw=False):
        """Set brightness as a percentage (or raw value) and return the raw value written."""
        maximum = self.maximum()
        target = value if raw else (value * maximum) // 100
        target = min(max(target, 0), maximum)
        self.write(target)
        return target

    def adjust(self, direction):
        """Step brightness 10% ``up`` or ``down`` and return the raw value written."""
        current = self.current()
        maximum = self.maximum()
        try:
            target = step_brightness(current, maximum, direction)
        except ValueError as exc:
            raise BacklightError(str(exc)) from exc
        self.write(target)
        return target


def find_backlight(interface=None, base=BACKLIGHT_BASE_PATH):
    """Return the named backlight interface, or the first usable one under ``base``."""
    base = Path(base)
    if interface is not None:
        backlight = Backlight(
            base / interface / "brightness", base / interface / "max_brightness"
        )
        if not _usable(backlight.brightness_path, backlight.max_brightness_path):
            both_exist = (
                backlight.brightness_path.exists()
                and backlight.max_brightness_path.exists()
            )
            if both_exist:
                raise BacklightError(
                    f"Permission denied on {backlight.brightness_path} "
                    f"or {backlight.max_brightness_path}"
                )
            raise BacklightError(
                f"Cannot access {backlight.brightness_path} or "
                f"{backlight.max_brightness_path}: {os.strerror(errno.ENOENT)}"
            )
        return backlight

    try:
        entries = sorted(os.listdir(base))
    except OSError as exc:
        raise BacklightError(f"Unable to open {base}: {exc.strerror}") from exc

    for name in entries:
        if name.startswith("."):
            continue
        brightness = base / name / "brightness"
        max_brightness = base / name / "max_brightness"
        if _usable(brightness, max_brightness):
            return Backlight(brightness, max_brightness)

    raise BacklightError(f"No writable backlight interface found in {base}")