"""Installation of udev rules granting the video group brightness access."""

from __future__ import annotations

import contextlib
import grp
import os
import subprocess
import sys
from pathlib import Path

from .backlight import BACKLIGHT_BASE_PATH

UDEV_RULE_ETC = Path("/etc/udev/rules.d/90-lumos.rules")
UDEV_RULE_LIB = Path("/lib/udev/rules.d/90-lumos.rules")
BACKLIGHT_BASE = BACKLIGHT_BASE_PATH
LEDS_BASE = Path("/sys/class/leds")
OS_RELEASE = Path("/etc/os-release")

_HEADER = (
    "# 90-lumos.rules - auto-generated by lumos --setup\n"
    '# Grants Member of group "video" write access to brightness file\n'
)
_BACKLIGHT_RULE = (
    'SUBSYSTEM=="backlight", ACTION=="add", '
    "RUN+=\"/bin/sh -c 'chmod 0664 /sys/class/backlight/%k/brightness && "
    "chown :video /sys/class/backlight/%k/brightness'\"\n"
)
_LEDS_RULE = (
    'SUBSYSTEM=="leds", ACTION=="add", '
    "RUN+=\"/bin/sh -c 'chmod 0664 /sys/class/leds/%k/brightness && "
    "chown :video /sys/class/leds/%k/brightness'\"\n"
)


class SetupError(Exception):
    """Raised when the udev setup cannot be carried out."""


def rules_text(include_leds):
    """Return the contents of the udev rules file."""
    text = _HEADER + _BACKLIGHT_RULE
    if include_leds:
        text += _LEDS_RULE
    return text


def os_pretty_name(os_release=OS_RELEASE):
    """Return PRETTY_NAME from an os-release file, else the kernel name and release."""
    with contextlib.suppress(OSError):
        with open(os_release, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if line.startswith("PRETTY_NAME="):
                    value = line.partition("=")[2].rstrip("\n")
                    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
                        value = value[1:-1]
                    return value
    with contextlib.suppress(AttributeError, OSError):
        uts = os.uname()
        return f"{uts.sysname} {uts.release}"
    return "Unknown OS"


def list_entries(base):
    """Return the sorted non-hidden entry names in ``base``, or [] if unreadable."""
    try:
        names = os.listdir(base)
    except OSError:
        return []
    return sorted(name for name in names if not name.startswith("."))


def write_rules_file(path, include_leds):
    """Write the rules file at ``path`` with mode 0644."""
    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise SetupError(
            f"Error: cannot open {path} for writing: {exc.strerror}"
        ) from exc
    with handle:
        try:
            os.fchmod(handle.fileno(), 0o644)
        except OSError as exc:
            print(
                f"Warning: failed to set permissions on {path}: {exc.strerror}",
                file=sys.stderr,
            )
        handle.write(rules_text(include_leds))


def fix_brightness_files(base, gid):
    """Make every ``<base>/*/brightness`` group-writable; return how many were fixed."""
    base = Path(base)
    fixed = 0
    for name in list_entries(base):
        path = base / name / "brightness"
        try:
            os.chmod(path, 0o664)
        except OSError:
            continue
        if gid is not None:
            with contextlib.suppress(OSError):
                os.chown(path, -1, gid)
        fixed += 1
    return fixed


def _udevadm(*args):
    try:
        result = subprocess.run(["udevadm", *args], check=False)
    except OSError:
        return False
    return result.returncode == 0


def _video_gid():
    try:
        return grp.getgrnam("video").gr_gid
    except KeyError:
        return None


def run_udev_setup():
    """Install the udev rule, reload udev and fix existing brightness files."""
    if os.geteuid() != 0:
        raise SetupError(
            "Error: 'lumos --setup' must be run as root. Try: sudo lumos --setup"
        )

    for existing in (UDEV_RULE_ETC, UDEV_RULE_LIB):
        if os.path.lexists(existing):
            print(f"Udev rule already exists at {existing}; nothing to do.")
            return

    backlights = list_entries(BACKLIGHT_BASE)
    leds = []
    if os.access(LEDS_BASE, os.R_OK | os.X_OK):
        leds = list_entries(LEDS_BASE)

    try:
        write_rules_file(UDEV_RULE_ETC, bool(leds))
    except SetupError as exc:
        raise SetupError(f"{exc}\nFailed to write udev rule; aborted.") from exc

    print("Reloading udev rules... ", end="", flush=True)
    reloaded = _udevadm("control", "--reload-rules")
    triggered = _udevadm("trigger")
    if reloaded and triggered:
        print("done.")
    else:
        print(
            "Failed to reload udev rules automatically.\n"
            "You may need:\n"
            "  sudo udevadm control --reload-rules && sudo udevadm trigger",
            file=sys.stderr,
        )

    _udevadm("trigger", "--subsystem-match=backlight", "--action=add")
    _udevadm("trigger", "--subsystem-match=leds", "--action=add")

    gid = _video_gid()
    fixed = fix_brightness_files(BACKLIGHT_BASE, gid)
    fixed += fix_brightness_files(LEDS_BASE, gid)

    print()
    print("=== lumos --setup Summary ===")
    print(f" OS: {os_pretty_name(OS_RELEASE)}")
    print(f" Backlight interfaces ({len(backlights)}):" + "".join(f" {n}" for n in backlights))
    if leds:
        print(f" LED interfaces ({len(leds)}):" + "".join(f" {n}" for n in leds))
    print(f" Udev rule installed at: {UDEV_RULE_ETC}")
    print(f" Existing brightness files fixed: {fixed}")
    print(" You can inspect or tweak the rule file as needed.")
    print("Done.")