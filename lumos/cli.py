"""Command-line interface for internal and external display brightness."""

from __future__ import annotations

import argparse
import re
import sys

from . import ddc
from .backlight import BACKLIGHT_BASE_PATH, BacklightError, find_backlight
from .config import config_path, load_saved_interface, save_interface
from .udev_setup import SetupError, run_udev_setup

BACKLIGHT_BASE = BACKLIGHT_BASE_PATH
PROG = "lumos"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_USAGE = (
    "Usage: {prog} [options]\n"
    "  -U, --setup                  configure udev rules for lumos\n"
    "  -m, --machine-readable       print raw brightness value\n"
    "  -r, --human-readable         print brightness with raw and percent\n"
    "  -a, --adjust <up|down>       step adjust by 10%\n"
    "  -s, --set <value>            set brightness (percent)\n"
    "  -R, --raw                    treat -s value as raw backlight number\n"
    "  -n, --nodisplay              do not show X11 popup\n"
    "  -d, --device <interface>     choose internal backlight interface\n"
    "  -P, --persist-device         save chosen internal interface\n"
    "  -x, --external <connector>   DDC/CI external monitor\n"
    "  --profile-new <name>         create a new profile (skeleton)\n"
    "  --profile-load <name>        load named profile (skeleton)\n"
    "  -h, --help                   this help\n"
)


class _UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise _UsageError(message)


def _leading_int(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def build_parser():
    """Return the argument parser for the command line."""
    parser = _Parser(prog=PROG, add_help=False)
    parser.add_argument("-U", "--setup", action="store_true")
    parser.add_argument("-m", "--machine-readable", action="store_true")
    parser.add_argument("-r", "--human-readable", action="store_true")
    parser.add_argument("-a", "--adjust")
    parser.add_argument("-s", "--set", type=_leading_int, default=-1)
    parser.add_argument("-R", "--raw", action="store_true")
    parser.add_argument("-n", "--nodisplay", action="store_true")
    parser.add_argument("-d", "--device")
    parser.add_argument("-P", "--persist-device", action="store_true")
    parser.add_argument("-x", "--external")
    parser.add_argument("--profile-new")
    parser.add_argument("--profile-load")
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def _print_usage():
    sys.stderr.write(_USAGE.format(prog=PROG))


def _error(message):
    print(message, file=sys.stderr)
    return 1


def _show(brightness, maximum):
    from .popup import show_brightness

    try:
        show_brightness(brightness, maximum)
    except RuntimeError as exc:
        return _error(str(exc))
    return 0


def _external(opts):
    device = ddc.resolve_connector(opts.external, ddc.DRM_ROOT, ddc.DEV_ROOT)
    if device is None:
        return _error(f"No DDC connector matching '{opts.external}'")

    try:
        if opts.human_readable:
            current, maximum = ddc.read_brightness(device)
            print(
                f"External '{opts.external}': raw={current}, max={maximum}, "
                f"percent={current * 100 // maximum}%"
            )
            return 0
        if opts.machine_readable:
            current, _ = ddc.read_brightness(device)
            print(current)
            return 0
        if opts.adjust is not None:
            ddc.adjust_brightness(device, opts.adjust)
            return 0
        if opts.set != -1:
            requested = opts.set
            value = requested if opts.raw else min(max(requested, 0), 100)
            if requested < 0 or (not opts.raw and requested > 100):
                print(f"Warning: clamped to {value}%", file=sys.stderr)
            ddc.write_brightness(device, value)
            print(f"External '{opts.external}' set to {value}% (raw={value})")
            return 0
    except ddc.DDCError as exc:
        return _error(str(exc))

    _print_usage()
    return 1


def _internal(opts, backlight):
    try:
        if opts.human_readable:
            current = backlight.current()
            maximum = backlight.maximum()
            print(
                f"Internal backlight: raw={current}, max={maximum}, "
                f"percent={current * 100 // maximum}%"
            )
            return 0
        if opts.machine_readable:
            print(backlight.current())
            return 0
        if opts.adjust is not None:
            target = backlight.adjust(opts.adjust)
            return 0 if opts.nodisplay else _show(target, backlight.maximum())
        if opts.set != -1:
            requested = opts.set
            maximum = backlight.maximum()
            if opts.raw:
                target = requested
            elif requested < 0:
                target = 0
            elif requested > 100:
                target = maximum
            else:
                target = requested * maximum // 100
            if not opts.raw and (requested < 0 or requested > 100):
                clamped = 0 if requested < 0 else 100
                print(f"Warning: clamped to {clamped}%", file=sys.stderr)
            backlight.write(target)
            return 0 if opts.nodisplay else _show(target, maximum)
    except BacklightError as exc:
        return _error(str(exc))

    _print_usage()
    return 1


def main(argv=None):
    """Run the command line and return the exit status."""
    try:
        opts = build_parser().parse_args(argv)
    except _UsageError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        _print_usage()
        return 1
    if opts.help:
        _print_usage()
        return 0

    if opts.setup:
        try:
            run_udev_setup()
        except SetupError as exc:
            return _error(str(exc))
        return 0

    if opts.profile_new is not None or opts.profile_load is not None:
        return 0

    saved = load_saved_interface(config_path())
    device = opts.device if opts.device is not None else saved
    try:
        backlight = find_backlight(device, BACKLIGHT_BASE)
    except BacklightError as exc:
        return _error(str(exc))

    if opts.persist_device and device is not None and device != saved:
        try:
            save_interface(device, config_path())
        except OSError as exc:
            print(f"save config: {exc}", file=sys.stderr)

    if opts.external is not None:
        return _external(opts)
    return _internal(opts, backlight)


if __name__ == "__main__":
    sys.exit(main())