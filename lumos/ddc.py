"""DDC/CI brightness control of external monitors over i2c-dev."""

from __future__ import annotations

import fcntl
import os
from contextlib import contextmanager
from pathlib import Path

from .backlight import step_brightness

DDC_ADDRESS = 0x37
VCP_BRIGHTNESS = 0x10
I2C_SLAVE = 0x0703
DRM_ROOT = Path("/sys/class/drm")
DEV_ROOT = Path("/dev")


class DDCError(Exception):
    """Raised when a DDC/CI transfer fails."""


@contextmanager
def _open_ddc(device):
    try:
        fd = os.open(device, os.O_RDWR)
    except OSError as exc:
        raise DDCError(f"Failed to open {device}: {exc.strerror}") from exc
    try:
        try:
            fcntl.ioctl(fd, I2C_SLAVE, DDC_ADDRESS)
        except OSError as exc:
            raise DDCError(
                f"I2C_SLAVE ioctl failed on {device}: {exc.strerror}"
            ) from exc
        yield fd
    finally:
        os.close(fd)


def write_brightness(device, value):
    """Write the brightness VCP value to the monitor behind ``device``."""
    payload = bytes((VCP_BRIGHTNESS, value & 0xFF))
    with _open_ddc(device) as fd:
        try:
            written = os.write(fd, payload)
        except OSError as exc:
            raise DDCError(f"DDC write failed on {device}: {exc.strerror}") from exc
        if written != len(payload):
            raise DDCError(f"DDC write failed on {device}: short write")


def read_brightness(device):
    """Return ``(current, maximum)`` brightness read from ``device``."""
    with _open_ddc(device) as fd:
        try:
            os.write(fd, bytes((VCP_BRIGHTNESS,)))
            data = os.read(fd, 2)
        except OSError as exc:
            raise DDCError(f"DDC read failed on {device}: {exc.strerror}") from exc
    if len(data) < 2:
        raise DDCError(f"DDC read failed on {device}: short read")
    word = int.from_bytes(data, "little")
    return (word >> 8) & 0xFF, word & 0xFF


def adjust_brightness(device, direction):
    """Step the monitor brightness 10% ``up`` or ``down``; return the new value."""
    try:
        current, maximum = read_brightness(device)
    except DDCError as exc:
        raise DDCError("Failed to read current DDC brightness") from exc
    try:
        target = step_brightness(current, maximum, direction)
    except ValueError as exc:
        raise DDCError(
            f"Invalid external adjust '{direction}' (use up/down)"
        ) from exc
    write_brightness(device, target)
    return target


def connector_variants(connector):
    """Return the connector name and, for names like HDMI-1, the HDMI-A-1 form."""
    variants = [connector]
    prefix, dash, suffix = connector.rpartition("-")
    if dash and len(prefix) < 64 and len(suffix) < 64 - len(prefix) - 3:
        variants.append(f"{prefix}-A-{suffix}")
    return variants


def resolve_connector(connector, drm_root=DRM_ROOT, dev_root=DEV_ROOT):
    """Find the accessible i2c device node for a DRM connector, or None."""
    drm_root = Path(drm_root)
    dev_root = Path(dev_root)
    try:
        entries = sorted(os.listdir(drm_root))
    except OSError:
        return None

    needles = [variant.lower() for variant in connector_variants(connector)]
    for name in entries:
        if name.startswith("."):
            continue
        if not any(needle in name.lower() for needle in needles):
            continue
        connector_dir = drm_root / name
        try:
            children = sorted(os.listdir(connector_dir))
        except OSError:
            continue
        for child in children:
            if not child.startswith(("i2c-", "drm_dp_aux")):
                continue
            try:
                target = os.readlink(connector_dir / child)
            except OSError:
                continue
            _, slash, node = target.rpartition("/")
            if not slash:
                continue
            device = dev_root / node
            if os.access(device, os.R_OK | os.W_OK):
                return device
    return None