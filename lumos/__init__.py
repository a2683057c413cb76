"""Backlight and external monitor brightness control for Linux."""

__version__ = "0.1.0"