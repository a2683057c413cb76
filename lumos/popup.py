"""Short-lived on-screen brightness indicator."""

from __future__ import annotations

import math

WIDTH = 200
HEIGHT = 120
SECTIONS = 10
GRAPH_HEIGHT = 10
GRAPH_LEFT = 10
GRAPH_TOP = 100
GRAPH_WIDTH = 180

_CENTER_X = 100
_CENTER_Y = 40
_Y_OFFSET = 10
_CIRCLE_RADIUS = 22
_RAY_LENGTH = 27
_RAY_GAP = 5
_LINE_THICKNESS = 5

_LIGHT_GRAY = "#D3D3D3"
_DARK_GRAY = "#A9A9A9"
_WHITE = "#FFFFFF"
_BLACK = "#000000"

_DISPLAY_MS = 1000


def icon_segments():
    """Return the eight sun rays of the icon as ``(x1, y1, x2, y2)`` tuples."""
    inner = _CIRCLE_RADIUS + _RAY_GAP
    outer = _CIRCLE_RADIUS + _RAY_LENGTH
    segments = []
    for ray in range(8):
        angle = ray * math.pi / 4.0
        cos, sin = math.cos(angle), math.sin(angle)
        segments.append(
            (
                _CENTER_X + int(inner * cos),
                _CENTER_Y + int(inner * sin) + _Y_OFFSET,
                _CENTER_X + int(outer * cos),
                _CENTER_Y + int(outer * sin) + _Y_OFFSET,
            )
        )
    return segments


def filled_sections(brightness, maximum):
    """Number of graph sections to light for ``brightness`` out of ``maximum``."""
    return int((brightness / maximum) * SECTIONS)


def show_brightness(brightness, maximum):
    """Show a centred popup with the brightness level for one second."""
    import tkinter

    try:
        root = tkinter.Tk(className="lumos")
    except tkinter.TclError as exc:
        raise RuntimeError("Cannot open display") from exc

    root.title("lumos")
    left = (root.winfo_screenwidth() - WIDTH) // 2
    top = (root.winfo_screenheight() - HEIGHT) // 2
    root.geometry(f"{WIDTH}x{HEIGHT}+{left}+{top}")

    canvas = tkinter.Canvas(
        root, width=WIDTH, height=HEIGHT, bg=_LIGHT_GRAY, highlightthickness=0
    )
    canvas.pack()

    centre_y = _CENTER_Y + _Y_OFFSET
    canvas.create_oval(
        _CENTER_X - _CIRCLE_RADIUS,
        centre_y - _CIRCLE_RADIUS,
        _CENTER_X + _CIRCLE_RADIUS,
        centre_y + _CIRCLE_RADIUS,
        outline=_BLACK,
        width=_LINE_THICKNESS,
    )
    for segment in icon_segments():
        canvas.create_line(
            *segment, fill=_BLACK, width=_LINE_THICKNESS, capstyle=tkinter.ROUND
        )

    canvas.create_rectangle(
        GRAPH_LEFT,
        GRAPH_TOP,
        GRAPH_LEFT + GRAPH_WIDTH,
        GRAPH_TOP + GRAPH_HEIGHT,
        fill=_DARK_GRAY,
        outline="",
    )
    lit = filled_sections(brightness, maximum)
    section_width = GRAPH_WIDTH // SECTIONS
    for section in range(SECTIONS):
        x = GRAPH_LEFT + section * section_width
        canvas.create_rectangle(
            x,
            GRAPH_TOP,
            x + section_width - 2,
            GRAPH_TOP + GRAPH_HEIGHT,
            fill=_WHITE if section < lit else _DARK_GRAY,
            outline="",
        )

    root.after(_DISPLAY_MS, root.destroy)
    root.mainloop()