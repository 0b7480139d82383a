"""Geometry, colours and the drawing interface shared by level-meter styles."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from meterdsp.meter_source import LevelMeterSource

__all__ = [
    "ColourGradient",
    "ColourId",
    "Graphics",
    "LevelMeterLookAndFeel",
    "Rectangle",
    "gain_to_decibels",
    "saved_state",
]


def gain_to_decibels(gain: float, minus_infinity_db: float = -100.0) -> float:
    """Convert a linear gain to decibels, never going below minus_infinity_db."""
    if gain > 0.0:
        return max(minus_infinity_db, math.log10(gain) * 20.0)
    return minus_infinity_db


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle given by its top-left corner and its size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def reduced(self, dx: float, dy: float | None = None) -> Rectangle:
        """Shrink by dx on the left and right and dy on the top and bottom."""
        if dy is None:
            dy = dx
        return Rectangle(
            self.x + dx,
            self.y + dy,
            max(0.0, self.width - 2 * dx),
            max(0.0, self.height - 2 * dy),
        )

    def contains(self, point: tuple[float, float]) -> bool:
        """True if the point lies inside; left and top edges are inside."""
        px, py = point
        return self.x <= px < self.right and self.y <= py < self.bottom

    def with_right(self, right: float) -> Rectangle:
        """Same rectangle with its right edge moved, keeping the left edge."""
        return Rectangle(self.x, self.y, max(0.0, right - self.x), self.height)

    def with_top(self, top: float) -> Rectangle:
        """Same rectangle with its top edge moved, keeping the bottom edge."""
        return Rectangle(self.x, top, self.width, max(0.0, self.bottom - top))


@dataclass
class ColourGradient:
    """Linear or radial gradient between two points, with extra colour stops."""

    colour1: int
    point1: tuple[float, float]
    colour2: int
    point2: tuple[float, float]
    radial: bool = False
    stops: list[tuple[float, int]] = field(default_factory=list)

    def add_colour(self, position: float, colour: int) -> None:
        """Add a colour stop at a proportional position between 0 and 1."""
        self.stops.append((position, colour))


class Graphics(Protocol):
    """Drawing target used by the look-and-feel classes. Colours are 0xAARRGGBB."""

    def save_state(self) -> None: ...

    def restore_state(self) -> None: ...

    def set_colour(self, colour: int) -> None: ...

    def set_gradient_fill(self, gradient: ColourGradient) -> None: ...

    def fill_rect(self, rect: Rectangle) -> None: ...

    def fill_rounded_rectangle(self, rect: Rectangle, corner: float) -> None: ...

    def draw_rounded_rectangle(self, rect: Rectangle, corner: float, thickness: float) -> None: ...

    def draw_vertical_line(self, x: float, top: float, bottom: float) -> None: ...

    def draw_horizontal_line(self, y: float, left: float, right: float) -> None: ...


@contextmanager
def saved_state(g: Graphics) -> Iterator[Graphics]:
    """Save the graphics state on entry and restore it on exit."""
    g.save_state()
    try:
        yield g
    finally:
        g.restore_state()


class ColourId(IntEnum):
    TEXT = 0
    TEXT_DEACTIVE = 1
    TICKS = 2
    OUTLINE = 3
    BACKGROUND = 4
    METER_FOREGROUND = 5
    METER_BACKGROUND = 6
    METER_MAX_NORMAL = 7
    METER_MAX_WARN = 8
    METER_MAX_OVER = 9
    METER_GRADIENT_LOW = 10
    METER_GRADIENT_MID = 11
    METER_GRADIENT_MAX = 12
    METER_REDUCTION = 13


_GREEN = 0xFF008000
_DARKGREY = 0xFFA9A9A9
_ORANGE = 0xFFFFA500
_LIGHTGREY = 0xFFD3D3D3
_DARKRED = 0xFF8B0000
_LIGHTGOLDENRODYELLOW = 0xFFFAFAD2
_RED = 0xFFFF0000

_DEFAULT_COLOURS = {
    ColourId.TEXT: _GREEN,
    ColourId.TEXT_DEACTIVE: _DARKGREY,
    ColourId.TICKS: _ORANGE,
    ColourId.OUTLINE: _ORANGE,
    ColourId.BACKGROUND: 0xFF050A29,
    ColourId.METER_FOREGROUND: _GREEN,
    ColourId.METER_BACKGROUND: _DARKGREY,
    ColourId.METER_MAX_NORMAL: _LIGHTGREY,
    ColourId.METER_MAX_WARN: _ORANGE,
    ColourId.METER_MAX_OVER: _DARKRED,
    ColourId.METER_GRADIENT_LOW: _GREEN,
    ColourId.METER_GRADIENT_MID: _LIGHTGOLDENRODYELLOW,
    ColourId.METER_GRADIENT_MAX: _RED,
    ColourId.METER_REDUCTION: _ORANGE,
}


class LevelMeterLookAndFeel(ABC):
    """Colours and drawing routines for a level meter; subclasses fix the layout."""

    def __init__(self) -> None:
        self._colours: dict[ColourId, int] = dict(_DEFAULT_COLOURS)

    def corner_size(self, bounds: Rectangle) -> float:
        return max(bounds.width, bounds.height) * 0.01

    def draw_clip_led(
        self,
        g: Graphics,
        bounds: Rectangle,
        num_channels: int,
        channel: int,
        clipped: bool,
    ) -> None:
        colour_id = ColourId.METER_MAX_OVER if clipped else ColourId.METER_BACKGROUND
        g.set_colour(self.meter_colour(colour_id))
        g.fill_rect(self.clip_light_bounds(bounds, num_channels, channel))

    @abstractmethod
    def clip_light_bounds(self, bounds: Rectangle, num_channels: int, channel: int) -> Rectangle:
        """Area of a channel's clip indicator inside the meter bounds."""

    @abstractmethod
    def draw_meters_background(self, g: Graphics, bounds: Rectangle) -> None:
        """Draw the panel behind all meters."""

    @abstractmethod
    def draw_meter_ticks(self, g: Graphics, bounds: Rectangle) -> None:
        """Draw the scale ticks between meters."""

    @abstractmethod
    def draw_meters(self, g: Graphics, bounds: Rectangle, source: LevelMeterSource | None) -> None:
        """Draw every channel of the source, or two empty meters without one."""

    @abstractmethod
    def draw_meter_bar(
        self,
        g: Graphics,
        bounds: Rectangle,
        max_level: float,
        rms: float,
        reduction: float = -1.0,
    ) -> None:
        """Draw one channel's bar, peak line and optional reduction."""

    def meter_colour(self, colour_id: ColourId) -> int:
        return self._colours[colour_id]

    def set_meter_colour(self, colour_id: ColourId, colour: int) -> None:
        self._colours[ColourId(colour_id)] = colour