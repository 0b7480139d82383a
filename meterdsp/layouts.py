"""Horizontal and vertical level-meter styles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from meterdsp.look_and_feel import (
    ColourGradient,
    ColourId,
    Graphics,
    LevelMeterLookAndFeel,
    Rectangle,
    gain_to_decibels,
    saved_state,
)

if TYPE_CHECKING:
    from meterdsp.meter_source import LevelMeterSource

__all__ = ["LevelMeterLookAndFeelHorizontal", "LevelMeterLookAndFeelVertical"]

_INFINITY_DB = -50.0
_DEFAULT_CHANNELS = 2
_NUM_TICKS = 11


def _max_colour_id(max_db: float) -> ColourId:
    if max_db > -0.3:
        return ColourId.METER_MAX_OVER
    if max_db > -5.0:
        return ColourId.METER_MAX_WARN
    return ColourId.METER_MAX_NORMAL


def _draw_background(lnf: LevelMeterLookAndFeel, g: Graphics, bounds: Rectangle) -> None:
    corner = lnf.corner_size(bounds)
    g.set_colour(lnf.meter_colour(ColourId.BACKGROUND))
    g.fill_rounded_rectangle(bounds, corner)
    g.set_colour(lnf.meter_colour(ColourId.OUTLINE))
    g.draw_rounded_rectangle(bounds.reduced(0.5), corner, 1.0)


def _levels_db(max_level: float, rms: float) -> tuple[float, float]:
    max_db = min(gain_to_decibels(max_level, _INFINITY_DB), 0.0)
    rms_db = min(gain_to_decibels(rms, _INFINITY_DB), 0.0)
    return max_db, rms_db


def _draw_channel(
    lnf: LevelMeterLookAndFeel,
    g: Graphics,
    bounds: Rectangle,
    bar: Rectangle,
    num_channels: int,
    channel: int,
    source: LevelMeterSource | None,
) -> None:
    if source is not None:
        lnf.draw_meter_bar(
            g,
            bar,
            source.max_level(channel),
            source.rms_level(channel),
            source.reduction_level(channel),
        )
        lnf.draw_clip_led(g, bounds, num_channels, channel, source.clip_flag(channel))
    else:
        lnf.draw_meter_bar(g, bar, 0.0, 0.0)
        lnf.draw_clip_led(g, bounds, num_channels, channel, False)


class LevelMeterLookAndFeelHorizontal(LevelMeterLookAndFeel):
    """Meters laid out as horizontal bars stacked from top to bottom."""

    def _bar_height(self, bounds: Rectangle, num_channels: int) -> float:
        corner = self.corner_size(bounds)
        return (bounds.height - 3.0 * corner) / (2 * num_channels - 1)

    def draw_meters(self, g: Graphics, bounds: Rectangle, source: LevelMeterSource | None) -> None:
        with saved_state(g):
            num_channels = source.num_channels() if source is not None else _DEFAULT_CHANNELS
            self.draw_meters_background(g, bounds)

            corner = self.corner_size(bounds)
            bar_height = self._bar_height(bounds, num_channels)
            bar_width = bounds.width - 2.0 * corner - bar_height
            x = bounds.x + corner
            for channel in range(num_channels):
                y = bounds.y + corner * 1.5 + 2 * channel * bar_height
                bar = Rectangle(x, y, bar_width, bar_height).reduced(5, 2)
                _draw_channel(self, g, bounds, bar, num_channels, channel, source)
                if channel < num_channels - 1:
                    ticks = Rectangle(x, y + bar_height, bar_width, bar_height).reduced(5, 2)
                    self.draw_meter_ticks(g, ticks)

    def clip_light_bounds(self, bounds: Rectangle, num_channels: int, channel: int) -> Rectangle:
        corner = self.corner_size(bounds)
        bar_height = self._bar_height(bounds, num_channels)
        bar_width = (bounds.width - 2.0 * corner) - bar_height
        return Rectangle(
            bounds.x + 5 + corner + bar_width - bar_height * 0.7,
            bounds.y + 2 + corner * 1.5 + 2 * channel * bar_height,
            bar_height * 0.7,
            bar_height - 4,
        )

    def draw_meters_background(self, g: Graphics, bounds: Rectangle) -> None:
        _draw_background(self, g, bounds)

    def draw_meter_ticks(self, g: Graphics, bounds: Rectangle) -> None:
        g.set_colour(self.meter_colour(ColourId.TICKS))
        for i in range(_NUM_TICKS):
            g.draw_vertical_line(bounds.x + i * 0.1 * bounds.width, bounds.y + 4, bounds.bottom - 4)

    def draw_meter_bar(
        self,
        g: Graphics,
        bounds: Rectangle,
        max_level: float,
        rms: float,
        reduction: float = -1.0,
    ) -> None:
        max_db, rms_db = _levels_db(max_level, rms)

        g.set_colour(self.meter_colour(ColourId.METER_BACKGROUND))
        g.fill_rect(bounds)

        gradient = ColourGradient(
            self.meter_colour(ColourId.METER_GRADIENT_LOW),
            (bounds.x, bounds.y),
            self.meter_colour(ColourId.METER_GRADIENT_MAX),
            (bounds.right, bounds.y),
        )
        gradient.add_colour(0.5, self.meter_colour(ColourId.METER_GRADIENT_LOW))
        gradient.add_colour(0.75, self.meter_colour(ColourId.METER_GRADIENT_MID))
        g.set_gradient_fill(gradient)
        g.fill_rect(bounds.with_right(bounds.right - rms_db * bounds.width / _INFINITY_DB))

        if max_db > -49.0:
            g.set_colour(self.meter_colour(_max_colour_id(max_db)))
            g.draw_vertical_line(
                bounds.right - max(max_db * bounds.width / _INFINITY_DB, 0.0),
                bounds.y,
                bounds.bottom,
            )
        if reduction >= 0.0:
            g.set_colour(self.meter_colour(ColourId.METER_REDUCTION))
            g.fill_rect(
                Rectangle(
                    bounds.x + bounds.width * reduction,
                    bounds.y + bounds.height * 0.75,
                    bounds.width * (1.0 - reduction),
                    bounds.height * 0.25,
                )
            )


class LevelMeterLookAndFeelVertical(LevelMeterLookAndFeel):
    """Meters laid out as vertical bars side by side from left to right."""

    def _bar_width(self, bounds: Rectangle, num_channels: int) -> float:
        corner = self.corner_size(bounds)
        return (bounds.width - 3.0 * corner) / (2 * num_channels - 1)

    def draw_meters(self, g: Graphics, bounds: Rectangle, source: LevelMeterSource | None) -> None:
        with saved_state(g):
            num_channels = source.num_channels() if source is not None else _DEFAULT_CHANNELS
            self.draw_meters_background(g, bounds)

            corner = self.corner_size(bounds)
            bar_width = self._bar_width(bounds, num_channels)
            bar_height = bounds.height - 2.0 * corner - bar_width
            y = bounds.y + corner + bar_width
            for channel in range(num_channels):
                x = bounds.x + corner * 1.5 + 2 * channel * bar_width
                bar = Rectangle(x, y, bar_width, bar_height).reduced(2, 5)
                _draw_channel(self, g, bounds, bar, num_channels, channel, source)
                if channel < num_channels - 1:
                    ticks = Rectangle(x + bar_width, y, bar_width, bar_height).reduced(2, 5)
                    self.draw_meter_ticks(g, ticks)

    def clip_light_bounds(self, bounds: Rectangle, num_channels: int, channel: int) -> Rectangle:
        corner = self.corner_size(bounds)
        bar_width = self._bar_width(bounds, num_channels)
        return Rectangle(
            bounds.x + corner * 1.5 + 2 * channel * bar_width + 2,
            bounds.y + corner + 5,
            bar_width - 4,
            bar_width * 0.7,
        )

    def draw_meters_background(self, g: Graphics, bounds: Rectangle) -> None:
        _draw_background(self, g, bounds)

    def draw_meter_ticks(self, g: Graphics, bounds: Rectangle) -> None:
        g.set_colour(self.meter_colour(ColourId.TICKS))
        for i in range(_NUM_TICKS):
            g.draw_horizontal_line(bounds.y + i * 0.1 * bounds.height, bounds.x + 4, bounds.right - 4)

    def draw_meter_bar(
        self,
        g: Graphics,
        bounds: Rectangle,
        max_level: float,
        rms: float,
        reduction: float = -1.0,
    ) -> None:
        max_db, rms_db = _levels_db(max_level, rms)

        g.set_colour(self.meter_colour(ColourId.METER_BACKGROUND))
        g.fill_rect(bounds)

        gradient = ColourGradient(
            self.meter_colour(ColourId.METER_GRADIENT_LOW),
            (bounds.x, bounds.bottom),
            self.meter_colour(ColourId.METER_GRADIENT_MAX),
            (bounds.x, bounds.y),
        )
        gradient.add_colour(0.5, self.meter_colour(ColourId.METER_GRADIENT_LOW))
        gradient.add_colour(0.75, self.meter_colour(ColourId.METER_GRADIENT_MID))
        g.set_gradient_fill(gradient)
        g.fill_rect(bounds.with_top(bounds.y + rms_db * bounds.height / _INFINITY_DB))

        if max_db > -49.0:
            g.set_colour(self.meter_colour(_max_colour_id(max_db)))
            g.draw_horizontal_line(
                bounds.y + max(max_db * bounds.height / _INFINITY_DB, 0.0),
                bounds.x,
                bounds.right,
            )
        if reduction >= 0.0:
            g.set_colour(self.meter_colour(ColourId.METER_REDUCTION))
            g.fill_rect(
                Rectangle(
                    bounds.x + bounds.width * 0.75,
                    bounds.y,
                    bounds.width * 0.25,
                    bounds.height * (1.0 - reduction),
                )
            )