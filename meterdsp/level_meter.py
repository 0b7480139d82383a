"""A level-meter component that paints a source through a look-and-feel."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import TYPE_CHECKING

from meterdsp.layouts import LevelMeterLookAndFeelVertical
from meterdsp.look_and_feel import Graphics, LevelMeterLookAndFeel, Rectangle, saved_state

if TYPE_CHECKING:
    from meterdsp.meter_source import LevelMeterSource

__all__ = ["LevelMeter"]

_DEFAULT_REFRESH_RATE_HZ = 30


class LevelMeter:
    """Displays max and RMS levels of a LevelMeterSource.

    The source is held weakly: once it is gone the meter paints empty bars.
    Clicking a channel's clip light clears that channel's clip flag, and
    double-clicking any clip light clears all of them.
    """

    def __init__(
        self,
        look_and_feel: LevelMeterLookAndFeel | None = None,
        bounds: Rectangle | None = None,
        refresh_rate_hz: int = _DEFAULT_REFRESH_RATE_HZ,
    ) -> None:
        self.look_and_feel: LevelMeterLookAndFeel | None = (
            look_and_feel if look_and_feel is not None else LevelMeterLookAndFeelVertical()
        )
        self.bounds = bounds if bounds is not None else Rectangle(0.0, 0.0, 0.0, 0.0)
        self.on_repaint: Callable[[], None] | None = None
        self._source_ref: weakref.ReferenceType[LevelMeterSource] | None = None
        self._refresh_rate_hz = refresh_rate_hz

    @property
    def source(self) -> LevelMeterSource | None:
        """The attached source, or None if none is set or it no longer exists."""
        return self._source_ref() if self._source_ref is not None else None

    def set_meter_source(self, source: LevelMeterSource | None) -> None:
        self._source_ref = weakref.ref(source) if source is not None else None

    @property
    def refresh_rate_hz(self) -> int:
        return self._refresh_rate_hz

    @property
    def timer_interval_ms(self) -> int | None:
        """Milliseconds between repaints, or None when the timer is stopped."""
        if self._refresh_rate_hz <= 0:
            return None
        return max(1, 1000 // self._refresh_rate_hz)

    def set_refresh_rate_hz(self, new_refresh_rate: int) -> None:
        """Change how often the meter asks to be repainted; 0 stops it."""
        self._refresh_rate_hz = new_refresh_rate

    def timer_callback(self) -> None:
        """Called on every timer tick: requests a repaint."""
        if self.on_repaint is not None:
            self.on_repaint()

    def _local_bounds(self) -> Rectangle:
        return Rectangle(0.0, 0.0, self.bounds.width, self.bounds.height)

    def paint(self, g: Graphics) -> None:
        """Draw the meters into g using the current look-and-feel."""
        with saved_state(g):
            if self.look_and_feel is not None:
                self.look_and_feel.draw_meters(g, self._local_bounds(), self.source)

    def _clip_light_hit(self, position: tuple[float, float]) -> bool:
        source = self.source
        lnf = self.look_and_feel
        if source is None or lnf is None:
            return False
        local = self._local_bounds()
        num_channels = source.num_channels()
        return any(
            lnf.clip_light_bounds(local, num_channels, i).contains(position)
            for i in range(num_channels)
        )

    def mouse_down(self, position: tuple[float, float], left_button: bool = True) -> None:
        """Clear the clip flag of the channel whose clip light was clicked."""
        source = self.source
        lnf = self.look_and_feel
        if not left_button or source is None or lnf is None:
            return
        local = self._local_bounds()
        num_channels = source.num_channels()
        for i in range(num_channels):
            if lnf.clip_light_bounds(local, num_channels, i).contains(position):
                source.clear_clip_flag(i)
                return

    def mouse_double_click(self, position: tuple[float, float]) -> None:
        """Clear every clip flag if any clip light was double-clicked."""
        if self._clip_light_hit(position):
            source = self.source
            if source is not None:
                source.clear_all_clip_flags()