"""Per-channel peak, RMS, clip and reduction readings for a level meter."""

from __future__ import annotations

import math
import time
from collections.abc import Sequence

__all__ = ["LevelMeterSource"]

_DEFAULT_RMS_WINDOW = 8


class _ChannelData:
    """Peak-hold, clip flag and running RMS window for one channel."""

    def __init__(self, rms_window: int = _DEFAULT_RMS_WINDOW) -> None:
        self.max = 0.0
        self.clip = False
        self.reduction = -1.0
        self.hold = 0
        self._rms_history = [0.0] * rms_window
        self._rms_sum = 0.0
        self._rms_ptr = 0

    def average_rms(self) -> float:
        if self._rms_history:
            return math.sqrt(self._rms_sum / len(self._rms_history))
        return math.sqrt(self._rms_sum)

    def set_levels(self, time_ms: int, new_max: float, new_rms: float, hold_ms: int) -> None:
        if new_max > 1.0 or new_rms > 1.0:
            self.clip = True
        if new_max >= self.max:
            self.max = min(1.0, new_max)
            self.hold = time_ms + hold_ms
        elif time_ms > self.hold:
            self.max = min(1.0, new_max)
        self._push_rms(new_rms)

    def set_rms_size(self, num_blocks: int) -> None:
        history = self._rms_history
        if num_blocks < len(history):
            del history[num_blocks:]
        else:
            history.extend([0.0] * (num_blocks - len(history)))
        self._rms_ptr = self._rms_ptr % len(history) if history else 0

    def _push_rms(self, new_rms: float) -> None:
        squared = min(1.0, new_rms * new_rms)
        history = self._rms_history
        if history:
            self._rms_sum = self._rms_sum - history[self._rms_ptr] + squared
            history[self._rms_ptr] = squared
            self._rms_ptr = (self._rms_ptr + 1) % len(history)
        else:
            self._rms_sum = squared


def _magnitude(samples: Sequence[float]) -> float:
    return max((abs(s) for s in samples), default=0.0)


def _rms(samples: Sequence[float]) -> float:
    if not samples:
        return 0.0
    return math.sqrt(sum(s * s for s in samples) / len(samples))


class LevelMeterSource:
    """Collects level readings from audio blocks for display in a meter."""

    def __init__(self) -> None:
        self._levels: list[_ChannelData] = []
        self._hold_ms = 500
        self._suspended = False

    def resize(self, channels: int, rms_window: int) -> None:
        """Set the channel count and the number of blocks averaged for RMS."""
        del self._levels[channels:]
        self._levels.extend(_ChannelData(rms_window) for _ in range(channels - len(self._levels)))
        for level in self._levels:
            level.set_rms_size(rms_window)

    def measure_block(self, buffer: Sequence[Sequence[float]], time_ms: int | None = None) -> None:
        """Take readings from a block given as one sample sequence per channel."""
        if self._suspended:
            return
        if time_ms is None:
            time_ms = int(time.time() * 1000)
        num_channels = len(buffer)
        del self._levels[num_channels:]
        self._levels.extend(_ChannelData() for _ in range(num_channels - len(self._levels)))
        for level, samples in zip(self._levels, buffer):
            level.set_levels(time_ms, _magnitude(samples), _rms(samples), self._hold_ms)

    def _channel(self, channel: int) -> _ChannelData:
        if not 0 <= channel < len(self._levels):
            raise IndexError(f"channel {channel} out of range")
        return self._levels[channel]

    def set_reduction_level(self, channel: int, reduction: float) -> None:
        """Store a reduction value; ignored for channels that do not exist."""
        if 0 <= channel < len(self._levels):
            self._levels[channel].reduction = reduction

    def set_max_hold_ms(self, millis: int) -> None:
        """Set how long a peak is held before a lower peak replaces it."""
        self._hold_ms = millis

    def reduction_level(self, channel: int) -> float:
        """Reduction value of a channel, or -1.0 for channels that do not exist."""
        if 0 <= channel < len(self._levels):
            return self._levels[channel].reduction
        return -1.0

    def max_level(self, channel: int) -> float:
        return self._channel(channel).max

    def rms_level(self, channel: int) -> float:
        return self._channel(channel).average_rms()

    def clip_flag(self, channel: int) -> bool:
        return self._channel(channel).clip

    def clear_clip_flag(self, channel: int) -> None:
        self._channel(channel).clip = False

    def clear_all_clip_flags(self) -> None:
        for level in self._levels:
            level.clip = False

    def num_channels(self) -> int:
        return len(self._levels)

    def set_suspended(self, should_be_suspended: bool) -> None:
        """While suspended, measure_block takes no readings."""
        self._suspended = should_be_suspended