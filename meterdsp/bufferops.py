"""Sample-buffer helpers, Brent minimisation and an envelope follower."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, MutableSequence, Sequence

__all__ = [
    "EnvelopeFollower",
    "add",
    "add_channels",
    "brent_minimize",
    "copy",
    "copy_channels",
    "deinterleave",
    "fade",
    "fade_channels",
    "fade_into",
    "fade_into_channels",
    "interleave",
    "multiply",
    "multiply_channels",
    "reverse",
    "reverse_channels",
    "to_mono",
    "validate",
    "zero",
    "zero_channels",
]

_MONO_GAIN = 0.70710678118654752440084436210485


def _strided(samples: int, skip: int) -> range:
    step = skip + 1
    return range(0, samples * step, step)


def add(
    samples: int,
    dest: MutableSequence[float],
    src: Sequence[float],
    dest_skip: int = 0,
    src_skip: int = 0,
) -> None:
    """Add src samples to dest in place, without clipping.

    A skip of n means n samples are stepped over between used samples.
    """
    for d, s in zip(_strided(samples, dest_skip), _strided(samples, src_skip)):
        dest[d] += src[s]


def add_channels(
    samples: int,
    dest: Sequence[MutableSequence[float]],
    src: Sequence[Sequence[float]],
) -> None:
    """Add each source channel to the matching destination channel."""
    for d, s in zip(dest, src):
        add(samples, d, s)


def copy(
    samples: int,
    dest: MutableSequence[float],
    src: Sequence[float],
    dest_skip: int = 0,
    src_skip: int = 0,
) -> None:
    """Copy samples from src into dest, honouring the skips on either side."""
    for d, s in zip(_strided(samples, dest_skip), _strided(samples, src_skip)):
        dest[d] = src[s]


def copy_channels(
    samples: int,
    dest: Sequence[MutableSequence[float]],
    src: Sequence[Sequence[float]],
    dest_skip: int = 0,
    src_skip: int = 0,
) -> None:
    """Copy a set of channels from src to dest."""
    for d, s in zip(dest, src):
        copy(samples, d, s, dest_skip, src_skip)


def deinterleave(channels: int, src: Sequence[float]) -> list[list[float]]:
    """Split interleaved frames into one list per channel."""
    if channels < 2:
        raise ValueError("deinterleave needs at least two channels")
    if len(src) % channels:
        raise ValueError("source length is not a whole number of frames")
    return [list(src[c::channels]) for c in range(channels)]


def interleave(src: Sequence[Sequence[float]]) -> list[float]:
    """Merge separate channels into one interleaved list of frames."""
    if len(src) < 2:
        raise ValueError("interleave needs at least two channels")
    length = len(src[0])
    if any(len(channel) != length for channel in src):
        raise ValueError("all channels must have the same length")
    return [sample for frame in zip(*src) for sample in frame]


def _ramp(samples: int, start: float, end: float):
    dt = (end - start) / samples
    t = start
    for _ in range(samples):
        yield t
        t += dt


def fade(
    samples: int,
    dest: MutableSequence[float],
    start: float = 0.0,
    end: float = 1.0,
) -> None:
    """Multiply dest by a linear ramp going from start towards end."""
    if samples <= 0:
        return
    for i, t in enumerate(_ramp(samples, start, end)):
        dest[i] *= t


def fade_channels(
    samples: int,
    dest: Sequence[MutableSequence[float]],
    start: float = 0.0,
    end: float = 1.0,
) -> None:
    """Fade every channel of dest."""
    for channel in dest:
        fade(samples, channel, start, end)


def fade_into(
    samples: int,
    dest: MutableSequence[float],
    src: Sequence[float],
    start: float = 0.0,
    end: float = 1.0,
) -> None:
    """Cross-fade src into dest along a linear ramp from start towards end."""
    if samples <= 0:
        return
    for i, t in enumerate(_ramp(samples, start, end)):
        dest[i] = dest[i] + t * (src[i] - dest[i])


def fade_into_channels(
    samples: int,
    dest: Sequence[MutableSequence[float]],
    src: Sequence[Sequence[float]],
    start: float = 0.0,
    end: float = 1.0,
) -> None:
    """Cross-fade each source channel into the matching destination channel."""
    for d, s in zip(dest, src):
        fade_into(samples, d, s, start, end)


def multiply(
    samples: int,
    dest: MutableSequence[float],
    factor: float,
    dest_skip: int = 0,
) -> None:
    """Multiply samples in place by a constant, without clipping."""
    for d in _strided(samples, dest_skip):
        dest[d] *= factor


def multiply_channels(
    samples: int,
    dest: Sequence[MutableSequence[float]],
    factor: float,
    dest_skip: int = 0,
) -> None:
    """Multiply a set of channels by a constant."""
    for channel in dest:
        multiply(samples, channel, factor, dest_skip)


def reverse(
    samples: int,
    dest: MutableSequence[float],
    src: Sequence[float],
    dest_skip: int = 0,
    src_skip: int = 0,
) -> None:
    """Copy samples from src into dest in reversed order."""
    src_positions = reversed(_strided(samples, src_skip))
    for d, s in zip(_strided(samples, dest_skip), src_positions):
        dest[d] = src[s]


def reverse_channels(
    frames: int,
    dest: Sequence[MutableSequence[float]],
    src: Sequence[Sequence[float]],
) -> None:
    """Reverse each source channel into the matching destination channel."""
    for d, s in zip(dest, src):
        reverse(frames, d, s)


def to_mono(left: Sequence[float], right: Sequence[float]) -> list[float]:
    """Sum a stereo pair to mono with equal-power scaling."""
    if len(left) != len(right):
        raise ValueError("left and right must have the same length")
    return [(l + r) * _MONO_GAIN for l, r in zip(left, right)]


def validate(src: Sequence[Sequence[float]]) -> None:
    """Raise ValueError if any sample lies outside the open range (-2, 2)."""
    for index, channel in enumerate(src):
        for v in channel:
            if not -2 < v < 2:
                raise ValueError(f"sample {v!r} in channel {index} is out of range")


def zero(samples: int, dest: MutableSequence[float], dest_skip: int = 0) -> None:
    """Fill samples of dest with zeros."""
    for d in _strided(samples, dest_skip):
        dest[d] = 0.0


def zero_channels(
    samples: int,
    dest: Sequence[MutableSequence[float]],
    dest_skip: int = 0,
) -> None:
    """Fill a set of channels with zeros."""
    for channel in dest:
        zero(samples, channel, dest_skip)


def brent_minimize(
    f: Callable[[float], float],
    left_end: float,
    right_end: float,
    epsilon: float,
) -> tuple[float, float]:
    """Minimise f on [left_end, right_end] by Brent's method.

    Returns (minimum value, location of the minimum).
    """
    c = 0.5 * (3.0 - math.sqrt(5.0))
    sqrt_eps = math.sqrt(sys.float_info.epsilon)

    a, b = left_end, right_end
    v = w = x = a + c * (b - a)
    d = e = 0.0
    fv = fw = fx = f(x)

    while True:
        m = 0.5 * (a + b)
        tol = sqrt_eps * abs(x) + epsilon
        t2 = 2.0 * tol
        if abs(x - m) <= t2 - 0.5 * (b - a):
            return fx, x

        p = q = r = 0.0
        if abs(e) > tol:
            # fit parabola
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            else:
                q = -q
            r = e
            e = d

        if abs(p) < abs(0.5 * q * r) and p < q * (a - x) and p < q * (b - x):
            d = p / q
            u = x + d
            if u - a < t2 or b - u < t2:
                d = tol if x < m else -tol
        else:
            e = (b if x < m else a) - x
            d = c * e

        if abs(d) >= tol:
            u = x + d
        elif d > 0.0:
            u = x + tol
        else:
            u = x - tol
        fu = f(u)

        if fu <= fx:
            if u < x:
                b = x
            else:
                a = x
            v, fv = w, fw
            w, fw = x, fx
            x, fx = u, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, fv = w, fw
                w, fw = u, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu


class EnvelopeFollower:
    """Tracks signal peaks per channel with separate attack and release."""

    def __init__(self, channels: int = 2) -> None:
        if channels < 1:
            raise ValueError("channels must be at least 1")
        self._env = [0.0] * channels
        self._attack: float | None = None
        self._release: float | None = None

    def __getitem__(self, channel: int) -> float:
        return self._env[channel]

    def __len__(self) -> int:
        return len(self._env)

    def setup(self, sample_rate: int, attack_ms: float, release_ms: float) -> None:
        """Set the attack and release times in milliseconds."""
        self._attack = 0.01 ** (1.0 / (attack_ms * sample_rate * 0.001))
        self._release = 0.01 ** (1.0 / (release_ms * sample_rate * 0.001))

    def process(self, src: Sequence[Sequence[float]]) -> None:
        """Feed one block, given as one sample sequence per channel."""
        if self._attack is None or self._release is None:
            raise RuntimeError("setup must be called before process")
        if len(src) != len(self._env):
            raise ValueError(f"expected {len(self._env)} channels, got {len(src)}")
        for index, channel in enumerate(src):
            e = self._env[index]
            for sample in channel:
                v = abs(sample)
                coeff = self._attack if v > e else self._release
                e = coeff * (e - v) + v
            self._env[index] = e