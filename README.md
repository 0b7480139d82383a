# meterdsp

Audio level metering in plain Python, with no third-party dependencies:

- `meterdsp.meter_source`: a level-meter source that tracks peak, RMS, clip and gain-reduction readings per channel
- `meterdsp.look_and_feel` and `meterdsp.layouts`: horizontal and vertical meter styles that work out bar, tick and clip-light geometry and draw onto any graphics object you supply
- `meterdsp.level_meter`: a meter component that joins a source and a style and handles clicks on the clip lights
- `meterdsp.bufferops`: helpers for sample lists, an envelope follower and Brent minimisation
- `meterdsp.mathsupport`: complex-number helpers and denormal prevention

## Install

```
pip install meterdsp
```

To run the tests:

```
pip install "meterdsp[test]"
pytest
```

## Metering a signal

A block is given as one sequence of samples per channel.

```python
from meterdsp.meter_source import LevelMeterSource

source = LevelMeterSource()
source.resize(2, 8)                      # two channels, RMS averaged over 8 blocks
source.measure_block([[0.5, -0.25], [1.2, 0.1]], time_ms=0)

source.max_level(0)     # 0.5: the block's peak, capped at 1.0
source.rms_level(0)     # RMS averaged over the last 8 blocks
source.clip_flag(1)     # True: channel 1 went above 1.0
source.clear_all_clip_flags()
```

- `measure_block` takes the current time from the system clock when `time_ms` is left out. It adapts the channel count to the block; new channels average RMS over 8 blocks.
- A peak is held for 500 ms by default; `set_max_hold_ms` changes that. A higher peak always replaces the held one.
- `set_suspended(True)` makes `measure_block` take no readings until it is set back to `False`.
- `set_reduction_level` and `reduction_level` store and read a gain-reduction value per channel; `reduction_level` returns `-1.0` for a channel that does not exist.
- `max_level`, `rms_level`, `clip_flag` and `clear_clip_flag` raise `IndexError` for a channel that does not exist.

## Meter styles

`meterdsp.layouts` provides `LevelMeterLookAndFeelHorizontal` and `LevelMeterLookAndFeelVertical`, both subclasses of `meterdsp.look_and_feel.LevelMeterLookAndFeel`. Geometry is given as `meterdsp.look_and_feel.Rectangle(x, y, width, height)`.

```python
from meterdsp.layouts import LevelMeterLookAndFeelVertical
from meterdsp.look_and_feel import ColourId, Rectangle

style = LevelMeterLookAndFeelVertical()
style.clip_light_bounds(Rectangle(0, 0, 100, 300), 2, 0)   # clip light of channel 0
style.set_meter_colour(ColourId.METER_MAX_OVER, 0xFFFF0000)
```

Colours are integers in `0xAARRGGBB` form, keyed by `ColourId`. `meter_colour` returns the current one.

Drawing goes through the object you pass as `g`. It must provide the methods listed by the `meterdsp.look_and_feel.Graphics` protocol: `save_state`, `restore_state`, `set_colour`, `set_gradient_fill` (given a `ColourGradient`), `fill_rect`, `fill_rounded_rectangle`, `draw_rounded_rectangle`, `draw_vertical_line` and `draw_horizontal_line`. `draw_meters(g, bounds, source)` draws the background, every channel's bar, peak line, reduction and clip light, and the ticks between bars. Without a source it draws two empty meters.

`gain_to_decibels(gain, minus_infinity_db=-100.0)` converts a linear gain to decibels, never going below the given floor.

## The meter component

```python
from meterdsp.level_meter import LevelMeter
from meterdsp.look_and_feel import Rectangle

meter = LevelMeter(bounds=Rectangle(0, 0, 100, 300))   # vertical style by default
meter.set_meter_source(source)
meter.paint(g)
meter.mouse_down((10.0, 8.0))          # clears the clip flag of the light hit
meter.mouse_double_click((10.0, 8.0))  # clears all clip flags if a light is hit
```

- The meter paints in its own coordinates: `(0, 0)` to the width and height of `bounds`. Mouse positions are in the same coordinates.
- The source is held by a weak reference. Once the source is gone, the meter paints empty bars and ignores clicks.
- `mouse_down` does nothing unless `left_button` is true, which is the default.
- `set_refresh_rate_hz` sets the repaint rate; the default is 30 Hz. `timer_interval_ms` gives the matching interval, or `None` for a rate of 0 or less. `timer_callback` calls `on_repaint` if one is set.

## Buffer utilities

`meterdsp.bufferops` works on Python lists and other mutable sequences:

- `interleave(channels)` and `deinterleave(channels, frames)` convert between separate channels and interleaved frames. Both need at least two channels and raise `ValueError` on uneven lengths.
- `to_mono(left, right)` sums a stereo pair with a gain of 1/sqrt(2).
- `copy`, `add`, `multiply`, `reverse` and `zero` work in place, with an optional skip: a skip of n steps over n samples between used ones. Each has a `*_channels` form for a list of channels.
- `fade` multiplies by a linear ramp. `fade_into` cross-fades a source into the destination. Both have `*_channels` forms.
- `validate(channels)` raises `ValueError` if any sample lies outside the open range (-2, 2).
- `brent_minimize(f, left_end, right_end, epsilon)` returns `(minimum value, location)`.
- `EnvelopeFollower(channels=2)` tracks peaks with separate attack and release times. Call `setup(sample_rate, attack_ms, release_ms)` before `process(blocks)`, then read each channel by index.

`meterdsp.mathsupport` holds quadratic solvers, `asinh`, `acosh`, `recip`, `addmul`, `adjust_imag`, `is_nan`, `infinity` and `DenormalPrevention`.

## What it does not do

meterdsp opens no window, reads no audio device and runs no timer. You supply the samples to `measure_block`, the graphics object to `paint`, and the mouse positions. If you want periodic repaints, call `timer_callback` yourself at `timer_interval_ms`.