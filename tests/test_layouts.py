import pytest

from meterdsp.layouts import LevelMeterLookAndFeelHorizontal, LevelMeterLookAndFeelVertical
from meterdsp.look_and_feel import ColourGradient, ColourId, Rectangle
from meterdsp.meter_source import LevelMeterSource


class _Recorder:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name, args))

        return record

    def names(self, name):
        return [args for n, args in self.calls if n == name]


BOUNDS = Rectangle(0, 0, 200, 400)
BAR = Rectangle(10, 20, 50, 100)
STYLES = [LevelMeterLookAndFeelHorizontal, LevelMeterLookAndFeelVertical]


@pytest.mark.parametrize("style", STYLES)
def test_clip_lights_lie_inside_bounds(style):
    lnf = style()
    for channel in range(3):
        led = lnf.clip_light_bounds(BOUNDS, 3, channel)
        assert led.x >= BOUNDS.x and led.right <= BOUNDS.right
        assert led.y >= BOUNDS.y and led.bottom <= BOUNDS.bottom
        assert led.width > 0 and led.height > 0


def test_vertical_clip_lights_ordered_left_to_right():
    lnf = LevelMeterLookAndFeelVertical()
    leds = [lnf.clip_light_bounds(BOUNDS, 3, c) for c in range(3)]
    assert all(a.right <= b.x for a, b in zip(leds, leds[1:]))
    assert len({led.y for led in leds}) == 1


def test_horizontal_clip_lights_ordered_top_to_bottom():
    lnf = LevelMeterLookAndFeelHorizontal()
    leds = [lnf.clip_light_bounds(BOUNDS, 3, c) for c in range(3)]
    assert all(a.bottom <= b.y for a, b in zip(leds, leds[1:]))
    assert len({led.x for led in leds}) == 1


@pytest.mark.parametrize("style", STYLES)
def test_clip_light_contains_its_centre(style):
    led = style().clip_light_bounds(BOUNDS, 2, 1)
    assert led.contains((led.x + led.width / 2, led.y + led.height / 2))


@pytest.mark.parametrize("style", STYLES)
def test_draw_meters_without_source_draws_two_channels(style):
    g = _Recorder()
    style().draw_meters(g, BOUNDS, None)
    assert len(g.names("set_gradient_fill")) == 2
    ticks = g.names("draw_vertical_line") + g.names("draw_horizontal_line")
    assert len(ticks) == 11
    assert g.calls[0] == ("save_state", ())
    assert g.calls[-1] == ("restore_state", ())


@pytest.mark.parametrize("style", STYLES)
def test_draw_meters_follows_source_channels(style):
    source = LevelMeterSource()
    source.resize(4, 8)
    g = _Recorder()
    style().draw_meters(g, BOUNDS, source)
    assert len(g.names("set_gradient_fill")) == 4


@pytest.mark.parametrize("style", STYLES)
def test_draw_meters_lights_clipped_channel(style):
    lnf = style()
    source = LevelMeterSource()
    source.measure_block([[0.1], [1.5]], time_ms=0)
    g = _Recorder()
    lnf.draw_meters(g, BOUNDS, source)
    led = lnf.clip_light_bounds(BOUNDS, 2, 1)
    index = g.calls.index(("fill_rect", (led,)))
    assert g.calls[index - 1] == ("set_colour", (lnf.meter_colour(ColourId.METER_MAX_OVER),))


@pytest.mark.parametrize("style", STYLES)
def test_background_fills_and_outlines(style):
    lnf = style()
    g = _Recorder()
    lnf.draw_meters_background(g, BOUNDS)
    corner = lnf.corner_size(BOUNDS)
    assert g.names("fill_rounded_rectangle") == [(BOUNDS, corner)]
    assert g.names("draw_rounded_rectangle") == [(BOUNDS.reduced(0.5), corner, 1.0)]
    assert g.names("set_colour") == [
        (lnf.meter_colour(ColourId.BACKGROUND),),
        (lnf.meter_colour(ColourId.OUTLINE),),
    ]


def test_vertical_ticks_span_bounds():
    g = _Recorder()
    LevelMeterLookAndFeelVertical().draw_meter_ticks(g, BAR)
    lines = g.names("draw_horizontal_line")
    assert len(lines) == 11
    assert lines[0][0] == BAR.y
    assert lines[-1][0] == pytest.approx(BAR.bottom)
    assert all(left == BAR.x + 4 and right == BAR.right - 4 for _, left, right in lines)


def test_horizontal_ticks_span_bounds():
    g = _Recorder()
    LevelMeterLookAndFeelHorizontal().draw_meter_ticks(g, BAR)
    lines = g.names("draw_vertical_line")
    assert len(lines) == 11
    assert lines[0][0] == BAR.x
    assert lines[-1][0] == pytest.approx(BAR.right)


def _level_fill(g):
    fills = g.names("fill_rect")
    gradient_index = next(i for i, (n, _) in enumerate(g.calls) if n == "set_gradient_fill")
    return next(args[0] for n, args in g.calls[gradient_index:] if n == "fill_rect"), fills


def test_vertical_full_scale_fills_whole_bar():
    g = _Recorder()
    LevelMeterLookAndFeelVertical().draw_meter_bar(g, BAR, 1.0, 1.0)
    level, _ = _level_fill(g)
    assert level == BAR


def test_vertical_silence_fills_nothing():
    g = _Recorder()
    LevelMeterLookAndFeelVertical().draw_meter_bar(g, BAR, 0.0, 0.0)
    level, _ = _level_fill(g)
    assert level.height == 0
    assert g.names("draw_horizontal_line") == []


def test_horizontal_full_scale_fills_whole_bar():
    g = _Recorder()
    LevelMeterLookAndFeelHorizontal().draw_meter_bar(g, BAR, 1.0, 1.0)
    level, _ = _level_fill(g)
    assert level.x == BAR.x
    assert level.right == pytest.approx(BAR.right)


def test_horizontal_silence_fills_nothing():
    g = _Recorder()
    LevelMeterLookAndFeelHorizontal().draw_meter_bar(g, BAR, 0.0, 0.0)
    level, _ = _level_fill(g)
    assert level.width == 0
    assert g.names("draw_vertical_line") == []


@pytest.mark.parametrize("style", STYLES)
def test_gradient_colours(style):
    lnf = style()
    g = _Recorder()
    lnf.draw_meter_bar(g, BAR, 0.5, 0.5)
    (gradient,) = g.names("set_gradient_fill")[0]
    assert isinstance(gradient, ColourGradient)
    assert gradient.colour1 == lnf.meter_colour(ColourId.METER_GRADIENT_LOW)
    assert gradient.colour2 == lnf.meter_colour(ColourId.METER_GRADIENT_MAX)
    assert gradient.stops == [
        (0.5, lnf.meter_colour(ColourId.METER_GRADIENT_LOW)),
        (0.75, lnf.meter_colour(ColourId.METER_GRADIENT_MID)),
    ]


@pytest.mark.parametrize("style", STYLES)
@pytest.mark.parametrize(
    "peak, colour_id",
    [
        (1.0, ColourId.METER_MAX_OVER),
        (0.7, ColourId.METER_MAX_WARN),
        (0.5, ColourId.METER_MAX_NORMAL),
    ],
)
def test_peak_line_colour(style, peak, colour_id):
    lnf = style()
    g = _Recorder()
    lnf.draw_meter_bar(g, BAR, peak, 0.1)
    colours = [args[0] for args in g.names("set_colour")]
    assert colours[-1] == lnf.meter_colour(colour_id)


@pytest.mark.parametrize("style", STYLES)
def test_peak_line_stays_inside_bar(style):
    g = _Recorder()
    style().draw_meter_bar(g, BAR, 0.3, 0.1)
    lines = g.names("draw_vertical_line") + g.names("draw_horizontal_line")
    assert len(lines) == 1
    position = lines[0][0]
    assert BAR.x <= position <= BAR.right or BAR.y <= position <= BAR.bottom


@pytest.mark.parametrize("style", STYLES)
def test_no_reduction_when_negative(style):
    lnf = style()
    g = _Recorder()
    lnf.draw_meter_bar(g, BAR, 0.5, 0.5, -1.0)
    colours = [args[0] for args in g.names("set_colour")]
    assert colours.count(lnf.meter_colour(ColourId.METER_REDUCTION)) == 0 or (
        lnf.meter_colour(ColourId.METER_REDUCTION) == lnf.meter_colour(ColourId.METER_MAX_WARN)
        and len(g.names("fill_rect")) == 2
    )
    assert len(g.names("fill_rect")) == 2


@pytest.mark.parametrize("style", STYLES)
def test_reduction_drawn_inside_bar(style):
    lnf = style()
    g = _Recorder()
    lnf.draw_meter_bar(g, BAR, 0.5, 0.5, 0.5)
    fills = g.names("fill_rect")
    assert len(fills) == 3
    reduction = fills[-1][0]
    assert reduction.x >= BAR.x and reduction.right <= BAR.right
    assert reduction.y >= BAR.y and reduction.bottom <= BAR.bottom
    assert g.names("set_colour")[-1] == (lnf.meter_colour(ColourId.METER_REDUCTION),)