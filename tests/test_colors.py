import pytest

from figma_blueprint.colors import TRANSPARENT, channel, format_hex, format_rgba, parse_rgba
from figma_blueprint.scene import Color


def test_format_rgba():
    assert format_rgba(Color(1, 0, 0, 1)) == "rgba(255, 0, 0, 1)"
    assert format_rgba(Color(0, 0, 0, 0.5)) == "rgba(0, 0, 0, 0.5)"


def test_missing_color_is_transparent():
    assert format_rgba(None) == TRANSPARENT


def test_channel_rounds_halves_up():
    assert channel(0.5) == 128
    assert channel(0.0) == 0
    assert channel(1.0) == 255


def test_format_hex():
    assert format_hex(Color(1, 1, 1)) == "#ffffff"
    assert format_hex(Color(0, 0.5, 1)) == "#0080ff"


@pytest.mark.parametrize(
    "color",
    [
        Color(0.2, 0.4, 0.6, 0.8),
        Color(0.123, 0.987, 0.5, 0.25),
        Color(1 / 3, 2 / 3, 0.01, 1 / 7),
    ],
)
def test_round_trip_recovers_channels_and_alpha(color):
    r, g, b, a = parse_rgba(format_rgba(color))

    assert (r, g, b) == (channel(color.r), channel(color.g), channel(color.b))
    assert a == pytest.approx(color.a)


def test_parse_rgb_without_alpha():
    assert parse_rgba("rgb(1, 2, 3)") == (1, 2, 3, 1.0)


def test_parse_rejects_other_formats():
    with pytest.raises(ValueError):
        parse_rgba("#ffffff")
