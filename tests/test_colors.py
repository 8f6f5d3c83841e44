import pytest

from delaunay.svg.colors import (
    parse_color,
    parse_color_hex,
    parse_color_name,
    parse_color_rgb,
    rgb,
)


def test_rgb_packs_red_in_low_byte():
    assert rgb(1, 2, 3) == 0x030201


def test_rgb_channels_round_trip():
    value = rgb(12, 34, 56)
    assert (value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF) == (12, 34, 56)


def test_hex_six_digits():
    assert parse_color_hex("#ff0000") == rgb(255, 0, 0)
    assert parse_color_hex("#0000ff") == rgb(0, 0, 255)


def test_hex_three_digits_expand():
    assert parse_color_hex("#f80") == parse_color_hex("#ff8800")


def test_hex_other_length_is_black():
    assert parse_color_hex("#12345") == rgb(0, 0, 0)


def test_hex_stops_at_whitespace():
    assert parse_color_hex("#00ff00 trailing") == rgb(0, 255, 0)


def test_rgb_integers():
    assert parse_color_rgb("rgb(10, 20, 30)") == rgb(10, 20, 30)


def test_rgb_percentages():
    assert parse_color_rgb("rgb(100%, 0%, 100%)") == rgb(255, 0, 255)


def test_rgb_truncated_leaves_missing_channels_unset():
    assert parse_color_rgb("rgb(10)") == rgb(10, -1, -1)


def test_named_colors():
    assert parse_color_name("white") == rgb(255, 255, 255)
    assert parse_color_name("grey") == parse_color_name("gray")


def test_unknown_name_is_grey():
    assert parse_color_name("chartreuse") == rgb(128, 128, 128)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("red", rgb(255, 0, 0)),
        ("  #0000ff", rgb(0, 0, 255)),
        ("rgb(0,128,0)", rgb(0, 128, 0)),
        ("green", rgb(0, 128, 0)),
    ],
)
def test_parse_color_dispatch(text, expected):
    assert parse_color(text) == expected