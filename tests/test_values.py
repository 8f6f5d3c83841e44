import math

import pytest

from delaunay.svg.values import (
    Coordinate,
    FillRule,
    LineCap,
    LineJoin,
    Units,
    atof,
    is_coordinate,
    parse_coordinate_raw,
    parse_fill_rule,
    parse_line_cap,
    parse_line_join,
    parse_miter_limit,
    parse_number,
    parse_opacity,
    parse_units,
    parse_url,
)


def test_parse_number_full_token():
    assert parse_number("12.5e3px", 0) == ("12.5e3", 6)


def test_parse_number_leaves_em_unit():
    token, end = parse_number("3em", 0)
    assert token == "3"
    assert end == 1


def test_parse_number_from_offset():
    token, end = parse_number("a,-7.25 b", 2)
    assert token == "-7.25"
    assert end == 7


def test_parse_number_truncates_long_token():
    text = "1" * 100
    token, end = parse_number(text, 0)
    assert len(token) == 63
    assert end == 100


@pytest.mark.parametrize("value", [0.0, 1.5, -2.25, 123.0, 0.125, 1e-5, 3.5e10])
def test_atof_round_trip(value):
    assert atof(repr(value)) == pytest.approx(value)


@pytest.mark.parametrize("text", ["", "abc", "-", "+.", ".e5"])
def test_atof_no_digits_is_zero(text):
    assert atof(text) == 0.0


def test_atof_leading_dot_and_sign():
    assert atof("-.5") == pytest.approx(-0.5)
    assert atof("+.5") == pytest.approx(0.5)


def test_atof_ignores_trailing_text():
    assert atof("42px") == pytest.approx(42.0)


def test_atof_overflowing_exponent_is_infinite():
    assert atof("1e400") == math.inf


def test_parse_opacity_clamps():
    assert parse_opacity("2") == 1.0
    assert parse_opacity("-0.5") == 0.0
    assert parse_opacity("0.25") == pytest.approx(0.25)


def test_parse_miter_limit_clamps_negative():
    assert parse_miter_limit("-3") == 0.0
    assert parse_miter_limit("4") == pytest.approx(4.0)


@pytest.mark.parametrize(
    "text,units",
    [
        ("px", Units.PX),
        ("pt", Units.PT),
        ("pc", Units.PC),
        ("mm", Units.MM),
        ("cm", Units.CM),
        ("in", Units.IN),
        ("%", Units.PERCENT),
        ("em", Units.EM),
        ("ex", Units.EX),
        ("", Units.USER),
        ("q", Units.USER),
    ],
)
def test_parse_units(text, units):
    assert parse_units(text) is units


@pytest.mark.parametrize("text", ["1", "-1", "+.5", ".5", "9x"])
def test_is_coordinate_true(text):
    assert is_coordinate(text) is True


@pytest.mark.parametrize("text", ["", "-", "M", "+x", "e5"])
def test_is_coordinate_false(text):
    assert is_coordinate(text) is False


def test_parse_coordinate_raw_with_units():
    assert parse_coordinate_raw("10mm") == Coordinate(10.0, Units.MM)
    assert parse_coordinate_raw("50%") == Coordinate(50.0, Units.PERCENT)
    assert parse_coordinate_raw("2em") == Coordinate(2.0, Units.EM)
    assert parse_coordinate_raw("7") == Coordinate(7.0, Units.USER)


def test_enumeration_values_fixed_by_format():
    assert int(parse_units("ex")) == 9
    assert int(parse_units("px")) == 1
    assert int(parse_line_cap("square")) == 2
    assert int(parse_line_join("bevel")) == 2
    assert int(parse_fill_rule("evenodd")) == 1


def test_line_cap_join_fill_rule():
    assert parse_line_cap("round") is LineCap.ROUND
    assert parse_line_cap("square") is LineCap.SQUARE
    assert parse_line_cap("inherit") is LineCap.BUTT
    assert parse_line_join("bevel") is LineJoin.BEVEL
    assert parse_line_join("round") is LineJoin.ROUND
    assert parse_line_join("other") is LineJoin.MITER
    assert parse_fill_rule("evenodd") is FillRule.EVENODD
    assert parse_fill_rule("inherit") is FillRule.NONZERO


def test_parse_url():
    assert parse_url("url(#grad1)") == "grad1"
    assert parse_url("url(grad2)") == "grad2"
    assert parse_url("url(#unterminated") == "unterminated"


def test_parse_url_truncates():
    assert len(parse_url("url(#" + "a" * 100 + ")")) == 63