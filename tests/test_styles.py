import pytest

from pagewright.styles import PaintStyle, parse_style


def test_fill():
    assert parse_style("F") is PaintStyle.FILL


@pytest.mark.parametrize("style", ["FD", "DF"])
def test_draw_fill(style):
    assert parse_style(style) is PaintStyle.DRAW_FILL


@pytest.mark.parametrize("style", ["", "D", "f", "anything"])
def test_default_is_draw(style):
    assert parse_style(style) is PaintStyle.DRAW


def test_operator_values():
    assert parse_style("F").value == "f"
    assert parse_style("DF").value == "B"
    assert parse_style("D").value == "S"