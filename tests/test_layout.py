import pytest

from triadchat.layout import (
    Length,
    Min,
    left_column_constraints,
    left_right_constraints,
    right_column_constraints,
    should_show_side_panels,
    three_pane_constraints,
    truncate,
)


def test_three_pane_constraints():
    assert three_pane_constraints() == [Length(18), Min(0), Length(22)]


def test_left_right_constraints():
    assert left_right_constraints() == [Length(18), Min(0)]


def test_right_column_constraints():
    assert right_column_constraints() == [Min(0), Length(8)]


@pytest.mark.parametrize(("cols", "expected"), [(79, False), (80, True), (200, True)])
def test_should_show_side_panels(cols, expected):
    assert should_show_side_panels(cols) is expected


def test_left_column_small_height_is_clamped():
    assert left_column_constraints(5) == [Min(0), Length(5)]


def test_left_column_medium_height_is_eight():
    assert left_column_constraints(30) == [Min(0), Length(8)]


def test_left_column_tall_height_scales():
    assert left_column_constraints(50) == [Min(0), Length(20)]


@pytest.mark.parametrize("height", range(31, 120, 7))
def test_left_column_rooms_never_exceed_half(height):
    rooms = left_column_constraints(height)[1]
    assert 8 < rooms.value <= height // 2


def test_truncate_counts_characters():
    assert truncate("héllo", 2) == "hé"
    assert truncate("日本語", 10) == "日本語"
    assert truncate("abc", 0) == ""