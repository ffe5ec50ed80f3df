import random

import pytest

from layout import (
    cell_bounds,
    cell_center,
    check_layout,
    locate_cell,
    plan_fixed,
    plan_variable,
)


def test_fixed_layout_is_unit_grid():
    pos_x, pos_z = plan_fixed(4, 3)
    assert pos_x == [0, 1, 2, 3, 4]
    assert pos_z == [0, 1, 2, 3]


@pytest.mark.parametrize("seed", range(5))
def test_variable_layout_widths_in_range(seed):
    pos_x, pos_z = plan_variable(7, 5, 0.5, 2.0, random.Random(seed))
    assert len(pos_x) == 8
    assert len(pos_z) == 6
    for pos in (pos_x, pos_z):
        assert pos[0] == 0
        for a, b in zip(pos, pos[1:]):
            assert b > a
            assert 0.5 <= b - a <= 2.0


def test_variable_layout_equal_bounds_is_uniform():
    pos_x, pos_z = plan_variable(3, 2, 1.5, 1.5)
    assert pos_x == pytest.approx([0, 1.5, 3.0, 4.5])
    assert pos_z == pytest.approx([0, 1.5, 3.0])


@pytest.mark.parametrize(
    "min_width,max_width",
    [(0.0, 1.0), (-1.0, 1.0), (2.0, 1.0)],
)
def test_variable_layout_rejects_bad_range(min_width, max_width):
    with pytest.raises(ValueError):
        plan_variable(3, 3, min_width, max_width)


@pytest.mark.parametrize("cols,rows", [(0, 1), (1, 0)])
def test_layout_rejects_bad_dimensions(cols, rows):
    with pytest.raises(ValueError):
        plan_fixed(cols, rows)


def test_rows_are_flipped_along_z():
    pos_x, pos_z = plan_fixed(2, 3)
    assert cell_bounds(pos_x, pos_z, 0, 0) == (0, 1, 2, 3)
    assert cell_bounds(pos_x, pos_z, 2, 1) == (1, 2, 0, 1)
    assert cell_center(pos_x, pos_z, 0, 1) == (1.5, 2.5)


def test_locate_cell_inverts_cell_center():
    pos_x, pos_z = plan_variable(6, 4, 0.7, 1.3, random.Random(1))
    for r in range(4):
        for c in range(6):
            x, z = cell_center(pos_x, pos_z, r, c)
            assert locate_cell(pos_x, pos_z, x, z) == (r, c)


def test_locate_cell_outside():
    pos_x, pos_z = plan_fixed(2, 2)
    assert locate_cell(pos_x, pos_z, -0.1, 1.0) is None
    assert locate_cell(pos_x, pos_z, 1.0, 2.5) is None


def test_check_layout_shape_mismatch():
    pos_x, pos_z = plan_fixed(3, 3)
    with pytest.raises(ValueError):
        check_layout(pos_x, pos_z, 4, 3)
    with pytest.raises(ValueError):
        check_layout([0, 1, 1, 2], pos_z, 3, 3)
