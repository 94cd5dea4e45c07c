import math

import pytest

from mbfea.repulsion import (
    PowerlawRepulsion,
    is_inside_triangle,
    powerlaw_repulsion_by_segment,
    wall_discrete_powerlaw,
)


# --- is_inside_triangle -----------------------------------------------------

def test_point_inside_clockwise_triangle_is_true():
    assert is_inside_triangle(0.2, 0.0, 0.0, 1.0, 0.2, 0.0, 1.0, 0.0) is True


def test_point_inside_counter_clockwise_triangle_is_false():
    assert is_inside_triangle(0.2, 0.0, 1.0, 0.0, 0.2, 0.0, 0.0, 1.0) is False


@pytest.mark.parametrize("point", [(0.2, 0.2), (0.1, 0.6), (2.0, 3.0), (-1.0, 0.5)])
def test_cyclic_vertex_rotation_gives_same_answer(point):
    px, py = point
    vx = (0.0, 0.0, 1.0)
    vy = (0.0, 1.0, 0.0)
    first = is_inside_triangle(px, vx[0], vx[1], vx[2], py, vy[0], vy[1], vy[2])
    rotated = is_inside_triangle(px, vx[1], vx[2], vx[0], py, vy[1], vy[2], vy[0])
    assert first == rotated


@pytest.mark.parametrize("point", [(0.2, 0.2), (0.1, 0.6), (2.0, 3.0), (-1.0, 0.5)])
def test_reversing_orientation_flips_answer_for_strict_points(point):
    px, py = point
    clockwise = is_inside_triangle(px, 0.0, 0.0, 1.0, py, 0.0, 1.0, 0.0)
    counter = is_inside_triangle(px, 0.0, 1.0, 0.0, py, 0.0, 0.0, 1.0)
    assert clockwise != counter


# --- powerlaw_repulsion_by_segment -----------------------------------------

def test_segment_beyond_cutoff_gives_zero_result():
    result = powerlaw_repulsion_by_segment(0.5, 0.0, 1.0, -5.0, 0.0, 0.0, 1.0, 1.0, 2.0)
    assert result == PowerlawRepulsion()


def test_segment_distance_equal_to_cutoff_gives_zero_result():
    result = powerlaw_repulsion_by_segment(0.5, 0.0, 1.0, -2.0, 0.0, 0.0, 1.0, 1.0, 2.0)
    assert result == PowerlawRepulsion()


def test_segment_worked_example():
    result = powerlaw_repulsion_by_segment(0.3, 0.0, 1.0, -1.0, 0.0, 0.0, 1.0, 2.0, 3.0)
    assert result.nx == pytest.approx(0.0)
    assert result.ny == pytest.approx(-1.0)
    assert result.r == pytest.approx(1.0)
    assert result.energy == pytest.approx(1.0)
    assert result.f == pytest.approx(12.0)
    assert result.fx == pytest.approx(0.0)
    assert result.fy == pytest.approx(-12.0)


@pytest.mark.parametrize(
    "args",
    [
        (0.4, 0.0, 2.0, -0.7, 0.0, 1.0, 0.5, 1.5, 2.0),
        (1.0, -1.0, 3.0, 2.0, 0.5, 0.2, 1.2, 0.3, 5.0),
        (0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.8, 2.0, 1.5),
    ],
)
def test_segment_force_energy_relation_and_unit_normal(args):
    result = powerlaw_repulsion_by_segment(*args)
    assert result.r != 0.0
    assert math.hypot(result.nx, result.ny) == pytest.approx(1.0)
    assert result.f == pytest.approx(12.0 * result.energy / result.r)
    assert result.fx == pytest.approx(result.f * result.nx)
    assert result.fy == pytest.approx(result.f * result.ny)


def test_segment_result_independent_of_position_along_line():
    a = powerlaw_repulsion_by_segment(0.1, 0.0, 1.0, -0.9, 0.0, 0.0, 1.0, 1.0, 3.0)
    b = powerlaw_repulsion_by_segment(7.5, 0.0, 1.0, -0.9, 0.0, 0.0, 1.0, 1.0, 3.0)
    assert a.energy == pytest.approx(b.energy)
    assert a.fy == pytest.approx(b.fy)


# --- wall_discrete_powerlaw -------------------------------------------------

def test_wall_nodes_beyond_cutoff_give_zero_result():
    result = wall_discrete_powerlaw(0.0, 0.0, 1.0, 5.0, 0.0, 0.0, 1.0, 1.0, 1.0, 4)
    assert result == PowerlawRepulsion()


def test_single_wall_node_pushes_point_away():
    result = wall_discrete_powerlaw(0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 1.0, 10.0, 1)
    assert result.fx == pytest.approx(0.0)
    assert result.fy > 0.0
    assert result.r == 0.0 and result.f == 0.0
    assert result.nx == 0.0 and result.ny == 0.0


def test_single_wall_node_matches_segment_energy_at_same_distance():
    node = wall_discrete_powerlaw(0.0, 0.0, 1.0, 1.3, 0.0, 0.0, 0.9, 1.7, 10.0, 1)
    segment = powerlaw_repulsion_by_segment(0.0, 0.0, 1.0, -1.3, 0.0, 0.0, 0.9, 1.7, 10.0)
    assert node.energy == pytest.approx(segment.energy)
    assert node.fy == pytest.approx(-segment.fy)


def test_wall_contributions_add_up():
    whole = wall_discrete_powerlaw(0.3, 0.0, 2.0, 0.8, 0.0, 0.0, 1.0, 1.0, 10.0, 2)
    first = wall_discrete_powerlaw(0.3, 0.0, 1.0, 0.8, 0.0, 0.0, 1.0, 1.0, 10.0, 1)
    second = wall_discrete_powerlaw(0.3, 1.0, 2.0, 0.8, 0.0, 0.0, 1.0, 1.0, 10.0, 1)
    assert whole.energy == pytest.approx(first.energy + second.energy)
    assert whole.fx == pytest.approx(first.fx + second.fx)
    assert whole.fy == pytest.approx(first.fy + second.fy)


def test_wall_symmetric_point_has_no_tangential_force():
    # nodes at x = -1, 0, 1 (s = 0, 1/3, 2/3 along -1..2)
    result = wall_discrete_powerlaw(0.0, -1.0, 2.0, 1.0, 0.0, 0.0, 1.0, 1.0, 1.5, 3)
    assert result.fx == pytest.approx(0.0, abs=1e-12)
    assert result.fy > 0.0


@pytest.mark.parametrize("count", [0, -3])
def test_wall_requires_positive_node_count(count):
    with pytest.raises(ValueError):
        wall_discrete_powerlaw(0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 1.0, 1.0, count)