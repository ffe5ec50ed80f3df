import random

import pytest

from collider import Body, integrate, kick, resolve
from layout import plan_fixed
from mazegen import generate_maze


@pytest.fixture
def single_cell():
    maze = generate_maze(1, 1)
    pos_x, pos_z = plan_fixed(1, 1)
    return maze, pos_x, pos_z


def test_head_on_rebound(single_cell):
    maze, pos_x, pos_z = single_cell
    body = Body(0.5, 0.9, vx=0.3, vz=2.0)
    resolve(body, maze, pos_x, pos_z, radius=0.1, restitution=0.5, thickness=0.1)
    assert body.vz == pytest.approx(-1.0)
    assert body.vx == pytest.approx(0.3)
    assert body.z == pytest.approx(0.85)
    assert body.x == pytest.approx(0.5)


def test_rebound_off_left_wall(single_cell):
    maze, pos_x, pos_z = single_cell
    body = Body(0.12, 0.5, vx=-2.0, vz=0.0)
    resolve(body, maze, pos_x, pos_z, radius=0.1, restitution=0.8, thickness=0.1)
    assert body.vx == pytest.approx(1.6)
    assert body.x == pytest.approx(0.15)


def test_body_moving_away_is_untouched(single_cell):
    maze, pos_x, pos_z = single_cell
    body = Body(0.5, 0.9, vx=0.0, vz=-1.0)
    resolve(body, maze, pos_x, pos_z, radius=0.1, restitution=0.5)
    assert (body.z, body.vz) == (0.9, -1.0)


def test_corner_resolves_both_axes(single_cell):
    maze, pos_x, pos_z = single_cell
    body = Body(0.9, 0.9, vx=1.0, vz=1.0)
    resolve(body, maze, pos_x, pos_z, radius=0.1, restitution=1.0, thickness=0.1)
    assert (body.vx, body.vz) == (-1.0, -1.0)
    assert body.x == pytest.approx(0.85)
    assert body.z == pytest.approx(0.85)


def test_slow_body_is_stopped(single_cell):
    maze, pos_x, pos_z = single_cell
    body = Body(0.5, 0.5, vx=0.01, vz=0.01)
    resolve(body, maze, pos_x, pos_z, radius=0.1, restitution=0.5, min_speed=0.05)
    assert (body.vx, body.vz) == (0.0, 0.0)


@pytest.mark.parametrize("radius,restitution", [(0.0, 0.5), (0.1, -0.1), (0.1, 1.5)])
def test_invalid_physics_parameters(single_cell, radius, restitution):
    maze, pos_x, pos_z = single_cell
    with pytest.raises(ValueError):
        resolve(Body(0.5, 0.5), maze, pos_x, pos_z, radius, restitution)


def test_integrate_applies_friction():
    body = integrate(Body(0.0, 0.0, vx=1.0, vz=-2.0), 0.5, friction=0.2)
    assert (body.x, body.z) == (0.5, -1.0)
    assert body.vx == pytest.approx(0.9)
    assert body.vz == pytest.approx(-1.8)


def test_kick_pushes_away():
    body = kick(Body(1.0, 0.0), 0.0, 0.0, 2.0)
    assert (body.vx, body.vz) == (2.0, 0.0)
    still = kick(Body(1.0, 1.0), 1.0, 1.0, 2.0)
    assert still.speed == 0.0


def test_repeated_kicks_do_not_stack():
    body = Body(0.0, 1.0)
    kick(body, 0.0, 0.0, 2.0)
    kick(body, 0.0, 0.0, 2.0)
    assert (body.vx, body.vz) == (0.0, 2.0)


def test_ball_stays_inside_maze():
    rng = random.Random(3)
    maze = generate_maze(3, 3, rng)
    pos_x, pos_z = plan_fixed(3, 3)
    ball = Body(1.5, 1.5, vx=2.5, vz=1.7)
    for _ in range(600):
        integrate(ball, 1 / 60, friction=0.1)
        resolve(ball, maze, pos_x, pos_z, radius=0.15, restitution=0.9)
        assert 0.0 < ball.x < 3.0
        assert 0.0 < ball.z < 3.0
