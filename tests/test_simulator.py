"""Tests for node spawning and the reflection step."""

from __future__ import annotations

import numpy as np
import pytest

from network_tiles.core.node import Bounds, Node
from network_tiles.simulation.simulator import spawn_nodes, tick


def _make_node(pos: tuple, vel: tuple) -> Node:
    return Node(position=np.array(pos, dtype=float), velocity=np.array(vel, dtype=float))


class TestTick:
    def test_moves_by_velocity(self):
        node = _make_node((10, 20, 30), (0.1, -0.2, 0.3))
        tick([node], Bounds(100, 100), 100)
        np.testing.assert_allclose(node.position, [10.1, 19.8, 30.3])
        np.testing.assert_allclose(node.velocity, [0.1, -0.2, 0.3])

    def test_reflects_only_the_crossing_axis(self):
        node = _make_node((0.1, 50, 50), (-0.4, 0.2, -0.1))
        tick([node], Bounds(100, 100), 100)
        assert node.velocity[0] == pytest.approx(0.4)
        assert node.velocity[1] == pytest.approx(0.2)
        assert node.velocity[2] == pytest.approx(-0.1)

    def test_no_clamping_in_step(self):
        node = _make_node((0.1, 50, 50), (-0.4, 0.0, 0.0))
        tick([node], Bounds(100, 100), 100)
        assert node.x == pytest.approx(-0.3)

    def test_upper_bounds_per_axis(self):
        # Height and depth differ from width: each axis uses its own limit.
        node = _make_node((99.9, 49.9, 79.95), (0.2, 0.2, 0.1))
        tick([node], Bounds(100, 50), 80)
        np.testing.assert_allclose(node.velocity, [-0.2, -0.2, -0.1])

    def test_border_position_is_inside(self):
        node = _make_node((100, 50, 0), (0.0, 0.0, 0.0))
        tick([node], Bounds(100, 50), 100)
        np.testing.assert_allclose(node.velocity, [0.0, 0.0, 0.0])

    def test_flips_once_per_crossing(self):
        node = _make_node((0.1, 50, 50), (-0.4, 0.05, 0.0))
        signs = [np.sign(node.velocity[0])]
        for _ in range(10):
            tick([node], Bounds(100, 100), 100)
            signs.append(np.sign(node.velocity[0]))
        flips = sum(1 for a, b in zip(signs, signs[1:]) if a != b)
        assert flips == 1
        assert signs[-1] == 1.0
        assert node.velocity[1] == pytest.approx(0.05)

    def test_never_escapes_more_than_one_step(self):
        bounds = Bounds(50, 40)
        nodes = spawn_nodes(20, bounds, 30, 5.0, rng=np.random.default_rng(1))
        upper = bounds.upper(30)
        for _ in range(500):
            tick(nodes, bounds, 30)
            for node in nodes:
                slack = np.abs(node.velocity)
                assert np.all(node.position >= -slack - 1e-9)
                assert np.all(node.position <= upper + slack + 1e-9)

    def test_deterministic_given_seed(self):
        bounds = Bounds(120, 80)
        a = spawn_nodes(13, bounds, 100, 0.2, rng=np.random.default_rng(7))
        b = spawn_nodes(13, bounds, 100, 0.2, rng=np.random.default_rng(7))
        for _ in range(100):
            tick(a, bounds, 100)
            tick(b, bounds, 100)
        for na, nb in zip(a, b):
            np.testing.assert_array_equal(na.position, nb.position)
            np.testing.assert_array_equal(na.velocity, nb.velocity)


class TestSpawnNodes:
    def test_count_and_bounds(self):
        bounds = Bounds(300, 200)
        nodes = spawn_nodes(50, bounds, 100, 0.2, rng=np.random.default_rng(0))
        assert len(nodes) == 50
        upper = bounds.upper(100)
        for node in nodes:
            assert np.all(node.position >= 0)
            assert np.all(node.position <= upper)

    def test_velocity_range(self):
        nodes = spawn_nodes(200, Bounds(10, 10), 100, 0.2, rng=np.random.default_rng(0))
        vs = np.array([n.velocity for n in nodes])
        assert vs.min() >= -0.1
        assert vs.max() < 0.1

    def test_flat_pins_depth(self):
        nodes = spawn_nodes(10, Bounds(10, 10), 100, 0.2,
                            rng=np.random.default_rng(0), flat=True)
        assert all(n.z == 100 for n in nodes)
        assert all(n.velocity[2] == 0 for n in nodes)

    def test_zero_nodes(self):
        assert spawn_nodes(0, Bounds(10, 10), 100, 0.2) == []
