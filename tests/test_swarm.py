"""
Unit tests for the Swarm coordinator

Covers population management, the two-phase frame update, parameter merging,
attraction-point handles, and the nearest-agent query.
"""

import numpy as np
import pytest

from swarm import Agent, FlockSnapshot, Swarm, SwarmParams


class TestPopulation:

    def test_add_agents(self, empty_swarm):
        added = empty_swarm.add_agents(25)
        assert len(added) == 25
        assert len(empty_swarm) == 25

    def test_spawn_volume(self, empty_swarm):
        empty_swarm.add_agents(100)
        p = empty_swarm.positions()
        assert ((p[:, 0] >= -3) & (p[:, 0] < 3)).all()
        assert ((p[:, 1] >= 1) & (p[:, 1] < 4)).all()
        assert ((p[:, 2] >= -3) & (p[:, 2] < 3)).all()

    def test_agents_are_independent(self, empty_swarm):
        a, b = empty_swarm.add_agents(2)
        assert not np.array_equal(a.position, b.position)
        assert a.position is not b.position

    def test_negative_count_rejected(self, empty_swarm):
        with pytest.raises(ValueError):
            empty_swarm.add_agents(-1)

    def test_remove_all(self, empty_swarm):
        empty_swarm.add_agents(10)
        empty_swarm.remove_all()
        assert len(empty_swarm) == 0
        empty_swarm.update()   # empty frame is a no-op

    def test_reset_keeps_population_size(self, empty_swarm):
        old = empty_swarm.add_agents(12)
        new = empty_swarm.reset()
        assert len(empty_swarm) == 12
        assert not any(agent in old for agent in new)

    def test_reset_to_new_size(self, empty_swarm):
        empty_swarm.add_agents(12)
        empty_swarm.reset(5)
        assert len(empty_swarm) == 5

    def test_seed_is_reproducible(self):
        a = Swarm(count=10, seed=3)
        b = Swarm(count=10, seed=3)
        np.testing.assert_array_equal(a.positions(), b.positions())
        np.testing.assert_array_equal(a.velocities(), b.velocities())

    def test_base_colors_are_valid_rgb(self, empty_swarm):
        empty_swarm.add_agents(20)
        colors = empty_swarm.base_colors()
        assert colors.shape == (20, 3)
        assert ((colors >= 0) & (colors <= 1)).all()

    def test_accessor_shapes_when_empty(self, empty_swarm):
        assert empty_swarm.positions().shape == (0, 3)
        assert empty_swarm.orientations().shape == (0, 4)
        assert empty_swarm.attraction_strengths().shape == (0,)


class TestUpdate:

    def test_isolated_agent_moves_by_its_velocity(self, swarm_with):
        agent = Agent(position=(0.0, 2.0, 0.0), velocity=(0.01, 0.0, -0.01))
        swarm = swarm_with(agent)

        snapshot = FlockSnapshot.capture(swarm.agents)
        agent.accumulate(snapshot.neighborhood(0), swarm.params, swarm.attraction_points)
        assert np.array_equal(agent.acceleration, np.zeros(3))
        agent.integrate()

        np.testing.assert_allclose(agent.position, [0.01, 2.0, -0.01])

    def test_snapshot_freezes_current_state(self, swarm_with):
        agent = Agent(position=(0.0, 2.0, 0.0), velocity=(0.0, 0.02, 0.0))
        swarm = swarm_with(agent)
        snapshot = swarm.snapshot()
        swarm.update()
        np.testing.assert_array_equal(snapshot.positions, [[0.0, 2.0, 0.0]])
        np.testing.assert_array_equal(snapshot.velocities, [[0.0, 0.02, 0.0]])
        assert len(snapshot) == 1

    def test_isolated_agent_via_update(self, swarm_with):
        agent = Agent(position=(0.0, 2.0, 0.0), velocity=(0.0, 0.02, 0.0))
        swarm = swarm_with(agent)
        swarm.update()
        np.testing.assert_allclose(agent.position, [0.0, 2.02, 0.0])
        assert swarm.frame == 1

    def test_close_pair_separates(self, swarm_with):
        a = Agent(position=(-0.05, 0.0, 0.0))
        b = Agent(position=(0.05, 0.0, 0.0))
        swarm = swarm_with(a, b)
        before = np.linalg.norm(a.position - b.position)

        swarm.update()

        assert a.velocity[0] < 0
        assert b.velocity[0] > 0
        assert np.linalg.norm(a.position - b.position) > before

    def test_boundary_pulls_back(self, swarm_with, params):
        agent = Agent(position=(params.boundary_radius + 1.0, 0.0, 0.0))
        swarm = swarm_with(agent)
        swarm.update()
        assert agent.velocity[0] < 0
        assert np.dot(agent.velocity, -agent.position) > 0

    def test_order_independent(self):
        forward = Swarm(count=30, seed=11)
        backward = Swarm(count=30, seed=11)
        backward.agents.reverse()
        for s in (forward, backward):
            s.add_attraction_point((0.5, 2.5, 0.0))

        for _ in range(5):
            forward.update()
            backward.update()

        np.testing.assert_allclose(forward.positions(), backward.positions()[::-1], atol=1e-12)
        np.testing.assert_allclose(forward.velocities(), backward.velocities()[::-1], atol=1e-12)

    def test_force_phase_reads_pre_integration_state(self, swarm_with):
        a = Agent(position=(-0.05, 0.0, 0.0))
        b = Agent(position=(0.05, 0.0, 0.0))
        swarm = swarm_with(a, b)
        swarm.update()
        # Symmetric inputs give mirror-image results only if neither saw the other move first
        np.testing.assert_allclose(a.position, -b.position, atol=1e-15)

    def test_speed_bound_over_many_frames(self):
        swarm = Swarm(count=40, seed=5)
        swarm.add_attraction_point((0.0, 2.5, 0.0))
        for _ in range(60):
            swarm.update()
            speeds = np.linalg.norm(swarm.velocities(), axis=1)
            assert (speeds <= swarm.agent_settings["max_speed"] + 1e-12).all()
        assert not np.isnan(swarm.positions()).any()

    def test_attraction_pulls_and_highlights(self, swarm_with):
        agent = Agent(position=(1.0, 2.0, 0.0))
        swarm = swarm_with(agent)
        handle = swarm.add_attraction_point((0.0, 2.0, 0.0))

        swarm.update()
        assert agent.velocity[0] < 0
        assert agent.attraction_strength == pytest.approx(1.0 - 1.0 / 3.0)

        swarm.remove_attraction_point(handle)
        swarm.update()
        assert agent.attraction_strength == 0.0


class TestParameters:

    def test_defaults(self, empty_swarm):
        p = empty_swarm.params
        assert p.separation_distance == 0.8
        assert p.alignment_distance == 1.5
        assert p.cohesion_distance == 1.8
        assert p.separation_force == 1.0
        assert p.alignment_force == 0.6
        assert p.cohesion_force == 0.5
        assert p.boundary_radius == 5.0
        assert p.boundary_force == 0.2
        assert p.attraction_distance == 3.0
        assert p.attraction_force == 1.5

    def test_empty_merge_is_noop(self, empty_swarm):
        before = empty_swarm.params.to_dict()
        empty_swarm.set_parameters({})
        empty_swarm.set_parameters()
        assert empty_swarm.params.to_dict() == before

    def test_partial_merge(self, empty_swarm):
        before = empty_swarm.params.to_dict()
        empty_swarm.set_parameters({"cohesion_force": 1.2}, boundary_radius=7.0)
        after = empty_swarm.params.to_dict()
        assert after["cohesion_force"] == 1.2
        assert after["boundary_radius"] == 7.0
        for key in before:
            if key not in ("cohesion_force", "boundary_radius"):
                assert after[key] == before[key]

    def test_unknown_parameter_rejected(self, empty_swarm):
        with pytest.raises(ValueError, match="cohesionForce"):
            empty_swarm.set_parameters({"cohesionForce": 1.0})

    def test_values_are_not_validated(self, empty_swarm):
        empty_swarm.set_parameters(separation_distance=-1.0)
        assert empty_swarm.params.separation_distance == -1.0

    def test_custom_params_object(self):
        params = SwarmParams(boundary_radius=2.0)
        swarm = Swarm(params=params)
        assert swarm.params is params

    def test_agent_parameters_apply_to_existing_and_new(self, empty_swarm):
        empty_swarm.add_agents(3)
        empty_swarm.set_agent_parameters(max_speed=0.06, smoothing_factor=0.5)
        empty_swarm.add_agents(2)
        for agent in empty_swarm.agents:
            assert agent.max_speed == 0.06
            assert agent.smoothing_factor == 0.5
            assert agent.max_force == 0.005

    def test_agent_parameters_none_is_noop(self, empty_swarm):
        before = dict(empty_swarm.agent_settings)
        empty_swarm.set_agent_parameters()
        assert empty_swarm.agent_settings == before


class TestAttractionPoints:

    def test_add_then_remove(self, empty_swarm):
        handle = empty_swarm.add_attraction_point((1.0, 2.0, 3.0))
        assert empty_swarm.remove_attraction_point(handle) is True
        assert empty_swarm.attraction_points == []
        assert empty_swarm.remove_attraction_point(handle) is False

    def test_point_is_copied_in(self, empty_swarm):
        source = np.array([1.0, 2.0, 3.0])
        empty_swarm.add_attraction_point(source)
        source[0] = 100.0
        np.testing.assert_array_equal(empty_swarm.attraction_points[0], [1.0, 2.0, 3.0])

    def test_returned_points_are_copies(self, empty_swarm):
        empty_swarm.add_attraction_point((1.0, 2.0, 3.0))
        empty_swarm.attraction_points[0][0] = 100.0
        assert empty_swarm.attraction_points[0][0] == 1.0

    def test_update_in_place(self, empty_swarm):
        keep = empty_swarm.add_attraction_point((0.0, 0.0, 0.0))
        moved = empty_swarm.add_attraction_point((1.0, 1.0, 1.0))
        assert empty_swarm.update_attraction_point(moved, (2.0, 2.0, 2.0)) is True
        points = empty_swarm.attraction_points
        np.testing.assert_array_equal(points[0], [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(points[1], [2.0, 2.0, 2.0])
        assert keep != moved

    def test_update_unknown_handle(self, empty_swarm):
        assert empty_swarm.update_attraction_point(999, (0.0, 0.0, 0.0)) is False

    def test_handles_not_reused(self, empty_swarm):
        first = empty_swarm.add_attraction_point((0.0, 0.0, 0.0))
        empty_swarm.remove_attraction_point(first)
        second = empty_swarm.add_attraction_point((0.0, 0.0, 0.0))
        assert second != first
        assert empty_swarm.update_attraction_point(first, (1.0, 1.0, 1.0)) is False

    def test_clear(self, empty_swarm):
        handles = [empty_swarm.add_attraction_point((i, 0.0, 0.0)) for i in range(2)]
        empty_swarm.clear_attraction_points()
        assert empty_swarm.attraction_points == []
        assert not any(empty_swarm.remove_attraction_point(h) for h in handles)

    def test_bad_point_shape(self, empty_swarm):
        with pytest.raises(ValueError):
            empty_swarm.add_attraction_point((1.0, 2.0))


class TestNearestAgent:

    def test_finds_closest_within_cutoff(self, swarm_with):
        near = Agent(position=(0.5, 0.0, 0.0))
        far = Agent(position=(3.0, 0.0, 0.0))
        swarm = swarm_with(far, near)
        assert swarm.nearest_agent((0.0, 0.0, 0.0)) is near

    def test_none_outside_cutoff(self, swarm_with):
        swarm = swarm_with(Agent(position=(1.5, 0.0, 0.0)))
        assert swarm.nearest_agent((0.0, 0.0, 0.0)) is None
        assert swarm.nearest_agent((0.0, 0.0, 0.0), cutoff=2.0) is not None

    def test_empty_swarm(self, empty_swarm):
        assert empty_swarm.nearest_agent((0.0, 0.0, 0.0)) is None
