"""Tests for the Simulation tick loop and its end-to-end behaviour."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from wavefront_chase.config import BoardConfig, SimulationConfig
from wavefront_chase.model.agent import Direction
from wavefront_chase.model.engine import (
    Simulation, SimulationStateError, new_simulation,
)
from wavefront_chase.model.grid import Cell, InvalidDimensions, manhattan
from wavefront_chase.model.state import SimulationStatus


def _assert_occupancy_matches(sim):
    expected = {sim.player, sim.enemy}
    assert sim.grid.get_occupied_positions() == expected
    assert sim.occupancy_at(*sim.player) is Cell.PLAYER
    if sim.enemy != sim.player:
        assert sim.occupancy_at(*sim.enemy) is Cell.ENEMY


class TestConstruction:
    """Starting configuration and validation."""

    def test_agents_start_in_opposite_corners(self):
        sim = new_simulation(6, 4)
        assert sim.player == (0, 0)
        assert sim.enemy == (3, 5)
        assert sim.history is None
        assert sim.current_tick == 0
        assert sim.status is SimulationStatus.RUNNING
        _assert_occupancy_matches(sim)

    @pytest.mark.parametrize("width,height", [(0, 5), (5, -1)])
    def test_invalid_dimensions(self, width, height):
        with pytest.raises(InvalidDimensions):
            new_simulation(width, height)

    def test_single_cell_board_is_terminal_immediately(self):
        sim = new_simulation(1, 1)
        assert sim.player == sim.enemy == (0, 0)
        assert sim.is_terminal()
        assert sim.status is SimulationStatus.TERMINATED
        assert sim.occupancy_at(0, 0) is Cell.PLAYER

    @pytest.mark.parametrize("width,height", [(1, 2), (2, 1)])
    def test_adjacent_start_is_terminal(self, width, height):
        assert new_simulation(width, height).is_terminal()

    def test_from_config(self):
        config = SimulationConfig(board=BoardConfig(width=8, height=3), seed=5)
        sim = Simulation.from_config(config)
        assert (sim.width, sim.height) == (8, 3)
        assert sim.enemy == (2, 7)

    def test_instances_do_not_share_history(self):
        first = new_simulation(5, 5, seed=1)
        second = new_simulation(5, 5, seed=1)
        first.tick()
        assert first.history is not None
        assert second.history is None
        assert second.current_tick == 0


class TestTick:
    """Single tick semantics."""

    def test_player_uses_field_from_before_enemy_move(self, scripted_rng):
        # 2x2: enemy North to (0, 1); player follows the old field to (1, 0)
        sim = new_simulation(2, 2, rng=scripted_rng([0]))
        state = sim.tick()
        assert sim.enemy == (0, 1)
        assert sim.player == (1, 0)
        np.testing.assert_array_equal(state.field, [[2, 1], [1, 0]])

    def test_snapshot_contents(self, scripted_rng):
        sim = new_simulation(2, 2, rng=scripted_rng([0]))
        state = sim.tick()
        assert state.tick == 1
        assert state.player == (1, 0)
        assert state.enemy == (0, 1)
        assert state.enemy_move == "NORTH"
        assert state.distance == 2
        assert state.status is SimulationStatus.RUNNING
        assert not state.terminated
        assert state.occupancy[1, 0] == Cell.PLAYER
        assert state.occupancy[0, 1] == Cell.ENEMY

    def test_snapshot_is_a_copy(self):
        sim = new_simulation(4, 4, seed=3)
        state = sim.snapshot()
        sim.tick()
        assert state.occupancy[0, 0] == Cell.PLAYER
        assert state.field is None

    def test_tick_after_termination_raises(self):
        sim = new_simulation(1, 1)
        with pytest.raises(SimulationStateError):
            sim.tick()

    def test_termination_is_idempotent(self):
        sim = new_simulation(6, 6, seed=11)
        sim.run()
        assert sim.is_terminal()
        assert sim.is_terminal()
        assert sim.distance() <= 1
        with pytest.raises(SimulationStateError):
            sim.tick()

    def test_tick_logs_debug_records(self, caplog):
        caplog.set_level(logging.DEBUG, logger="wavefront_chase.model.engine")
        sim = new_simulation(5, 1, seed=0)
        sim.run()
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Tick 1:") for m in messages)
        assert "Enemy caught after 2 ticks" in messages


class TestTwoByTwoScenario:
    """Exhaustive check of both enemy opening moves on a 2x2 board."""

    def test_starts_two_apart(self):
        sim = new_simulation(2, 2)
        assert sim.distance() == 2
        assert not sim.is_terminal()

    def test_enemy_west_is_caught_in_one_tick(self, scripted_rng):
        sim = new_simulation(2, 2, rng=scripted_rng([1]))
        sim.tick()
        assert sim.enemy == (1, 0)
        assert sim.player == (1, 0)
        assert sim.distance() == 0
        assert sim.is_terminal()
        assert sim.grid.get_occupied_positions() == {(1, 0)}
        assert sim.occupancy_at(1, 0) is Cell.PLAYER

    def test_enemy_north_is_caught_on_second_tick(self, scripted_rng):
        rng = scripted_rng([0, 0])
        sim = new_simulation(2, 2, rng=rng)
        sim.tick()
        assert sim.distance() == 2
        assert not sim.is_terminal()

        sim.tick()
        assert sim.history is Direction.WEST
        assert sim.enemy == (0, 0)
        assert sim.player == (0, 0)
        assert sim.is_terminal()
        assert rng.calls == 2

    @pytest.mark.parametrize("seed", range(30))
    def test_any_seed_terminates_within_two_ticks(self, seed):
        sim = new_simulation(2, 2, seed=seed)
        states = sim.run()
        assert 1 <= len(states) <= 2
        assert states[-1].terminated


class TestSingleLaneScenario:
    """On a one-cell-wide board the enemy can only walk toward the player."""

    @pytest.mark.parametrize("seed", [0, 7, 2024])
    def test_one_by_five_trace(self, seed):
        sim = new_simulation(5, 1, seed=seed)
        states = sim.run()
        assert [s.player for s in states] == [(0, 1), (0, 2)]
        assert [s.enemy for s in states] == [(0, 3), (0, 2)]
        assert sim.is_terminal()

    @pytest.mark.parametrize("seed", [0, 7, 2024])
    def test_one_by_eight_trace(self, seed):
        sim = new_simulation(8, 1, seed=seed)
        states = sim.run()
        assert [s.player for s in states] == [(0, 1), (0, 2), (0, 3)]
        assert [s.enemy for s in states] == [(0, 6), (0, 5), (0, 4)]
        assert [s.enemy_move for s in states] == ["WEST"] * 3
        assert [s.distance for s in states] == [5, 3, 1]
        assert states[0].field[0, 7] == 0

    def test_eight_by_one_column_trace(self):
        sim = new_simulation(1, 8, seed=3)
        states = sim.run()
        assert [s.player for s in states] == [(1, 0), (2, 0), (3, 0)]
        assert [s.enemy for s in states] == [(6, 0), (5, 0), (4, 0)]


class TestInvariants:
    """Properties that hold across random runs."""

    @pytest.mark.parametrize("seed", range(10))
    def test_occupancy_tracks_agents_every_tick(self, seed):
        sim = new_simulation(9, 6, seed=seed)
        ticks = []

        def check(s):
            _assert_occupancy_matches(s)
            ticks.append(s.current_tick)

        states = sim.run(max_ticks=500, on_tick=check)
        assert ticks == list(range(1, len(states) + 1))

    @pytest.mark.parametrize("seed", range(10))
    def test_enemy_never_reverses_and_stays_on_board(self, seed):
        sim = new_simulation(9, 6, seed=seed)
        previous_enemy = sim.enemy
        previous_move = None
        for state in sim.run(max_ticks=500):
            move = Direction[state.enemy_move]
            assert move.apply(previous_enemy) == state.enemy
            assert 0 <= state.enemy[0] < 6 and 0 <= state.enemy[1] < 9
            if previous_move is not None:
                assert move is not previous_move.opposite
            previous_enemy, previous_move = state.enemy, move

    @pytest.mark.parametrize("seed", range(10))
    def test_player_moves_one_step_per_tick(self, seed):
        sim = new_simulation(9, 6, seed=seed)
        previous = sim.player
        for state in sim.run(max_ticks=500):
            assert manhattan(previous, state.player) == 1
            previous = state.player

    def test_same_seed_same_trace(self):
        first = new_simulation(10, 10, seed=123).run(max_ticks=300)
        second = new_simulation(10, 10, seed=123).run(max_ticks=300)
        assert [(s.player, s.enemy) for s in first] == \
               [(s.player, s.enemy) for s in second]


class TestRun:
    """Convenience driver."""

    def test_max_ticks_stops_early(self):
        sim = new_simulation(10, 10, seed=0)
        calls = []
        states = sim.run(max_ticks=1, on_tick=lambda s: calls.append(s.current_tick))
        assert len(states) == 1
        assert calls == [1]
        assert not sim.is_terminal()
        assert sim.status is SimulationStatus.RUNNING

    def test_run_on_terminal_simulation_is_empty(self):
        assert new_simulation(1, 1).run() == []

    def test_summary(self):
        sim = new_simulation(5, 1, seed=0)
        sim.run()
        summary = sim.get_summary()
        assert summary['board'] == "5x1"
        assert summary['total_ticks'] == 2
        assert summary['caught'] is True
        assert summary['distance'] == 0
