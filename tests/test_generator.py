"""Tests for the procedural board generator."""

import random
from collections import deque

import numpy as np
import pytest

from stickochet.board import Board, CellKind
from stickochet.errors import GenerationError
from stickochet.generator import (
    BoardGenerator,
    GeneratorConfig,
    pick_difficult,
    simulate_visits,
)
from stickochet.movement import Direction, slide


def reachable(board, start):
    """Every resting cell reachable from *start* with slide moves."""
    seen = {start}
    queue = deque([start])
    while queue:
        at = queue.popleft()
        for d in Direction:
            nxt = slide(board, at, d)
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def objectives(board):
    return board.find(CellKind.CHECKPOINT) + board.find(CellKind.GOAL)


# ============================================================
# CONFIG
# ============================================================

class TestConfig:
    def test_defaults(self):
        cfg = GeneratorConfig()
        assert (cfg.width, cfg.height) == (10, 10)
        assert cfg.wall_range == (2, 9)
        assert cfg.sticky_range == (0, 3)
        assert cfg.objectives == 2
        assert (cfg.walks, cfg.walk_steps) == (100, 20)
        assert cfg.center == (5, 5)

    @pytest.mark.parametrize("kwargs", [
        {"width": 2},
        {"height": 1},
        {"wall_range": (5, 2)},
        {"sticky_range": (-1, 3)},
        {"objectives": 0},
        {"quantile": 0},
        {"max_attempts": 0},
    ])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            GeneratorConfig(**kwargs)


# ============================================================
# RANDOM WALK SIMULATION
# ============================================================

class TestSimulateVisits:
    def test_every_step_is_counted(self, open_board, rng):
        counts = simulate_visits(open_board, (2, 2), rng, walks=7, steps=5)
        assert counts.shape == (5, 5)
        assert counts.sum() == 35

    def test_open_centre_is_never_a_resting_cell(self, open_board, rng):
        counts = simulate_visits(open_board, (2, 2), rng)
        assert counts[2, 2] == 0
        assert counts[1, 1] > 0

    def test_walls_are_never_visited(self, rng):
        board = Board.from_rows([
            "######",
            "#..#.#",
            "#~...#",
            "######",
        ])
        counts = simulate_visits(board, (1, 1), rng)
        for pos in board.find(CellKind.WALL):
            assert counts[pos[1], pos[0]] == 0

    def test_closed_cell_only_visits_origin(self, rng):
        board = Board.from_rows(["###", "#.#", "###"])
        counts = simulate_visits(board, (1, 1), rng, walks=3, steps=4)
        assert counts[1, 1] == 12

    def test_same_stream_same_counts(self, open_board):
        a = simulate_visits(open_board, (2, 2), random.Random(5))
        b = simulate_visits(open_board, (2, 2), random.Random(5))
        assert np.array_equal(a, b)


# ============================================================
# DIFFICULTY-RANKED PICK
# ============================================================

CANDIDATES = [(1, 1), (2, 1), (3, 1), (1, 2), (2, 2), (3, 2), (1, 3), (2, 3)]


def counts_for(values):
    counts = np.zeros((5, 5), dtype=np.int64)
    for (x, y), v in zip(CANDIDATES, values):
        counts[y, x] = v
    return counts


def picks(counts, n=200, quantile=4):
    return {pick_difficult(CANDIDATES, counts, random.Random(seed), quantile) for seed in range(n)}


class TestPickDifficult:
    def test_hardest_quarter(self):
        counts = counts_for([8, 7, 6, 5, 4, 3, 2, 1])
        assert picks(counts) == {(2, 3), (1, 3)}

    def test_tie_group_is_not_split(self):
        counts = counts_for([1, 2, 2, 2, 5, 6, 7, 8])
        assert picks(counts) == {(1, 1), (2, 1), (3, 1), (1, 2)}

    def test_all_equal_counts_are_all_eligible(self):
        counts = counts_for([3] * 8)
        assert picks(counts) == set(CANDIDATES)

    def test_small_candidate_list_keeps_one(self):
        counts = counts_for([4, 9, 9, 9, 9, 9, 9, 9])
        assert pick_difficult(CANDIDATES[:3], counts, random.Random(0)) == (1, 1)

    def test_quantile_widens_pool(self):
        counts = counts_for([8, 7, 6, 5, 4, 3, 2, 1])
        assert picks(counts, quantile=2) == {(2, 3), (1, 3), (3, 2), (2, 2)}


# ============================================================
# GENERATION
# ============================================================

@pytest.fixture(scope="module")
def batch():
    gen = BoardGenerator(GeneratorConfig(), random.Random(2024))
    return [gen.generate() for _ in range(25)]


class TestGenerate:
    def test_border_invariant(self, batch):
        for generated in batch:
            assert generated.board.border_intact()

    def test_exactly_one_goal(self, batch):
        for generated in batch:
            board = generated.board
            assert board.count(CellKind.GOAL) == 1
            assert board.count(CellKind.CHECKPOINT) == generated.goal_count - 1
            assert 1 <= generated.goal_count <= 2
            assert board.count(CellKind.CHECKPOINT_COLLECTED) == 0

    def test_token_cell_stays_open(self, batch):
        for generated in batch:
            assert generated.token == (5, 5)
            assert generated.board[generated.token] in (CellKind.EMPTY, CellKind.STICKY)

    def test_objectives_are_reachable_from_token(self, batch):
        for generated in batch:
            seen = reachable(generated.board, generated.token)
            for pos in objectives(generated.board):
                assert pos in seen

    def test_objectives_sit_on_interior(self, batch):
        for generated in batch:
            for pos in objectives(generated.board):
                assert not generated.board.is_border(pos)

    def test_same_seed_same_boards(self):
        a = BoardGenerator(GeneratorConfig(), random.Random(42))
        b = BoardGenerator(GeneratorConfig(), random.Random(42))
        for _ in range(3):
            assert a.generate().board == b.generate().board

    def test_stream_is_not_reseeded(self):
        gen = BoardGenerator(GeneratorConfig(), random.Random(42))
        boards = [gen.generate().board for _ in range(5)]
        assert any(board != boards[0] for board in boards[1:])

    def test_custom_token_is_spared(self, small_config):
        gen = BoardGenerator(small_config, random.Random(3))
        for _ in range(30):
            generated = gen.generate((1, 1))
            assert generated.board[1, 1] != CellKind.WALL
            assert (1, 1) not in objectives(generated.board)

    def test_single_objective_is_the_goal(self):
        gen = BoardGenerator(GeneratorConfig(objectives=1), random.Random(8))
        generated = gen.generate()
        assert generated.goal_count == 1
        assert generated.board.count(CellKind.CHECKPOINT) == 0
        assert generated.board.count(CellKind.GOAL) == 1

    def test_longer_chains(self):
        gen = BoardGenerator(GeneratorConfig(objectives=4, wall_range=(0, 2)), random.Random(8))
        generated = gen.generate()
        assert 1 <= generated.goal_count <= 4
        assert generated.board.count(CellKind.GOAL) == 1

    def test_no_walls_no_goop(self):
        cfg = GeneratorConfig(width=6, height=6, wall_range=(0, 0), sticky_range=(0, 0))
        generated = BoardGenerator(cfg, random.Random(1)).generate((1, 1))
        assert generated.board.count(CellKind.WALL) == 20
        assert generated.board.count(CellKind.STICKY) == 0


class TestCandidates:
    def test_excludes_token_objectives_goop_and_unvisited(self, make_board):
        board = make_board("""
            ######
            #.c~.#
            #..G.#
            ######
        """)
        counts = np.ones((4, 6), dtype=np.int64)
        counts[2, 1] = 0
        gen = BoardGenerator(GeneratorConfig(width=6, height=4), random.Random(0))
        assert gen._candidates(board, counts, (1, 1)) == [(4, 1), (2, 2), (4, 2)]


class TestRetry:
    def test_gives_up_on_closed_board(self):
        cfg = GeneratorConfig(width=3, height=3, max_attempts=5)
        gen = BoardGenerator(cfg, random.Random(0))
        with pytest.raises(GenerationError, match="5 attempts"):
            gen.generate()

    def test_empty_attempt_is_regenerated(self, monkeypatch):
        gen = BoardGenerator(GeneratorConfig(), random.Random(11))
        real = gen._place_objectives
        calls = []

        def flaky(board, token):
            calls.append(token)
            if len(calls) == 1:
                return []
            return real(board, token)

        monkeypatch.setattr(gen, "_place_objectives", flaky)
        generated = gen.generate()
        assert len(calls) >= 2
        assert generated.board.count(CellKind.GOAL) == 1
