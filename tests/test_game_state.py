from __future__ import annotations

from collections import deque

from termtris.config import GameConfig
from termtris.game_state import GameState, Phase
from termtris.randomizer import SevenBag
from termtris.tetromino import Tetromino, TetrominoType


def test_spawn_uses_upcoming_piece_at_top_centre():
    state = GameState()
    state.queue = deque([TetrominoType.T, TetrominoType.I, TetrominoType.O])
    piece = state.spawn_tetromino()
    assert piece is state.active
    assert piece.shape is TetrominoType.T
    assert piece.position == (0, 3)
    assert piece.rotation == 0
    assert state.phase is Phase.FALLING
    assert state.upcoming is TetrominoType.I
    assert len(state.queue) == state.config.preview


def test_spawn_position_centres_each_box():
    state = GameState()
    assert state.spawn_position(TetrominoType.I) == (0, 3)
    assert state.spawn_position(TetrominoType.O) == (0, 4)
    assert state.spawn_position(TetrominoType.L) == (0, 3)


def test_spawn_collision_is_game_over():
    state = GameState()
    state.queue = deque([TetrominoType.O])
    state.board.set_cell(1, 5, 1)
    assert state.spawn_tetromino() is None
    assert state.active is None
    assert state.phase is Phase.GAME_OVER
    assert state.game_over


def test_crowded_board_without_spawn_collision_is_not_game_over():
    state = GameState()
    state.board.grid[2:] = 1
    state.board.grid[2:, 0] = 0
    state.queue = deque([TetrominoType.O])
    assert state.spawn_tetromino() is not None
    assert state.phase is Phase.FALLING


def test_same_seed_gives_same_pieces():
    first = GameState(GameConfig(seed=7))
    second = GameState(GameConfig(seed=7))
    first.reset_game()
    second.reset_game()
    shapes_a, shapes_b = [], []
    for _ in range(20):
        shapes_a.append(first.spawn_tetromino().shape)
        shapes_b.append(second.spawn_tetromino().shape)
    assert shapes_a == shapes_b


def test_seven_bag_deals_each_shape_once_per_bag():
    bag = SevenBag(seed=3)
    for _ in range(5):
        assert sorted(bag.next() for _ in range(7)) == sorted(TetrominoType)


def test_uniform_randomizer_in_config():
    state = GameState(GameConfig(randomizer="random", seed=1, preview=5))
    state.reset_game()
    assert len(state.queue) == 5
    assert all(isinstance(shape, TetrominoType) for shape in state.queue)


def test_first_hold_takes_next_queued_piece():
    state = GameState()
    state.queue = deque([TetrominoType.T, TetrominoType.I, TetrominoType.S])
    state.spawn_tetromino()
    state.active = state.active.moved(0, 5)

    assert state.swap_hold()
    assert state.held is TetrominoType.T
    assert state.active.shape is TetrominoType.I
    assert state.active.position == state.spawn_position(TetrominoType.I)
    assert state.upcoming is TetrominoType.S
    assert len(state.queue) == state.config.preview


def test_hold_only_once_per_piece():
    state = GameState()
    state.queue = deque([TetrominoType.T, TetrominoType.I, TetrominoType.S])
    state.spawn_tetromino()
    assert state.swap_hold()
    assert not state.swap_hold()
    assert state.held is TetrominoType.T
    assert state.active.shape is TetrominoType.I

    state.spawn_tetromino()
    assert state.swap_hold()
    assert state.active.shape is TetrominoType.T
    assert state.held is TetrominoType.S


def test_hold_refused_when_incoming_piece_collides():
    state = GameState()
    state.queue = deque([TetrominoType.T, TetrominoType.O, TetrominoType.S])
    state.spawn_tetromino()
    state.active = state.active.moved(0, 8)
    state.board.set_cell(0, 4, 1)
    before = state.active

    assert not state.swap_hold()
    assert state.held is None
    assert state.active == before
    assert state.upcoming is TetrominoType.O
    assert not state.hold_used


def test_hold_ignored_after_game_over():
    state = GameState()
    state.phase = Phase.GAME_OVER
    state.active = Tetromino(TetrominoType.T)
    assert not state.swap_hold()
