import random

import pytest

from solid_snake.logic import (
    GRIDSIZE,
    HISTORY_SIZE,
    RECT_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SPEED,
    Direction,
    DirectionTracker,
    FillBuffer,
    Player,
    PositionHistory,
    Rect,
    Steering,
    load_highscore,
    random_divisible,
    save_highscore,
    spawn_block,
    wrap_player,
)


def test_rect_overlap_collides():
    assert Rect(0, 0, 50, 50).collides(Rect(25, 25, 50, 50))


def test_rect_touching_edges_do_not_collide():
    assert not Rect(0, 0, 50, 50).collides(Rect(50, 0, 50, 50))
    assert not Rect(0, 0, 50, 50).collides(Rect(0, 50, 50, 50))


def test_intersection_partial():
    assert Rect(0, 0, 50, 50).intersection(Rect(25, 10, 50, 50)) == Rect(25, 10, 25, 40)


def test_intersection_with_itself_and_disjoint():
    r = Rect(10, 20, 50, 50)
    assert r.intersection(r) == r
    assert r.intersection(Rect(500, 500, 10, 10)) == Rect()


def test_direction_opposites():
    player = Player()
    steering = Steering()
    steering.steer(player, Direction.LEFT)
    steering.steer(player, Direction.LEFT.opposite)
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.UP.vertical and not Direction.LEFT.vertical
    assert steering.heading is Direction.LEFT
    assert player.rect.x == RECT_WIDTH - 2 * SPEED


def test_player_reset_keeps_position():
    player = Player()
    player.score = 9
    player.speed = 0
    player.rect.x = 300
    player.reset()
    assert player.score == 0
    assert player.speed == SPEED
    assert player.rect.x == 300


def test_history_previous_returns_recent_positions():
    history = PositionHistory()
    history.save((1, 2))
    history.save((3, 4))
    assert history.previous(1) == (3.0, 4.0)
    assert history.previous(2) == (1.0, 2.0)
    assert history.previous(3) == (0.0, 0.0)


def test_history_wraps_around():
    history = PositionHistory()
    for n in range(HISTORY_SIZE + 2):
        history.save((n, n))
    assert history.index == 2
    assert history.previous(1) == (HISTORY_SIZE + 1, HISTORY_SIZE + 1)
    assert history.previous(HISTORY_SIZE) == (2.0, 2.0)


def test_history_clear():
    history = PositionHistory()
    history.save((7, 7))
    history.clear()
    assert history.index == 0
    assert history.previous(1) == (0.0, 0.0)


def test_fill_buffer_insert_and_active():
    buffer = FillBuffer()
    blocks = [Rect(n, n, GRIDSIZE, GRIDSIZE) for n in range(3)]
    for block in blocks:
        buffer.insert(block)
    assert len(buffer) == len(blocks)
    assert buffer.active() == blocks
    buffer.clear()
    assert len(buffer) == 0
    assert buffer.active() == []


def test_fill_buffer_wraps_from_tail():
    buffer = FillBuffer(size=3)
    blocks = [Rect(n, 0, GRIDSIZE, GRIDSIZE) for n in range(4)]
    for block in blocks:
        buffer.insert(block)
    buffer.tail = 2
    assert buffer.head == 1
    assert buffer.active() == [blocks[2], blocks[3]]


def test_direction_tracker_alternates_axes():
    history = PositionHistory()
    tracker = DirectionTracker()
    history.save((0, 0))
    history.save((0, 5))
    assert tracker.changed(history) is True
    history.save((0, 10))
    assert tracker.changed(history) is False
    history.save((5, 10))
    assert tracker.changed(history) is True
    history.save((10, 10))
    assert tracker.changed(history) is False


def test_steering_starts_downwards():
    player = Player()
    steering = Steering()
    steering.steer(player, None)
    assert player.rect.y == RECT_WIDTH + SPEED
    assert player.rect.x == RECT_WIDTH


def test_steering_refuses_reversal():
    player = Player()
    steering = Steering()
    steering.steer(player, Direction.UP)
    assert steering.heading is Direction.DOWN
    assert player.rect.y == RECT_WIDTH + SPEED


def test_steering_turn_when_aligned():
    player = Player()
    steering = Steering()
    steering.steer(player, Direction.LEFT)
    assert steering.heading is Direction.LEFT
    assert player.rect.x == RECT_WIDTH - SPEED


def test_steering_pending_turn_waits_for_grid():
    player = Player()
    steering = Steering()
    steering.steer(player, None)
    steering.steer(player, Direction.LEFT)
    assert steering.heading is Direction.DOWN
    player.rect.y = 3 * GRIDSIZE
    steering.steer(player, None)
    assert steering.heading is Direction.LEFT
    assert player.rect.y == 3 * GRIDSIZE


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (SCREEN_WIDTH, 100, (0, 100)),
        (-GRIDSIZE, 100, (SCREEN_WIDTH - GRIDSIZE, 100)),
        (100, SCREEN_HEIGHT, (100, 0)),
        (100, -GRIDSIZE, (100, SCREEN_HEIGHT - GRIDSIZE)),
        (100, 100, (100, 100)),
    ],
)
def test_wrap_player(x, y, expected):
    player = Player(Rect(x, y, GRIDSIZE, GRIDSIZE))
    wrap_player(player)
    assert (player.rect.x, player.rect.y) == expected


def test_random_divisible_stays_on_grid():
    rng = random.Random(1)
    values = {random_divisible(GRIDSIZE, 10, SCREEN_WIDTH - 10, rng) for _ in range(500)}
    assert all(v % GRIDSIZE == 0 for v in values)
    assert min(values) >= 10
    assert max(values) <= SCREEN_WIDTH - 10


def test_random_divisible_single_choice():
    assert random_divisible(7, 14, 14, random.Random(0)) == 14


def test_random_divisible_without_candidates():
    with pytest.raises(ValueError):
        random_divisible(GRIDSIZE, 10, 40, random.Random(0))


def test_spawn_block_on_grid_inside_screen():
    rng = random.Random(5)
    for _ in range(100):
        block = spawn_block(rng)
        assert block.x % GRIDSIZE == 0 and block.y % GRIDSIZE == 0
        assert 0 < block.x and block.right <= SCREEN_WIDTH
        assert 0 < block.y and block.bottom <= SCREEN_HEIGHT
        assert block.width == GRIDSIZE and block.height == GRIDSIZE


def test_highscore_round_trip(tmp_path):
    path = tmp_path / "highscore.txt"
    save_highscore(path, 42)
    assert load_highscore(path) == 42


def test_highscore_missing_file(tmp_path):
    assert load_highscore(tmp_path / "absent.txt") == 0


@pytest.mark.parametrize(
    "content, expected",
    [("  17abc", 17), ("garbage", 0), ("", 0), ("-3\n9", -3)],
)
def test_highscore_parsing(tmp_path, content, expected):
    path = tmp_path / "highscore.txt"
    path.write_text(content, encoding="utf-8")
    assert load_highscore(path) == expected