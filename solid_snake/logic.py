"""Game rules for the snake: geometry, steering, position history and scores."""

from __future__ import annotations

import contextlib
import random
import re
from dataclasses import dataclass, field
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Union

SCREEN_WIDTH = 900
SCREEN_HEIGHT = 500
GRIDSIZE = 50
HISTORY_SIZE = 2500
SIZE_FILL_BLOCK = 50
SPEED = 5.0
FOLLOWER = 250
RECT_WIDTH = 100

DEFAULT_HIGHSCORE_PATH = "highscore.txt"

Position = tuple[float, float]
StrPath = Union[str, "PathLike[str]"]


@dataclass
class Rect:
    """An axis-aligned rectangle in screen coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def collides(self, other: Rect) -> bool:
        """Return True when the two rectangles overlap (touching edges do not count)."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def intersection(self, other: Rect) -> Rect:
        """Return the overlapping area, or an empty rectangle at the origin."""
        left = max(self.x, other.x)
        right = min(self.right, other.right)
        top = max(self.y, other.y)
        bottom = min(self.bottom, other.bottom)
        if left < right and top < bottom:
            return Rect(left, top, right - left, bottom - top)
        return Rect()


class Direction(Enum):
    """A heading together with its unit step."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vertical(self) -> bool:
        return self.value[0] == 0

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


def _start_rect() -> Rect:
    return Rect(RECT_WIDTH, RECT_WIDTH, GRIDSIZE, GRIDSIZE)


@dataclass
class Player:
    """The snake's head: where it is, how fast it goes and the current score."""

    rect: Rect = field(default_factory=_start_rect)
    score: int = 0
    speed: float = SPEED

    def reset(self) -> None:
        """Clear the score and restore the normal speed; the position is kept."""
        self.score = 0
        self.speed = SPEED


class PositionHistory:
    """A ring buffer of the head's past positions."""

    def __init__(self, size: int = HISTORY_SIZE) -> None:
        self._positions: list[Position] = [(0.0, 0.0)] * size
        self.index = 0

    def __len__(self) -> int:
        return len(self._positions)

    def save(self, pos: Position) -> None:
        """Record a position, overwriting the oldest one."""
        x, y = pos
        self._positions[self.index] = (float(x), float(y))
        self.index = (self.index + 1) % len(self._positions)

    def previous(self, steps_back: int) -> Position:
        """Return the position saved ``steps_back`` saves ago (1 is the latest)."""
        return self._positions[(self.index - steps_back) % len(self._positions)]

    def clear(self) -> None:
        """Forget every position and start again at the first slot."""
        self._positions = [(0.0, 0.0)] * len(self._positions)
        self.index = 0


class FillBuffer:
    """A ring buffer of the blocks that fill the corners where the snake turned."""

    def __init__(self, size: int = SIZE_FILL_BLOCK) -> None:
        self.blocks: list[Rect] = [Rect() for _ in range(size)]
        self.head = 0
        self.tail = 0

    def __len__(self) -> int:
        if self.head >= self.tail:
            return self.head - self.tail
        return len(self.blocks) - self.tail + self.head

    def insert(self, rect: Rect) -> None:
        """Store a block at the head, wrapping around when the buffer is full."""
        self.blocks[self.head] = rect
        self.head = (self.head + 1) % len(self.blocks)

    def active(self) -> list[Rect]:
        """Return the blocks between tail and head, oldest first."""
        size = len(self.blocks)
        return [self.blocks[(self.tail + n) % size] for n in range(len(self))]

    def clear(self) -> None:
        """Drop all blocks and reset both ends."""
        self.blocks = [Rect() for _ in self.blocks]
        self.head = 0
        self.tail = 0


class DirectionTracker:
    """Detects when the head switches between vertical and horizontal travel."""

    def __init__(self) -> None:
        self._expect_vertical = True
        self._expect_horizontal = False

    def changed(self, history: PositionHistory) -> bool:
        """Return True when the last step began travel along a new axis."""
        cx, cy = history.previous(1)
        px, py = history.previous(2)
        result = False
        if cx == px and cy != py and self._expect_vertical:
            self._expect_horizontal = True
            self._expect_vertical = False
            result = True
        if cx != px and cy == py and self._expect_horizontal:
            self._expect_vertical = True
            self._expect_horizontal = False
            result = True
        return result


class Steering:
    """Turns key presses into movement, only turning when the head is on the grid."""

    def __init__(self) -> None:
        self.pending: Direction | None = None
        self.heading = Direction.DOWN

    def steer(self, player: Player, key: Direction | None) -> None:
        """Apply a key press (or none) and move the player one step."""
        if key is not None:
            self.pending = key
        rect = player.rect
        pending = self.pending
        if pending is not None and pending is not self.heading.opposite:
            if pending.vertical:
                aligned = int(rect.x) % GRIDSIZE == 0
            else:
                aligned = int(rect.y) % GRIDSIZE == 0
            if aligned:
                self.heading = pending
        dx, dy = self.heading.value
        rect.x += dx * player.speed
        rect.y += dy * player.speed


def wrap_player(player: Player) -> None:
    """Bring the player back onto the screen from the opposite edge."""
    rect = player.rect
    size = int(rect.height)
    if rect.x >= SCREEN_WIDTH:
        rect.x = 0
    if rect.x <= -rect.width:
        rect.x = SCREEN_WIDTH - size
    if rect.y >= SCREEN_HEIGHT:
        rect.y = 0
    if rect.y <= -rect.height:
        rect.y = SCREEN_HEIGHT - size


def random_divisible(
    divisor: int, low: int, high: int, rng: random.Random | None = None
) -> int:
    """Return a random multiple of ``divisor`` within ``[low, high]``."""
    rng = rng or random.Random()
    start = -((-low) // divisor)
    end = high // divisor
    if start > end:
        raise ValueError(f"no multiple of {divisor} between {low} and {high}")
    return rng.randint(start, end) * divisor


def spawn_block(rng: random.Random | None = None) -> Rect:
    """Place a food block on a random grid cell away from the screen border."""
    x = random_divisible(GRIDSIZE, 10, SCREEN_WIDTH - 10, rng)
    y = random_divisible(GRIDSIZE, 10, SCREEN_HEIGHT - 10, rng)
    return Rect(float(x), float(y), GRIDSIZE, GRIDSIZE)


_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def load_highscore(path: StrPath = DEFAULT_HIGHSCORE_PATH) -> int:
    """Read the stored high score; a missing or unreadable file counts as 0."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(11)
    except OSError:
        return 0
    match = _LEADING_INT.match(line)
    return int(match.group(1)) if match else 0


def save_highscore(path: StrPath, highscore: int) -> None:
    """Write the high score, silently giving up if the file cannot be written."""
    with contextlib.suppress(OSError):
        Path(path).write_text(str(highscore), encoding="utf-8")