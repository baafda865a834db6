"""The playable game: one frame of rules per update, drawn with pygame."""

from __future__ import annotations

import argparse
import random
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

import pygame

from solid_snake.logic import (
    DEFAULT_HIGHSCORE_PATH,
    FOLLOWER,
    GRIDSIZE,
    HISTORY_SIZE,
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
    StrPath,
    load_highscore,
    save_highscore,
    spawn_block,
    wrap_player,
)

BLACK = (0, 0, 0)
RED = (230, 41, 55)
DARKGRAY = (80, 80, 80)
RAYWHITE = (245, 245, 245)
LIME = (0, 158, 47)

_WRAP_OFFSETS = (
    (-SCREEN_WIDTH, 0),
    (SCREEN_WIDTH, 0),
    (0, -SCREEN_HEIGHT),
    (0, SCREEN_HEIGHT),
)

_ARROWS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def _ghosts(rect: Rect) -> Iterator[Rect]:
    """Yield the copies of ``rect`` shifted by a screen size that are still visible."""
    size = int(rect.height)
    for dx, dy in _WRAP_OFFSETS:
        ghost = replace(rect, x=rect.x + dx, y=rect.y + dy)
        if (
            ghost.x + size > 0
            and ghost.x < SCREEN_WIDTH
            and ghost.y + size > 0
            and ghost.y < SCREEN_HEIGHT
        ):
            yield ghost


def _to_pygame(rect: Rect) -> pygame.Rect:
    return pygame.Rect(int(rect.x), int(rect.y), int(rect.width), int(rect.height))


class SnakeGame:
    """The state of one game session and the rules applied every frame."""

    def __init__(
        self,
        highscore_path: StrPath = DEFAULT_HIGHSCORE_PATH,
        rng: random.Random | None = None,
    ) -> None:
        self.highscore_path = Path(highscore_path)
        self.rng = rng or random.Random()
        self.player = Player()
        self.highscore = load_highscore(self.highscore_path)
        self.is_over = False
        self.eating_rect = Rect()
        self.history = PositionHistory()
        self.fill = FillBuffer()
        step = int(GRIDSIZE / SPEED)
        self.delays = [step * (i + 1) for i in range(FOLLOWER)]
        self.followers: list[Rect] = []
        self._tracker = DirectionTracker()
        self._steering = Steering()
        self._spawn_food = True

    def restart(self) -> None:
        """Start a fresh round; the head keeps its place and heading."""
        self.history.clear()
        self.fill.clear()
        self.player.reset()
        self.is_over = False
        self._spawn_food = True

    def end(self) -> None:
        """Stop the snake, update the high score and store it."""
        self.player.speed = 0
        self.highscore = max(self.highscore, self.player.score)
        self.is_over = True
        save_highscore(self.highscore_path, self.highscore)

    def _release_fill(self, body: Rect) -> None:
        """Drop the oldest corner block once the tail covers it completely."""
        if not len(self.fill):
            return
        index = self.fill.tail
        area = body.intersection(self.fill.blocks[index])
        if area.height == body.height and area.width == body.width:
            self.fill.tail = (index + 1) % len(self.fill.blocks)

    def update(self, key: Direction | None = None, restart_pressed: bool = False) -> None:
        """Advance the game by one frame."""
        player = self.player
        self._steering.steer(player, key)
        wrap_player(player)
        self.history.save((player.rect.x, player.rect.y))

        ate = False
        if self.is_over and restart_pressed:
            self.restart()

        if player.rect.collides(self.eating_rect):
            self._spawn_food = ate = True

        if player.score >= 1 and self._tracker.changed(self.history):
            x, y = self.history.previous(2)
            self.fill.insert(Rect(x, y, GRIDSIZE, GRIDSIZE))

        if any(ghost.collides(self.eating_rect) for ghost in _ghosts(player.rect)):
            self._spawn_food = ate = True

        self.followers = []
        for i, delay in enumerate(self.delays[: player.score]):
            if delay >= HISTORY_SIZE:
                continue
            x, y = self.history.previous(delay)
            body = Rect(x, y, GRIDSIZE, GRIDSIZE)
            if i == player.score - 1:
                self._release_fill(body)
            self.followers.append(body)
            if body.collides(self.eating_rect):
                self._spawn_food = ate = True
            if i != 0 and body.collides(player.rect):
                self.end()

        if ate and not self.is_over:
            player.score += 1
        if self._spawn_food:
            self.eating_rect = spawn_block(self.rng)
        self._spawn_food = False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Render the current frame onto ``surface``."""
        surface.fill(RAYWHITE)
        rect = self.player.rect
        pygame.draw.rect(surface, RED if self.is_over else BLACK, _to_pygame(rect))
        for ghost in _ghosts(rect):
            pygame.draw.rect(surface, BLACK, _to_pygame(ghost))

        body_colour = RED if self.is_over else DARKGRAY
        for body in self.followers:
            pygame.draw.rect(surface, body_colour, _to_pygame(body))
            for ghost in _ghosts(body):
                pygame.draw.rect(surface, body_colour, _to_pygame(ghost))
        for block in self.fill.active():
            pygame.draw.rect(surface, body_colour, _to_pygame(block))

        pygame.draw.rect(surface, RED, _to_pygame(self.eating_rect))

        if self.is_over:
            surface.blit(font.render("GAME OVER!", True, BLACK), (100, 100))
        surface.blit(font.render(str(self.player.score * 100), True, BLACK), (150, 10))
        surface.blit(font.render(str(self.highscore * 100), True, BLACK), (500, 10))
        surface.blit(font.render("Highscore", True, BLACK), (350, 10))


def main(argv: list[str] | None = None) -> int:
    """Open the window and run the game until it is closed."""
    parser = argparse.ArgumentParser(prog="solid-snake", description="Play snake.")
    parser.add_argument(
        "--highscore-file",
        default=DEFAULT_HIGHSCORE_PATH,
        help="file where the high score is kept",
    )
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("solid snake!!")
        font = pygame.font.Font(None, 26)
        clock = pygame.time.Clock()
        game = SnakeGame(args.highscore_file)
        running = True
        while running:
            key: Direction | None = None
            restart = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        restart = True
                    elif key is None:
                        key = _ARROWS.get(event.key)
            if not running:
                break
            game.update(key, restart)
            game.draw(screen, font)
            fps = font.render(f"{round(clock.get_fps())} FPS", True, LIME)
            screen.blit(fps, (10, 10))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return 0