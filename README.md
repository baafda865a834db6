# solid-snake

A small arcade snake game. The snake's head glides across a 900×500 playfield
on a 50-pixel grid and wraps around every edge. The body segments follow the
exact path the head took. Eat the red block to grow. If your own body touches
the head, the game is over.

## Installing

```
pip install .
```

This installs pygame as a dependency.

## Playing

```
solid-snake
```

- **Arrow keys** steer. A turn you ask for is remembered and happens as soon
  as the head lines up with the grid. You cannot reverse straight back on
  yourself.
- **Space** starts a new round after a game over. The head stays where it
  stopped.
- **Escape**, or closing the window, quits.

Each block you eat is worth 100 points. When a game ends, your best score is
written to `highscore.txt` in the current directory and is read back the next
time the game starts. A missing or unreadable file counts as a high score of 0.
You can use another file:

```
solid-snake --highscore-file scores/best.txt
```

## Using the game logic

The rules live in `solid_snake.logic` and have no display code, so you can use
them on their own:

```python
import random
from solid_snake.logic import Player, PositionHistory, spawn_block, wrap_player

player = Player()
history = PositionHistory()
food = spawn_block(random.Random(1))

wrap_player(player)
history.save((player.rect.x, player.rect.y))
print(player.rect.collides(food))
```

Other pieces in that module:

- `Steering.steer(player, key)` applies an optional `Direction` key press and
  moves the player one step.
- `DirectionTracker.changed(history)` tells when the head switched between
  vertical and horizontal travel.
- `FillBuffer` keeps the blocks that fill the corners where the snake turned.
- `load_highscore(path)` and `save_highscore(path, highscore)` read and write
  the score file.

`solid_snake.app.SnakeGame` holds the whole game state and advances it one
frame at a time. Call `update(key, restart_pressed)` to advance a frame and
`draw(surface, font)` to render it onto a pygame surface. `restart()` starts a
new round, and `end()` stops the snake and stores the high score.

## Running the tests

```
pip install ".[test]"
pytest
```