"""
Arcade front end for playing the chase game by hand.

The simulation uses screen coordinates with y pointing down; arcade draws
with y pointing up, so every draw call flips y.

Run:
    python -m game.chase.window --highscore-file ~/.chase/highscore.json
"""

from __future__ import annotations

import argparse
import math
import os
import time
from typing import Optional

import arcade

from .config import ChaseConfig
from .controls import Direction
from .scores import JsonHighScoreStore
from .session import GameSession

# arcade key codes for the same directions as controls.KEY_BINDINGS
KEYMAP = {
    arcade.key.UP: Direction.UP,
    arcade.key.W: Direction.UP,
    arcade.key.DOWN: Direction.DOWN,
    arcade.key.S: Direction.DOWN,
    arcade.key.LEFT: Direction.LEFT,
    arcade.key.A: Direction.LEFT,
    arcade.key.RIGHT: Direction.RIGHT,
    arcade.key.D: Direction.RIGHT,
}

RESTART_KEYS = (arcade.key.R, arcade.key.ENTER, arcade.key.SPACE)


def star_points(cx: float, cy: float, r: float):
    """Five-point star outline, alternating outer and inner vertices"""
    points = []
    for i in range(5):
        outer = math.radians(18 + i * 72)
        inner = math.radians(54 + i * 72)
        points.append((cx + math.cos(outer) * r, cy + math.sin(outer) * r))
        points.append((cx + math.cos(inner) * r * 0.5, cy + math.sin(inner) * r * 0.5))
    return points


class ChaseWindow(arcade.Window):
    """Draws a GameSession and feeds keyboard/mouse input into it"""

    def __init__(self, session: GameSession, title: str = "Chase"):
        super().__init__(session.config.width, session.config.height, title)
        self.session = session
        self.background_color = (18, 18, 22)

        # Colors
        self.GRID_C = (255, 255, 255, 15)
        self.GLOW_C = (250, 204, 21, 16)
        self.EYE_C = (17, 17, 17)
        self.HALO_C = (255, 255, 255, 13)
        self.HUD_C = (220, 220, 220)
        self.OVERLAY_C = (0, 0, 0, 170)

        self._t0 = time.perf_counter()

    def now_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def restart(self):
        self.session.reset(self.now_ms())

    # ----------------------------
    # Arcade callbacks
    # ----------------------------

    def on_update(self, delta_time: float):
        self.session.frame(self.now_ms())

    def on_draw(self):
        self.clear()
        s = self.session
        h = self.height

        for gx in range(0, self.width, 40):
            arcade.draw_line(gx, 0, gx, h, self.GRID_C, 1)
        for gy in range(0, h, 40):
            arcade.draw_line(0, gy, self.width, gy, self.GRID_C, 1)

        k = s.pickup
        if not k.taken:
            arcade.draw_circle_filled(k.x, h - k.y, k.radius + 18, self.GLOW_C)
            arcade.draw_polygon_filled(star_points(k.x, h - k.y, k.radius + 6), k.color)

        e, p = s.pursuer, s.player
        arcade.draw_circle_filled(e.x, h - e.y, e.radius, e.color)
        look = math.atan2(p.y - e.y, p.x - e.x)
        arcade.draw_circle_filled(
            e.x + math.cos(look) * e.radius * 0.45,
            h - (e.y + math.sin(look) * e.radius * 0.45),
            e.radius * 0.28, self.EYE_C,
        )

        arcade.draw_circle_filled(p.x, h - p.y, p.radius + 2, p.color)
        arcade.draw_circle_outline(p.x, h - p.y, p.radius + 7, self.HALO_C, 2)

        arcade.draw_text(f"Score: {s.score}   Best: {s.high_score}",
                         12, h - 28, self.HUD_C, 14)

        if not s.running:
            self._draw_game_over()

    def _draw_game_over(self):
        s = self.session
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.OVERLAY_C)
        arcade.draw_text("Game Over", cx, cy + 30, self.HUD_C, 32, anchor_x="center")
        label = f"Final score: {s.score}"
        if s.new_record:
            label += "  (new best!)"
        arcade.draw_text(label, cx, cy - 10, self.HUD_C, 16, anchor_x="center")
        arcade.draw_text("Press R or click to restart", cx, cy - 40, self.HUD_C, 12,
                         anchor_x="center")

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.session.running:
            if symbol in RESTART_KEYS:
                self.restart()
            return
        direction = KEYMAP.get(symbol)
        if direction is not None:
            self.session.set_intent(direction, True)

    def on_key_release(self, symbol: int, modifiers: int):
        direction = KEYMAP.get(symbol)
        if direction is not None:
            self.session.set_intent(direction, False)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if not self.session.running:
            self.restart()
            return
        self.session.steer_toward(x, self.height - y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.session.release_pointer()


def play(highscore_file: Optional[str] = None, seed: Optional[int] = None,
         config: Optional[ChaseConfig] = None):
    path = highscore_file or os.path.join(os.path.expanduser("~"), ".chase", "highscore.json")
    session = GameSession(config, store=JsonHighScoreStore(path), seed=seed)
    window = ChaseWindow(session)
    window.restart()
    arcade.run()


def main():
    parser = argparse.ArgumentParser(description="Play the chase game")
    parser.add_argument(
        "--highscore-file",
        type=str,
        default=None,
        help="Where to keep the best score (default: ~/.chase/highscore.json)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for pickup placement",
    )
    args = parser.parse_args()
    play(highscore_file=args.highscore_file, seed=args.seed)


if __name__ == "__main__":
    main()
