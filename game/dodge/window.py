"""
Arcade front end for Triangle Dodger.

The simulation works in screen coordinates (origin top-left, y down);
Arcade draws with y up, so positions are flipped on the way in and out.

Controls:
    mouse           move the ball
    UP / DOWN       change difficulty on the menu
    ENTER / SPACE   start (menu) or restart (game over)
    ESC / M         back to the menu

Run:
    python -m game.dodge.window --difficulty 5
"""

from __future__ import annotations

import argparse
from typing import Dict, Optional, Tuple

import arcade

from .config import DEFAULT_DIFFICULTY, GAME_CONFIG
from .entities import Pursuer, PursuerKind
from .loop import GameLoop
from .round import Phase, PhaseChange, RoundController
from .scores import JsonScoreStore
from .utils import heading_vector, parse_difficulty


class DodgeWindow(arcade.Window):
    """Render sink, pointer source and menu/game-over screens"""

    def __init__(
        self,
        controller: Optional[RoundController] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        title: str = GAME_CONFIG["title"],
        difficulty: int = DEFAULT_DIFFICULTY,
        scores_path: str = GAME_CONFIG["scores_path"],
        fps: int = GAME_CONFIG["fps"],
        interactive: bool = True,
    ):
        if controller is not None:
            width = width or int(controller.viewport.width)
            height = height or int(controller.viewport.height)
        width = width or GAME_CONFIG["width"]
        height = height or GAME_CONFIG["height"]
        super().__init__(width, height, title, resizable=interactive)

        self.interactive = interactive
        self.menu_difficulty = parse_difficulty(difficulty)

        # slot -> (x, y, heading, size, kind) for every visible pursuer
        self._shapes: Dict[int, Tuple[float, float, float, float, PursuerKind]] = {}
        self._pressed = False
        self._game_over_text = ""

        if controller is None:
            controller = RoundController(
                width,
                height,
                store=JsonScoreStore(scores_path),
                render_sink=self.render_pursuer,
            )
            controller.set_difficulty(self.menu_difficulty)
        self.controller = controller
        self.controller.subscribe(self.on_phase_change)
        self.loop = GameLoop(controller) if interactive else None

        # Colors
        self.background_color = (18, 18, 22)
        self.BALL_C = (80, 200, 120)
        self.BALL_PRESSED_C = (140, 240, 170)
        self.SMALL_C = (220, 80, 80)
        self.BIG_C = (230, 140, 60)
        self.HUD_C = (220, 220, 220)
        self.NEW_RECORD_C = (240, 210, 80)

        self.set_update_rate(1 / fps)

    # ----------------------------
    # Core collaborators
    # ----------------------------

    def render_pursuer(self, p: Pursuer) -> None:
        if p.visible:
            self._shapes[p.slot] = (p.x, p.y, p.heading, p.size, p.kind)
        else:
            self._shapes.pop(p.slot, None)

    def on_phase_change(self, event: PhaseChange) -> None:
        if event.current is Phase.ENDED and event.result is not None:
            r = event.result
            if r.new_high_score:
                self._game_over_text = f"New High Score: {r.final_score}!"
            else:
                self._game_over_text = f"High Score: {r.high_score}"
        elif event.current is Phase.IDLE:
            self.menu_difficulty = event.difficulty

    # ----------------------------
    # Arcade events
    # ----------------------------

    def on_update(self, delta_time: float):
        # One simulation tick per display refresh, only while a frame is requested
        if self.loop is not None:
            self.loop.scheduler.pump()

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        if self.interactive:
            self.controller.pointer_moved(x, self.height - y)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self._pressed = True

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self._pressed = False

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        if self.interactive:
            self.controller.resize(width, height)

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return

        phase = self.controller.phase
        if phase is Phase.IDLE:
            if symbol == arcade.key.UP:
                self.menu_difficulty = self.controller.set_difficulty(self.menu_difficulty + 1)
            elif symbol == arcade.key.DOWN:
                self.menu_difficulty = self.controller.set_difficulty(self.menu_difficulty - 1)
            elif symbol in (arcade.key.ENTER, arcade.key.RETURN, arcade.key.SPACE):
                self.controller.start(self.menu_difficulty)
        elif phase is Phase.ENDED:
            if symbol in (arcade.key.ENTER, arcade.key.RETURN, arcade.key.SPACE, arcade.key.R):
                self.controller.restart()
            elif symbol in (arcade.key.ESCAPE, arcade.key.M):
                self.controller.return_to_menu(self.menu_difficulty)
        elif symbol in (arcade.key.ESCAPE, arcade.key.M):
            self.controller.return_to_menu(self.menu_difficulty)

    # ----------------------------
    # Drawing
    # ----------------------------

    def _triangle(self, x: float, y: float, heading: float, size: float):
        """Isosceles triangle pointing along heading, in Arcade coordinates"""
        ux, uy = heading_vector(heading)
        px, py = -uy, ux
        half = size * 0.5
        tip = (x + ux * half, y + uy * half)
        left = (x - ux * half + px * half, y - uy * half + py * half)
        right = (x - ux * half - px * half, y - uy * half - py * half)
        h = self.height
        return tip[0], h - tip[1], left[0], h - left[1], right[0], h - right[1]

    def on_draw(self):
        self.clear()

        for x, y, heading, size, kind in self._shapes.values():
            color = self.BIG_C if kind is PursuerKind.BIG else self.SMALL_C
            arcade.draw_triangle_filled(*self._triangle(x, y, heading, size), color)

        player = self.controller.player
        phase = self.controller.phase
        if phase is not Phase.IDLE:
            color = self.BALL_PRESSED_C if self._pressed else self.BALL_C
            radius = player.radius * (0.8 if self._pressed else 1.0)
            arcade.draw_circle_filled(player.x, self.height - player.y, radius, color)

        cx = self.width * 0.5
        cy = self.height * 0.5
        st = self.controller.state
        if phase is Phase.PLAYING:
            arcade.draw_text(f"Score: {st.display_score}", 12, self.height - 30, self.HUD_C, 16)
        elif phase is Phase.IDLE:
            arcade.draw_text("Triangle Dodger", cx, cy + 60, self.HUD_C, 32, anchor_x="center")
            arcade.draw_text(f"Difficulty: {self.menu_difficulty}  (UP/DOWN)", cx, cy,
                             self.HUD_C, 18, anchor_x="center")
            arcade.draw_text(f"High Score (Difficulty {self.menu_difficulty}): "
                             f"{self.controller.high_score(self.menu_difficulty)}",
                             cx, cy - 36, self.HUD_C, 16, anchor_x="center")
            arcade.draw_text("Press ENTER to start", cx, cy - 80, self.HUD_C, 14, anchor_x="center")
        else:
            result = self.controller.last_result
            final = result.final_score if result is not None else st.display_score
            record = result is not None and result.new_high_score
            arcade.draw_text("Game Over", cx, cy + 60, self.HUD_C, 32, anchor_x="center")
            arcade.draw_text(f"Your Score: {final}", cx, cy + 10, self.HUD_C, 20, anchor_x="center")
            arcade.draw_text(self._game_over_text, cx, cy - 26,
                             self.NEW_RECORD_C if record else self.HUD_C, 16, anchor_x="center")
            arcade.draw_text("ENTER: restart    ESC: menu", cx, cy - 70, self.HUD_C, 14, anchor_x="center")


def main():
    parser = argparse.ArgumentParser(description="Play Triangle Dodger")
    parser.add_argument(
        "--difficulty",
        type=str,
        default=str(DEFAULT_DIFFICULTY),
        help=f"Starting difficulty, 1-10 (default: {DEFAULT_DIFFICULTY})",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=GAME_CONFIG["width"],
        help=f"Window width (default: {GAME_CONFIG['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=GAME_CONFIG["height"],
        help=f"Window height (default: {GAME_CONFIG['height']})",
    )
    parser.add_argument(
        "--scores",
        type=str,
        default=GAME_CONFIG["scores_path"],
        help=f"High score file (default: {GAME_CONFIG['scores_path']})",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=GAME_CONFIG["fps"],
        help=f"Display refresh rate to tick at (default: {GAME_CONFIG['fps']})",
    )

    args = parser.parse_args()

    DodgeWindow(
        width=args.width,
        height=args.height,
        difficulty=parse_difficulty(args.difficulty),
        scores_path=args.scores,
        fps=args.fps,
    )
    arcade.run()


if __name__ == "__main__":
    main()
