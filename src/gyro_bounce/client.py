#!/usr/bin/env python3
"""
client.py

Desktop front end: difficulty menu, pygame rendering and keyboard tilt.
The arrow keys lean the "device"; a sensor thread samples that lean the
same way a phone accelerometer would be sampled.
"""

import argparse
import logging
import random
import time
from typing import Dict, Optional

import pygame

from .constants import ACCEL_UPDATE_MS, DB_FILE, RENDER_FPS
from .difficulty import DEFAULT_DIFFICULTY, available_difficulties
from .errors import StorageError
from .game_config import CFG, GameConfig
from .score_store import SQLiteScoreStore
from .session import FrameClock, GameSession
from .tilt import KeyboardTilt, PollingTiltSource

BACKGROUND = (11, 18, 32)
BALL_FILL = (255, 209, 102)
BALL_EDGE = (255, 183, 3)
PLATFORM_FILL = (6, 214, 160)
OBSTACLE_FILL = (239, 71, 111)
WHITE = (255, 255, 255)
HINT = (154, 164, 178)
BUTTON = (17, 138, 178)

DIFFICULTY_LABELS = {"easy": "Easy", "hard": "Hard"}


class GyroBounceClient:
    def __init__(self, session: GameSession):
        pygame.init()
        self.session = session
        cfg = session.config
        self.screen = pygame.display.set_mode((int(cfg.screen_width), int(cfg.screen_height)))
        pygame.display.set_caption("Gyro Bounce")

        self.keyboard = KeyboardTilt()
        self.sensor = PollingTiltSource(self.keyboard.read)

        self.clock = pygame.time.Clock()
        self.frame_clock = FrameClock(cfg.max_dt)

        self.in_menu = True
        self.selected = session.difficulty
        self.best_scores: Dict[str, int] = {}

        self.large_font = pygame.font.Font(None, 44)
        self.font = pygame.font.Font(None, 26)
        self.small_font = pygame.font.Font(None, 20)

    def run(self):
        """The main client loop."""
        self._refresh_best_scores()
        self.session.attach_tilt(self.sensor, ACCEL_UPDATE_MS)

        running = True
        try:
            while running:
                frame_dt = self.clock.tick(RENDER_FPS) / 1000.0

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        running = self._handle_key(event.key)

                keys = pygame.key.get_pressed()
                self.keyboard.update(keys[pygame.K_LEFT], keys[pygame.K_RIGHT], frame_dt)

                if self.in_menu:
                    self._draw_menu()
                    continue

                dt = self.frame_clock.advance(time.perf_counter())
                events = self.session.tick(dt)
                if events is not None and events.game_over:
                    self.best_scores[self.session.difficulty] = self.session.best_score()
                self._draw_game()
        finally:
            self.session.close()
            pygame.quit()

    def _handle_key(self, key) -> bool:
        if key == pygame.K_ESCAPE:
            if self.in_menu:
                return False
            self.in_menu = True
            self._refresh_best_scores()
            return True

        if self.in_menu:
            names = available_difficulties()
            if key in (pygame.K_UP, pygame.K_DOWN, pygame.K_TAB):
                step = -1 if key == pygame.K_UP else 1
                self.selected = names[(names.index(self.selected) + step) % len(names)]
            elif key in (pygame.K_1, pygame.K_2) and key - pygame.K_1 < len(names):
                self.selected = names[key - pygame.K_1]
            elif key in (pygame.K_RETURN, pygame.K_SPACE):
                self._start(self.selected)
            return True

        if key == pygame.K_r and not self.session.state.running:
            self._start(self.session.difficulty)
        elif key == pygame.K_m and not self.session.state.running:
            self.in_menu = True
            self._refresh_best_scores()
        return True

    def _start(self, difficulty: str):
        if difficulty != self.session.difficulty:
            self.session.change_difficulty(difficulty)
        else:
            self.session.reset_game()
        self.frame_clock.reset()
        self.in_menu = False

    def _refresh_best_scores(self):
        self.best_scores = {name: self.session.best_score(name) for name in available_difficulties()}

    # ---------------- Drawing ----------------
    def _blit_centered(self, surf, y):
        self.screen.blit(surf, (self.screen.get_width() // 2 - surf.get_width() // 2, y))

    def _draw_menu(self):
        screen = self.screen
        screen.fill(BACKGROUND)
        height = screen.get_height()

        self._blit_centered(self.large_font.render("Gyro Bounce", True, WHITE), height // 5)

        best = self.best_scores.get(self.selected, 0)
        self._blit_centered(self.font.render("Best score", True, HINT), height // 5 + 70)
        self._blit_centered(self.large_font.render(str(best), True, WHITE), height // 5 + 95)

        self._blit_centered(self.font.render("Choose difficulty", True, HINT), height // 2 - 30)
        for i, name in enumerate(available_difficulties()):
            label = DIFFICULTY_LABELS.get(name, name.title())
            color = BUTTON if name == self.selected else HINT
            text = self.font.render(f"{i + 1}. {label}", True, color)
            self._blit_centered(text, height // 2 + 10 + 34 * i)

        self._blit_centered(self.small_font.render(
            "Enter = Start | Up/Down = Select | Esc = Quit", True, HINT), height - 80)
        self._blit_centered(self.small_font.render(
            "Tilt with Left / Right to move the platform", True, HINT), height - 55)
        pygame.display.flip()

    def _draw_game(self):
        screen = self.screen
        state = self.session.snapshot()
        screen.fill(BACKGROUND)

        for o in state["obstacles"]:
            pygame.draw.rect(screen, OBSTACLE_FILL, (o["x"], o["y"], o["w"], o["h"]), border_radius=4)

        p = state["platform"]
        pygame.draw.rect(screen, PLATFORM_FILL, (p["x"], p["y"], p["w"], p["h"]), border_radius=8)

        b = state["ball"]
        center = (int(b["x"]), int(b["y"]))
        pygame.draw.circle(screen, BALL_FILL, center, int(b["r"]))
        pygame.draw.circle(screen, BALL_EDGE, center, int(b["r"]), 2)

        # HUD
        screen.blit(self.font.render(f"Bounces: {state['score']}", True, WHITE), (16, 16))
        screen.blit(self.small_font.render(
            f"{DIFFICULTY_LABELS.get(state['difficulty'], state['difficulty'])}"
            f" | best {self.best_scores.get(state['difficulty'], 0)}", True, HINT), (16, 44))

        if state["phase"] == "game_over":
            height = screen.get_height()
            self._blit_centered(self.large_font.render("Game Over", True, WHITE), height // 2 - 60)
            self._blit_centered(self.font.render(f"Bounces: {state['score']}", True, WHITE), height // 2 - 15)
            if state["new_record"]:
                self._blit_centered(self.font.render("New best!", True, BALL_FILL), height // 2 + 15)
            self._blit_centered(self.small_font.render(
                "R = Restart | M = Menu | Esc = Menu", True, HINT), height // 2 + 50)

        pygame.display.flip()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Tilt the platform, keep the ball bouncing.")
    parser.add_argument("--difficulty", choices=available_difficulties(), default=DEFAULT_DIFFICULTY)
    parser.add_argument("--db", default=DB_FILE, help="SQLite file for best scores")
    parser.add_argument("--width", type=int, default=int(CFG.screen_width))
    parser.add_argument("--height", type=int, default=int(CFG.screen_height))
    parser.add_argument("--seed", type=int, default=None, help="Seed for obstacles and bounce jitter")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def open_store(db_file: str) -> Optional[SQLiteScoreStore]:
    try:
        return SQLiteScoreStore(db_file)
    except StorageError as e:
        # Best scores just won't persist
        logging.getLogger(__name__).warning("%s", e)
        return None


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config: GameConfig = CFG.for_screen(args.width, args.height)
    store = open_store(args.db)
    session = GameSession(
        difficulty=args.difficulty,
        config=config,
        store=store,
        rng=random.Random(args.seed),
    )

    print(f"Gyro Bounce started ({args.width}x{args.height}), scores in {args.db}.")
    try:
        GyroBounceClient(session).run()
    except KeyboardInterrupt:
        print("Interrupted.")
    finally:
        if store is not None:
            store.close()
    print("Bye.")


if __name__ == "__main__":
    main()
