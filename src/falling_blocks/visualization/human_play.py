from __future__ import annotations

import argparse
import logging
import math
import time
from typing import Callable, Dict, List, Optional

import pygame

from falling_blocks.game import Command, Game, GameConfig
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.UP_NUDGE,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_x: Command.ROTATE_CW,
    pygame.K_h: Command.LEFT,
    pygame.K_n: Command.RIGHT,
    pygame.K_t: Command.SOFT_DROP,
    pygame.K_c: Command.UP_NUDGE,
    pygame.K_SEMICOLON: Command.ROTATE_CCW,
    pygame.K_j: Command.ROTATE_CW,
    pygame.K_COMMA: Command.DEBUG_CYCLE_SHAPE,
}

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_QUOTE)


def command_for_key(key: int) -> Command:
    return KEY_TO_COMMAND.get(key, Command.NO_OP)


def poll_events(wait_ms: int) -> List[pygame.event.Event]:
    """Collect pending events, blocking at most `wait_ms` for the first one.

    `pygame.event.wait(0)` blocks forever, so a zero budget only drains the
    queue.
    """
    if wait_ms <= 0:
        return pygame.event.get()
    event = pygame.event.wait(wait_ms)
    events = [] if event.type == pygame.NOEVENT else [event]
    events.extend(pygame.event.get())
    return events


class TickDriver:
    """Buffers the latest command and ticks the game at a fixed rate."""

    def __init__(self, game: Game, tick_rate: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.game = game
        self.tick_rate = tick_rate
        self.clock = clock
        self.last_tick = clock()
        self.command = Command.NO_OP
        self.running = True

    def wait_ms(self) -> int:
        remaining = self.tick_rate - (self.clock() - self.last_tick)
        return max(0, int(math.ceil(remaining * 1000)))

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key in QUIT_KEYS:
                self.running = False
            elif event.key == pygame.K_r and self.game.game_over:
                self.game.reset()
            else:
                new_command = command_for_key(event.key)
                # Only the latest command since the last tick is kept
                if new_command != Command.NO_OP:
                    self.command = new_command

    def update(self) -> bool:
        """Tick the game if the interval has elapsed; True when it ticked."""
        if self.clock() - self.last_tick < self.tick_rate:
            return False
        self.game.tick(self.command)
        self.last_tick = self.clock()
        self.command = Command.NO_OP
        return True


def run(seed: Optional[int] = None, tick_ms: int = 16) -> int:
    """Play until the window is closed; returns the final score."""
    pygame.init()
    try:
        game = Game(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")
        logger.info("Starting game (seed=%s, tick=%dms)", seed, tick_ms)

        driver = TickDriver(game, tick_ms / 1000.0)
        while driver.running:
            renderer.draw(screen, game)
            pygame.display.flip()

            # Wait for input, but never past the next tick
            for event in poll_events(driver.wait_ms()):
                driver.handle_event(event)
            driver.update()
        return game.score
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks in a pygame window")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece sequencer")
    p.add_argument("--tick-ms", type=int, default=16, help="Milliseconds between game ticks")
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    score = run(seed=args.seed, tick_ms=args.tick_ms)
    print(f"Final score: {score}")


if __name__ == "__main__":  # pragma: no cover
    main()
