"""Pygame front end for the dodgeball simulation.

The game owns the window and the frame loop. Each frame it forwards mouse
input to the MatchController, advances the simulation by the elapsed
wall-clock time and draws the latest snapshot.
"""

import logging
from typing import Any, Dict, List, Optional

import pygame

from dodgeball.config.display import ARENA_HEIGHT, ARENA_WIDTH, FRAME_RATE
from dodgeball.config.match_config import MatchConfig, MatchMode
from dodgeball.events import PlayerHitEvent
from dodgeball.math_utils import Vector2
from dodgeball.simulation.engine import MatchController
from rendering.arena_renderer import ArenaRenderer
from rendering.ui_renderer import FEED_DURATION, FEED_MAX_COUNT, UIRenderer

logger = logging.getLogger(__name__)

MENU_OPTIONS = ["Start match", "Infinite mode"]
RESULT_OPTIONS = ["Play again", "Main menu"]


class DodgeballGame:
    """Interactive dodgeball match in a pygame window.

    Attributes:
        base_config: Configuration the menu options are derived from
        controller: The simulation engine
        screen: Pygame display surface
        clock: Pygame clock for frame pacing
        state: "menu", "playing" or "results"
        paused: Whether the simulation is paused
        hit_feed: Recent hit notifications for the UI
    """

    def __init__(self, config: Optional[MatchConfig] = None) -> None:
        """Initialize the game.

        Args:
            config: Base match configuration (mode is chosen in the menu)
        """
        self.base_config = config if config is not None else MatchConfig()
        self.controller = MatchController(self.base_config)
        self.controller.event_bus.subscribe(PlayerHitEvent, self._on_player_hit)
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.screen: Optional[pygame.Surface] = None
        self.arena_renderer: Optional[ArenaRenderer] = None
        self.ui_renderer: Optional[UIRenderer] = None
        self.state = "menu"
        self.selected = 0
        self.paused = False
        self.mouse_down = False
        self.mouse_pos = Vector2(0.0, 0.0)
        self.frame_count = 0
        self.hit_feed: List[Dict[str, Any]] = []
        self._last_mode = self.base_config.mode

    def setup_game(self) -> bool:
        """Open the window and create renderers.

        Returns:
            False if the display could not be initialised
        """
        try:
            self.screen = pygame.display.set_mode(
                (int(self.base_config.arena_width), int(self.base_config.arena_height))
            )
            pygame.display.set_caption("Dodgeball")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False

        stats_font = pygame.font.Font(None, 28)
        title_font = pygame.font.Font(None, 96)
        self.arena_renderer = ArenaRenderer(self.screen, pygame.font.Font(None, 20))
        self.ui_renderer = UIRenderer(self.screen, stats_font, title_font)
        return True

    def start_match(self, mode: MatchMode) -> None:
        """Reset the controller for a new match in ``mode``."""
        self._last_mode = mode
        self.controller.reset(self.base_config.with_overrides(mode=mode))
        self.hit_feed.clear()
        self.mouse_down = False
        self.paused = False
        self.selected = 0
        self.state = "playing"

    def _on_player_hit(self, event: PlayerHitEvent) -> None:
        thrower = self.controller.get_player(event.thrower_id)
        victim = self.controller.get_player(event.victim_id)
        thrower_name = self._display_name(thrower, event.thrower_id)
        victim_name = self._display_name(victim, event.victim_id)
        color = pygame.Color(thrower.team.color) if thrower is not None else (220, 220, 255)
        self.hit_feed.append(
            {
                "message": f"{thrower_name} hit {victim_name}",
                "color": color,
                "frame": self.frame_count,
            }
        )
        if len(self.hit_feed) > FEED_MAX_COUNT:
            self.hit_feed.pop(0)

    def close(self) -> None:
        """Detach the hit feed from the controller's event bus."""
        self.controller.event_bus.unsubscribe(PlayerHitEvent, self._on_player_hit)

    @staticmethod
    def _display_name(player, fallback: str) -> str:
        if player is not None and player.is_human and player.nickname:
            return player.nickname
        return fallback

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False when the game should quit
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                if self.state == "playing":
                    self.state = "menu"
                    continue
                return False

            if self.state == "playing":
                self._handle_playing_event(event)
            else:
                self._handle_menu_event(event)
        return True

    def _handle_playing_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.mouse_down = True
            self.mouse_pos = Vector2(*event.pos)
            self.controller.request_human_throw(self.mouse_pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.mouse_down = False
        elif event.type == pygame.MOUSEMOTION:
            self.mouse_pos = Vector2(*event.pos)
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
            self.paused = not self.paused

    def _handle_menu_event(self, event: pygame.event.Event) -> None:
        options = MENU_OPTIONS if self.state == "menu" else RESULT_OPTIONS
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_UP, pygame.K_w):
            self.selected = (self.selected - 1) % len(options)
        elif event.key in (pygame.K_DOWN, pygame.K_s):
            self.selected = (self.selected + 1) % len(options)
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            self._choose(self.selected)

    def _choose(self, index: int) -> None:
        if self.state == "menu":
            mode = MatchMode.INFINITE if index == 1 else MatchMode.FIXED_ROUND
            self.start_match(mode)
        elif index == 0:
            self.start_match(self._last_mode)
        else:
            self.state = "menu"
            self.selected = 0

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def update(self, frame_ms: float) -> None:
        """Forward input and advance the simulation by ``frame_ms``."""
        self.frame_count += 1
        self.hit_feed = [n for n in self.hit_feed if self.frame_count - n["frame"] < FEED_DURATION]

        if self.state != "playing" or self.paused:
            return

        if self.mouse_down:
            self.controller.set_human_steering(target=self.mouse_pos)
        else:
            self.controller.clear_human_steering()

        self.controller.advance(frame_ms)
        if self.controller.is_over:
            outcome = self.controller.outcome
            logger.info("Match finished: %s", outcome.value if outcome else "unknown")
            self.state = "results"
            self.selected = 0

    def render(self) -> None:
        """Draw the current screen."""
        if self.screen is None or self.arena_renderer is None or self.ui_renderer is None:
            return

        self.ui_renderer.set_frame_count(self.frame_count)
        snapshot = self.controller.snapshot

        if self.state == "menu" or snapshot is None:
            self.arena_renderer.draw_court()
            self.ui_renderer.draw_menu(MENU_OPTIONS, self.selected, self.base_config.human_nickname)
        else:
            self.arena_renderer.render(snapshot)
            self.ui_renderer.draw_hud(snapshot, self.paused)
            self.ui_renderer.draw_hit_feed(self.hit_feed)
            if self.state == "results":
                self.ui_renderer.draw_results(snapshot, RESULT_OPTIONS, self.selected)

        pygame.display.flip()

    def run(self) -> None:
        """Run the game loop until the window is closed."""
        if not self.setup_game():
            return

        logger.info("Dodgeball ready (%dx%d)", ARENA_WIDTH, ARENA_HEIGHT)
        frame_ms = 0.0
        while self.handle_events():
            self.update(frame_ms)
            self.render()
            frame_ms = self.clock.tick(FRAME_RATE)

        logger.info("Goodbye!")


def main(config: Optional[MatchConfig] = None) -> None:
    """Entry point for the interactive game."""
    pygame.init()
    game = DodgeballGame(config)
    try:
        game.run()
    finally:
        game.close()
        pygame.quit()


if __name__ == "__main__":
    main()
