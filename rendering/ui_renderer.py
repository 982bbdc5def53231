"""UI rendering utilities for the dodgeball front end.

This module handles the HUD (score, streak, countdown), the hit feed,
and the menu and results screens.
"""

from typing import Any, Dict, List, Optional, Sequence

import pygame

from dodgeball.config.match_config import MatchMode
from dodgeball.entities.team import Team
from dodgeball.simulation.snapshot import MatchOutcome, MatchSnapshot

TEXT_COLOR = (220, 220, 255)
MUTED_TEXT_COLOR = (150, 150, 170)
PANEL_COLOR = (20, 20, 40)
WIN_COLOR = (100, 255, 100)
LOSE_COLOR = (255, 100, 100)
HIGHLIGHT_COLOR = (255, 200, 100)

FEED_DURATION = 180  # Frames a hit notification stays on screen
FEED_FADE_FRAMES = 60
FEED_MAX_COUNT = 5


class UIRenderer:
    """Renders UI elements on top of the arena.

    Attributes:
        screen: Pygame surface to render to
        stats_font: Font for HUD text
        title_font: Large font for countdown and screen titles
        frame_count: Current frame count for fades
    """

    def __init__(
        self,
        screen: pygame.Surface,
        stats_font: pygame.font.Font,
        title_font: pygame.font.Font,
    ) -> None:
        """Initialize the UI renderer.

        Args:
            screen: Pygame surface to render to
            stats_font: Font for HUD text
            title_font: Font for large headings
        """
        self.screen = screen
        self.stats_font = stats_font
        self.title_font = title_font
        self.frame_count: int = 0

    def set_frame_count(self, frame_count: int) -> None:
        self.frame_count = frame_count

    def _blit_centered(self, font: pygame.font.Font, text: str, color, y: int) -> None:
        surface = font.render(text, True, color)
        x = self.screen.get_width() // 2 - surface.get_width() // 2
        self.screen.blit(surface, (x, y))

    def draw_hud(self, snapshot: MatchSnapshot, paused: bool = False) -> None:
        """Draw the score bar, the human's streak and the countdown."""
        width = self.screen.get_width()
        score = snapshot.score

        purple = self.stats_font.render(
            f"Purple: {score.purple}", True, pygame.Color(Team.PURPLE.color)
        )
        blue = self.stats_font.render(f"Blue: {score.blue}", True, pygame.Color(Team.BLUE.color))
        self.screen.blit(purple, (20, 15))
        self.screen.blit(blue, (width - blue.get_width() - 20, 15))

        mode = "Infinite" if snapshot.mode is MatchMode.INFINITE else "Round"
        clock = f"{mode}  {snapshot.time_ms / 1000.0:5.1f}s"
        self._blit_centered(self.stats_font, clock, TEXT_COLOR, 15)

        human = snapshot.human
        if human is not None:
            streak = f"Streak: {human.kills}"
            if human.has_aura:
                streak += "  AURA"
            color = HIGHLIGHT_COLOR if human.has_aura else TEXT_COLOR
            text = self.stats_font.render(streak, True, color)
            self.screen.blit(text, (20, self.screen.get_height() - 35))

        if snapshot.countdown is not None:
            self._blit_centered(
                self.title_font,
                str(snapshot.countdown),
                TEXT_COLOR,
                self.screen.get_height() // 2 - 40,
            )

        if paused:
            self._blit_centered(self.stats_font, "PAUSED", HIGHLIGHT_COLOR, 45)

    def draw_hit_feed(self, notifications: List[Dict[str, Any]]) -> None:
        """Draw recent hit notifications in the bottom-right corner.

        Args:
            notifications: Dicts with 'message', 'color' and 'frame' keys
        """
        y_offset = self.screen.get_height() - 30
        for notif in reversed(notifications):  # Newest at bottom
            age = self.frame_count - notif["frame"]
            fade_start = FEED_DURATION - FEED_FADE_FRAMES
            if age > fade_start:
                alpha = int(255 * (FEED_DURATION - age) / FEED_FADE_FRAMES)
            else:
                alpha = 255

            text_surface = self.stats_font.render(notif["message"], True, notif["color"])
            background = pygame.Surface(
                (text_surface.get_width() + 20, text_surface.get_height() + 10)
            )
            background.set_alpha(max(0, min(alpha, 220)))
            background.fill(PANEL_COLOR)

            x_pos = self.screen.get_width() - background.get_width() - 10
            y_pos = y_offset - background.get_height()
            self.screen.blit(background, (x_pos, y_pos))
            self.screen.blit(text_surface, (x_pos + 10, y_pos + 5))
            y_offset = y_pos - 5

    def draw_menu(self, options: Sequence[str], selected: int, nickname: str) -> None:
        """Draw the title screen with selectable options."""
        height = self.screen.get_height()
        self._blit_centered(self.title_font, "DODGEBALL", TEXT_COLOR, height // 4)
        self._blit_centered(
            self.stats_font, f"Playing as {nickname}", MUTED_TEXT_COLOR, height // 4 + 90
        )

        y = height // 2
        for i, option in enumerate(options):
            color = HIGHLIGHT_COLOR if i == selected else TEXT_COLOR
            label = f"> {option} <" if i == selected else option
            self._blit_centered(self.stats_font, label, color, y)
            y += 40

        help_lines = [
            "Hold the left mouse button to run toward the cursor",
            "Click to throw - clicks near an enemy aim straight at them",
            "UP/DOWN + ENTER to choose, ESC to quit",
        ]
        y = height - 40 - 26 * len(help_lines)
        for line in help_lines:
            self._blit_centered(self.stats_font, line, MUTED_TEXT_COLOR, y)
            y += 26

    def draw_results(self, snapshot: MatchSnapshot, options: Sequence[str], selected: int) -> None:
        """Draw the end-of-match screen over a dimmed arena."""
        veil = pygame.Surface(self.screen.get_size())
        veil.set_alpha(180)
        veil.fill(PANEL_COLOR)
        self.screen.blit(veil, (0, 0))

        height = self.screen.get_height()
        outcome: Optional[MatchOutcome] = snapshot.outcome
        if outcome is MatchOutcome.WIN:
            title, color = "VICTORY", WIN_COLOR
        else:
            title, color = "DEFEAT", LOSE_COLOR
        self._blit_centered(self.title_font, title, color, height // 4)

        score = snapshot.score
        self._blit_centered(
            self.stats_font,
            f"Purple {score.purple} - {score.blue} Blue",
            TEXT_COLOR,
            height // 4 + 90,
        )
        self._blit_centered(
            self.stats_font,
            f"Match time {snapshot.time_ms / 1000.0:.1f}s",
            MUTED_TEXT_COLOR,
            height // 4 + 120,
        )

        y = height // 2 + 40
        for i, option in enumerate(options):
            label = f"> {option} <" if i == selected else option
            self._blit_centered(
                self.stats_font, label, HIGHLIGHT_COLOR if i == selected else TEXT_COLOR, y
            )
            y += 40
