"""Arena rendering for the dodgeball front end.

Draws a MatchSnapshot: the court, particles, players and balls. The
renderer only reads snapshot values; it never touches the engine.
"""

import math
from typing import Dict, Tuple

import pygame

from dodgeball.config.display import (
    BACKGROUND_COLOR,
    CENTER_LINE_COLOR,
    HOT_BALL_COLOR,
    NEUTRAL_BALL_COLOR,
)
from dodgeball.simulation.snapshot import BallView, MatchSnapshot, ParticleView, PlayerView

HIT_FLASH_COLOR = (255, 255, 255)
AURA_COLOR = (255, 215, 0)
HUMAN_RING_COLOR = (255, 255, 255)
INVULNERABLE_ALPHA = 140


class ArenaRenderer:
    """Renders the playing field and every entity in a snapshot.

    Attributes:
        screen: Pygame surface to render to
        label_font: Font for the human player's nickname
    """

    def __init__(self, screen: pygame.Surface, label_font: pygame.font.Font) -> None:
        """Initialize the arena renderer.

        Args:
            screen: Pygame surface to render to
            label_font: Font for name labels
        """
        self.screen = screen
        self.label_font = label_font
        self._colors: Dict[str, pygame.Color] = {}
        self._overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)

    def _color(self, hex_color: str) -> pygame.Color:
        color = self._colors.get(hex_color)
        if color is None:
            color = pygame.Color(hex_color)
            self._colors[hex_color] = color
        return color

    def render(self, snapshot: MatchSnapshot) -> None:
        """Draw one frame for ``snapshot``."""
        self.draw_court()
        self._overlay.fill((0, 0, 0, 0))
        for particle in snapshot.particles:
            self.draw_particle(particle)
        for ball in snapshot.balls:
            self.draw_ball_trail(ball)
        self.screen.blit(self._overlay, (0, 0))

        for player in snapshot.players:
            if player.is_alive:
                self.draw_player(player)
            elif player.death_progress is not None and player.death_progress < 1.0:
                self.draw_dying_player(player)

        for ball in snapshot.balls:
            self.draw_ball(ball)

    def draw_court(self) -> None:
        width, height = self.screen.get_size()
        self.screen.fill(self._color(BACKGROUND_COLOR))
        line = pygame.Surface((2, height), pygame.SRCALPHA)
        line.fill(CENTER_LINE_COLOR)
        self.screen.blit(line, (width // 2 - 1, 0))

    def draw_particle(self, particle: ParticleView) -> None:
        alpha = particle.life_fraction
        radius = max(1, int(particle.size * alpha))
        color = self._color(particle.color)
        pygame.draw.circle(
            self._overlay,
            (color.r, color.g, color.b, int(255 * alpha)),
            (int(particle.x), int(particle.y)),
            radius,
        )

    def draw_ball_trail(self, ball: BallView) -> None:
        count = len(ball.trail)
        if count == 0:
            return
        color = self._color(HOT_BALL_COLOR)
        for i, (x, y, alpha) in enumerate(ball.trail):
            # Older points are fainter and smaller
            strength = max(0.0, alpha) * (i / count)
            if strength <= 0:
                continue
            radius = max(1, int(ball.radius * strength))
            pygame.draw.circle(
                self._overlay,
                (color.r, color.g, color.b, int(255 * strength)),
                (int(x), int(y)),
                radius,
            )

    def draw_player(self, player: PlayerView) -> None:
        center = (int(player.x), int(player.y))
        radius = max(1, int(player.radius * player.scale))
        color = self._color(player.team.color)

        if player.has_aura:
            pygame.draw.circle(self.screen, AURA_COLOR, center, radius + 6, 3)

        if player.invulnerable:
            body = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(
                body, (color.r, color.g, color.b, INVULNERABLE_ALPHA), (radius, radius), radius
            )
            self.screen.blit(body, (center[0] - radius, center[1] - radius))
        else:
            pygame.draw.circle(self.screen, color, center, radius)

        # Spin marker so rotation is visible on a plain disc
        tip = (
            center[0] + int(math.cos(player.rotation) * radius * 0.7),
            center[1] + int(math.sin(player.rotation) * radius * 0.7),
        )
        pygame.draw.line(self.screen, self._color(NEUTRAL_BALL_COLOR), center, tip, 2)

        if player.is_human:
            pygame.draw.circle(self.screen, HUMAN_RING_COLOR, center, radius + 3, 2)
            if player.nickname:
                self.draw_label(player.nickname, (center[0], center[1] - radius - 14))

    def draw_dying_player(self, player: PlayerView) -> None:
        progress = player.death_progress or 0.0
        radius = max(1, int(player.radius * (1 - progress)))
        if player.hit_flash:
            color = pygame.Color(*HIT_FLASH_COLOR)
        else:
            color = self._color(player.team.color)
        body = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(
            body, (color.r, color.g, color.b, int(255 * (1 - progress))), (radius, radius), radius
        )
        self.screen.blit(body, (int(player.x) - radius, int(player.y) - radius))

    def draw_ball(self, ball: BallView) -> None:
        color = self._color(HOT_BALL_COLOR if ball.hot else NEUTRAL_BALL_COLOR)
        pygame.draw.circle(self.screen, color, (int(ball.x), int(ball.y)), int(ball.radius))

    def draw_label(self, text: str, center: Tuple[int, int]) -> None:
        surface = self.label_font.render(text, True, (255, 255, 255))
        self.screen.blit(surface, (center[0] - surface.get_width() // 2, center[1]))
