"""Read-only views of the match, published once per tick.

Snapshots copy plain values out of the live entities, so renderers and
tests can hold on to them without ever seeing a half-updated tick.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from dodgeball.config.match_config import MatchMode
from dodgeball.config.physics import DEATH_ANIMATION_TICKS, HIT_FLASH_MS
from dodgeball.entities.player import AIState, Player
from dodgeball.entities.team import Team

if TYPE_CHECKING:
    from dodgeball.events import MatchEvent
    from dodgeball.simulation.engine import MatchController


class MatchOutcome(Enum):
    """Result of a finished match from the human player's point of view."""

    WIN = "win"
    LOSE = "lose"


@dataclass(frozen=True)
class ScoreSnapshot:
    """Living players per team."""

    purple: int
    blue: int

    def for_team(self, team: Team) -> int:
        return self.purple if team is Team.PURPLE else self.blue

    @classmethod
    def from_players(cls, players: Iterable[Player]) -> "ScoreSnapshot":
        purple = 0
        blue = 0
        for player in players:
            if not player.is_alive:
                continue
            if player.team is Team.PURPLE:
                purple += 1
            else:
                blue += 1
        return cls(purple=purple, blue=blue)


@dataclass(frozen=True)
class PlayerView:
    player_id: str
    team: Team
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    rotation: float
    scale: float
    is_alive: bool
    has_ball: bool
    is_human: bool
    ai_state: AIState
    kills: int
    has_aura: bool
    hit_flash: bool
    invulnerable: bool
    throw_animation: Optional[int]
    death_progress: Optional[float]  # 0..1 while the death animation plays
    trail: Tuple[Tuple[float, float], ...]
    nickname: Optional[str]
    avatar: Optional[str]


@dataclass(frozen=True)
class BallView:
    ball_id: str
    x: float
    y: float
    radius: float
    owner_id: Optional[str]
    hot: bool
    trail: Tuple[Tuple[float, float, float], ...]  # (x, y, alpha)


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    life_fraction: float
    color: str
    size: float


@dataclass(frozen=True)
class MatchSnapshot:
    """Everything an outside observer may read about one tick.

    Attributes:
        tick: Tick number the snapshot was taken at (0 right after reset)
        time_ms: Logical match time
        mode: Fixed-round or infinite
        players: All players in roster order, dead ones included
        balls: All balls in creation order
        particles: Live particles
        score: Living players per team
        is_over: Whether the match has ended
        outcome: WIN/LOSE once over, else None
        countdown: Whole seconds left before throws are allowed, or None
        human_id: Id of the human-controlled player
        events: Domain events emitted during this tick
    """

    tick: int
    time_ms: float
    mode: MatchMode
    players: Tuple[PlayerView, ...]
    balls: Tuple[BallView, ...]
    particles: Tuple[ParticleView, ...]
    score: ScoreSnapshot
    is_over: bool
    outcome: Optional[MatchOutcome]
    countdown: Optional[int]
    human_id: Optional[str]
    events: Tuple["MatchEvent", ...] = ()

    @property
    def human(self) -> Optional[PlayerView]:
        for view in self.players:
            if view.player_id == self.human_id:
                return view
        return None

    def get_player(self, player_id: str) -> Optional[PlayerView]:
        for view in self.players:
            if view.player_id == player_id:
                return view
        return None


def countdown_seconds(now_ms: float, start_delay_ms: float) -> Optional[int]:
    """Whole seconds (rounded up) until the match starts, None once started."""
    if now_ms >= start_delay_ms:
        return None
    return int(math.ceil((start_delay_ms - now_ms) / 1000.0))


def _player_view(player: Player, now_ms: float, aura_holder: Optional[str]) -> PlayerView:
    death_progress = None
    if player.death_animation is not None:
        death_progress = min(1.0, player.death_animation / DEATH_ANIMATION_TICKS)
    hit_flash = player.hit_time_ms is not None and now_ms - player.hit_time_ms < HIT_FLASH_MS
    return PlayerView(
        player_id=player.player_id,
        team=player.team,
        x=player.position.x,
        y=player.position.y,
        vx=player.velocity.x,
        vy=player.velocity.y,
        radius=player.radius,
        rotation=player.rotation,
        scale=player.scale,
        is_alive=player.is_alive,
        has_ball=player.has_ball,
        is_human=player.is_human,
        ai_state=player.ai_state,
        kills=player.kills,
        has_aura=player.player_id == aura_holder,
        hit_flash=hit_flash,
        invulnerable=player.is_alive and player.is_invulnerable(now_ms),
        throw_animation=player.throw_animation,
        death_progress=death_progress,
        trail=tuple((p.x, p.y) for p in player.trail),
        nickname=player.nickname,
        avatar=player.avatar,
    )


def build_snapshot(
    engine: "MatchController",
    events: Tuple["MatchEvent", ...] = (),
) -> MatchSnapshot:
    """Copy the engine's current state into an immutable snapshot."""
    now = engine.clock.now_ms
    aura_holder = engine.aura_holder_id
    human = engine.human

    players = tuple(_player_view(p, now, aura_holder) for p in engine.players)
    balls = tuple(
        BallView(
            ball_id=b.ball_id,
            x=b.position.x,
            y=b.position.y,
            radius=b.radius,
            owner_id=b.owner_id,
            hot=b.just_thrown,
            trail=tuple((t.x, t.y, t.alpha) for t in b.trail),
        )
        for b in engine.balls
    )
    particles = tuple(
        ParticleView(p.x, p.y, p.life_fraction, p.color, p.size) for p in engine.particles
    )

    return MatchSnapshot(
        tick=engine.clock.tick,
        time_ms=now,
        mode=engine.config.mode,
        players=players,
        balls=balls,
        particles=particles,
        score=engine.score,
        is_over=engine.is_over,
        outcome=engine.outcome,
        countdown=countdown_seconds(now, engine.config.start_delay_ms),
        human_id=human.player_id if human is not None else None,
        events=events,
    )
