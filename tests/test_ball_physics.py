"""Tests for ball flight, wall bounces, ball-ball collisions and settling."""

import pytest

from dodgeball.entities.ball import Ball, TrailPoint
from dodgeball.events import BallBouncedEvent, BallsCollidedEvent
from dodgeball.math_utils import Vector2
from dodgeball.systems.ball_physics import (
    bounce_off_walls,
    keep_inside,
    resolve_ball_collision,
    settle,
    update_trail,
)


def make_ball(x, y, vx=0.0, vy=0.0, ball_id="b", hot=False) -> Ball:
    ball = Ball(ball_id=ball_id, position=Vector2(x, y), velocity=Vector2(vx, vy))
    if hot:
        ball.just_thrown = True
        ball.thrown_by = "purple-0"
    return ball


class TestWallBounce:
    def test_left_wall_reflects_and_clamps(self):
        ball = make_ball(3, 100, vx=-10, hot=True)
        assert bounce_off_walls(ball, 1280, 720, 0.7)
        assert ball.position.x == pytest.approx(ball.radius)
        assert ball.velocity.x == pytest.approx(7.0)

    def test_wall_hit_neutralizes(self):
        ball = make_ball(1279, 100, vx=10, hot=True)
        bounce_off_walls(ball, 1280, 720, 0.7)
        assert not ball.just_thrown
        assert ball.thrown_by is None

    def test_corner_reflects_both_axes(self):
        ball = make_ball(1, 719, vx=-4, vy=6)
        assert bounce_off_walls(ball, 1280, 720, 0.5)
        assert ball.velocity == Vector2(2, -3)

    def test_no_contact(self):
        ball = make_ball(640, 360, vx=5, hot=True)
        assert not bounce_off_walls(ball, 1280, 720, 0.7)
        assert ball.just_thrown

    def test_keep_inside_clamps_without_bouncing(self):
        ball = make_ball(2, 730, vx=-3, vy=1, hot=True)
        assert keep_inside(ball, 1280, 720)
        assert ball.position == Vector2(ball.radius, 720 - ball.radius)
        assert ball.velocity == Vector2(-3, 1)
        assert ball.just_thrown

    def test_keep_inside_leaves_interior_ball_alone(self):
        ball = make_ball(640, 360)
        assert not keep_inside(ball, 1280, 720)
        assert ball.position == Vector2(640, 360)


class TestBallCollision:
    def test_head_on_collision_exchanges_momentum(self):
        a = make_ball(100, 100, vx=5)
        b = make_ball(110, 100, vx=-5)

        closing = resolve_ball_collision(a, b, restitution=0.8)

        assert closing == pytest.approx(10.0)
        # Pushed apart by half the overlap each
        assert a.position.x == pytest.approx(97.0)
        assert b.position.x == pytest.approx(113.0)
        # j = (1 + e) * closing / 2 = 9
        assert a.velocity.x == pytest.approx(-4.0)
        assert b.velocity.x == pytest.approx(4.0)

    def test_momentum_is_conserved(self):
        a = make_ball(100, 100, vx=6, vy=1)
        b = make_ball(110, 104, vx=-2, vy=0)
        before = a.velocity + b.velocity
        resolve_ball_collision(a, b, restitution=0.8)
        assert a.velocity + b.velocity == before

    def test_separating_balls_only_untangle(self):
        a = make_ball(100, 100, vx=-3)
        b = make_ball(110, 100, vx=3)
        assert resolve_ball_collision(a, b, restitution=0.8) == 0.0
        assert a.velocity.x == -3
        assert b.position.x - a.position.x == pytest.approx(a.radius + b.radius)

    def test_not_touching(self):
        a = make_ball(100, 100, vx=5)
        b = make_ball(200, 100, vx=-5)
        assert resolve_ball_collision(a, b, restitution=0.8) is None
        assert a.position.x == 100

    def test_coincident_centres_use_fixed_normal(self):
        a = make_ball(100, 100)
        b = make_ball(100, 100)
        resolve_ball_collision(a, b, restitution=0.8)
        assert a.position.x < b.position.x
        assert a.position.y == b.position.y


class TestSettleAndTrail:
    def test_slow_ball_settles_and_cools(self):
        ball = make_ball(100, 100, vx=0.3, hot=True)
        assert settle(ball, stop_speed=0.5)
        assert ball.velocity == Vector2(0, 0)
        assert not ball.just_thrown

    def test_fast_ball_keeps_moving(self):
        ball = make_ball(100, 100, vx=3, hot=True)
        assert not settle(ball, stop_speed=0.5)
        assert ball.just_thrown

    def test_trail_grows_while_hot_and_fades(self):
        ball = make_ball(100, 100, hot=True)
        update_trail(ball)
        update_trail(ball)
        assert len(ball.trail) == 2
        assert ball.trail[0].alpha == pytest.approx(0.9)

    def test_trail_shrinks_when_cold(self):
        ball = make_ball(100, 100)
        ball.trail.extend([TrailPoint(0, 0), TrailPoint(1, 1)])
        update_trail(ball)
        assert len(ball.trail) == 1

    def test_trail_is_bounded(self):
        ball = make_ball(100, 100, hot=True)
        for _ in range(100):
            update_trail(ball)
        assert len(ball.trail) == ball.trail.maxlen


class TestBallPhysicsSystem:
    def test_owned_ball_follows_owner(self, duel, place):
        human = place(duel, "purple-0", 200.0, 250.0)
        duel.ball_physics_system.update(1)
        ball = next(b for b in duel.balls if b.owner_id == human.player_id)
        assert ball.position == human.position
        assert ball.velocity == Vector2(0, 0)

    def test_ball_of_dead_owner_is_released(self, duel):
        bot = duel.get_player("blue-0")
        bot.is_alive = False
        result = duel.ball_physics_system.update(1)
        ball = next(b for b in duel.balls if b.ball_id == "ball-blue-0")
        assert ball.owner_id is None
        assert not bot.has_ball
        assert result.details["released"] == 1

    def test_wall_bounce_emits_event(self, duel):
        events = []
        duel.event_bus.subscribe(BallBouncedEvent, events.append)
        ball = next(b for b in duel.balls if b.ball_id == "ball-purple-0")
        ball.release()
        duel.get_player("purple-0").has_ball = False
        ball.position = Vector2(12.0, 360.0)
        ball.velocity = Vector2(-10.0, 0.0)

        duel.ball_physics_system.update(1)

        assert len(events) == 1
        assert events[0].ball_id == "ball-purple-0"
        assert ball.velocity.x > 0

    def test_hard_collision_emits_event(self, duel):
        events = []
        duel.event_bus.subscribe(BallsCollidedEvent, events.append)
        for ball in duel.balls:
            owner = duel.get_player(ball.owner_id)
            owner.has_ball = False
            ball.release()
        a, b = duel.balls
        a.position, a.velocity = Vector2(600.0, 100.0), Vector2(6.0, 0.0)
        b.position, b.velocity = Vector2(620.0, 100.0), Vector2(-6.0, 0.0)

        result = duel.ball_physics_system.update(1)

        assert result.details["collisions"] == 1
        assert len(events) == 1
        assert events[0].ball_ids == (a.ball_id, b.ball_id)
        assert a.velocity.x < 0 < b.velocity.x

    def test_separation_never_leaves_a_ball_outside_the_wall(self, duel):
        bounced = []
        duel.event_bus.subscribe(BallBouncedEvent, bounced.append)
        for ball in duel.balls:
            duel.get_player(ball.owner_id).has_ball = False
            ball.release()
        a, b = duel.balls
        a.position, a.velocity = Vector2(8.0, 300.0), Vector2(0.0, 0.0)
        a.just_thrown, a.thrown_by = True, "purple-0"
        b.position, b.velocity = Vector2(20.0, 300.0), Vector2(-3.0, 0.0)

        duel.ball_physics_system.update(1)

        assert a.position.x == pytest.approx(a.radius)
        assert b.position.x >= b.radius
        assert a.just_thrown
        assert bounced == []
