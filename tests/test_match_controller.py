"""Integration tests for MatchController: lifecycle, phases, win conditions."""

import dataclasses

import pytest

from dodgeball.config.match_config import MatchConfig, MatchMode
from dodgeball.entities.team import Team
from dodgeball.events import BallThrownEvent, PlayerHitEvent
from dodgeball.exceptions import ConfigurationError, SimulationError
from dodgeball.math_utils import Vector2
from dodgeball.simulation.engine import MatchController
from dodgeball.simulation.roster import human_index
from dodgeball.simulation.snapshot import MatchOutcome, countdown_seconds
from dodgeball.update_phases import UpdatePhase


class TestLifecycle:
    def test_step_before_reset_raises(self):
        controller = MatchController()
        with pytest.raises(SimulationError):
            controller.step()
        with pytest.raises(SimulationError):
            controller.advance(16.0)
        assert controller.snapshot is None

    def test_invalid_config_is_rejected_before_any_change(self, match_controller):
        match_controller.step()
        players_before = list(match_controller.players)
        with pytest.raises(ConfigurationError):
            match_controller.reset(MatchConfig(team_size=0))
        assert match_controller.tick == 1
        assert match_controller.players == players_before
        assert match_controller.config.team_size == 3

    def test_reset_returns_initial_snapshot(self):
        controller = MatchController()
        snapshot = controller.reset(MatchConfig(team_size=2, seed=5))
        assert snapshot.tick == 0
        assert snapshot.countdown == 2
        assert not snapshot.is_over
        assert snapshot.outcome is None
        assert snapshot.score.purple == snapshot.score.blue == 2

    def test_reset_starts_fresh(self, match_controller):
        for _ in range(50):
            match_controller.step()
        match_controller.reset()
        assert match_controller.tick == 0
        assert all(p.is_alive and p.has_ball for p in match_controller.players)
        assert len(match_controller.particles) == 0

    def test_phases_run_in_order(self, match_controller):
        seen = []
        for name in ("Respawn", "PlayerMotion", "BallPhysics", "Combat", "AIDecision", "Particles"):
            system = match_controller.get_system(name)
            original = system.update

            def spy(tick, _system=system, _original=original):
                seen.append(match_controller.get_current_phase())
                return _original(tick)

            system.update = spy

        match_controller.step()

        assert seen == [
            UpdatePhase.LIFECYCLE,
            UpdatePhase.PLAYER_MOTION,
            UpdatePhase.BALL_PHYSICS,
            UpdatePhase.COMBAT,
            UpdatePhase.AI_DECISION,
            UpdatePhase.PARTICLES,
        ]
        assert match_controller.get_current_phase() is None
        assert "Intents" in match_controller.get_last_results()


class TestRoster:
    @pytest.mark.parametrize("team_size", [1, 2, 5, 8])
    def test_roster_shape(self, team_size):
        controller = MatchController()
        controller.reset(MatchConfig(team_size=team_size, seed=1))
        players = controller.players
        assert len(players) == 2 * team_size
        assert len(controller.balls) == 2 * team_size
        assert len({p.player_id for p in players}) == 2 * team_size

        humans = [p for p in players if p.is_human]
        assert len(humans) == 1
        assert humans[0].index == human_index(team_size)

        for ball in controller.balls:
            owner = controller.get_player(ball.owner_id)
            assert owner is not None and owner.has_ball
            assert ball.position == owner.position

    def test_configured_human_team(self):
        controller = MatchController()
        controller.reset(MatchConfig(team_size=3, human_team=Team.BLUE, human_nickname="Ace"))
        assert controller.human.team is Team.BLUE
        assert controller.human.nickname == "Ace"
        assert controller.snapshot.human.nickname == "Ace"

    def test_players_start_on_their_half(self):
        controller = MatchController()
        controller.reset(MatchConfig(team_size=8, seed=2))
        center = controller.arena.center_x
        for player in controller.players:
            if player.team is Team.PURPLE:
                assert player.position.x < center
            else:
                assert player.position.x > center


class TestCountdown:
    def test_countdown_seconds(self):
        assert countdown_seconds(0.0, 2000.0) == 2
        assert countdown_seconds(1001.0, 2000.0) == 1
        assert countdown_seconds(2000.0, 2000.0) is None

    def test_throws_during_countdown_are_dropped(self):
        controller = MatchController()
        controller.reset(MatchConfig(team_size=1, human_team=Team.PURPLE, seed=4))
        controller.set_system_enabled("AIDecision", False)
        thrown = []
        controller.event_bus.subscribe(BallThrownEvent, thrown.append)

        controller.request_human_throw(Vector2(900, 360))
        controller.step()

        assert controller.human.has_ball
        assert thrown == []
        assert not controller.human_input.has_throw_request

    def test_everyone_is_invulnerable_until_start(self):
        controller = MatchController()
        snapshot = controller.reset(MatchConfig(team_size=2, seed=4))
        assert all(view.invulnerable for view in snapshot.players)


class TestHumanControl:
    def test_steering_target_moves_human(self, duel):
        human = duel.get_player("purple-0")
        duel.set_human_steering(target=Vector2(100, 360))
        for _ in range(20):
            duel.step()
        assert human.position.x < 300

    def test_steering_direction_moves_human(self, duel):
        human = duel.get_player("purple-0")
        duel.set_human_steering(direction=Vector2(0, -3))
        for _ in range(20):
            duel.step()
        assert human.position.y < 360

    def test_both_steering_forms_is_an_error(self, duel):
        with pytest.raises(SimulationError):
            duel.set_human_steering(target=Vector2(1, 1), direction=Vector2(1, 0))

    def test_clear_steering_lets_friction_stop_the_human(self, duel):
        human = duel.get_player("purple-0")
        duel.set_human_steering(target=Vector2(100, 360))
        for _ in range(10):
            duel.step()
        duel.clear_human_steering()
        for _ in range(200):
            duel.step()
        assert human.velocity.length() < 0.01

    def test_human_cannot_cross_center_line(self, duel):
        human = duel.get_player("purple-0")
        duel.set_human_steering(target=Vector2(1200, 360))
        for _ in range(300):
            duel.step()
            assert human.position.x <= duel.arena.center_x - human.radius


class TestDuel:
    def test_human_hit_wins_fixed_round(self, duel, step_until):
        human = duel.get_player("purple-0")
        bot = duel.get_player("blue-0")
        hits = []
        duel.event_bus.subscribe(PlayerHitEvent, hits.append)

        duel.request_human_throw(Vector2(910, 365))  # snaps onto the bot
        snapshot = duel.step()
        assert not human.has_ball
        assert any(isinstance(e, BallThrownEvent) for e in snapshot.events)

        step_until(duel, lambda: duel.is_over, max_ticks=120)

        assert not bot.is_alive
        assert human.kills == 1
        assert duel.outcome is MatchOutcome.WIN
        assert duel.snapshot.is_over
        assert duel.snapshot.score.blue == 0
        assert len(hits) == 1

    def test_step_after_match_over_is_a_no_op(self, duel):
        duel.get_player("blue-0").is_alive = False
        final = duel.step()
        assert final.is_over
        assert duel.step() is final
        assert duel.tick == final.tick

    def test_human_death_loses_fixed_round(self, duel):
        duel.human.is_alive = False
        snapshot = duel.step()
        assert snapshot.is_over
        assert snapshot.outcome is MatchOutcome.LOSE

    def test_infinite_mode_only_ends_on_human_death(self, duel_config):
        controller = MatchController(duel_config.with_overrides(mode=MatchMode.INFINITE))
        controller.reset()
        bot = controller.get_player("blue-0")
        bot.is_alive = False
        bot.respawn_at_ms = 10_000.0
        controller.step()
        assert not controller.is_over

        controller.human.is_alive = False
        controller.step()
        assert controller.is_over
        assert controller.outcome is MatchOutcome.LOSE

    @pytest.mark.parametrize("mode", [MatchMode.FIXED_ROUND, MatchMode.INFINITE])
    def test_human_death_loses_while_teammates_live(self, mode):
        controller = MatchController(
            MatchConfig(
                team_size=3, human_team=Team.PURPLE, seed=11, start_delay_ms=0, mode=mode
            )
        )
        controller.reset()
        controller.set_system_enabled("AIDecision", False)

        controller.human.is_alive = False
        snapshot = controller.step()

        assert snapshot.is_over
        assert snapshot.score.purple == 2
        assert snapshot.outcome is MatchOutcome.LOSE

    def test_surviving_human_wins_when_enemies_are_out(self):
        controller = MatchController(
            MatchConfig(team_size=3, human_team=Team.PURPLE, seed=11, start_delay_ms=0)
        )
        controller.reset()
        controller.set_system_enabled("AIDecision", False)
        for player in controller.players:
            if player.team is Team.BLUE:
                player.is_alive = False

        snapshot = controller.step()

        assert snapshot.is_over
        assert snapshot.outcome is MatchOutcome.WIN


class TestInvariants:
    def test_ball_ownership_stays_consistent(self, match_controller):
        for _ in range(900):
            match_controller.step()
            balls_by_owner = {}
            for ball in match_controller.balls:
                if ball.owner_id is not None:
                    owner = match_controller.get_player(ball.owner_id)
                    assert owner.is_alive
                    assert owner.has_ball
                    assert ball.position == owner.position
                    assert not ball.just_thrown
                    balls_by_owner.setdefault(ball.owner_id, []).append(ball)
                if ball.just_thrown:
                    assert ball.thrown_by is not None
                else:
                    assert ball.thrown_by is None
            for player in match_controller.players:
                held = balls_by_owner.get(player.player_id, [])
                assert len(held) == (1 if player.has_ball else 0)
            if match_controller.is_over:
                break

    def test_same_seed_same_match(self):
        config = MatchConfig(team_size=3, seed=99, start_delay_ms=0)
        first = MatchController(config)
        second = MatchController(config)
        first.reset()
        second.reset()
        for _ in range(400):
            a = first.step()
            b = second.step()
        assert a == b

    def test_bots_eventually_throw(self, match_controller):
        thrown = []
        match_controller.event_bus.subscribe(BallThrownEvent, thrown.append)
        for _ in range(300):
            match_controller.step()
        assert thrown
        assert all(e.thrower_id != match_controller.human.player_id for e in thrown)


class TestAdvanceAndSnapshot:
    def test_advance_runs_whole_ticks(self, duel):
        step = duel.config.tick_ms
        assert duel.advance(step * 2.5) == 2
        assert duel.advance(step * 0.5) == 1
        assert duel.tick == 3

    def test_snapshot_is_immutable(self, duel):
        snapshot = duel.step()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.tick = 10  # type: ignore[misc]
        assert snapshot.get_player("blue-0") is not None
        assert snapshot.human.is_human

    def test_run_headless_returns_final_snapshot(self):
        controller = MatchController(MatchConfig(team_size=2, seed=3))
        snapshot = controller.run_headless(max_ticks=30, stats_interval=10)
        assert snapshot.tick == 30
        stats = controller.get_stats()
        assert stats["tick"] == 30
        assert stats["purple_alive"] + stats["blue_alive"] <= 4

    def test_debug_info_lists_every_system(self, match_controller):
        info = match_controller.get_systems_debug_info()
        assert set(info) == {
            "Respawn",
            "PlayerMotion",
            "BallPhysics",
            "Combat",
            "AIDecision",
            "Particles",
        }
        assert match_controller.get_phase_description() == "Not in update loop"
        assert match_controller.set_system_enabled("Nope", False) is False
