import logging
import random

import pytest

from gyro_bounce.data_models import Phase
from gyro_bounce.difficulty import EASY, HARD
from gyro_bounce.errors import ConfigurationError
from gyro_bounce.session import FrameClock, GameSession

DT = 1 / 60
KEY_EASY = "gyro_bounce_highscore_v1_easy"


def drop_ball(session):
    """Puts the ball just above the bottom edge, falling."""
    ball = session.world.ball
    ball.pos.update(session.config.screen_width / 2, session.config.screen_height + ball.radius - 1)
    ball.vel.update(0, 400)


def test_new_session_starts_running(config):
    session = GameSession("easy", rng=random.Random(1))
    world = session.world

    assert session.phase is Phase.RUNNING
    assert session.score == 0
    assert len(world.obstacles) == EASY.obstacle_count
    assert world.platform.width == pytest.approx(EASY.platform_width(config.screen_width))
    assert world.platform.x == pytest.approx((config.screen_width - world.platform.width) / 2)
    assert world.ball.pos.x == config.screen_width / 2
    assert world.ball.pos.y == config.platform_y - config.ball_drop_height
    assert world.ball.vel.length() == 0


def test_unknown_difficulty_is_rejected():
    with pytest.raises(ConfigurationError):
        GameSession("nightmare")


def test_change_difficulty_resets_with_new_profile():
    session = GameSession("easy", rng=random.Random(1))
    session.state.score = 7

    session.change_difficulty("hard")

    assert session.profile is HARD
    assert session.score == 0
    assert len(session.world.obstacles) == HARD.obstacle_count


def test_bad_difficulty_change_keeps_session():
    session = GameSession("hard", rng=random.Random(1))
    session.state.score = 3
    world = session.world

    with pytest.raises(ConfigurationError):
        session.change_difficulty("medium")

    assert session.profile is HARD
    assert session.world is world
    assert session.score == 3


def test_game_over_happens_once_and_freezes(memory_store):
    store = memory_store()
    session = GameSession("easy", store=store, rng=random.Random(1))
    session.state.score = 5
    drop_ball(session)

    events = session.tick(DT)
    assert events.game_over
    assert session.phase is Phase.GAME_OVER

    snapshot = session.snapshot()
    for _ in range(10):
        assert session.tick(DT) is None
    assert session.snapshot() == snapshot
    assert store.writes == [(KEY_EASY, 5)]


@pytest.mark.parametrize("stored, final, expected", [
    (12, 9, 12),
    (12, 15, 15),
    (12, 12, 12),
    (None, 4, 4),
])
def test_high_score_only_grows(memory_store, stored, final, expected):
    store = memory_store({KEY_EASY: stored} if stored is not None else {})
    session = GameSession("easy", store=store, rng=random.Random(1))
    session.state.score = final
    drop_ball(session)

    session.tick(DT)

    assert store.values[KEY_EASY] == expected
    assert session.new_record == (expected == final and final != stored)
    assert session.snapshot()["new_record"] == session.new_record


def test_zero_score_writes_nothing(memory_store):
    store = memory_store()
    session = GameSession("easy", store=store, rng=random.Random(1))
    drop_ball(session)
    session.tick(DT)
    assert store.writes == []


def test_storage_failure_does_not_stop_the_game(broken_store, caplog):
    session = GameSession("easy", store=broken_store(), rng=random.Random(1))
    session.state.score = 9
    drop_ball(session)

    with caplog.at_level(logging.WARNING, logger="gyro_bounce.session"):
        events = session.tick(DT)

    assert events.game_over
    assert session.phase is Phase.GAME_OVER
    assert not session.new_record
    assert "Failed to" in caplog.text

    session.reset_game()
    assert session.phase is Phase.RUNNING


def test_unreadable_best_counts_as_none(broken_store):
    store = broken_store(fail_get=True, fail_set=False)
    session = GameSession("easy", store=store, rng=random.Random(1))
    session.state.score = 3
    drop_ball(session)

    session.tick(DT)

    assert store.values == {KEY_EASY: 3}
    assert session.new_record


def test_best_score_lookup(memory_store, broken_store):
    store = memory_store({"gyro_bounce_highscore_v1_hard": 21})
    session = GameSession("easy", store=store)

    assert session.best_score() == 0
    assert session.best_score("HARD") == 21
    assert GameSession("easy").best_score() == 0
    assert GameSession("easy", store=broken_store()).best_score() == 0


def test_high_score_key_uses_base_key():
    session = GameSession("hard", base_key="scores")
    assert session.high_score_key() == "scores_hard"
    assert session.high_score_key("easy") == "scores_easy"


def test_reset_after_game_over(memory_store):
    session = GameSession("hard", store=memory_store(), rng=random.Random(2))
    session.state.score = 2
    drop_ball(session)
    session.tick(DT)

    session.reset_game()

    assert session.phase is Phase.RUNNING
    assert session.score == 0
    assert not session.new_record
    assert session.tick(DT) is not None


def test_untouched_ball_scores_on_the_platform():
    session = GameSession("easy", rng=random.Random(5))
    session.world.obstacles = []
    for _ in range(120):
        session.tick(DT)
    assert session.score >= 1
    assert session.phase is Phase.RUNNING


def test_tilt_register_moves_platform():
    session = GameSession("easy", rng=random.Random(5))
    session.world.obstacles = []
    start = session.world.platform.x

    session.set_tilt(-0.5)
    session.tick(DT)

    assert session.world.platform.x == pytest.approx(start - 0.5 * session.config.sensitivity * DT)


def test_same_seed_same_trajectory():
    dts = [DT, 0.02, 0.05, 0.0, DT, 0.01] * 60
    tilts = [0.0, 0.3, -0.6, 0.2, 0.0] * 72

    def run():
        session = GameSession("hard", rng=random.Random(99))
        frames = [session.snapshot()]
        for dt, tilt in zip(dts, tilts):
            session.set_tilt(tilt)
            session.tick(dt)
            frames.append(session.snapshot())
        return frames

    assert run() == run()


def test_snapshot_shape():
    session = GameSession("hard", rng=random.Random(3))
    snap = session.snapshot()
    assert set(snap) == {"ball", "platform", "obstacles", "score", "phase", "difficulty", "new_record"}
    assert snap["phase"] == "running"
    assert snap["difficulty"] == "hard"
    assert len(snap["obstacles"]) == HARD.obstacle_count


class FakeSource:
    def __init__(self):
        self.callback = None
        self.unsubscribed = 0

    def subscribe(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        return self

    def unsubscribe(self):
        self.unsubscribed += 1


def test_attached_tilt_feeds_the_register():
    source = FakeSource()
    with GameSession("easy") as session:
        session.attach_tilt(source)
        assert source.interval_ms == 10
        source.callback(0.25)
        assert session.tilt.read() == 0.25
    assert source.unsubscribed == 1


def test_close_without_tilt_is_harmless():
    session = GameSession("easy")
    session.close()
    session.close()


def test_frame_clock():
    clock = FrameClock(max_dt=0.033)
    assert clock.advance(10.0) == 0.0
    assert clock.advance(10.016) == pytest.approx(0.016)
    assert clock.advance(12.0) == 0.033
    assert clock.advance(11.0) == 0.0
    clock.reset()
    assert clock.advance(50.0) == 0.0
