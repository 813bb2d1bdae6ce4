import threading
from datetime import datetime, timezone

from game_session import GameState, OutcomeKind
from hourly_game import HourlyGame, HourlyResetWorker
from word_selector import current_bucket, pick_target, select

UTC = timezone.utc
WORDS = ("adieu", "crane", "eerie", "erase", "geese", "speed", "zebra")
WORD_SET = frozenset(WORDS)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class SequenceClock:
    """Returns the given times in order, then keeps returning the last one."""

    def __init__(self, *times):
        self._times = list(times)
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            if len(self._times) > 1:
                return self._times.pop(0)
            return self._times[0]


def test_target_follows_bucket():
    clock = FakeClock(datetime(2024, 5, 1, 10, 30, tzinfo=UTC))
    game = HourlyGame(WORDS, WORD_SET, clock=clock)
    assert game.bucket == current_bucket(clock.now)
    assert game.session.target == select(game.bucket, WORDS)
    assert game.session.target == pick_target(WORDS, clock.now)


def test_refresh_within_the_hour_keeps_board():
    clock = FakeClock(datetime(2024, 5, 1, 10, 30, tzinfo=UTC))
    game = HourlyGame(WORDS, WORD_SET, clock=clock)
    game.session.reset("zebra")
    game.submit_guess("adieu")

    clock.now = datetime(2024, 5, 1, 10, 59, 59, tzinfo=UTC)
    assert game.refresh() is False
    assert game.session.cursor == 1


def test_refresh_on_new_hour_resets_board():
    clock = FakeClock(datetime(2024, 5, 1, 10, 30, tzinfo=UTC))
    game = HourlyGame(WORDS, WORD_SET, clock=clock)
    game.session.reset("crane")
    assert game.submit_guess("crane").kind == OutcomeKind.WON

    clock.now = datetime(2024, 5, 1, 11, 0, 1, tzinfo=UTC)
    assert game.refresh() is True
    assert game.bucket == current_bucket(clock.now)
    assert game.session.state == GameState.IN_PROGRESS
    assert game.session.cursor == 0
    assert game.session.target == select(game.bucket, WORDS)


def test_submit_guess_rotates_before_evaluating():
    clock = FakeClock(datetime(2024, 5, 1, 10, 30, tzinfo=UTC))
    game = HourlyGame(WORDS, WORD_SET, clock=clock)
    game.session.reset("crane")
    game.submit_guess("crane")

    clock.now = datetime(2024, 5, 1, 11, 5, tzinfo=UTC)
    outcome = game.submit_guess("adieu")
    assert outcome.kind != OutcomeKind.LOCKED
    assert game.session.cursor == 1


def test_seconds_until_next_word():
    clock = FakeClock(datetime(2024, 5, 1, 10, 59, 0, tzinfo=UTC))
    game = HourlyGame(WORDS, WORD_SET, clock=clock)
    assert game.seconds_until_next_word() == 60


def test_worker_fires_at_the_boundary():
    clock = SequenceClock(
        datetime(2024, 5, 1, 10, 59, 59, 990000, tzinfo=UTC),
        datetime(2024, 5, 1, 10, 59, 59, 990000, tzinfo=UTC),
        datetime(2024, 5, 1, 11, 0, 0, 10000, tzinfo=UTC),
    )
    fired = []
    done = threading.Event()

    def on_new_bucket(bucket):
        fired.append(bucket)
        done.set()

    worker = HourlyResetWorker(on_new_bucket, clock=clock)
    worker.start()
    try:
        assert done.wait(5)
        assert worker.running
    finally:
        worker.stop(timeout=5)

    assert fired == [current_bucket(datetime(2024, 5, 1, 11, tzinfo=UTC))]
    assert not worker.running


def test_worker_survives_callback_errors():
    clock = SequenceClock(
        datetime(2024, 5, 1, 10, 59, 59, 990000, tzinfo=UTC),
        datetime(2024, 5, 1, 10, 59, 59, 990000, tzinfo=UTC),
        datetime(2024, 5, 1, 11, 0, 0, 10000, tzinfo=UTC),
    )
    called = threading.Event()

    def on_new_bucket(bucket):
        called.set()
        raise RuntimeError("boom")

    worker = HourlyResetWorker(on_new_bucket, clock=clock)
    worker.start()
    try:
        assert called.wait(5)
        # give the loop a moment to get past the exception
        called.clear()
        assert not called.wait(0.05)
        assert worker.running
    finally:
        worker.stop(timeout=5)
    assert not worker.running


def test_stop_cancels_pending_wait():
    clock = FakeClock(datetime(2024, 5, 1, 10, 0, 1, tzinfo=UTC))
    worker = HourlyResetWorker(lambda bucket: None, clock=clock)
    worker.start()
    worker.stop(timeout=5)
    assert not worker.running
