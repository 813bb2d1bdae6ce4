"""
Keeps a game session in step with the hourly target word.

HourlyGame rotates the target lazily whenever it notices a new bucket.
HourlyResetWorker is a background thread that wakes at each hour boundary
so connected clients can be told about the new word right away.
"""
import threading
from datetime import datetime
from typing import Callable, FrozenSet, Optional, Sequence

from game_session import GameSession, Outcome
from word_selector import current_bucket, pick_target, select, seconds_until_next_bucket, utc_now

Clock = Callable[[], datetime]


class HourlyGame:
    """A GameSession whose target follows the current time bucket."""

    def __init__(self, words: Sequence[str], word_set: FrozenSet[str], clock: Clock = utc_now):
        self.words = words
        self.clock = clock
        self._lock = threading.Lock()
        now = clock()
        self.bucket = current_bucket(now)
        self.session = GameSession(pick_target(words, now), word_set)

    def refresh(self) -> bool:
        """Reset the board if the hour changed. Returns True on reset."""
        with self._lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> bool:
        bucket = current_bucket(self.clock())
        if bucket == self.bucket:
            return False
        self.bucket = bucket
        self.session.reset(select(bucket, self.words))
        return True

    def submit_guess(self, raw: Optional[str]) -> Outcome:
        with self._lock:
            self._refresh_locked()
            return self.session.submit_guess(raw)

    def seconds_until_next_word(self) -> float:
        return seconds_until_next_bucket(self.clock())


class HourlyResetWorker:
    """
    Calls `on_new_bucket(bucket)` at the start of every hour.

    Runs as a daemon thread; stop() cancels the pending wait.
    """

    def __init__(self, on_new_bucket: Callable[[int], None], clock: Clock = utc_now):
        self.on_new_bucket = on_new_bucket
        self.clock = clock
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="wordle-hourly-reset", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        print("Hourly reset worker started")
        last_bucket = current_bucket(self.clock())

        while True:
            delay = max(0.001, seconds_until_next_bucket(self.clock()))
            if self._stop.wait(delay):
                break

            bucket = current_bucket(self.clock())
            if bucket == last_bucket:
                continue
            last_bucket = bucket

            try:
                self.on_new_bucket(bucket)
            except Exception as e:
                print(f"Error in hourly reset: {e}")

        print("Hourly reset worker stopped")
