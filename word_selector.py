"""
Hourly target word selection.

Every process with the same word list agrees on the target for a given
hour: the hour's start (epoch seconds, UTC) seeds a Random instance and
its first draw picks the index.
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

import config


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def bucket_start(now: Optional[datetime] = None) -> datetime:
    """Start of the hour containing `now`, in UTC."""
    if now is None:
        now = utc_now()
    return now.astimezone(timezone.utc).replace(minute=0, second=0, microsecond=0)


def current_bucket(now: Optional[datetime] = None) -> int:
    """Epoch seconds of the start of the current UTC hour."""
    return int(bucket_start(now).timestamp())


def next_bucket_start(now: Optional[datetime] = None) -> datetime:
    return bucket_start(now) + timedelta(seconds=config.BUCKET_SECONDS)


def seconds_until_next_bucket(now: Optional[datetime] = None) -> float:
    if now is None:
        now = utc_now()
    return (next_bucket_start(now) - now).total_seconds()


def select(bucket: int, words: Sequence[str]) -> str:
    """Pick the target word for `bucket`. Same inputs, same word."""
    if not words:
        raise ValueError("cannot select a word from an empty list")
    index = random.Random(bucket).randrange(len(words))
    return words[index]


def pick_target(words: Sequence[str], now: Optional[datetime] = None) -> str:
    return select(current_bucket(now), words)
