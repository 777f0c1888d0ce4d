from datetime import datetime
from typing import Optional
import random

SEQUENCE_PLACEHOLDER = 1


def generate_unique_code(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """
    Build a transaction code like TRX048213-2024-05-17-14-03-59-000000000001.

    Uniqueness is probabilistic; the store's unique constraint catches collisions.
    """
    now = now or datetime.now()
    rng = rng or random
    return "TRX{:06d}-{:04d}-{:02d}-{:02d}-{:02d}-{:02d}-{:02d}-{:012d}".format(
        rng.randint(0, 999999),
        now.year,
        now.month,
        now.day,
        now.hour,
        now.minute,
        now.second,
        SEQUENCE_PLACEHOLDER,
    )
