"""Common types and helpers shared across models."""

import time
from typing import TypeAlias

EpochMillis: TypeAlias = int


def now_epoch_ms() -> EpochMillis:
    return int(time.time() * 1000)
