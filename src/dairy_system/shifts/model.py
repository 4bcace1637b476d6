from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """A named time window (morning/evening) that collections and sales are booked under."""

    id: Optional[int]
    name: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
