from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Farmer:
    """A milk supplier. ``code`` is the unique member number printed on slips."""

    id: Optional[int]
    name: str
    code: str
    contact: str
    bank_id: Optional[int] = None
    branch_id: Optional[int] = None
