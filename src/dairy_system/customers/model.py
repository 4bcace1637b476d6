from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Customer:
    id: Optional[int]
    name: str
    contact: str
    branch_id: Optional[int] = None
