from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Branch:
    """An organizational/geographic unit owning farmers, customers and employees."""

    id: Optional[int]
    name: str
    address: Optional[str] = None
    contact: Optional[str] = None
