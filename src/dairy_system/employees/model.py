from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    id: Optional[int]
    name: str
    contact: str
    branch_id: Optional[int]
    role: Role
