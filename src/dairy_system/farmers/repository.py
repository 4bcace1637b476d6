from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Farmer


class FarmerRepository(Protocol):
    def list_all(self, *, branch_id: Optional[int] = None) -> Sequence[Farmer]:
        raise NotImplementedError

    def get_by_id(self, farmer_id: int) -> Optional[Farmer]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Farmer]:
        raise NotImplementedError

    def add(self, farmer: Farmer) -> int:
        raise NotImplementedError

    def update(self, farmer: Farmer) -> bool:
        raise NotImplementedError

    def delete(self, farmer_id: int) -> bool:
        raise NotImplementedError
