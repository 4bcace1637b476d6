from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Branch


class BranchRepository(Protocol):
    def list_all(self) -> Sequence[Branch]:
        raise NotImplementedError

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        raise NotImplementedError

    def add(self, branch: Branch) -> int:
        raise NotImplementedError

    def update(self, branch: Branch) -> bool:
        raise NotImplementedError

    def delete(self, branch_id: int) -> bool:
        raise NotImplementedError
