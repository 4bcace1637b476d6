from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Customer


class CustomerRepository(Protocol):
    def list_all(self, *, branch_id: Optional[int] = None) -> Sequence[Customer]:
        raise NotImplementedError

    def get_by_id(self, customer_id: int) -> Optional[Customer]:
        raise NotImplementedError

    def add(self, customer: Customer) -> int:
        raise NotImplementedError

    def update(self, customer: Customer) -> bool:
        raise NotImplementedError

    def delete(self, customer_id: int) -> bool:
        raise NotImplementedError
