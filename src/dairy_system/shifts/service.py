from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..audit.service import AuditService
from ..common.datetime_utils import parse_optional_time
from ..common.validators import require_max_length, require_non_empty
from ..core.enums import AuditAction
from ..core.exceptions import NotFoundError, ValidationError
from .model import Shift
from .repository import ShiftRepository


class ShiftService:
    def __init__(self, shifts: ShiftRepository, audit: AuditService):
        self._shifts = shifts
        self._audit = audit

    def list_all(self):
        return self._shifts.list_all()

    def get(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def _build(self, shift_id: Optional[int], *, name, start_time, end_time) -> Shift:
        start = parse_optional_time(start_time, "start_time")
        end = parse_optional_time(end_time, "end_time")
        if start is not None and end is not None and start == end:
            raise ValidationError("Shift start and end must differ")
        return Shift(
            id=shift_id,
            name=require_max_length(require_non_empty(name, "Shift name"), "Shift name", 50),
            start_time=start,
            end_time=end,
        )

    def create(self, *, name: str, start_time: Any = None, end_time: Any = None, actor: str) -> Shift:
        shift = self._build(None, name=name, start_time=start_time, end_time=end_time)
        with self._audit.change():
            shift = replace(shift, id=self._shifts.add(shift))
            self._audit.record(entity="shift", entity_id=shift.id, action=AuditAction.CREATE, actor=actor, details=shift)
        return shift

    def update(self, shift_id: int, *, name: str, start_time: Any = None, end_time: Any = None, actor: str) -> Shift:
        self.get(shift_id)
        shift = self._build(shift_id, name=name, start_time=start_time, end_time=end_time)
        with self._audit.change():
            if not self._shifts.update(shift):
                raise NotFoundError(f"Shift {shift_id} not found")
            self._audit.record(entity="shift", entity_id=shift_id, action=AuditAction.UPDATE, actor=actor, details=shift)
        return shift

    def delete(self, shift_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._shifts.delete(shift_id):
                raise NotFoundError(f"Shift {shift_id} not found")
            self._audit.record(entity="shift", entity_id=shift_id, action=AuditAction.DELETE, actor=actor)
