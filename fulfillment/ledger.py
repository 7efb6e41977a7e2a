from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from fulfillment.errors import NothingToUndo


class ActionKind(Enum):
    ADD = "add"
    PROCESS = "process"
    DISPATCH = "dispatch"


@dataclass(frozen=True)
class AdmitRecord:
    """Inverse needs the order to drop and the stock to give back."""

    kind: ClassVar[ActionKind] = ActionKind.ADD

    order_id: int
    item_id: int
    quantity: int
    priority: int


@dataclass(frozen=True)
class ProcessRecord:
    kind: ClassVar[ActionKind] = ActionKind.PROCESS

    order_id: int


@dataclass(frozen=True)
class DispatchRecord:
    # Never written today: shipping is terminal.
    kind: ClassVar[ActionKind] = ActionKind.DISPATCH

    order_id: int


ActionRecord = Union[AdmitRecord, ProcessRecord, DispatchRecord]


class ActionLedger:
    """Last-in-first-out log of committed mutations."""

    def __init__(self) -> None:
        self._records: list[ActionRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def record(self, action: ActionRecord) -> None:
        if not isinstance(action, (AdmitRecord, ProcessRecord, DispatchRecord)):
            raise TypeError(f"not an action record: {action!r}")
        self._records.append(action)

    def has_pending(self) -> bool:
        return bool(self._records)

    def pop_last(self) -> ActionRecord:
        if not self._records:
            raise NothingToUndo()
        return self._records.pop()
