from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressProtocol(Protocol):
    def update(self, current: int, total: int, message: str) -> None:
        ...
