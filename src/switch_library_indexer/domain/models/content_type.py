from __future__ import annotations

from enum import StrEnum


class ContentType(StrEnum):
    BASE = "base"
    UPDATE = "update"
    DLC = "dlc"

    @classmethod
    def from_title_id(cls, title_id: str) -> "ContentType":
        value = str(title_id or "").strip().lower()
        if value.endswith("800"):
            return cls.UPDATE
        if value.endswith("000"):
            return cls.BASE
        return cls.DLC
