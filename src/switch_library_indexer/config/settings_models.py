from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class UserSettings(BaseModel):
    log_level: str = Field(default="info")
    scan_folders: tuple[str, ...] = Field(default=())
    scan_recursive: bool = Field(default=True)
    resolve_workers: int = Field(default=1, ge=1)
    store_lock_timeout_seconds: float = Field(default=1.0, ge=0)
    keys_file: str | None = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = str(value or "").strip().lower()
        if normalized not in {"debug", "info", "warn", "warning", "error"}:
            raise ValueError("LOG_LEVEL must be one of: debug, info, warn, error")
        return "warning" if normalized == "warn" else normalized

    @field_validator("scan_folders")
    @classmethod
    def _validate_scan_folders(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        folders: list[str] = []
        for item in value:
            folder = str(item or "").strip()
            if not folder or folder in seen:
                continue
            seen.add(folder)
            folders.append(folder)
        return tuple(folders)
