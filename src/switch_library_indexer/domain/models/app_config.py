from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from switch_library_indexer.config.settings_models import UserSettings


@dataclass(frozen=True)
class RuntimePaths:
    app_root: Path
    data_dir: Path
    logs_dir: Path
    cache_db_path: Path
    cache_lock_path: Path
    settings_path: Path
    keys_path: Path


@dataclass(frozen=True)
class AppConfig:
    user: UserSettings
    paths: RuntimePaths
    app_version: str = "0.0.0"

    @property
    def scan_folders(self) -> tuple[Path, ...]:
        return tuple(Path(folder).expanduser() for folder in self.user.scan_folders)
