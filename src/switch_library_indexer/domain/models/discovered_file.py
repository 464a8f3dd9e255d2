from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DiscoveredFile:
    base_folder: Path
    name: str
    size: int
    mtime_ns: int
    is_dir: bool = False

    @property
    def path(self) -> Path:
        return self.base_folder / self.name

    @property
    def fingerprint(self) -> str:
        return f"{self.path}|{self.name}|{self.size}"

    @property
    def lower_name(self) -> str:
        return self.name.lower()
