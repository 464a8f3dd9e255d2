import sys
from pathlib import Path

root = Path(__file__).resolve().parents[1]
src = root / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

import pytest

from switch_library_indexer.domain.models.discovered_file import DiscoveredFile


@pytest.fixture()
def temp_workspace(tmp_path, monkeypatch):
    (tmp_path / "configs").mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def make_file(tmp_path):
    def _make(name: str, size: int = 10, folder: Path | None = None) -> DiscoveredFile:
        return DiscoveredFile(
            base_folder=folder or tmp_path / "library",
            name=name,
            size=size,
            mtime_ns=1,
        )

    return _make
