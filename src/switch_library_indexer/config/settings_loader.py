from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import ClassVar, final

from switch_library_indexer.config.settings_models import UserSettings
from switch_library_indexer.domain.models.app_config import AppConfig, RuntimePaths


@final
class SettingsLoader:
    DIST_NAME: ClassVar[str] = "switch-library-indexer"
    DEFAULT_VERSION: ClassVar[str] = "0.0.0"

    _KEY_MAP: ClassVar[dict[str, str]] = {
        "LOG_LEVEL": "log_level",
        "SCAN_FOLDERS": "scan_folders",
        "SCAN_RECURSIVE": "scan_recursive",
        "RESOLVE_WORKERS": "resolve_workers",
        "STORE_LOCK_TIMEOUT_SECONDS": "store_lock_timeout_seconds",
        "KEYS_FILE": "keys_file",
    }

    @staticmethod
    def _parse_key_value_file(path: Path) -> dict[str, str]:
        data: dict[str, str] = {}
        if not path.exists():
            return data

        for raw_line in path.read_text("utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[7:].strip()
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            data[key.strip()] = value.strip().strip('"').strip("'")
        return data

    @staticmethod
    def _parse_bool(value: str) -> bool:
        return str(value or "").strip().lower() in {"1", "true", "yes", "on"}

    @classmethod
    def _to_user_settings(cls, raw: dict[str, str]) -> UserSettings:
        mapped: dict[str, object] = {}
        for key, value in raw.items():
            target = cls._KEY_MAP.get(key)
            if not target:
                continue
            text = str(value or "").strip()
            if not text:
                continue
            if target == "resolve_workers":
                try:
                    mapped[target] = int(text)
                except ValueError:
                    pass
                continue
            if target == "store_lock_timeout_seconds":
                try:
                    mapped[target] = float(text)
                except ValueError:
                    pass
                continue
            if target == "scan_recursive":
                mapped[target] = cls._parse_bool(text)
                continue
            if target == "scan_folders":
                mapped[target] = tuple(
                    item.strip() for item in text.split(",") if item.strip()
                )
                continue

            mapped[target] = text

        return UserSettings.model_validate(mapped)

    @staticmethod
    def _build_paths(app_root: Path, settings_path: Path, keys_file: str | None) -> RuntimePaths:
        data_dir = app_root / "data"
        cache_db_path = data_dir / "library-cache.db"
        keys_path = Path(keys_file).expanduser() if keys_file else app_root / "prod.keys"
        return RuntimePaths(
            app_root=app_root,
            data_dir=data_dir,
            logs_dir=data_dir / "logs",
            cache_db_path=cache_db_path,
            cache_lock_path=cache_db_path.with_suffix(".lock"),
            settings_path=settings_path,
            keys_path=keys_path,
        )

    @classmethod
    def app_version(cls) -> str:
        try:
            value = (metadata.version(cls.DIST_NAME) or "").strip()
        except metadata.PackageNotFoundError:
            return cls.DEFAULT_VERSION
        return value or cls.DEFAULT_VERSION

    @classmethod
    def load(cls, settings_path: Path | None = None) -> AppConfig:
        app_root = Path.cwd()
        resolved_settings = settings_path or app_root / "configs" / "settings.ini"
        raw = cls._parse_key_value_file(resolved_settings)
        user = cls._to_user_settings(raw)
        paths = cls._build_paths(app_root, resolved_settings, user.keys_file)
        return AppConfig(user=user, paths=paths, app_version=cls.app_version())
