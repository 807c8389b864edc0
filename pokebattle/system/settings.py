from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from pokebattle.core.logging import logger
from pokebattle.data.catalog import DEFAULT_BASE_URL

SETTINGS_FILENAME = ".pokebattle_settings.json"
LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    trainer_name: str = "TRAINER"
    log_level: str = "INFO"         # DEBUG / INFO / WARN / ERROR
    catalog_url: str = DEFAULT_BASE_URL
    turn_delay: float = 0.6         # seconds between battle messages in the terminal UI
    debug: bool = False

    def normalize(self):
        self.trainer_name = str(self.trainer_name).strip()[:20] or "TRAINER"
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            self.log_level = "INFO"
        try:
            self.turn_delay = max(0.0, min(5.0, float(self.turn_delay)))
        except (TypeError, ValueError):
            self.turn_delay = 0.6
        if not str(self.catalog_url).startswith(("http://", "https://")):
            self.catalog_url = DEFAULT_BASE_URL
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        self.data.normalize()
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_logging(self):
        lvl = "DEBUG" if self.data.debug else self.data.log_level
        logger.set_level(lvl)  # type: ignore[arg-type]
