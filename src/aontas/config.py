import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List

from aontas.core.sheets import ExportContext

logger = logging.getLogger(__name__)


def config_path() -> Path:
    override = os.environ.get("AONTAS_CONFIG")
    return Path(override) if override else Path.home() / ".aontas10.json"


@dataclass
class AppConfig:
    lang: str = "en-US"
    out_dir: str = ""
    formats: List[str] = field(default_factory=lambda: ["txt", "pdf", "docx"])
    output_language: str = "English"
    level: str = "B1"
    output_type: str = "article"
    dyslexia_friendly: bool = True

    def export_context(self) -> ExportContext:
        return ExportContext(
            output_language=self.output_language,
            level=self.level,
            output_type=self.output_type,
            dyslexia_friendly=self.dyslexia_friendly,
        )

    def save(self) -> None:
        try:
            config_path().write_text(json.dumps(asdict(self), ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", config_path(), e)

    @staticmethod
    def load() -> "AppConfig":
        path = config_path()
        if not path.exists():
            return AppConfig()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            return AppConfig()
        if not isinstance(data, dict):
            return AppConfig()
        known = {f.name for f in fields(AppConfig)}
        return AppConfig(**{k: v for k, v in data.items() if k in known})
