"""Store settings loaded from settings.yaml."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from UFOArray.errors import ConfigError

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent / "settings.yaml"


@dataclass
class StoreSettings:
    codec: str = "str"
    encoding: str = "utf-8"
    append: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreSettings":
        section = data.get("store") or {}
        if not isinstance(section, dict):
            raise ConfigError("'store' settings must be a mapping", details={"store": section})
        append = section.get("append", cls.append)
        if not isinstance(append, bool):
            raise ConfigError("'store.append' must be true or false", details={"append": append})
        return cls(
            codec=str(section.get("codec", cls.codec)),
            encoding=str(section.get("encoding", cls.encoding)),
            append=append,
        )


def load_settings(path: str | Path | None = None) -> Dict[str, Any]:
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    try:
        data = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(
            f"Cannot read settings file {settings_path}",
            details={"path": str(settings_path)},
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Invalid YAML in {settings_path}: {exc}",
            details={"path": str(settings_path)},
        ) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Settings file {settings_path} must contain a mapping",
            details={"path": str(settings_path)},
        )
    data.setdefault("store", {})
    return data
