from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_DIR = Path("configs")


class SessionConfig(BaseModel):
    context_character_limit: int = Field(default=8000, ge=1)
    max_summary_rounds: int = Field(default=5, ge=0)


class StorageConfig(BaseModel):
    backend: Literal["memory", "file"] = "memory"
    root: str = ".agentdesk/sessions"


class ToolsConfig(BaseModel):
    sourcing_mode: Literal["dry_run", "live"] = "dry_run"


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    session: SessionConfig = SessionConfig()
    storage: StorageConfig = StorageConfig()
    tools: ToolsConfig = ToolsConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(env: str = "base", config_dir: Path = DEFAULT_CONFIG_DIR) -> AppConfig:
    config_dir = Path(config_dir)
    base_path = config_dir / "base.yaml"
    base = _read_yaml(base_path) if base_path.exists() else {}
    if env != "base":
        override_path = config_dir / f"{env}.yaml"
        if override_path.exists():
            base = _merge_dicts(base, _read_yaml(override_path))
    return AppConfig(
        session=SessionConfig(**base.get("session", {})),
        storage=StorageConfig(**base.get("storage", {})),
        tools=ToolsConfig(**base.get("tools", {})),
        logging=LoggingConfig(**base.get("logging", {"level": "INFO"})),
    )


def _read_yaml(path: Path) -> Dict[str, Any]:
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merged[key] = _merge_dicts(base[key], value)
        else:
            merged[key] = value
    return merged
