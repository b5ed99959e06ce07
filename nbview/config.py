"""Configuration management for nbview."""

import json
from pathlib import Path

from pydantic import BaseModel, Field


class DisplayConfig(BaseModel):
    buftype: str = "nofile"
    filetype: str = "jupyter"

    def options(self) -> dict[str, str]:
        """Display-mode attributes applied to a surface after its last line."""
        return {"buftype": self.buftype, "filetype": self.filetype}


class RenderSettings(BaseModel):
    batch_size: int = Field(default=64, ge=1)


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8765


class NbviewConfig(BaseModel):
    display: DisplayConfig = DisplayConfig()
    render: RenderSettings = RenderSettings()
    server: ServerConfig = ServerConfig()


def _config_dir() -> Path:
    return Path.home() / ".nbview"


def _config_path() -> Path:
    return _config_dir() / "config.json"


def ensure_dirs() -> None:
    """Create the nbview config directory."""
    _config_dir().mkdir(parents=True, exist_ok=True)


def load_config() -> NbviewConfig:
    """Load config from ~/.nbview/config.json, returning defaults if missing."""
    path = _config_path()
    if not path.exists():
        return NbviewConfig()
    text = path.read_text()
    return NbviewConfig.model_validate_json(text)


def save_config(config: NbviewConfig) -> None:
    """Save config to ~/.nbview/config.json."""
    ensure_dirs()
    path = _config_path()
    path.write_text(json.dumps(config.model_dump(), indent=2) + "\n")
