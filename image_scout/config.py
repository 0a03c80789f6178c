# === FILE: image_scout/config.py ===
"""
Loading and validation of the ImageScout crawler configuration.
Pydantic describes the schema; YAML and JSON files are both accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

CONFIG_ENV_VAR = "IMAGE_SCOUT_CONFIG"


class CrawlerConfig(BaseModel):
    """Settings for one crawl run. The seed URL and depth come from the CLI."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    max_attempts: int = Field(3, ge=1, description="Attempts per page fetch.")
    image_attempts: int = Field(1, ge=1, description="Attempts per image fetch.")
    backoff_base: float = Field(2.0, ge=0, description="Retry delay is attempt * backoff_base.")
    concurrency: int = Field(16, ge=1, description="Maximum in-flight HTTP requests.")
    output_dir: Path = Field(Path("images"), description="Where images and the manifest go.")
    manifest_name: str = Field("index.json", min_length=1, description="Manifest file name.")
    default_image_name: str = Field("image.jpg", min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[Path] = None

    @field_validator("log_level", mode="before")
    def _upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("manifest_name", "default_image_name")
    def _plain_file_name(cls, v: str) -> str:
        if "/" in v or "\\" in v:
            raise ValueError("must be a file name, not a path")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _locate(path: Union[str, Path, None]) -> Optional[Path]:
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = env_path
        elif _DEFAULT_CFG.is_file():
            return _DEFAULT_CFG
        else:
            return None
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
    return path_obj


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    With ``path=None`` the ``IMAGE_SCOUT_CONFIG`` environment variable is
    consulted first, then ``configs/default.yaml``; if neither exists the
    built-in defaults are returned.
    """
    path_obj = _locate(path)
    if path_obj is None:
        return CrawlerConfig()

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "DEFAULT_USER_AGENT", "CONFIG_ENV_VAR", "load_config"]
