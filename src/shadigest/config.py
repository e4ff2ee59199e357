"""Settings for the shadigest CLI, read from config.yaml and SHADIGEST_* env vars"""

import codecs
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from shadigest.core.constants import DEFAULT_CHUNK_SIZE


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "SHADIGEST_"

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([km]?)b?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "k": 1024, "m": 1024 * 1024}


class Settings(BaseModel):
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1, description="Bytes read per chunk; accepts 64K / 1M")
    encoding:   str = Field(default="utf-8", description="Codec used to encode text input")
    log_level:  str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("chunk_size", mode="before")
    @classmethod
    def _parse_size(cls, value: Any) -> Any:
        if isinstance(value, str) and (m := _SIZE_RE.match(value)):
            return int(m.group(1)) * _SIZE_UNITS[m.group(2).lower()]
        return value

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Build Settings for one CLI run.

    Precedence, lowest first: config.yaml in the CWD, SHADIGEST_<FIELD> env
    vars, then non-None CLI overrides. Only the CLI calls this; the library
    entry points take explicit arguments.
    """
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
