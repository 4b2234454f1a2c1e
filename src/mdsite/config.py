"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDSITE_"


class Settings(BaseModel):
    app_name:         str  = "mdsite"
    reading_speed:    int  = Field(default=200,   ge=1, description="Average reading speed, words per minute")
    include_drafts:   bool = Field(default=False, description="Build drafts into the corpus and output (never search)")
    strict:           bool = Field(default=True,  description="Abort on any document failure; False degrades and skips")
    count_code_words: bool = Field(default=False, description="Count fenced code content toward word count")
    summary_length:   int  = Field(default=70,    ge=1, description="Words in a generated search summary")
    workers:          int  = Field(default=4,     ge=1, description="Threads for per-document parse/validate/metrics")
    output_dir:       str  = Field(default="dist",     description="Directory for page contexts and search index")
    parser_config:    str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    log_level:        str  = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
