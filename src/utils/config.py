"""Configuration helpers for title-catalog-reports."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, field_validator


class AppConfig(BaseModel):
    """Application level configuration."""

    data_path: Path = Field(default=Path("data/netflix_titles.csv"))
    output_dir: Path = Field(default=Path("outputs/reports"))
    log_level: str = "INFO"
    report_defaults: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()

    def params_for(self, report: str, overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Merge configured defaults for ``report`` under explicit ``overrides``."""

        return {**self.report_defaults.get(report, {}), **overrides}


def load_config(path: Path) -> AppConfig:
    """Load configuration from a YAML file."""

    data: Dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
    return AppConfig(**data)
