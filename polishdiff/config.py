"""
YAML-driven configuration for polishdiff.

Design choice:
- Put all parameters in YAML, except secrets (API key), which should come from an env var.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import os
import yaml
from pydantic import BaseModel, Field

from .models import DeletionPolicy


class ProjectConfig(BaseModel):
    original_file: str
    polished_file: Optional[str] = None  # when absent the polisher produces it
    output_dir: str = "comparison_output"
    trace_id: Optional[str] = None


class LLMConfig(BaseModel):
    provider: Literal["openrouter"] = "openrouter"
    api_key_env: str = "OPENROUTER_API_KEY"
    api_key: Optional[str] = None  # discouraged; prefer env
    base_url: str = "https://openrouter.ai/api/v1"
    model: str = "google/gemini-2.5-flash-lite"
    site_url: str = ""
    site_name: str = ""
    style: str = "academic"
    language: str = "English"
    timeout_sec: float = 90.0
    max_retries: int = 2

    def resolved_api_key(self) -> str:
        if self.api_key:
            return self.api_key
        key = os.getenv(self.api_key_env, "")
        if not key:
            raise ValueError(
                f"Missing API key. Set env var '{self.api_key_env}' or provide llm.api_key in YAML."
            )
        return key


class DiffConfig(BaseModel):
    timeout_sec: float = Field(1.0, ge=0.0)  # 0 = no time limit
    edit_cost: int = Field(4, ge=1)


class ClassifierConfig(BaseModel):
    structure_ratio: float = Field(0.30, ge=0.0)


class EngineConfig(BaseModel):
    deletion_policy: DeletionPolicy = DeletionPolicy.OMIT


class StoreConfig(BaseModel):
    directory: str = ""  # empty = <output_dir>/comparisons

    def resolved_directory(self, output_dir: str) -> Path:
        if self.directory:
            return Path(self.directory)
        return Path(output_dir) / "comparisons"


class ReportConfig(BaseModel):
    enabled: bool = True
    title: str = "Polish Comparison Report"
    truncate_chars: int = 4000


class RuntimeConfig(BaseModel):
    verbose: bool = True


class PolishDiffConfig(BaseModel):
    project: ProjectConfig
    llm: LLMConfig = Field(default_factory=LLMConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PolishDiffConfig":
        path = Path(path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)
