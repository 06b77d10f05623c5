from pathlib import Path

import pytest
from pydantic import ValidationError

from polishdiff.config import LLMConfig, PolishDiffConfig
from polishdiff.models import DeletionPolicy

YAML = """
project:
  original_file: original.txt
  polished_file: polished.txt
  output_dir: out
  trace_id: "1732701603123"
diff:
  timeout_sec: 2.0
  edit_cost: 6
classifier:
  structure_ratio: 0.5
engine:
  deletion_policy: report
runtime:
  verbose: false
"""


def test_from_yaml(tmp_path):
    path = tmp_path / "polishdiff.yaml"
    path.write_text(YAML, encoding="utf-8")

    cfg = PolishDiffConfig.from_yaml(path)

    assert cfg.project.original_file == "original.txt"
    assert cfg.project.trace_id == "1732701603123"
    assert cfg.diff.timeout_sec == 2.0
    assert cfg.diff.edit_cost == 6
    assert cfg.classifier.structure_ratio == 0.5
    assert cfg.engine.deletion_policy == DeletionPolicy.REPORT
    assert cfg.runtime.verbose is False
    assert cfg.report.enabled is True
    assert cfg.llm.model == "google/gemini-2.5-flash-lite"


def test_minimal_config_uses_defaults():
    cfg = PolishDiffConfig.model_validate({"project": {"original_file": "a.txt"}})
    assert cfg.project.polished_file is None
    assert cfg.engine.deletion_policy == DeletionPolicy.OMIT
    assert cfg.store.resolved_directory(cfg.project.output_dir) == Path("comparison_output") / "comparisons"


def test_explicit_store_directory():
    cfg = PolishDiffConfig.model_validate(
        {"project": {"original_file": "a.txt"}, "store": {"directory": "/data/cmp"}}
    )
    assert cfg.store.resolved_directory("ignored") == Path("/data/cmp")


def test_invalid_deletion_policy_rejected():
    with pytest.raises(ValidationError):
        PolishDiffConfig.model_validate(
            {"project": {"original_file": "a.txt"}, "engine": {"deletion_policy": "drop"}}
        )


def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    assert LLMConfig().resolved_api_key() == "sk-test"


def test_api_key_explicit_wins(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")
    assert LLMConfig(api_key="sk-yaml").resolved_api_key() == "sk-yaml"


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    with pytest.raises(ValueError, match="Missing API key"):
        LLMConfig().resolved_api_key()
