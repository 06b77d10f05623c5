"""
High-level pipeline:
- read the original (and optionally polished) text
- ask the polisher for a polished text when none is supplied
- generate (or load) the comparison for the trace
- write the PDF report
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .classifier import ChangeClassifier
from .config import PolishDiffConfig
from .diffing import DiffEngine
from .engine import ComparisonEngine
from .llm import OpenRouterPolisher, Polisher
from .models import ComparisonResult
from .report import save_comparison_report_pdf
from .service import ComparisonService
from .store import JsonComparisonStore
from .utils import new_trace_id


def build_engine(cfg: PolishDiffConfig) -> ComparisonEngine:
    return ComparisonEngine(
        diff_engine=DiffEngine(timeout_sec=cfg.diff.timeout_sec, edit_cost=cfg.diff.edit_cost),
        classifier=ChangeClassifier(structure_ratio=cfg.classifier.structure_ratio),
        deletion_policy=cfg.engine.deletion_policy,
    )


def build_service(cfg: PolishDiffConfig) -> ComparisonService:
    store = JsonComparisonStore(cfg.store.resolved_directory(cfg.project.output_dir))
    return ComparisonService(store, build_engine(cfg), verbose=cfg.runtime.verbose)


def build_polisher(cfg: PolishDiffConfig) -> OpenRouterPolisher:
    return OpenRouterPolisher(
        api_key=cfg.llm.resolved_api_key(),
        model=cfg.llm.model,
        base_url=cfg.llm.base_url,
        site_url=cfg.llm.site_url,
        site_name=cfg.llm.site_name,
        timeout_sec=cfg.llm.timeout_sec,
        max_retries=cfg.llm.max_retries,
        verbose=cfg.runtime.verbose,
    )


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def run_from_config(cfg: PolishDiffConfig, polisher: Optional[Polisher] = None) -> ComparisonResult:
    """Run the full pipeline and return the comparison result."""
    os.makedirs(cfg.project.output_dir, exist_ok=True)
    verbose = cfg.runtime.verbose

    trace_id = cfg.project.trace_id or new_trace_id()
    service = build_service(cfg)

    original = _read_text(cfg.project.original_file)
    if verbose:
        print(f"[INFO] Original: {cfg.project.original_file} ({len(original)} chars)")

    if cfg.project.polished_file:
        polished = _read_text(cfg.project.polished_file)
        if verbose:
            print(f"[INFO] Polished: {cfg.project.polished_file} ({len(polished)} chars)")
    elif service.store.exists(trace_id):
        polished = None
    else:
        polisher = polisher or build_polisher(cfg)
        polished = polisher.polish(original, style=cfg.llm.style, language=cfg.llm.language)

    result = service.get_comparison(trace_id, original, polished)

    if cfg.report.enabled:
        report_pdf = os.path.join(cfg.project.output_dir, f"comparison_{result.trace_id}.pdf")
        save_comparison_report_pdf(
            result,
            report_pdf,
            title=cfg.report.title,
            truncate_chars=cfg.report.truncate_chars,
        )
        if verbose:
            print(f"[DONE] Report: {report_pdf}")

    if verbose:
        print(f"[DONE] Trace: {result.trace_id} ({result.metadata.total_changes} changes)")

    return result
