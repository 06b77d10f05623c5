"""
Command-line interface.

Usage:
  polishdiff run --config polishdiff.yaml
  polishdiff compare original.txt polished.txt [--trace-id ID]
  polishdiff show TRACE_ID
  polishdiff list
  polishdiff action TRACE_ID CHANGE_ID accept|reject
  polishdiff accept-all TRACE_ID
  polishdiff reject-all TRACE_ID
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import PolishDiffConfig
from .engine import ComparisonEngine
from .errors import ComparisonError
from .models import BatchAction, DeletionPolicy
from .pipeline import run_from_config
from .service import ComparisonService
from .store import JsonComparisonStore
from .utils import new_trace_id, preview

DEFAULT_STORE = "comparison_output/comparisons"


def _service(args: argparse.Namespace) -> ComparisonService:
    engine = ComparisonEngine(deletion_policy=getattr(args, "deletion_policy", DeletionPolicy.OMIT.value))
    return ComparisonService(JsonComparisonStore(args.store), engine, verbose=args.verbose)


def _print_summary(result) -> None:
    md = result.metadata
    print(f"trace {result.trace_id}: {md.total_changes} changes, "
          f"words {md.original_word_count} -> {md.polished_word_count}")
    for c in result.annotations:
        print(f"  {c.id:<10} {c.type.value:<10} {c.status.value:<8} "
              f"[{c.position.start}:{c.position.end}] line {c.position.line}: "
              f"'{preview(c.original_text, 30)}' -> '{preview(c.polished_text, 30)}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polishdiff",
        description="Annotate the changes between an original text and its polished version.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="Run polishdiff using a YAML config.")
    run_p.add_argument("--config", required=True, help="Path to YAML config file.")

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--store", default=DEFAULT_STORE, help="Directory holding comparison JSON files.")
        p.add_argument("--json", action="store_true", help="Print the full result as JSON.")
        p.add_argument("-q", "--quiet", dest="verbose", action="store_false", help="Suppress progress output.")

    cmp_p = sub.add_parser("compare", help="Compare two text files and store the result.")
    cmp_p.add_argument("original", help="Original text file.")
    cmp_p.add_argument("polished", help="Polished text file.")
    cmp_p.add_argument("--trace-id", default=None)
    cmp_p.add_argument(
        "--deletion-policy",
        choices=[p.value for p in DeletionPolicy],
        default=DeletionPolicy.OMIT.value,
    )
    add_common(cmp_p)

    show_p = sub.add_parser("show", help="Show a stored comparison.")
    show_p.add_argument("trace_id")
    add_common(show_p)

    list_p = sub.add_parser("list", help="List stored trace ids.")
    add_common(list_p)

    act_p = sub.add_parser("action", help="Accept or reject a single change.")
    act_p.add_argument("trace_id")
    act_p.add_argument("change_id")
    act_p.add_argument("action", choices=["accept", "reject"])
    add_common(act_p)

    for name, help_text in (("accept-all", "Accept every pending change."),
                            ("reject-all", "Reject every pending change.")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("trace_id")
        add_common(p)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.cmd == "run":
            cfg = PolishDiffConfig.from_yaml(args.config)
            run_from_config(cfg)
            return 0

        service = _service(args)

        if args.cmd == "compare":
            original = Path(args.original).read_text(encoding="utf-8")
            polished = Path(args.polished).read_text(encoding="utf-8")
            result = service.get_comparison(args.trace_id or new_trace_id(), original, polished)
            if args.json:
                print(result.model_dump_json(indent=2))
            else:
                _print_summary(result)

        elif args.cmd == "show":
            result = service.get_comparison(args.trace_id)
            if args.json:
                print(result.model_dump_json(indent=2))
            else:
                _print_summary(result)
                print("\nfinal text:\n" + result.final_content)

        elif args.cmd == "list":
            trace_ids = service.store.list_trace_ids()
            print(json.dumps(trace_ids) if args.json else "\n".join(trace_ids))

        elif args.cmd == "action":
            response = service.apply_action(args.trace_id, args.change_id, args.action)
            print(response.model_dump_json(indent=2) if args.json else response.updated_content)

        elif args.cmd in ("accept-all", "reject-all"):
            action = BatchAction.ACCEPT_ALL if args.cmd == "accept-all" else BatchAction.REJECT_ALL
            response = service.batch_action(args.trace_id, action)
            print(response.model_dump_json(indent=2) if args.json else response.updated_content)

    except ComparisonError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
