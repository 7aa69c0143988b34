"""Operator CLI for the EVM -> Injective translation layer."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from compatibility_report.estimator import MigrationEstimator
from compatibility_report.models import function_shapes_from_abi
from compatibility_report.scorer import CompatibilityScorer, patterns_from_abi
from signature_registry.registry import default_registry
from translation_engine.builder import MessageBuilder
from translation_engine.engine import TranslationEngine
from translation_engine.errors import NoBuilderError, TranslationError
from translation_engine.models import TranslationContext

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="evm-bridge")
    parser.add_argument("--log-level", default="WARNING")
    subparsers = parser.add_subparsers(dest="command", required=True)

    translate_parser = subparsers.add_parser("translate")
    source = translate_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--calldata")
    source.add_argument("--action")
    translate_parser.add_argument("--param", action="append", default=[])
    translate_parser.add_argument("--context", action="append", default=[])
    translate_parser.add_argument("--allow-placeholders", action="store_true")
    translate_parser.set_defaults(func=_translate)

    score_parser = subparsers.add_parser("score")
    score_parser.add_argument("patterns", nargs="*")
    score_parser.add_argument("--abi")
    score_parser.set_defaults(func=_score)

    estimate_parser = subparsers.add_parser("estimate")
    estimate_parser.add_argument("--abi", required=True)
    estimate_parser.set_defaults(func=_estimate)

    selectors_parser = subparsers.add_parser("selectors")
    selectors_parser.set_defaults(func=_selectors)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
    )

    try:
        return args.func(args)
    except NoBuilderError as exc:
        logger.error("Registry and builder are out of sync: %s", exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 3
    except (TranslationError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2


def _translate(args: argparse.Namespace) -> int:
    registry = default_registry()
    engine = TranslationEngine(
        registry,
        builder=MessageBuilder(registry, allow_placeholders=args.allow_placeholders),
    )
    context = TranslationContext.from_dict(_parse_pairs(args.context, "Context"))
    if args.calldata:
        result = engine.translate_calldata(args.calldata, context)
    else:
        result = engine.translate_intent(args.action, _parse_pairs(args.param, "Param"), context)
    _print_json(result.to_dict())
    return 0


def _score(args: argparse.Namespace) -> int:
    patterns = list(args.patterns)
    if args.abi:
        patterns.extend(patterns_from_abi(_load_abi(args.abi)))
    report = CompatibilityScorer().score(patterns)
    _print_json(report.to_dict())
    return 0


def _estimate(args: argparse.Namespace) -> int:
    shapes = function_shapes_from_abi(_load_abi(args.abi))
    estimate = MigrationEstimator().estimate(shapes)
    _print_json(estimate.to_dict())
    return 0


def _selectors(args: argparse.Namespace) -> int:
    registry = default_registry()
    for selector, entry in zip(registry.selectors.keys(), registry.selectors.values()):
        print(f"{selector} {entry.canonical_signature} {entry.mapping.match_type.value}")
    return 0


def _parse_pairs(values: Iterable[str], label: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for raw in values:
        if "=" not in raw:
            raise ValueError(f"{label} must be formatted as NAME=VALUE.")
        name, value = raw.split("=", 1)
        if not name:
            raise ValueError(f"{label} name is required.")
        pairs[name] = value
    return pairs


def _load_abi(source: str) -> list:
    if source == "-":
        payload = json.loads(sys.stdin.read())
    else:
        payload = json.loads(Path(source).read_text())
    if isinstance(payload, dict):
        payload = payload.get("abi", payload.get("contractAbi", []))
    if not isinstance(payload, list):
        raise ValueError("ABI must be a JSON list of entries.")
    return payload


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    raise SystemExit(main())
