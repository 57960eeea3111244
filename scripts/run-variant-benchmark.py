#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from pictolex.services.keyword_index import InMemoryKeywordIndex
from pictolex.services.matching import MatchingEngine
from benchmark_reporting import append_benchmark_report


ROOT_DIR = Path(__file__).resolve().parents[1]
FIXTURE_PATH = ROOT_DIR / "test-data" / "fixtures" / "variants" / "variant_cases.json"
DEFAULT_MIN_ACCURACY = 95.0


@dataclass(frozen=True)
class CaseResult:
    case_id: str
    category: str
    lang: str
    passed: bool
    expected: str | None
    predicted: str | None
    match_source: str


def _metric(results: list[CaseResult]) -> tuple[int, int, float]:
    total = len(results)
    passed = sum(1 for result in results if result.passed)
    accuracy = (passed / total * 100.0) if total else 0.0
    return passed, total, accuracy


def evaluate(cases: list[dict]) -> list[CaseResult]:
    results: list[CaseResult] = []
    for case in cases:
        engine = MatchingEngine(InMemoryKeywordIndex.from_keywords(case["keywords"]))
        match = engine.analyze_token(case["surface"], case["lang"])
        results.append(
            CaseResult(
                case_id=case["id"],
                category=case["category"],
                lang=case["lang"],
                passed=match.query_term == case["expected_query_term"],
                expected=case["expected_query_term"],
                predicted=match.query_term,
                match_source=match.match_source,
            )
        )
    return results


def run(*, enforce_targets: bool = False, min_accuracy: float = DEFAULT_MIN_ACCURACY) -> int:
    cases = json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))
    results = evaluate(cases)
    failures = [result for result in results if not result.passed]

    by_category: dict[str, list[CaseResult]] = defaultdict(list)
    by_lang: dict[str, list[CaseResult]] = defaultdict(list)
    for result in results:
        by_category[result.category].append(result)
        by_lang[result.lang].append(result)

    passed, total, accuracy = _metric(results)

    print("Pictolex Variant Matching Benchmark")
    print("Policy: one keyword index per case, stop words skipped")
    print("")
    print(f"Query term accuracy: {passed}/{total} ({accuracy:.1f}%)")
    print("")
    print("Per-language:")
    for lang in sorted(by_lang):
        lang_passed, lang_total, lang_accuracy = _metric(by_lang[lang])
        print(f"- {lang}: {lang_passed}/{lang_total} ({lang_accuracy:.1f}%)")
    print("")
    print("Per-category:")
    for category in sorted(by_category):
        cat_passed, cat_total, cat_accuracy = _metric(by_category[category])
        print(f"- {category}: {cat_passed}/{cat_total} ({cat_accuracy:.1f}%)")

    print("")
    print("Top failures (up to 20):")
    if not failures:
        print("- none")
    else:
        for result in failures[:20]:
            print(
                f"- {result.case_id} [{result.category}] "
                f"expected={result.expected} predicted={result.predicted} source={result.match_source}"
            )

    comparison = append_benchmark_report(
        benchmark="variants",
        summary={"passed": passed, "total": total, "accuracy": round(accuracy, 2)},
        per_category={
            category: dict(zip(("passed", "total", "accuracy"), _metric(items)))
            for category, items in sorted(by_category.items())
        },
        failures=[result.case_id for result in failures],
    )
    print("")
    if comparison.accuracy_delta is not None:
        print(f"Change since last run: {comparison.accuracy_delta:+.2f} (best {comparison.best_accuracy:.2f}%)")
    if comparison.new_failures:
        print(f"New failures: {', '.join(comparison.new_failures)}")
    if comparison.fixed_cases:
        print(f"Fixed since last run: {', '.join(comparison.fixed_cases)}")
    print(f"Report appended: {comparison.report_path}")

    if enforce_targets and accuracy < min_accuracy:
        print(f"- failed: accuracy {accuracy:.1f}% < {min_accuracy:.1f}%")
        return 1
    return 0


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Pictolex variant matching benchmark.")
    parser.add_argument(
        "--enforce-targets",
        action="store_true",
        help="Exit non-zero when the accuracy threshold is not met.",
    )
    parser.add_argument("--min-accuracy", type=float, default=DEFAULT_MIN_ACCURACY)
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    sys.exit(run(enforce_targets=args.enforce_targets, min_accuracy=args.min_accuracy))
