from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


ROOT_DIR = Path(__file__).resolve().parents[1]
REPORTS_DIR = ROOT_DIR / "test-data" / "benchmark-reports"
MAX_STORED_RUNS = 200


@dataclass(frozen=True)
class RunComparison:
    report_path: Path
    accuracy: float
    best_accuracy: float
    accuracy_delta: float | None
    new_failures: tuple[str, ...]
    fixed_cases: tuple[str, ...]


def _read_runs(report_path: Path) -> list[dict[str, Any]]:
    if not report_path.exists():
        return []
    stored = json.loads(report_path.read_text(encoding="utf-8"))
    runs = stored.get("runs") if isinstance(stored, dict) else None
    if not isinstance(runs, list):
        return []
    return [run for run in runs if isinstance(run, dict)]


def _accuracy(run: dict[str, Any]) -> float | None:
    summary = run.get("summary")
    if isinstance(summary, dict) and isinstance(summary.get("accuracy"), (int, float)):
        return float(summary["accuracy"])
    return None


def append_benchmark_report(
    *,
    benchmark: str,
    summary: dict[str, Any],
    failures: list[str],
    per_category: dict[str, Any] | None = None,
    reports_dir: Path = REPORTS_DIR,
) -> RunComparison:
    """Append one run to ``<benchmark>-report.json`` and compare it with the last one.

    Failures are case ids. The history keeps the most recent ``MAX_STORED_RUNS``
    runs; ``best_accuracy`` covers only what is still stored.
    """
    reports_dir.mkdir(parents=True, exist_ok=True)
    report_path = reports_dir / f"{benchmark}-report.json"
    runs = _read_runs(report_path)

    accuracy = float(summary["accuracy"])
    previous = runs[-1] if runs else None
    previous_accuracy = _accuracy(previous) if previous is not None else None
    previous_failures = set(previous.get("failures") or []) if previous is not None else set()

    accuracy_delta = None if previous_accuracy is None else round(accuracy - previous_accuracy, 2)
    new_failures = tuple(case_id for case_id in failures if previous is not None and case_id not in previous_failures)
    fixed_cases = tuple(sorted(previous_failures - set(failures)))

    now = datetime.now(timezone.utc).isoformat()
    runs.append(
        {
            "timestamp": now,
            "summary": summary,
            "per_category": per_category or {},
            "failures": list(failures),
            "accuracy_delta": accuracy_delta,
            "new_failures": list(new_failures),
        }
    )
    runs = runs[-MAX_STORED_RUNS:]
    best_accuracy = max(value for value in (_accuracy(run) for run in runs) if value is not None)

    payload = {
        "benchmark": benchmark,
        "updated_at": now,
        "best_accuracy": best_accuracy,
        "runs": runs,
    }
    report_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return RunComparison(
        report_path=report_path,
        accuracy=accuracy,
        best_accuracy=best_accuracy,
        accuracy_delta=accuracy_delta,
        new_failures=new_failures,
        fixed_cases=fixed_cases,
    )
