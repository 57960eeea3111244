from __future__ import annotations

import json

from benchmark_reporting import MAX_STORED_RUNS, append_benchmark_report


def _append(tmp_path, accuracy: float, failures: list[str]):
    return append_benchmark_report(
        benchmark="variants",
        summary={"passed": 0, "total": 0, "accuracy": accuracy},
        failures=failures,
        reports_dir=tmp_path,
    )


def test_first_run_has_nothing_to_compare(tmp_path) -> None:
    comparison = _append(tmp_path, 90.0, ["it-imperfect-1"])

    assert comparison.report_path == tmp_path / "variants-report.json"
    assert comparison.accuracy_delta is None
    assert comparison.new_failures == ()
    assert comparison.fixed_cases == ()
    assert comparison.best_accuracy == 90.0


def test_second_run_reports_delta_and_changed_cases(tmp_path) -> None:
    _append(tmp_path, 90.0, ["it-imperfect-1", "es-gerund-2"])
    comparison = _append(tmp_path, 85.5, ["es-gerund-2", "en-plural-3"])

    assert comparison.accuracy_delta == -4.5
    assert comparison.new_failures == ("en-plural-3",)
    assert comparison.fixed_cases == ("it-imperfect-1",)
    assert comparison.best_accuracy == 90.0

    stored = json.loads(comparison.report_path.read_text(encoding="utf-8"))
    assert stored["best_accuracy"] == 90.0
    assert [run["summary"]["accuracy"] for run in stored["runs"]] == [90.0, 85.5]
    assert stored["runs"][-1]["new_failures"] == ["en-plural-3"]


def test_history_is_capped(tmp_path) -> None:
    for attempt in range(MAX_STORED_RUNS + 3):
        comparison = _append(tmp_path, float(attempt % 100), [])

    stored = json.loads(comparison.report_path.read_text(encoding="utf-8"))
    assert len(stored["runs"]) == MAX_STORED_RUNS


def test_unreadable_history_shape_starts_over(tmp_path) -> None:
    (tmp_path / "variants-report.json").write_text(json.dumps({"runs": "broken"}), encoding="utf-8")

    comparison = _append(tmp_path, 70.0, [])

    assert comparison.accuracy_delta is None
    stored = json.loads(comparison.report_path.read_text(encoding="utf-8"))
    assert len(stored["runs"]) == 1
