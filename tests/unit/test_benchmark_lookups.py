from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path

import pytest


def _load_benchmark_module():
    script_path = Path(__file__).resolve().parents[2] / "scripts" / "benchmark_lookups.py"
    spec = importlib.util.spec_from_file_location("benchmark_lookups", script_path)
    assert spec is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    loader = spec.loader
    assert loader is not None
    loader.exec_module(module)
    return module


def test_synthetic_paths_are_unique_and_nested() -> None:
    module = _load_benchmark_module()
    paths = [module.synthetic_path(index, depth=3) for index in range(50)]

    assert len(set(paths)) == 50
    assert all(path.count("/") == 3 for path in paths)
    assert paths[0].endswith("module_0.test.js")


def test_build_snapshot_creates_one_record_per_file() -> None:
    module = _load_benchmark_module()
    snapshot = module.build_snapshot(files=10, depth=2)

    assert len(snapshot) == 10
    assert all(len(record) == 7 for record in snapshot.values())


def test_summarize_timings_handles_empty_and_values() -> None:
    module = _load_benchmark_module()

    assert module.summarize_timings([]) == {"min": 0.0, "median": 0.0, "max": 0.0}
    assert module.summarize_timings([3.0, 1.0, 2.0]) == {"min": 1.0, "median": 2.0, "max": 3.0}


def test_main_prints_summary(capsys: pytest.CaptureFixture[str]) -> None:
    module = _load_benchmark_module()

    exit_code = module.main(["--files", "40", "--depth", "2", "--runs", "1"])

    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["files"] == 40
    assert set(summary["seconds"]) == {
        "absolute_lookup",
        "canonical_lookup",
        "context_query",
        "dependencies",
        "glob_query",
    }


def test_main_rejects_invalid_arguments() -> None:
    module = _load_benchmark_module()

    with pytest.raises(SystemExit):
        module.main(["--runs", "0"])
