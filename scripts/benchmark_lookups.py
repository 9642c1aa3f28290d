#!/usr/bin/env python3
"""Benchmark hot-path file map lookups against a synthetic snapshot."""

from __future__ import annotations

import argparse
import json
import re
import statistics
import time
from collections.abc import Callable

from filemap import FileData, FileMapIndex, file_metadata

DEFAULT_ROOT = "/bench/project"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--files",
        type=int,
        default=20_000,
        help="Number of synthetic files in the snapshot. Default: 20000.",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=4,
        help="Directory nesting depth of generated paths. Default: 4.",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=3,
        help="Number of timed runs per measurement. Default: 3.",
    )
    parser.add_argument(
        "--root",
        default=DEFAULT_ROOT,
        help=f"Absolute root directory of the snapshot. Default: {DEFAULT_ROOT}.",
    )
    return parser.parse_args(argv)


def synthetic_path(index: int, depth: int) -> str:
    """Return a deterministic relative path for the index-th file."""
    segments = [f"pkg_{(index // (10 ** (level + 1))) % 10}" for level in range(depth)]
    suffix = ".test.js" if index % 7 == 0 else ".js"
    return "/".join([*segments, f"module_{index}{suffix}"])


def build_snapshot(files: int, depth: int) -> FileData:
    """Build a deterministic snapshot with one record per synthetic path."""
    snapshot: FileData = {}
    for index in range(files):
        snapshot[synthetic_path(index, depth)] = file_metadata(
            module_name=f"Module{index}" if index % 3 == 0 else None,
            mtime=1_700_000_000_000 + index,
            size=index * 17,
            visited=1,
            dependencies=[f"dep_{index % 11}", f"dep_{index % 13}"],
            sha1=f"{index:040x}",
        )
    return snapshot


def time_call(func: Callable[[], object], runs: int) -> list[float]:
    """Return elapsed seconds for each run of func."""
    timings: list[float] = []
    for _ in range(runs):
        started = time.perf_counter()
        func()
        timings.append(time.perf_counter() - started)
    return timings


def summarize_timings(values: list[float]) -> dict[str, float]:
    """Summarize timings in seconds."""
    if not values:
        return {"min": 0.0, "median": 0.0, "max": 0.0}
    return {
        "min": min(values),
        "median": statistics.median(values),
        "max": max(values),
    }


def run_benchmark(files: int, depth: int, runs: int, root: str) -> dict[str, object]:
    """Run every measurement and return a JSON-serializable summary."""
    snapshot = build_snapshot(files, depth)
    index = FileMapIndex(root, snapshot)
    keys = list(index.get_file_iterator())
    absolute = index.get_all_files()
    context_root = root + "/pkg_0"
    context_filter = re.compile(r"\.js$")

    measurements = {
        "canonical_lookup": time_call(lambda: [index.exists(key) for key in keys], runs),
        "absolute_lookup": time_call(lambda: [index.exists(path) for path in absolute], runs),
        "dependencies": time_call(lambda: [index.get_dependencies(key) for key in keys], runs),
        "context_query": time_call(
            lambda: index.match_files_with_context(
                context_root, recursive=True, filter=context_filter
            ),
            runs,
        ),
        "glob_query": time_call(lambda: index.match_files_with_glob(["**/*.test.js"]), runs),
    }
    return {
        "files": files,
        "depth": depth,
        "runs": runs,
        "seconds": {name: summarize_timings(values) for name, values in measurements.items()},
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.files < 1:
        raise SystemExit("--files must be >= 1")
    if args.depth < 0:
        raise SystemExit("--depth must be >= 0")
    if args.runs < 1:
        raise SystemExit("--runs must be >= 1")
    summary = run_benchmark(args.files, args.depth, args.runs, args.root)
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
