#!/usr/bin/env python3
"""Render every polygon preset through the CLI and record the results."""

from __future__ import annotations

import json
import subprocess
import sys
import time
from datetime import UTC, datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DIST_DIR = PROJECT_ROOT / "dist" / "gallery"
RESULTS_FILE = DIST_DIR / "results.json"

CASES = [
    {"name": "triangle", "args": ["triangle"]},
    {"name": "triangle-rotated", "args": ["triangle", "--rotation-deg", "30"]},
    {"name": "square-sharp", "args": ["square", "--radius", "0"]},
    {"name": "pentagon", "args": ["pentagon"]},
    {"name": "pentagon-rotated", "args": ["pentagon", "--rotation-deg", "36"]},
    {"name": "hexagon", "args": ["hexagon"]},
    {"name": "octagon-rounded", "args": ["octagon", "--radius", "12"]},
    {"name": "dodecagon", "args": ["12", "--stroke", "2"]},
]


def _isoformat(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def run_case(case: dict) -> dict:
    output = DIST_DIR / f"{case['name']}.svg"
    cmd = [sys.executable, "-m", "polymask.cli", "render", *case["args"], "--output", str(output), "--overwrite"]
    started_at = datetime.now(UTC)
    start_monotonic = time.perf_counter()
    proc = subprocess.run(cmd, cwd=PROJECT_ROOT, capture_output=True, text=True)
    duration = time.perf_counter() - start_monotonic

    success = proc.returncode == 0 and output.exists()
    status = "PASS" if success else "FAIL"
    print(f"{status} - {case['name']} ({duration:.2f}s)")
    if not success:
        print(f"  {proc.stderr.strip() or proc.stdout.strip()}")

    return {
        "name": case["name"],
        "args": case["args"],
        "returncode": proc.returncode,
        "svg_path": str(output.relative_to(PROJECT_ROOT)),
        "svg_exists": output.exists(),
        "started_at": _isoformat(started_at),
        "duration_seconds": duration,
    }


def main() -> int:
    DIST_DIR.mkdir(parents=True, exist_ok=True)
    results = [run_case(case) for case in CASES]
    RESULTS_FILE.write_text(json.dumps({"cases": results}, indent=2) + "\n")
    failures = [result for result in results if result["returncode"] != 0 or not result["svg_exists"]]
    print(f"Wrote {RESULTS_FILE.relative_to(PROJECT_ROOT)}; {len(failures)} failure(s).")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
