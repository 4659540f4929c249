#!/usr/bin/env python3
from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

SKIP_DIRS = {".git", ".venv", "venv", "__pycache__", ".pytest_cache", "build", "dist"}


def run(command: list[str], *, cwd: Path) -> int:
    completed = subprocess.run(command, cwd=str(cwd), check=False)
    # pytest exit 5: nothing collected
    if command[:3] == [sys.executable, "-m", "pytest"] and completed.returncode == 5:
        return 0
    return completed.returncode


def repo_files(repo_root: Path) -> list[str]:
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(repo_root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS and not d.endswith(".egg-info"))
        for name in sorted(filenames):
            files.append(Path(dirpath, name).relative_to(repo_root).as_posix())
    return files


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]

    existing = os.environ.get("PYTHONPATH", "")
    os.environ["PYTHONPATH"] = str(repo_root) + (os.pathsep + existing if existing else "")

    print("Checking file placements...")
    placements = run([sys.executable, "scripts/validate_placements.py", *repo_files(repo_root)], cwd=repo_root)
    if placements != 0:
        return placements

    if shutil.which("pytest"):
        print("Running tests with pytest...")
        return run([sys.executable, "-m", "pytest", "tests"], cwd=repo_root)

    print("pytest not found; falling back to unittest discovery...")
    return run(
        [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_layer*.py", "-t", ".", "-v"],
        cwd=repo_root,
    )


if __name__ == "__main__":
    raise SystemExit(main())
