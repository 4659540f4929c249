#!/usr/bin/env python3
from __future__ import annotations

import re
import sys
from pathlib import Path

ENGINE_PACKAGES = (
    "contracts/",
    "jurisdiction_registry/",
    "ingest/",
    "distribution_risk/",
    "multi_jurisdiction/",
    "model_risk/",
    "premium/",
    "audit_log/",
    "orchestrator/",
    "api/",
)

# YAML is only tool configuration at the repo root
ROOT_CONFIG_FILES = frozenset({".pre-commit-config.yaml", ".pre-commit-config.yml"})

YAML_RULE = ("YAML is limited to the pre-commit config at the repo root", re.compile(r"^$"))
FIXTURE_RULE = (
    "JSON files must be test fixtures under tests/fixtures/",
    re.compile(r"^tests/fixtures/.+\.json$"),
)
DOC_RULE = (
    "Docs must be root documents (README.md, DESIGN.md, ...) or live in docs/*.md",
    re.compile(r"^(docs/[^/]+\.md|[A-Z][A-Z_]*\.md|spec\.md)$"),
)
FILETYPE_GUARDS = {
    ".yml": YAML_RULE,
    ".yaml": YAML_RULE,
    ".json": FIXTURE_RULE,
    ".md": DOC_RULE,
}

ALLOWED_PYTHON = re.compile(r"^(scripts/[^/]+\.py|tests/.+\.py)$")

# Registry data and audit samples pasted into docs belong in code or fixtures.
PASTE_PATTERNS = [
    re.compile(r"^\s*on:\s*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^\s*jobs:\s*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"```(?:yaml|yml|toml|json|jsonl)\b", re.IGNORECASE),
]


def _check_path(path: Path) -> list[str]:
    posix = path.as_posix()
    if posix in ROOT_CONFIG_FILES:
        return []

    errors: list[str] = []
    guard = FILETYPE_GUARDS.get(path.suffix.lower())
    if guard is not None:
        msg, pattern = guard
        if not pattern.match(posix):
            errors.append(f"{posix}: {msg}")

    if path.suffix.lower() == ".py" and not ALLOWED_PYTHON.match(posix) and not posix.startswith(ENGINE_PACKAGES):
        errors.append(f"{posix}: Python must be under an engine package, scripts/*.py or tests/")
    return errors


def _check_content(path: Path) -> list[str]:
    if path.suffix.lower() != ".md":
        return []
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return []
    return [
        f"{path.as_posix()}: contains blocked pasted block '{pat.pattern}'" for pat in PASTE_PATTERNS if pat.search(content)
    ]


def main(argv: list[str]) -> int:
    errors: list[str] = []
    for arg in argv:
        p = Path(arg)
        if not p.exists() or p.is_dir():
            continue
        errors.extend(_check_path(p))
        errors.extend(_check_content(p))

    if errors:
        print("validate_placements failed:")
        for err in errors:
            print(f" - {err}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
