from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_json(path: Path, value) -> None:
    path.write_text(json.dumps(value), encoding="utf-8")


def _run_cli(*args: str, stdin_payload: str | None = None):
    cmd = [sys.executable, "-m", "orchestrator.cli", *args]
    return subprocess.run(
        cmd,
        input=stdin_payload,
        text=True,
        capture_output=True,
        check=False,
        cwd=str(REPO_ROOT),
    )


def _distribution(tmp_path: Path, **overrides) -> Path:
    value = {"primary_use": "advertising", "us_states": ["NY", "TX"], "countries": [], "platforms": []}
    value.update(overrides)
    path = tmp_path / "distribution.json"
    _write_json(path, value)
    return path


def test_cli_clear_exit_0(tmp_path: Path) -> None:
    assets = tmp_path / "assets.json"
    _write_json(assets, [{"id": "a-1", "talentRightsVerified": True}])

    completed = _run_cli("distribution", "--assets", str(assets), "--distribution", str(_distribution(tmp_path)))

    assert completed.returncode == 0
    payload = json.loads(completed.stdout)
    assert payload["status"] == "clear"
    assert payload["enforcement_error"] is False


def test_cli_needs_review_exit_2_and_audit(tmp_path: Path) -> None:
    assets = tmp_path / "assets.json"
    audit = tmp_path / "audit.jsonl"
    _write_json(assets, {"id": "a-1", "aiMethod": "AI Generative"})

    completed = _run_cli(
        "distribution",
        "--assets",
        str(assets),
        "--distribution",
        str(_distribution(tmp_path)),
        "--audit-log",
        str(audit),
    )

    assert completed.returncode == 2
    payload = json.loads(completed.stdout)
    assert payload["status"] == "needs_review"
    assert payload["audit_written"] == 1
    assert json.loads(audit.read_text(encoding="utf-8").splitlines()[0])["asset_id"] == "a-1"


def test_cli_blocked_exit_3(tmp_path: Path) -> None:
    assets = tmp_path / "assets.json"
    _write_json(assets, [{"id": "a-1", "creatorIds": ["t-1"]}])

    completed = _run_cli(
        "distribution", "--assets", str(assets), "--distribution", str(_distribution(tmp_path)), "--enforce"
    )

    assert completed.returncode == 3
    payload = json.loads(completed.stdout)
    assert payload["status"] == "blocked"
    assert payload["enforcement_error"] is True


def test_cli_reads_assets_from_stdin(tmp_path: Path) -> None:
    completed = _run_cli(
        "distribution",
        "--distribution",
        str(_distribution(tmp_path)),
        stdin_payload=json.dumps([{"id": "a-1", "talentRightsVerified": True}]),
    )

    assert completed.returncode == 0
    assert json.loads(completed.stdout)["results"]["a-1"]["status"] == "clear"


def test_cli_strict_unknown_state_exit_4(tmp_path: Path) -> None:
    assets = tmp_path / "assets.json"
    _write_json(assets, [{"id": "a-1"}])

    completed = _run_cli(
        "distribution",
        "--assets",
        str(assets),
        "--distribution",
        str(_distribution(tmp_path, us_states=["ZZ"])),
        "--strict",
    )

    assert completed.returncode == 4
    assert json.loads(completed.stdout)["error"] == "unknown_us_state:ZZ"


def test_cli_multi_state() -> None:
    completed = _run_cli("multi-state", "--codes", "NY,CA", "--content-type", "AI-generated ad")

    assert completed.returncode == 0
    payload = json.loads(completed.stdout)
    assert payload["combined_penalty_exposure"] == "Up to $7,500 aggregate"
    assert payload["risk_level"] == "Elevated"


def test_cli_multi_state_bad_content_type_exit_4() -> None:
    completed = _run_cli("multi-state", "--codes", "NY", "--content-type", "Podcast")
    assert completed.returncode == 4


def test_cli_premium() -> None:
    completed = _run_cli("premium", "--limit", "1000000", "--rate", "2", "--jurisdiction", "NY", "--mrs", "95")

    assert completed.returncode == 0
    payload = json.loads(completed.stdout)
    assert payload["risk_class"] == "Low"
    assert abs(payload["premium"] - 36000) < 1e-6


def test_cli_premium_declined_exit_3() -> None:
    completed = _run_cli("premium", "--limit", "1000000", "--rate", "2", "--jurisdiction", "NY", "--mrs", "20")
    assert completed.returncode == 3
    assert json.loads(completed.stdout)["declined"] is True


def test_cli_premium_invalid_limit_exit_4() -> None:
    completed = _run_cli("premium", "--limit", "0", "--rate", "2", "--jurisdiction", "NY", "--mrs", "95")
    assert completed.returncode == 4


def test_cli_mrs_and_explain() -> None:
    listed = _run_cli("mrs")
    assert listed.returncode == 0
    assert len(json.loads(listed.stdout)) == 10

    explained = _run_cli("explain", "--model-id", "model-3", "--apply", "1")
    assert explained.returncode == 0
    payload = json.loads(explained.stdout)
    assert payload["model_id"] == "model-3"
    assert payload["remediation_roadmap"][0]["priority"] == 1
    assert payload["projected_mrs_partial"] <= payload["projected_mrs"]

    missing = _run_cli("explain", "--model-id", "model-404")
    assert missing.returncode == 4


def test_cli_custom_registry(tmp_path: Path) -> None:
    registry = tmp_path / "registry.json"
    _write_json(
        registry,
        {
            "states": [
                {
                    "stateCode": "NY",
                    "state": "New York",
                    "multiplier": 3.0,
                    "legislationStatus": "ENACTED",
                    "lawCategories": ["AI_AD_DISCLOSURE"],
                }
            ]
        },
    )

    completed = _run_cli(
        "--registry", str(registry), "premium", "--limit", "1000", "--rate", "10", "--jurisdiction", "NY", "--mrs", "95"
    )

    assert completed.returncode == 0
    assert json.loads(completed.stdout)["jurisdiction_multiplier"] == 3.0
