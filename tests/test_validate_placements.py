from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from scripts.validate_placements import main


class TestValidatePlacements(unittest.TestCase):
    def _in_tmp_repo(self, rel: str, content: str) -> int:
        with tempfile.TemporaryDirectory() as td:
            old = os.getcwd()
            try:
                os.chdir(td)
                p = Path(rel)
                p.parent.mkdir(parents=True, exist_ok=True)
                p.write_text(content, encoding="utf-8")
                # pre-commit passes paths relative to the repo root
                return main([p.as_posix()])
            finally:
                os.chdir(old)

    def test_allows_precommit_config_at_repo_root(self) -> None:
        self.assertEqual(0, self._in_tmp_repo(".pre-commit-config.yaml", "repos: []\n"))

    def test_allows_engine_packages_and_design_docs(self) -> None:
        self.assertEqual(0, self._in_tmp_repo("model_risk/scoring.py", "X = 1\n"))
        self.assertEqual(0, self._in_tmp_repo("DESIGN.md", "# Design\n"))
        self.assertEqual(0, self._in_tmp_repo("CHANGELOG.md", "# Changes\n"))
        self.assertEqual(1, self._in_tmp_repo("model_risk/notes.md", "# Notes\n"))

    def test_blocks_python_outside_packages(self) -> None:
        self.assertEqual(1, self._in_tmp_repo("misc/helper.py", "X = 1\n"))

    def test_blocks_pasted_fences_in_docs(self) -> None:
        self.assertEqual(1, self._in_tmp_repo("docs/notes.md", "```yaml\non:\n```\n"))

    def test_blocks_yaml_outside_repo_root_config(self) -> None:
        self.assertEqual(1, self._in_tmp_repo(".github/workflows/ci.yml", "name: ci\n"))

        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "random.yml"
            p.write_text("name: nope\n", encoding="utf-8")
            self.assertEqual(1, main([str(p)]))

    def test_allows_json_fixtures_only_under_tests(self) -> None:
        self.assertEqual(0, self._in_tmp_repo("tests/fixtures/registry.json", "{}"))
        self.assertEqual(1, self._in_tmp_repo("jurisdiction_registry/states.json", "{}"))

    def test_blocks_json_in_wrong_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "oops.json"
            p.write_text("{}", encoding="utf-8")
            self.assertEqual(1, main([str(p)]))


if __name__ == "__main__":
    unittest.main()
