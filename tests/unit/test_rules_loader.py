"""
Rules file loader tests.

Tests for loading and validating the YAML modules file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from import_redirector.components.redirector import build_from_sources
from import_redirector.rules.loader import extract_yaml, load_rules
from import_redirector.rules.models import RedirectorRules

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestLoadRules:
    """Test rules file loading."""

    def test_load_project_rules_file(self) -> None:
        """Sample rules.yaml at the project root is valid."""
        rules = load_rules(PROJECT_ROOT / "rules.yaml")

        assert isinstance(rules, RedirectorRules)
        assert rules.vcs == "git"
        assert ("rsc.io/*", "https://github.com/rsc/*") in rules.iter_pairs()

    def test_pairs_keep_file_order(self, rules_file: Path) -> None:
        rules = load_rules(rules_file)

        assert rules.iter_pairs() == [
            ("rsc.io/*", "https://github.com/rsc/*"),
            ("9fans.net/go", "https://github.com/9fans/go"),
        ]
        assert rules.doc_base_url is None

    def test_load_nonexistent_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(Path("/nonexistent/rules.yaml"))

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("modulez: []\n")

        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(path)

    def test_missing_repo_path_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("modules:\n  - import_path: a.com\n")

        with pytest.raises(ValueError, match="repo_path"):
            load_rules(path)

    def test_empty_file_has_no_modules(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("")

        rules = load_rules(path)

        assert rules.modules == []
        assert rules.iter_pairs() == []

    def test_load_strips_markdown_code_fences(self, tmp_path: Path) -> None:
        """Loader handles markdown-wrapped YAML files."""
        path = tmp_path / "rules.md"
        path.write_text(
            "## Modules\n"
            "\n"
            "```yaml\n"
            "modules:\n"
            "  - import_path: a.com\n"
            "    repo_path: https://example.com/a\n"
            "```\n"
            "\n"
            "Trailing notes.\n"
        )

        rules = load_rules(path)

        assert rules.iter_pairs() == [("a.com", "https://example.com/a")]


class TestExtractYaml:
    def test_plain_content_unchanged(self) -> None:
        assert extract_yaml("a: 1\n") == "a: 1\n"

    def test_first_block_only(self) -> None:
        content = "```yaml\na: 1\n```\n```yaml\nb: 2\n```\n"

        assert extract_yaml(content) == "a: 1"


class TestRulesAsModuleSource:
    def test_build_from_rules_file(self, rules_file: Path) -> None:
        """Loaded rules feed the registry builder directly."""
        result = build_from_sources(load_rules(rules_file), vcs="git")

        assert result.success is True
        assert result.registry is not None
        record = result.registry.match("rsc.io/pdf/cmd")
        assert record is not None
        assert record.vcs_root == "https://github.com/rsc/pdf"
