"""Tests for section discovery and configuration loading."""

from pathlib import Path

import pytest

from rulekit.exceptions import ConfigurationError
from rulekit.registry import DEFAULT_CONTENT_ROOT, SectionRegistry


class TestSectionRegistry:
    """Test SectionRegistry."""

    def test_discover_sorted(self, content_root: Path, make_section) -> None:
        """Test sections are discovered in identifier order."""
        make_section("zeta", index="# Z\n")
        make_section("alpha", index="# A\n")
        (content_root / "Not_A_Section").mkdir()
        (content_root / "README.md").write_text("notes", encoding="utf-8")

        registry = SectionRegistry(content_root)

        assert registry.section_ids() == ["alpha", "zeta"]
        assert [s.id for s in registry.discover()] == ["alpha", "zeta"]

    def test_get_loads_json_config(self, content_root: Path, make_section) -> None:
        """Test section.json populates the section config."""
        make_section(
            "project-structure",
            config={
                "name": "Project Structure",
                "globs": "src/**",
                "guideGlobs": {"03-testing": "**/*.test.tsx"},
            },
        )

        section = SectionRegistry(content_root).get("project-structure")

        assert section.title == "Project Structure"
        assert section.config.globs == "src/**"
        assert section.config.guide_globs == {"03-testing": "**/*.test.tsx"}

    def test_get_loads_yaml_config(self, content_root: Path, make_section) -> None:
        """Test section.yaml is accepted as well."""
        section_dir = make_section("docs")
        (section_dir / "section.yaml").write_text(
            "name: Docs\nguideGlobs:\n  intro: 'docs/**'\n",
            encoding="utf-8",
        )

        section = SectionRegistry(content_root).get("docs")

        assert section.title == "Docs"
        assert section.config.guide_globs == {"intro": "docs/**"}

    def test_missing_config_is_valid(self, content_root: Path, make_section) -> None:
        """Test a section without configuration gets defaults."""
        make_section("plain", index="# Plain\n")

        section = SectionRegistry(content_root).get("plain")

        assert section.config.globs is None
        assert section.config.guide_globs == {}

    def test_unknown_section(self, content_root: Path) -> None:
        """Test unknown identifiers raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unknown section 'nope'"):
            SectionRegistry(content_root).get("nope")

    def test_schema_violation(self, content_root: Path, make_section) -> None:
        """Test configs with wrong types are rejected by the schema."""
        make_section("broken", config={"globs": ["src/**"]})

        with pytest.raises(ConfigurationError, match="is invalid"):
            SectionRegistry(content_root).get("broken")

    def test_unknown_key_rejected(self, content_root: Path, make_section) -> None:
        """Test unexpected keys are rejected."""
        make_section("typo", config={"guideGlob": {}})

        with pytest.raises(ConfigurationError):
            SectionRegistry(content_root).get("typo")

    def test_unparsable_config(self, content_root: Path, make_section) -> None:
        """Test malformed files raise ConfigurationError."""
        section_dir = make_section("bad-json")
        (section_dir / "section.json").write_text("{ not: [valid", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            SectionRegistry(content_root).get("bad-json")

    def test_bundled_sections(self) -> None:
        """Test the bundled content root ships the default sections."""
        registry = SectionRegistry()

        assert registry.root == DEFAULT_CONTENT_ROOT
        assert registry.section_ids() == ["project-structure", "tanstack-query"]
        assert registry.get("tanstack-query").title == "TanStack Query"
