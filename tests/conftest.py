"""Shared fixtures for building section content trees."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

SectionBuilder = Callable[..., Path]


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Empty content root holding one directory per section."""
    root = tmp_path / "sections"
    root.mkdir()
    return root


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty installation target directory."""
    target = tmp_path / "project"
    target.mkdir()
    return target


@pytest.fixture
def make_section(content_root: Path) -> SectionBuilder:
    """Return a builder writing a section tree under the content root."""

    def _build(
        section_id: str,
        index: str | None = None,
        guides: dict[str, str] | None = None,
        agents: dict[str, str] | None = None,
        decisions: dict[str, str] | None = None,
        config: dict | None = None,
    ) -> Path:
        section_dir = content_root / section_id
        section_dir.mkdir()
        if index is not None:
            (section_dir / "00-index.md").write_text(index, encoding="utf-8")
        for folder, files in (
            ("guides", guides),
            ("agents", agents),
            ("decisions", decisions),
        ):
            if files is None:
                continue
            (section_dir / folder).mkdir()
            for name, text in files.items():
                (section_dir / folder / f"{name}.md").write_text(text, encoding="utf-8")
        if config is not None:
            (section_dir / "section.json").write_text(json.dumps(config), encoding="utf-8")
        return section_dir

    return _build


@pytest.fixture
def query_section(make_section: SectionBuilder) -> Path:
    """Section with an index linking two guides, one guide override and three decisions."""
    return make_section(
        "tanstack-query",
        index=(
            "# TanStack Query\n\n"
            "- [Keys](./guides/01-query-keys.md)\n"
            "- [Mutations](./guides/02-mutations.md)\n"
        ),
        guides={
            "01-query-keys": "# Query keys\n\nUse key factories.\n",
            "02-mutations": "# Mutations\n\nInvalidate narrowly.\n",
        },
        decisions={
            "001-factories": "# ADR 1\n",
            "002-devtools": "# ADR 2\n",
            "003-suspense": "# ADR 3\n",
        },
        config={
            "name": "TanStack Query",
            "description": "Query guides",
            "guideGlobs": {"02-mutations": "src/**/*.mutation.ts"},
        },
    )
