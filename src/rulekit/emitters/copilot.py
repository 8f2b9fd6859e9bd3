"""GitHub Copilot emitter: ``applyTo`` instruction files under ``.github/instructions/``.

Copilot reads scoped instruction files whose frontmatter carries an
``applyTo`` path matcher. Index and guides share one file, each agent gets
its own file and decisions are merged into one file.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

from ..models import Artifact, ContentWarning, PlannedFile, Role, SectionContent
from .base import BODY_SEPARATOR, Emitter, join_bodies, render_document, source_label

DEFAULT_APPLY_TO = "src/data/**"


class CopilotEmitter(Emitter):
    """Every file carries the same fixed path matcher."""

    name = "copilot"
    label = "GitHub Copilot"
    output_dir = PurePosixPath(".github/instructions")
    extension = ".instructions.md"

    def __init__(self, apply_to: str = DEFAULT_APPLY_TO) -> None:
        self.apply_to = apply_to

    @classmethod
    def from_options(cls, **options: Any) -> CopilotEmitter:
        return cls(apply_to=options.get("apply_to") or DEFAULT_APPLY_TO)

    def file_name(self, section_id: str, group: str) -> str:
        return f"{section_id}-{group}{self.extension}"

    def link_target(self, section_id: str, guide: Artifact) -> str:
        # All guides live in the merged guides file.
        return self.output_path(section_id, "guides").as_posix()

    def plan_index(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        # The index is merged into the guides file.
        return []

    def plan_guides(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        bodies = []
        merged = []
        if content.index is not None:
            bodies.append(self.rewrite_index(content, warnings))
            merged.append(content.index)
        if content.guides:
            bodies.append(join_bodies(content.guides))
            merged.extend(content.guides)
        if not bodies:
            return []

        return [
            self._plan_group(
                content,
                "guides",
                BODY_SEPARATOR.join(bodies),
                Role.INDEX if content.index is not None else Role.GUIDE,
                merged,
            ),
        ]

    def plan_agents(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        return [
            self._plan_group(content, agent.identifier, agent.content, Role.AGENT, [agent])
            for agent in content.agents
        ]

    def plan_decisions(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        if not content.decisions:
            return []
        return [
            self._plan_group(
                content,
                "decisions",
                join_bodies(content.decisions),
                Role.DECISION,
                content.decisions,
            ),
        ]

    def _plan_group(
        self,
        content: SectionContent,
        group: str,
        body: str,
        role: Role,
        artifacts: list[Artifact],
    ) -> PlannedFile:
        section = content.section
        return PlannedFile(
            path=Path(self.output_path(section.id, group)),
            content=render_document([("applyTo", f'"{self.apply_to}"')], body),
            role=role,
            glob=self.apply_to,
            sources=[source_label(section, a) for a in artifacts],
        )
