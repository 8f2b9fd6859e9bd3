"""Cursor emitter: one ``.mdc`` rule per guide and agent under ``.cursor/rules/``."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from ..models import (
    Artifact,
    AttachmentPolicy,
    ContentWarning,
    PlannedFile,
    Role,
    Section,
    SectionContent,
)
from ..policy import (
    decisions_description,
    guide_description,
    index_description,
    resolve_attachment,
)
from .base import Emitter, join_bodies, render_document, source_label


def mdc_attributes(description: str | None, policy: AttachmentPolicy | None) -> list[tuple[str, str]]:
    """Cursor frontmatter: description, optional globs, and ``alwaysApply: false``.

    An index with no default glob falls back to ``alwaysApply: false``
    without globs, so Cursor treats it as a manual rule.
    """
    attributes: list[tuple[str, str]] = []
    if description:
        attributes.append(("description", description))
    if policy is not None and policy.is_auto and policy.glob:
        attributes.append(("globs", policy.glob))
    attributes.append(("alwaysApply", "false"))
    return attributes


class CursorEmitter(Emitter):
    """Index auto-attached, guides and agents picked by description, decisions merged."""

    name = "cursor"
    label = "Cursor"
    output_dir = PurePosixPath(".cursor/rules")
    extension = ".mdc"

    def file_name(self, section_id: str, group: str) -> str:
        return f"{section_id}-{group}{self.extension}"

    def plan_index(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        index = content.index
        if index is None:
            return []

        section = content.section
        policy = resolve_attachment(index, section)
        document = render_document(
            mdc_attributes(index_description(section), policy),
            self.rewrite_index(content, warnings),
        )
        return [
            PlannedFile(
                path=Path(self.output_path(section.id, "index")),
                content=document,
                role=Role.INDEX,
                glob=policy.glob,
                sources=[source_label(section, index)],
            ),
        ]

    def plan_guides(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        section = content.section
        files = []
        for guide in content.guides:
            policy = resolve_attachment(guide, section)
            self.note_missing_title(section.id, guide, warnings)
            # Auto-attached guides keep their description so the rule stays discoverable.
            description = policy.description or guide_description(section, guide)
            files.append(self._plan_single(section, guide, description, policy))
        return files

    def plan_agents(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        section = content.section
        files = []
        for agent in content.agents:
            policy = resolve_attachment(agent, section)
            self.note_missing_title(section.id, agent, warnings)
            files.append(self._plan_single(section, agent, policy.description, policy))
        return files

    def plan_decisions(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        if not content.decisions:
            return []

        section = content.section
        document = render_document(
            mdc_attributes(decisions_description(section), None),
            join_bodies(content.decisions),
        )
        return [
            PlannedFile(
                path=Path(self.output_path(section.id, "decisions")),
                content=document,
                role=Role.DECISION,
                sources=[source_label(section, d) for d in content.decisions],
            ),
        ]

    def _plan_single(
        self,
        section: Section,
        artifact: Artifact,
        description: str | None,
        policy: AttachmentPolicy,
    ) -> PlannedFile:
        return PlannedFile(
            path=Path(self.output_path(section.id, artifact.identifier)),
            content=render_document(mdc_attributes(description, policy), artifact.content),
            role=artifact.role,
            glob=policy.glob if policy.is_auto else None,
            sources=[source_label(section, artifact)],
        )
