"""Base class and shared helpers for target format emitters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Any

from ..exceptions import ArtifactIOError, ConfigurationError
from ..links import rewrite_guide_links
from ..logging import get_logger
from ..models import (
    Artifact,
    ContentWarning,
    EmissionPlan,
    PlannedFile,
    Section,
    SectionContent,
)

logger = get_logger("emitters")

BODY_SEPARATOR = "\n\n---\n\n"


def render_document(attributes: list[tuple[str, str]], body: str) -> str:
    """Prefix a body with a frontmatter block and a blank line.

    Args:
        attributes: Ordered frontmatter keys and pre-rendered values
        body: Document body

    Returns:
        Complete file content
    """
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in attributes)
    lines.extend(["---", "", body])
    return "\n".join(lines)


def join_bodies(artifacts: list[Artifact]) -> str:
    """Concatenate artifact bodies with a horizontal rule between them."""
    return BODY_SEPARATOR.join(a.content for a in artifacts)


def source_label(section: Section, artifact: Artifact) -> str:
    """Artifact source file relative to its section root, e.g. ``guides/01-keys.md``."""
    try:
        return artifact.source_path.relative_to(section.path).as_posix()
    except ValueError:
        return artifact.source_path.name


class Emitter(ABC):
    """One output format: its frontmatter, aggregation and naming rules.

    Subclasses plan each artifact group; ``emit`` assembles the groups into
    an ``EmissionPlan`` and ``write`` puts a plan on disk. Keeping the two
    steps apart lets a plan be inspected without touching the filesystem.
    """

    name: str = ""
    label: str = ""
    output_dir: PurePosixPath = PurePosixPath(".")

    @classmethod
    def from_options(cls, **options: Any) -> Emitter:
        """Build an emitter from run options, ignoring the ones it does not use."""
        return cls()

    def emit(self, content: SectionContent, root: Path) -> EmissionPlan:
        """Build the emission plan for one section.

        Args:
            content: Classified section artifacts
            root: Installation root directory

        Returns:
            Ordered output files and collected content warnings

        Raises:
            ConfigurationError: If two artifacts map to the same output path
        """
        warnings: list[ContentWarning] = []
        files: list[PlannedFile] = []
        files.extend(self.plan_index(content, warnings))
        files.extend(self.plan_guides(content, warnings))
        files.extend(self.plan_agents(content, warnings))
        files.extend(self.plan_decisions(content, warnings))
        self.check_collisions(content.section.id, files)

        for warning in warnings:
            logger.info("%s: %s (%s)", warning.section_id, warning.message, warning.source)
        logger.debug("Planned %d file(s) for %s with %s", len(files), content.section.id, self.name)

        return EmissionPlan(
            section_id=content.section.id,
            emitter=self.name,
            root=root,
            files=files,
            warnings=warnings,
        )

    def check_collisions(self, section_id: str, files: list[PlannedFile]) -> None:
        """Reject a plan in which two outputs share a path.

        Raises:
            ConfigurationError: Naming every clashing path and its source files
        """
        by_path: dict[str, list[PlannedFile]] = {}
        for planned in files:
            by_path.setdefault(planned.path.as_posix(), []).append(planned)

        clashes = {
            path: [source for planned in group for source in planned.sources]
            for path, group in by_path.items()
            if len(group) > 1
        }
        if not clashes:
            return

        described = "; ".join(
            f"{path} <- {', '.join(sources)}" for path, sources in clashes.items()
        )
        msg = f"Section '{section_id}' maps several sources to one {self.label} file: {described}"
        raise ConfigurationError(msg, details={"section": section_id, "collisions": clashes})

    @abstractmethod
    def plan_index(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        """Plan output for the section index."""
        ...

    @abstractmethod
    def plan_guides(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        """Plan output for the section guides."""
        ...

    @abstractmethod
    def plan_agents(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        """Plan output for the section agents."""
        ...

    @abstractmethod
    def plan_decisions(
        self, content: SectionContent, warnings: list[ContentWarning],
    ) -> list[PlannedFile]:
        """Plan output for the section decision records."""
        ...

    @abstractmethod
    def file_name(self, section_id: str, group: str) -> str:
        """Output file name for an artifact identifier or group name."""
        ...

    def output_path(self, section_id: str, group: str) -> PurePosixPath:
        """Output path relative to the installation root."""
        return self.output_dir / self.file_name(section_id, group)

    def link_target(self, section_id: str, guide: Artifact) -> str:
        """Link target used when an index references ``guide``."""
        return self.output_path(section_id, guide.identifier).as_posix()

    def rewrite_index(self, content: SectionContent, warnings: list[ContentWarning]) -> str:
        """Index body with guide links pointing at generated files."""
        if content.index is None:
            return ""
        section_id = content.section.id
        mapping = {g.identifier: self.link_target(section_id, g) for g in content.guides}
        result = rewrite_guide_links(content.index.content, mapping)
        for identifier in result.unresolved:
            warnings.append(
                ContentWarning(
                    section_id=section_id,
                    source=content.index.source_path.name,
                    message=f"unresolved guide reference '{identifier}' left unchanged",
                ),
            )
        return result.content

    def note_missing_title(
        self,
        section_id: str,
        artifact: Artifact,
        warnings: list[ContentWarning],
    ) -> None:
        """Record a warning when an artifact's description falls back to its identifier."""
        if not artifact.title:
            warnings.append(
                ContentWarning(
                    section_id=section_id,
                    source=artifact.source_path.name,
                    message="no title heading, description uses the identifier",
                ),
            )

    def write_file(self, root: Path, planned: PlannedFile) -> Path:
        """Write one planned file, overwriting any previous version.

        Raises:
            ArtifactIOError: If the directory or file cannot be written
        """
        target_path = root / planned.path
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(planned.content, encoding="utf-8")
        except OSError as e:
            msg = f"Failed to write {target_path}: {e}"
            raise ArtifactIOError(msg, path=target_path) from e
        logger.debug("Wrote %s", target_path)
        return target_path

    def write(self, plan: EmissionPlan) -> list[Path]:
        """Write every file of a plan in order.

        Returns:
            Absolute paths written
        """
        return [self.write_file(plan.root, planned) for planned in plan.files]
