"""Installation orchestrator: runs the selected sections through one emitter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .emitters import Emitter, get_emitter
from .exceptions import ArtifactIOError, ConfigurationError, RuleKitError
from .logging import get_logger
from .models import (
    EmissionPlan,
    FileResult,
    InstallReport,
    InstallTarget,
    SectionResult,
    SectionStatus,
)
from .reader import ContentTreeReader
from .registry import SectionRegistry

logger = get_logger("installer")


class Installer:
    """Installs sections into a target directory.

    Each run regenerates the chosen sections from scratch. A failing
    section is reported and skipped; the remaining sections still install.
    """

    def __init__(
        self,
        registry: SectionRegistry,
        reader: ContentTreeReader | None = None,
    ) -> None:
        """Initialize installer with a section registry.

        Args:
            registry: Registry resolving section identifiers
            reader: Content tree reader, defaults to the standard reader
        """
        self.registry = registry
        self.reader = reader or ContentTreeReader()

    def run(
        self,
        target: InstallTarget,
        section_ids: list[str],
        dry_run: bool = False,
        emitter_options: dict[str, Any] | None = None,
    ) -> InstallReport:
        """Install the selected sections.

        Args:
            target: Installation root and emitter identifier
            section_ids: Sections to install, in order
            dry_run: Plan only, without writing files
            emitter_options: Extra emitter options (e.g., ``apply_to``)

        Returns:
            Per-section results, including failures

        Raises:
            ConfigurationError: If the target directory or emitter cannot be resolved
        """
        root = target.root.expanduser().resolve()
        if not root.is_dir():
            msg = f"Directory not found: {root}"
            raise ConfigurationError(msg, details={"target": str(root)})

        emitter = get_emitter(target.emitter, **(emitter_options or {}))
        report = InstallReport(
            target=InstallTarget(root=root, emitter=emitter.name),
            dry_run=dry_run,
        )

        for section_id in section_ids:
            report.sections.append(
                self.install_section(emitter, root, section_id, dry_run=dry_run),
            )

        return report

    def plan_section(self, emitter: Emitter, root: Path, section_id: str) -> EmissionPlan:
        """Read one section and build its emission plan without writing."""
        section = self.registry.get(section_id)
        content = self.reader.read(section)
        return emitter.emit(content, root)

    def install_section(
        self,
        emitter: Emitter,
        root: Path,
        section_id: str,
        dry_run: bool = False,
    ) -> SectionResult:
        """Plan and write one section, converting failures into a result entry."""
        result = SectionResult(section_id=section_id)

        try:
            plan = self.plan_section(emitter, root, section_id)
        except RuleKitError as e:
            logger.warning("Section %s failed: %s", section_id, e)
            result.status = SectionStatus.FAILED
            result.error = str(e)
            return result

        result.warnings = plan.warnings

        for planned in plan.files:
            if dry_run:
                result.files.append(
                    FileResult(
                        path=root / planned.path,
                        role=planned.role,
                        written=False,
                        glob=planned.glob,
                    ),
                )
                continue

            try:
                written = emitter.write_file(root, planned)
            except ArtifactIOError as e:
                logger.warning("Section %s aborted: %s", section_id, e)
                result.files.append(
                    FileResult(
                        path=e.path,
                        role=planned.role,
                        written=False,
                        glob=planned.glob,
                        error=str(e),
                    ),
                )
                result.status = SectionStatus.FAILED
                result.error = str(e)
                break

            result.files.append(FileResult(path=written, role=planned.role, glob=planned.glob))

        return result
