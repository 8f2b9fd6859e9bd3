"""Content tree reader: classifies a section's files by role."""

from __future__ import annotations

from pathlib import Path

from .exceptions import ArtifactIOError, ConfigurationError
from .logging import get_logger
from .models import Artifact, Role, Section, SectionContent

logger = get_logger("reader")

INDEX_FILE = "00-index.md"
ROLE_DIRECTORIES = {
    Role.GUIDE: "guides",
    Role.AGENT: "agents",
    Role.DECISION: "decisions",
}
CONTENT_SUFFIX = ".md"


class ContentTreeReader:
    """Reads a section directory into classified artifacts without writing anything."""

    def read(self, section: Section) -> SectionContent:
        """Read all artifacts of a section.

        Args:
            section: Section to read

        Returns:
            Index, guides, agents and decisions, each role sorted by file name

        Raises:
            ConfigurationError: If the section root does not exist
            ArtifactIOError: If a content file cannot be read
        """
        root = section.path
        if not root.is_dir():
            msg = f"Section directory not found: {root}"
            raise ConfigurationError(msg, details={"section": section.id})

        index_path = root / INDEX_FILE
        index = (
            self._read_artifact(index_path, Role.INDEX)
            if index_path.is_file()
            else None
        )

        content = SectionContent(
            section=section,
            index=index,
            guides=self._read_role(root, Role.GUIDE),
            agents=self._read_role(root, Role.AGENT),
            decisions=self._read_role(root, Role.DECISION),
        )
        logger.debug(
            "Read section %s: index=%s guides=%d agents=%d decisions=%d",
            section.id,
            index is not None,
            len(content.guides),
            len(content.agents),
            len(content.decisions),
        )
        return content

    def _read_role(self, root: Path, role: Role) -> list[Artifact]:
        role_dir = root / ROLE_DIRECTORIES[role]
        if not role_dir.is_dir():
            return []

        files = sorted(
            (p for p in role_dir.iterdir() if p.is_file() and p.suffix == CONTENT_SUFFIX),
            key=lambda p: p.name,
        )
        return [self._read_artifact(path, role) for path in files]

    def _read_artifact(self, path: Path, role: Role) -> Artifact:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read {path}: {e}"
            raise ArtifactIOError(msg, path=path) from e

        identifier = "index" if role == Role.INDEX else path.stem
        return Artifact(role=role, identifier=identifier, content=text, source_path=path)
