"""Core data models for the RuleKit distribution engine."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TITLE_PATTERN = re.compile(r"^#[ \t]+(\S.*?)[ \t]*$", re.MULTILINE)
SECTION_ID_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"


class Role(str, Enum):
    """Role of an artifact inside a section, assigned once at read time."""

    INDEX = "index"
    GUIDE = "guide"
    AGENT = "agent"
    DECISION = "decision"


class AttachmentMode(str, Enum):
    """How the host tool decides to load a generated rule."""

    AUTO = "auto"
    ON_DEMAND = "on-demand"


class SectionConfig(BaseModel):
    """Optional per-section configuration shipped next to the content."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, description="Human-readable title")
    description: str = Field(default="", description="One-line summary")
    globs: str | None = Field(
        default=None,
        description="Default auto-attach glob for the section index",
    )
    guide_globs: dict[str, str] = Field(
        default_factory=dict,
        alias="guideGlobs",
        description="Per-guide glob overrides keyed by guide identifier",
    )


class Section(BaseModel):
    """A named, independently installable bundle of documentation."""

    id: str = Field(..., description="Stable short name used in output file names")
    path: Path = Field(..., description="Section root directory")
    config: SectionConfig = Field(default_factory=SectionConfig)

    @field_validator("id")
    @classmethod
    def validate_id_format(cls, v: str) -> str:
        """Validate section identifiers are kebab-case."""
        if not re.match(SECTION_ID_PATTERN, v):
            msg = "Section ID must be kebab-case (e.g., tanstack-query)"
            raise ValueError(msg)
        return v

    @property
    def title(self) -> str:
        return self.config.name or self.id

    @property
    def description(self) -> str:
        return self.config.description


class Artifact(BaseModel):
    """One content unit of a section."""

    role: Role = Field(..., description="Artifact role")
    identifier: str = Field(..., description="File stem relative to its role directory")
    content: str = Field(..., description="Raw text content")
    source_path: Path = Field(..., description="File the content was read from")

    @property
    def title(self) -> str | None:
        """First level-one heading of the content, if any."""
        match = TITLE_PATTERN.search(self.content)
        return match.group(1) if match else None


class SectionContent(BaseModel):
    """Classified artifacts of one section."""

    section: Section
    index: Artifact | None = None
    guides: list[Artifact] = Field(default_factory=list)
    agents: list[Artifact] = Field(default_factory=list)
    decisions: list[Artifact] = Field(default_factory=list)


class AttachmentPolicy(BaseModel):
    """Derived attachment behaviour of one artifact.

    ``auto`` with no glob means the rule is unfiltered, which is distinct
    from a rule bound to a glob.
    """

    mode: AttachmentMode
    glob: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def validate_mode_fields(self) -> AttachmentPolicy:
        """Each mode carries only its own attribute."""
        if self.mode == AttachmentMode.AUTO and self.description is not None:
            msg = "Auto-attached policies carry a glob, not a description"
            raise ValueError(msg)
        if self.mode == AttachmentMode.ON_DEMAND:
            if self.glob is not None:
                msg = "On-demand policies cannot carry a glob"
                raise ValueError(msg)
            if not self.description:
                msg = "On-demand policies require a description"
                raise ValueError(msg)
        return self

    @property
    def is_auto(self) -> bool:
        return self.mode == AttachmentMode.AUTO


class ContentWarning(BaseModel):
    """Non-fatal content issue, such as an unresolved cross-reference."""

    section_id: str
    source: str = Field(..., description="Artifact or file the warning concerns")
    message: str


class PlannedFile(BaseModel):
    """One output file an emitter intends to write."""

    path: Path = Field(..., description="Output path relative to the install root")
    content: str
    role: Role
    glob: str | None = Field(
        default=None,
        description="Glob the file is auto-attached on, for reporting",
    )
    sources: list[str] = Field(
        default_factory=list,
        description="Section-relative source files rendered into this output",
    )


class EmissionPlan(BaseModel):
    """Ordered output files for one section and one emitter."""

    section_id: str
    emitter: str
    root: Path = Field(..., description="Installation root directory")
    files: list[PlannedFile] = Field(default_factory=list)
    warnings: list[ContentWarning] = Field(default_factory=list)


class InstallTarget(BaseModel):
    """Resolved installation root plus the chosen emitter identifier."""

    root: Path
    emitter: str


class SectionStatus(str, Enum):
    """Outcome of installing a single section."""

    SUCCESS = "success"
    FAILED = "failed"


class FileResult(BaseModel):
    """Outcome of writing a single output file."""

    path: Path
    role: Role
    written: bool = True
    glob: str | None = None
    error: str | None = None


class SectionResult(BaseModel):
    """Per-section result reported to the invoking surface."""

    section_id: str
    status: SectionStatus = SectionStatus.SUCCESS
    files: list[FileResult] = Field(default_factory=list)
    error: str | None = None
    warnings: list[ContentWarning] = Field(default_factory=list)

    @property
    def written(self) -> list[Path]:
        return [f.path for f in self.files if f.written]

    @property
    def ok(self) -> bool:
        return self.status == SectionStatus.SUCCESS


class InstallReport(BaseModel):
    """Result of one installation run."""

    target: InstallTarget
    dry_run: bool = False
    sections: list[SectionResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(s.ok for s in self.sections)
