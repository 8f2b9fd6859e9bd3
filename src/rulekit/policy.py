"""Attachment policy resolution shared by every emitter."""

from __future__ import annotations

from .models import Artifact, AttachmentMode, AttachmentPolicy, Role, Section


def display_title(artifact: Artifact) -> str:
    """Extracted title of an artifact, falling back to its identifier."""
    return artifact.title or artifact.identifier


def decisions_description(section: Section) -> str:
    """Role-level description used for the aggregated decision records."""
    return f"{section.id} — architecture decision records (ADRs)"


def guide_description(section: Section, artifact: Artifact) -> str:
    return f"{section.title} guide: {display_title(artifact)}"


def index_description(section: Section) -> str:
    return (
        f"{section.id} — index and routing table. "
        "Read this FIRST to find which guide to load."
    )


def resolve_attachment(artifact: Artifact, section: Section) -> AttachmentPolicy:
    """Decide whether an artifact is auto-attached or loaded on demand.

    Resolution is pure: the same artifact and section always produce the
    same policy, so different emitters agree on what a guide is even when
    they render the policy differently.

    Args:
        artifact: Artifact to resolve
        section: Section owning the artifact

    Returns:
        Exactly one auto-attached or on-demand policy
    """
    config = section.config

    if artifact.role == Role.INDEX:
        return AttachmentPolicy(mode=AttachmentMode.AUTO, glob=config.globs)

    if artifact.role == Role.GUIDE:
        override = config.guide_globs.get(artifact.identifier)
        if override:
            return AttachmentPolicy(mode=AttachmentMode.AUTO, glob=override)
        return AttachmentPolicy(
            mode=AttachmentMode.ON_DEMAND,
            description=guide_description(section, artifact),
        )

    if artifact.role == Role.AGENT:
        return AttachmentPolicy(
            mode=AttachmentMode.ON_DEMAND,
            description=f"Agent: {display_title(artifact)}",
        )

    # Decisions share one role-level policy; they are never resolved per file.
    return AttachmentPolicy(
        mode=AttachmentMode.ON_DEMAND,
        description=decisions_description(section),
    )
