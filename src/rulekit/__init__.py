"""RuleKit: distribute documentation sections as AI assistant rule files."""

__version__ = "0.1.0"
__author__ = "RuleKit Contributors"
__description__ = "Distribute documentation sections as AI assistant rule files"

from .emitters import CopilotEmitter, CursorEmitter, Emitter, get_emitter
from .installer import Installer
from .models import AttachmentPolicy, InstallTarget, Role, Section
from .reader import ContentTreeReader
from .registry import SectionRegistry

__all__ = [
    "AttachmentPolicy",
    "ContentTreeReader",
    "CopilotEmitter",
    "CursorEmitter",
    "Emitter",
    "InstallTarget",
    "Installer",
    "Role",
    "Section",
    "SectionRegistry",
    "get_emitter",
]
