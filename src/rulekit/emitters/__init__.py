"""Target format emitters and their registry."""

from __future__ import annotations

from typing import Any

from ..exceptions import ConfigurationError
from .base import Emitter, join_bodies, render_document
from .copilot import CopilotEmitter
from .cursor import CursorEmitter

EMITTERS: dict[str, type[Emitter]] = {
    CursorEmitter.name: CursorEmitter,
    CopilotEmitter.name: CopilotEmitter,
}


def available_emitters() -> dict[str, str]:
    """Emitter identifiers mapped to their display labels."""
    return {name: cls.label for name, cls in EMITTERS.items()}


def get_emitter(name: str, **options: Any) -> Emitter:
    """Instantiate an emitter by identifier.

    Args:
        name: Emitter identifier (e.g., 'cursor')
        **options: Emitter-specific options; unsupported ones are ignored

    Raises:
        ConfigurationError: If the identifier is unknown
    """
    emitter_class = EMITTERS.get(name)
    if emitter_class is None:
        msg = f"Unknown emitter '{name}'"
        raise ConfigurationError(msg, details={"available": sorted(EMITTERS)})

    return emitter_class.from_options(**options)


__all__ = [
    "EMITTERS",
    "CopilotEmitter",
    "CursorEmitter",
    "Emitter",
    "available_emitters",
    "get_emitter",
    "join_bodies",
    "render_document",
]
