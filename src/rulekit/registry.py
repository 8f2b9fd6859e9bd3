"""Section registry loader with schema validation."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .logging import get_logger
from .models import SECTION_ID_PATTERN, Section, SectionConfig

logger = get_logger("registry")

DEFAULT_CONTENT_ROOT = Path(__file__).parent / "sections"
CONFIG_FILE_NAMES = ("section.json", "section.yaml", "section.yml")
SCHEMA_PATH = Path(__file__).parent / "schemas" / "section.schema.json"


class SectionRegistry:
    """Discovers and loads the sections available for installation."""

    def __init__(self, content_root: Path | None = None) -> None:
        """Initialize registry with the directory holding one folder per section.

        Args:
            content_root: Content directory, defaults to the bundled sections
        """
        self.root = Path(content_root) if content_root else DEFAULT_CONTENT_ROOT
        self._schema: dict[str, Any] | None = None
        self._cache: dict[str, Section] = {}

    def _load_schema(self) -> dict[str, Any]:
        """Load and cache the section configuration schema."""
        if self._schema is None:
            try:
                with SCHEMA_PATH.open(encoding="utf-8") as f:
                    self._schema = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                msg = f"Failed to load section schema: {e}"
                raise ConfigurationError(msg) from e
        return self._schema

    def section_ids(self) -> list[str]:
        """List identifiers of all sections under the content root."""
        if not self.root.is_dir():
            return []
        return sorted(
            child.name
            for child in self.root.iterdir()
            if child.is_dir() and re.match(SECTION_ID_PATTERN, child.name)
        )

    def discover(self) -> list[Section]:
        """Load every available section, sorted by identifier."""
        return [self.get(section_id) for section_id in self.section_ids()]

    def get(self, section_id: str) -> Section:
        """Resolve a section by identifier.

        Raises:
            ConfigurationError: If the section is unknown or its config is invalid
        """
        if section_id in self._cache:
            return self._cache[section_id]

        section_dir = self.root / section_id
        if not section_dir.is_dir():
            msg = f"Unknown section '{section_id}' (no directory at {section_dir})"
            raise ConfigurationError(
                msg,
                details={"section": section_id, "available": self.section_ids()},
            )

        try:
            section = Section(
                id=section_id,
                path=section_dir,
                config=self.load_config(section_dir),
            )
        except ValidationError as e:
            msg = f"Invalid section '{section_id}': {e}"
            raise ConfigurationError(msg, details={"section": section_id}) from e

        self._cache[section_id] = section
        return section

    def load_config(self, section_dir: Path) -> SectionConfig:
        """Load the optional configuration file of a section.

        A missing file yields the default configuration.

        Raises:
            ConfigurationError: If the file cannot be parsed or validated
        """
        config_path = next(
            (section_dir / name for name in CONFIG_FILE_NAMES if (section_dir / name).is_file()),
            None,
        )
        if config_path is None:
            logger.debug("No configuration for section at %s", section_dir)
            return SectionConfig()

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Failed to parse section config {config_path}: {e}"
            raise ConfigurationError(msg) from e
        except OSError as e:
            msg = f"Failed to read section config {config_path}: {e}"
            raise ConfigurationError(msg) from e

        if data is None:
            data = {}

        try:
            jsonschema.validate(data, self._load_schema())
        except jsonschema.ValidationError as e:
            msg = f"Section config {config_path} is invalid: {e.message}"
            raise ConfigurationError(
                msg,
                details={"path": list(e.absolute_path), "file": str(config_path)},
            ) from e

        try:
            return SectionConfig.model_validate(data)
        except ValidationError as e:
            msg = f"Section config {config_path} is invalid: {e}"
            raise ConfigurationError(msg) from e
