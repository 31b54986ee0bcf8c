"""Layout catalog persisted as TOML.

The whole catalog lives in one file (default ~/.config/slam/config.toml),
rewritten atomically on every change. The file path itself is never stored
in the file.
"""

import logging
import os
import tempfile
import tomllib
from pathlib import Path
from typing import Dict, List, Optional

import tomli_w
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..errors import ConfigurationError, PersistenceError
from ..models.screen import Layout
from .xrandr import Xrandr

logger = logging.getLogger(__name__)

CURRENT_MARKER = " ✓"


def strip_marker(label: str) -> str:
    """Turn a ``layout_names()`` entry back into the layout name."""
    return label.removesuffix(CURRENT_MARKER)


class LayoutCatalog(BaseModel):
    """Schema of the config file."""

    layouts: Dict[str, Layout] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_layouts(self):
        for key, layout in self.layouts.items():
            if key != layout.name:
                raise ValueError(f"Layout stored under '{key}' is named '{layout.name}'")

        current = [name for name, layout in self.layouts.items() if layout.is_current]
        if len(current) > 1:
            raise ValueError(f"Only one layout can be current, got: {', '.join(current)}")
        return self


class LayoutConfig:
    """Named layouts plus the marker of the last applied one.

    Every mutating operation persists immediately.
    """

    def __init__(self, config_file: Path, layouts: Optional[Dict[str, Layout]] = None):
        """Initialize the catalog.

        Args:
            config_file: TOML file the catalog is written to
            layouts: Initial layouts by name (default: empty)
        """
        self.file = config_file
        self.layouts: Dict[str, Layout] = dict(layouts or {})

    @classmethod
    def load(cls, config_file: Path) -> "LayoutConfig":
        """Read the catalog, creating an empty file if there is none yet.

        Raises:
            PersistenceError: If the file cannot be read or created
            ConfigurationError: If the file is not a valid layout catalog
        """
        try:
            content = config_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"Config file {config_file} not found, creating an empty one")
            cls._create_config_file(config_file)
            return cls(config_file)
        except UnicodeDecodeError as e:
            raise ConfigurationError(str(config_file), f"not UTF-8 text: {e}") from e
        except OSError as e:
            raise PersistenceError(str(config_file), "read", str(e)) from e

        if not content.strip():
            return cls(config_file)

        try:
            catalog = LayoutCatalog.model_validate(tomllib.loads(content))
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_file), str(e)) from e
        except ValidationError as e:
            raise ConfigurationError(str(config_file), str(e)) from e

        logger.debug(f"Loaded {len(catalog.layouts)} layout(s) from {config_file}")
        return cls(config_file, catalog.layouts)

    @staticmethod
    def _create_config_file(config_file: Path) -> None:
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            config_file.touch()
        except OSError as e:
            raise PersistenceError(str(config_file), "write", str(e)) from e

    def save(self) -> None:
        """Overwrite the config file with the whole catalog.

        Performs atomic write using temp file + rename.

        Raises:
            PersistenceError: If the file cannot be written
        """
        data = LayoutCatalog(layouts=self.layouts).model_dump(mode="json", exclude_none=True)

        try:
            self.file.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.file.parent,
                prefix=".slam-",
                suffix=".toml",
            )
        except OSError as e:
            raise PersistenceError(str(self.file), "write", str(e)) from e

        try:
            with os.fdopen(fd, "wb") as f:
                tomli_w.dump(data, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.file)
        except (OSError, TypeError, ValueError) as e:
            if Path(temp_path).exists():
                os.unlink(temp_path)
            raise PersistenceError(str(self.file), "write", str(e)) from e

        logger.debug(f"Saved {len(self.layouts)} layout(s) to {self.file}")

    def is_empty(self) -> bool:
        return not self.layouts

    def get(self, layout_name: str) -> Optional[Layout]:
        return self.layouts.get(layout_name)

    def current(self) -> Optional[Layout]:
        return next((layout for layout in self.layouts.values() if layout.is_current), None)

    def layout_names(self) -> List[str]:
        """Layout names for menus; the current one carries CURRENT_MARKER."""
        return [
            name + CURRENT_MARKER if layout.is_current else name
            for name, layout in self.layouts.items()
        ]

    def add(self, layout: Layout) -> None:
        """Insert or overwrite a layout by name and persist."""
        self.layouts[layout.name] = layout.model_copy(deep=True)
        self.save()
        logger.info(f"Saved layout '{layout.name}'")

    def remove(self, layout_name: str) -> None:
        """Delete a layout and persist. Unknown names are ignored."""
        if self.layouts.pop(layout_name, None) is None:
            return
        self.save()
        logger.info(f"Removed layout '{layout_name}'")

    def apply(self, layout_name: str, backend: Xrandr) -> bool:
        """Apply a layout through the backend and mark it current.

        Returns:
            False if there is no such layout (nothing happens), True otherwise

        Raises:
            CommandError: If the backend fails
            PersistenceError: If the current marker cannot be saved
        """
        layout = self.layouts.get(layout_name)
        if layout is None:
            logger.info(f"Layout '{layout_name}' not found, nothing to apply")
            return False

        backend.apply(layout.to_xrandr_args())
        self._mark_layout_as_current(layout_name)
        return True

    def _mark_layout_as_current(self, layout_name: str) -> None:
        for name, layout in self.layouts.items():
            layout.is_current = name == layout_name
        self.save()
