"""scaffoldkit configuration.

Typed run settings as a Pydantic v2 model, so they are validated at
construction time and can be read from environment variables or saved to
and loaded from JSON.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from .layout import LayoutSpec, load_blueprint, load_layout_bundle
from .templates import TemplateRegistry
from .writer import ConflictPolicy

DEFAULT_BLUEPRINT = "react-workspace"

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Settings for one scaffold invocation.

    ``layout_path`` wins over ``blueprint`` when both are set.
    """

    root_dir: Path = Field(default=Path("./output"), description="Project root to scaffold into")
    blueprint: str = Field(default=DEFAULT_BLUEPRINT, description="Bundled blueprint name")
    layout_path: Optional[Path] = Field(default=None, description="Custom layout.yaml")
    conflict_policy: ConflictPolicy = Field(default=ConflictPolicy.FAIL)
    install: bool = Field(default=False, description="Run the layout's install command")
    install_timeout: int = Field(default=300, ge=1, description="Install timeout in seconds")

    def load_layout(self) -> tuple[LayoutSpec, TemplateRegistry]:
        """Load the configured layout and its template registry.

        Raises:
            LayoutError: If the layout or its templates cannot be loaded.
        """
        if self.layout_path is not None:
            return load_layout_bundle(self.layout_path)
        return load_blueprint(self.blueprint)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_ROOT_DIR, SCAFFOLD_BLUEPRINT, SCAFFOLD_LAYOUT,
            SCAFFOLD_CONFLICT_POLICY, SCAFFOLD_INSTALL, SCAFFOLD_INSTALL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_ROOT_DIR"):
            kwargs["root_dir"] = Path(os.environ["SCAFFOLD_ROOT_DIR"])
        if os.environ.get("SCAFFOLD_BLUEPRINT"):
            kwargs["blueprint"] = os.environ["SCAFFOLD_BLUEPRINT"]
        if os.environ.get("SCAFFOLD_LAYOUT"):
            kwargs["layout_path"] = Path(os.environ["SCAFFOLD_LAYOUT"])
        if os.environ.get("SCAFFOLD_CONFLICT_POLICY"):
            kwargs["conflict_policy"] = os.environ["SCAFFOLD_CONFLICT_POLICY"].strip().lower()
        if os.environ.get("SCAFFOLD_INSTALL"):
            kwargs["install"] = os.environ["SCAFFOLD_INSTALL"].strip().lower() in _TRUTHY
        if os.environ.get("SCAFFOLD_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = os.environ["SCAFFOLD_INSTALL_TIMEOUT"]

        return cls(**kwargs)
