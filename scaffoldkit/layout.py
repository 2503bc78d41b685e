"""Layout specification models and loaders.

A layout describes the target tree: directories created unconditionally,
plus *slots* whose paths and contents come from templates.  Layouts are
plain Pydantic v2 models so they can be embedded in code or loaded from a
YAML (or JSON) file and validated at construction time.

Bundled blueprints live under ``scaffoldkit/blueprints/<name>/`` as a
``layout.yaml`` next to a ``templates/`` directory.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import LayoutError
from .templates import TemplateRegistry

BLUEPRINTS_DIR = Path(__file__).parent / "blueprints"
LAYOUT_FILENAME = "layout.yaml"
ROLE_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Cardinality(str, Enum):
    """How many files a slot produces."""

    ONE = "one"
    PER_NAME = "per_name"


class Slot(BaseModel):
    """A templated position in the target tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Unique slot identifier")
    path: str = Field(..., min_length=1, description="Root-relative path pattern, may hold placeholders")
    template: str = Field(..., min_length=1, description="Template id in the registry")
    cardinality: Cardinality = Field(default=Cardinality.ONE)
    role: str = Field(default="name", pattern=ROLE_PATTERN, description="Role bound to each name")
    group: Optional[str] = Field(default=None, description="Name group; defaults to the role")
    bindings: dict[str, str] = Field(default_factory=dict, description="Slot-local fixed bindings")

    @model_validator(mode="after")
    def _check_slot(self) -> "Slot":
        if self.cardinality is Cardinality.ONE and self.group is not None:
            raise ValueError(f"slot {self.id!r}: 'group' only applies to per_name slots")
        if self.cardinality is Cardinality.PER_NAME and self.role in self.bindings:
            raise ValueError(f"slot {self.id!r}: fixed binding shadows the per-name role {self.role!r}")
        return self

    @property
    def name_group(self) -> Optional[str]:
        """The name group driving this slot, or ``None`` for fixed slots."""
        if self.cardinality is Cardinality.ONE:
            return None
        return self.group or self.role


class InstallSpec(BaseModel):
    """Package-manager invocation run after a successful write."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    command: list[str] = Field(..., min_length=1, description="Executable and leading arguments")
    packages: list[str] = Field(default_factory=list)


class LayoutSpec(BaseModel):
    """Static description of a project tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="")
    description: str = Field(default="")
    directories: list[str] = Field(default_factory=list)
    bindings: dict[str, str] = Field(default_factory=dict, description="Fixed bindings for every slot")
    slots: list[Slot] = Field(default_factory=list)
    default_names: dict[str, list[str]] = Field(default_factory=dict)
    install: Optional[InstallSpec] = Field(default=None)
    templates_dir: Optional[str] = Field(default=None, description="Relative to the layout file")

    @model_validator(mode="after")
    def _check_slot_ids(self) -> "LayoutSpec":
        seen: set[str] = set()
        for slot in self.slots:
            if slot.id in seen:
                raise ValueError(f"duplicate slot id {slot.id!r}")
            seen.add(slot.id)
        return self

    def groups(self) -> list[str]:
        """Name groups used by per-name slots, in first-use order."""
        groups: list[str] = []
        for slot in self.slots:
            group = slot.name_group
            if group is not None and group not in groups:
                groups.append(group)
        return groups


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_layout(path: str | Path) -> LayoutSpec:
    """Load and validate a layout file.

    Raises:
        LayoutError: If the file cannot be read, parsed, or validated.
    """
    layout_path = Path(path)
    try:
        raw = layout_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LayoutError(str(layout_path), str(exc)) from exc

    try:
        data: Any = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise LayoutError(str(layout_path), f"not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise LayoutError(str(layout_path), "top level must be a mapping")

    try:
        return LayoutSpec.model_validate(data)
    except ValidationError as exc:
        raise LayoutError(str(layout_path), str(exc)) from exc


def load_layout_bundle(path: str | Path) -> tuple[LayoutSpec, TemplateRegistry]:
    """Load a layout file together with the template registry it points at."""
    layout_path = Path(path)
    layout = load_layout(layout_path)
    template_dir = layout_path.parent / (layout.templates_dir or "templates")
    return layout, TemplateRegistry.from_directory(template_dir)


def available_blueprints() -> list[str]:
    """Return the names of all bundled blueprints."""
    if not BLUEPRINTS_DIR.is_dir():
        return []
    return sorted(
        p.name for p in BLUEPRINTS_DIR.iterdir() if (p / LAYOUT_FILENAME).is_file()
    )


def load_blueprint(name: str) -> tuple[LayoutSpec, TemplateRegistry]:
    """Load a bundled blueprint by name.

    Raises:
        LayoutError: If no blueprint called *name* exists.
    """
    layout_path = BLUEPRINTS_DIR / name / LAYOUT_FILENAME
    if not layout_path.is_file():
        known = ", ".join(available_blueprints()) or "none"
        raise LayoutError(name, f"unknown blueprint (available: {known})")
    return load_layout_bundle(layout_path)
