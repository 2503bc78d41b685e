"""Path planning: layout + names -> fully rendered, collision-free plan.

Planning is a pure function of the layout, the name groups and the
template registry.  It never touches the filesystem, so a bad layout or a
bad name can never leave a half-written tree behind: every path is
resolved, every template rendered and every collision detected before the
writer sees the plan.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Optional, Union

from .errors import MissingNamesError, PathCollisionError, PlanError, UnknownTemplateError, UnsafePathError
from .layout import Cardinality, LayoutSpec, Slot
from .naming import CaseVariants, NameSet, case_variants
from .templates import Template, TemplateRegistry, TemplateRenderer

NamesInput = Union[NameSet, Sequence[str], Mapping[str, Union[NameSet, Sequence[str]]], None]


# ---------------------------------------------------------------------------
# Plan data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlannedFile:
    """One file to materialize: root-relative path, rendered content, origin."""

    path: str
    content: str
    template_id: str
    slot_id: str


@dataclass(frozen=True)
class Plan:
    """Ordered, pre-validated list of directories and files for one run.

    Iterating a plan yields its files; directories are kept separately and
    are always created before any file is written.
    """

    directories: tuple[str, ...] = ()
    files: tuple[PlannedFile, ...] = ()

    def __iter__(self) -> Iterator[PlannedFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def to_dict(self) -> dict[str, Any]:
        return {
            "directories": list(self.directories),
            "files": [
                {"path": f.path, "template_id": f.template_id, "slot_id": f.slot_id}
                for f in self.files
            ],
        }


# ---------------------------------------------------------------------------
# Name groups
# ---------------------------------------------------------------------------


def resolve_name_groups(spec: LayoutSpec, names: NamesInput = None) -> dict[str, NameSet]:
    """Validate the caller's names and map each group the layout uses to a NameSet.

    *names* may be a single NameSet / sequence (only when the layout uses at
    most one name group) or a ``{group: names}`` mapping.  Groups the caller
    leaves out fall back to the layout's ``default_names``.

    Raises:
        InvalidNameError: A name breaks the NameSet invariants.
        MissingNamesError: A group has no names from either source.
        PlanError: Names were given for a group the layout does not use.
    """
    groups = spec.groups()

    supplied: dict[str, NameSet] = {}
    if isinstance(names, Mapping):
        supplied = {group: NameSet.of(values) for group, values in names.items()}
    elif names is not None:
        name_set = NameSet.of(names)
        if len(groups) > 1:
            raise PlanError(
                f"Layout uses several name groups ({', '.join(groups)}); "
                "supply names as a {group: names} mapping"
            )
        if groups:
            supplied = {groups[0]: name_set}
        elif name_set:
            raise PlanError("Layout has no per-name slots but names were supplied")

    unknown = [group for group in supplied if group not in groups]
    if unknown:
        raise PlanError(f"Unknown name group(s): {', '.join(unknown)}")

    resolved: dict[str, NameSet] = {}
    for group in groups:
        if group in supplied:
            resolved[group] = supplied[group]
        elif group in spec.default_names:
            resolved[group] = NameSet.of(spec.default_names[group])
        else:
            raise MissingNamesError(group)
    return resolved


# ---------------------------------------------------------------------------
# PathPlanner
# ---------------------------------------------------------------------------


class PathPlanner:
    """Turns a LayoutSpec and name groups into a :class:`Plan`."""

    def __init__(self, registry: TemplateRegistry, renderer: Optional[TemplateRenderer] = None) -> None:
        self.registry = registry
        self.renderer = renderer or TemplateRenderer()

    def plan(self, spec: LayoutSpec, names: NamesInput = None) -> Plan:
        """Compute the full plan.

        Directories come first in layout order.  Files follow slot by slot;
        per-name slots emit one file per name in the NameSet's order.

        Raises:
            ScaffoldError: Any name, template or planning error.  Nothing is
                returned on failure.
        """
        groups = resolve_name_groups(spec, names)
        global_bindings = _fixed_bindings(spec.bindings)

        directories: list[str] = []
        for directory in spec.directories:
            path = _normalize(directory, "directories")
            if path not in directories:
                directories.append(path)

        files: list[PlannedFile] = []
        for slot in spec.slots:
            template = self._template_for(slot)
            fixed = {**global_bindings, **_fixed_bindings(slot.bindings)}

            if slot.cardinality is Cardinality.ONE:
                files.append(self._plan_file(slot, template, fixed))
                continue

            for variants in groups[slot.name_group].variants():
                files.append(self._plan_file(slot, template, {**fixed, slot.role: variants}))

        _check_collisions(directories, files)
        return Plan(directories=tuple(directories), files=tuple(files))

    # -- Internal helpers --------------------------------------------------

    def _template_for(self, slot: Slot) -> Template:
        try:
            return self.registry.get_template(slot.template)
        except UnknownTemplateError:
            raise UnknownTemplateError(slot.template, slot.id) from None

    def _plan_file(
        self,
        slot: Slot,
        template: Template,
        bindings: Mapping[str, CaseVariants],
    ) -> PlannedFile:
        raw_path = self.renderer.render_string(slot.path, bindings, source=f"{slot.id} path")
        return PlannedFile(
            path=_normalize(raw_path, slot.id),
            content=self.renderer.render(template, bindings),
            template_id=template.template_id,
            slot_id=slot.id,
        )


def _fixed_bindings(bindings: Mapping[str, str]) -> dict[str, CaseVariants]:
    return {role: case_variants(value) for role, value in bindings.items()}


def _normalize(path: str, owner: str) -> str:
    """Return *path* as a clean root-relative POSIX path.

    Raises:
        UnsafePathError: Absolute paths, ``..`` segments or empty results.
    """
    pure = PurePosixPath(path.replace("\\", "/"))
    if pure.is_absolute() or ".." in pure.parts:
        raise UnsafePathError(path, owner)
    parts = [part for part in pure.parts if part not in ("", ".")]
    if not parts:
        raise UnsafePathError(path, owner)
    return "/".join(parts)


def _check_collisions(directories: Sequence[str], files: Sequence[PlannedFile]) -> None:
    """Reject duplicate file paths and files that sit where a directory must be."""
    file_owners: dict[str, str] = {}
    for planned in files:
        first = file_owners.get(planned.path)
        if first is not None:
            raise PathCollisionError(planned.path, first, planned.slot_id)
        file_owners[planned.path] = planned.slot_id

    # Every path that must exist as a directory, with whoever requires it.
    dir_owners: dict[str, str] = {d: "directories" for d in directories}
    for planned in files:
        for parent in PurePosixPath(planned.path).parents:
            key = str(parent)
            if key != ".":
                dir_owners.setdefault(key, planned.slot_id)
    for directory in directories:
        for parent in PurePosixPath(directory).parents:
            key = str(parent)
            if key != ".":
                dir_owners.setdefault(key, "directories")

    for path, slot_id in file_owners.items():
        if path in dir_owners:
            raise PathCollisionError(path, slot_id, dir_owners[path])
