"""Exception hierarchy for the scaffolding engine.

Errors raised here are *input* errors: they are detected while
validating names, loading layouts, or planning, and they always abort the
run before anything touches the filesystem.  Write-time problems (an
existing file, a permission fault) are never raised -- they are recorded as
``WriteOutcome`` entries in the final report instead.
"""

from __future__ import annotations

from typing import Any


class ScaffoldError(Exception):
    """Base class for every error raised by the scaffolding engine."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly description of the error."""
        return {"type": type(self).__name__, "message": str(self)}


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


class InvalidNameError(ScaffoldError):
    """Raised when an identifier cannot be turned into case variants."""

    def __init__(self, name: str, reason: str = "must match ^[A-Za-z][A-Za-z0-9]*$") -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class DuplicateNameError(InvalidNameError):
    """Raised when a NameSet contains the same identifier twice."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "duplicate name")


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TemplateError(ScaffoldError):
    """Base class for placeholder resolution failures."""


class UnboundPlaceholderError(TemplateError):
    """A placeholder names a role that has no binding."""

    def __init__(self, role: str, template_id: str | None = None) -> None:
        self.role = role
        self.template_id = template_id
        where = f" in {template_id}" if template_id else ""
        super().__init__(f"No binding for role {role!r}{where}")


class UnknownCasingError(TemplateError):
    """A placeholder asks for a casing variant that does not exist."""

    def __init__(self, casing: str, template_id: str | None = None) -> None:
        self.casing = casing
        self.template_id = template_id
        where = f" in {template_id}" if template_id else ""
        super().__init__(f"Unknown casing {casing!r}{where}")


class MalformedPlaceholderError(TemplateError):
    """Template text contains a ``{{`` that is neither a placeholder nor an escape."""

    def __init__(self, fragment: str, template_id: str | None = None, line: int | None = None) -> None:
        self.fragment = fragment
        self.template_id = template_id
        self.line = line
        where = template_id or "<string>"
        if line is not None:
            where = f"{where}:{line}"
        super().__init__(f"Malformed placeholder {fragment!r} at {where}")


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------


class LayoutError(ScaffoldError):
    """A layout file could not be read or failed validation."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Invalid layout {source}: {message}")


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


class PlanError(ScaffoldError):
    """Raised when a layout and name set cannot be turned into a valid plan."""


class PathCollisionError(PlanError):
    """Two plan entries resolve to the same (or overlapping) path."""

    def __init__(self, path: str, first: str, second: str) -> None:
        self.path = path
        self.first = first
        self.second = second
        super().__init__(f"Path collision at {path!r} between {first!r} and {second!r}")


class UnsafePathError(PlanError):
    """A resolved path would land outside the project root."""

    def __init__(self, path: str, slot_id: str) -> None:
        self.path = path
        self.slot_id = slot_id
        super().__init__(f"Slot {slot_id!r} resolves to unsafe path {path!r}")


class UnknownTemplateError(PlanError):
    """A slot references a template id missing from the registry."""

    def __init__(self, template_id: str, slot_id: str | None = None) -> None:
        self.template_id = template_id
        self.slot_id = slot_id
        owner = f" (slot {slot_id!r})" if slot_id else ""
        super().__init__(f"Unknown template {template_id!r}{owner}")


class MissingNamesError(PlanError):
    """A per-name slot's group has neither caller-supplied nor default names."""

    def __init__(self, group: str) -> None:
        self.group = group
        super().__init__(f"No names supplied for group {group!r}")
