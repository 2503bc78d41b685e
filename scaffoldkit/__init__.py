"""scaffoldkit -- materializes project trees from a layout and a list of names.

A layout (``LayoutSpec``) declares fixed directories and templated slots.
The planner expands it against the supplied names into a collision-free
plan, and the writer materializes that plan on disk under a single project
root, honouring a conflict policy for files that already exist.

Quick usage::

    from scaffoldkit import ConflictPolicy, ScaffoldOrchestrator, load_blueprint

    spec, registry = load_blueprint("react-workspace")
    orchestrator = ScaffoldOrchestrator("./dev-workspace-dashboard", registry)
    report = orchestrator.run(spec, {"pages": ["Dashboard", "Tasks"]}, ConflictPolicy.SKIP)
    print(report.summary())
"""

from scaffoldkit.errors import (
    DuplicateNameError,
    InvalidNameError,
    LayoutError,
    MalformedPlaceholderError,
    MissingNamesError,
    PathCollisionError,
    PlanError,
    ScaffoldError,
    UnboundPlaceholderError,
    UnknownCasingError,
    UnknownTemplateError,
    UnsafePathError,
)
from scaffoldkit.layout import (
    Cardinality,
    InstallSpec,
    LayoutSpec,
    Slot,
    available_blueprints,
    load_blueprint,
    load_layout,
    load_layout_bundle,
)
from scaffoldkit.naming import CaseVariants, NameSet, case_variants
from scaffoldkit.orchestrator import ScaffoldOrchestrator
from scaffoldkit.planner import PathPlanner, Plan, PlannedFile
from scaffoldkit.results import ScaffoldReport, WriteOutcome, WriteStatus
from scaffoldkit.templates import Template, TemplateRegistry, TemplateRenderer
from scaffoldkit.writer import ConflictPolicy, FileTreeWriter

__all__ = [
    "Cardinality",
    "CaseVariants",
    "ConflictPolicy",
    "DuplicateNameError",
    "FileTreeWriter",
    "InstallSpec",
    "InvalidNameError",
    "LayoutError",
    "LayoutSpec",
    "MalformedPlaceholderError",
    "MissingNamesError",
    "NameSet",
    "PathCollisionError",
    "PathPlanner",
    "Plan",
    "PlanError",
    "PlannedFile",
    "ScaffoldError",
    "ScaffoldOrchestrator",
    "ScaffoldReport",
    "Slot",
    "Template",
    "TemplateRegistry",
    "TemplateRenderer",
    "UnboundPlaceholderError",
    "UnknownCasingError",
    "UnknownTemplateError",
    "UnsafePathError",
    "WriteOutcome",
    "WriteStatus",
    "available_blueprints",
    "case_variants",
    "load_blueprint",
    "load_layout",
    "load_layout_bundle",
]
