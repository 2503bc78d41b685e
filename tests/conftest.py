"""Shared pytest fixtures for the scaffoldkit test suite.

Provides reusable fixtures for:
- Temporary project roots
- A minimal page layout and its in-memory template registry
- Hand-built plans for exercising the writer in isolation
"""

from __future__ import annotations

from pathlib import Path

import pytest

from scaffoldkit.layout import Cardinality, LayoutSpec, Slot
from scaffoldkit.planner import Plan, PlannedFile
from scaffoldkit.templates import TemplateRegistry


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Project root that does not exist yet (the writer creates it)."""
    return tmp_path / "test-project"


# ---------------------------------------------------------------------------
# Layouts & Templates
# ---------------------------------------------------------------------------

@pytest.fixture
def page_layout() -> LayoutSpec:
    """One fixed directory plus one per-name page slot."""
    return LayoutSpec(
        name="pages",
        directories=["src/pages"],
        slots=[
            Slot(
                id="page",
                path="src/pages/{{name:pascal}}/{{name:pascal}}Page",
                template="page.tmpl",
                cardinality=Cardinality.PER_NAME,
            ),
        ],
    )


@pytest.fixture
def page_registry() -> TemplateRegistry:
    return TemplateRegistry.from_mapping({"page.tmpl": "export default {{name:pascal}}Page;"})


@pytest.fixture
def workspace_layout() -> LayoutSpec:
    """Two name groups, fixed bindings and a fixed entry slot."""
    return LayoutSpec(
        name="workspace",
        directories=["src/components", "src/pages"],
        bindings={"app": "App"},
        slots=[
            Slot(
                id="component",
                path="src/components/{{component:pascal}}.tsx",
                template="component.tmpl",
                cardinality=Cardinality.PER_NAME,
                role="component",
                group="components",
            ),
            Slot(
                id="page",
                path="src/pages/{{page:pascal}}Page.tsx",
                template="page.tmpl",
                cardinality=Cardinality.PER_NAME,
                role="page",
                group="pages",
            ),
            Slot(id="app", path="src/{{app:pascal}}.tsx", template="app.tmpl"),
        ],
        default_names={"components": ["Navbar", "Sidebar"]},
    )


@pytest.fixture
def workspace_registry() -> TemplateRegistry:
    return TemplateRegistry.from_mapping(
        {
            "component.tmpl": "export const {{component:pascal}} = () => null; // {{component:kebab}}\n",
            "page.tmpl": "const {{page:pascal}}Page = '{{page:lower}}';\nexport default {{page:pascal}}Page;\n",
            "app.tmpl": "export default function {{app:pascal}}() {{{{ return null; }}\n",
        }
    )


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

@pytest.fixture
def five_file_plan() -> Plan:
    """Five files spread over two directories, no fixed directories."""
    return Plan(
        files=tuple(
            PlannedFile(
                path=f"src/part{i // 3}/file{i}.txt",
                content=f"content {i}\n",
                template_id="file.tmpl",
                slot_id=f"slot{i}",
            )
            for i in range(1, 6)
        )
    )
