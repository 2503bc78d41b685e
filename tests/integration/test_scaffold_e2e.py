"""Integration tests for the bundled react-workspace blueprint.

These tests load the real blueprint from disk, scaffold it into a temporary
project root and check the generated tree, then re-run against the same
root under each conflict policy.

No external services or package managers are required.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from scaffoldkit import ConflictPolicy, ScaffoldOrchestrator, WriteStatus, load_blueprint


DEFAULT_PAGES = ["Dashboard", "Projects", "Tasks", "Automation", "Git", "Notes", "Profile"]
DEFAULT_COMPONENTS = ["Navbar", "Sidebar", "Stats", "ProjectCard"]
BOOTSTRAP_FILES = [
    "package.json",
    "index.html",
    "vite.config.ts",
    "tsconfig.json",
    "tsconfig.app.json",
    "tsconfig.node.json",
    "src/vite-env.d.ts",
    ".gitignore",
]
# Bootstrap files, one file per default page and component, providers, services and entry files.
FILE_COUNT = len(BOOTSTRAP_FILES) + len(DEFAULT_PAGES) + len(DEFAULT_COMPONENTS) + 10


@pytest.fixture(scope="module")
def blueprint():
    return load_blueprint("react-workspace")


@pytest.fixture
def orchestrator(tmp_project_dir: Path, blueprint) -> ScaffoldOrchestrator:
    _, registry = blueprint
    return ScaffoldOrchestrator(tmp_project_dir, registry)


# ---------------------------------------------------------------------------
# Fresh scaffold
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestReactWorkspace:
    def test_default_names(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        report = orchestrator.run(layout)

        assert report.success, report.summary()
        assert report.counts == {"created": FILE_COUNT + 5, "skipped": 0, "overwritten": 0, "failed": 0}

        for page in DEFAULT_PAGES:
            assert (tmp_project_dir / "src" / "pages" / page / f"{page}Page.tsx").is_file()
        for component in DEFAULT_COMPONENTS:
            assert (tmp_project_dir / "src" / "components" / component / f"{component}.tsx").is_file()
        assert (tmp_project_dir / "src" / "utils").is_dir()
        assert (tmp_project_dir / "src" / "App.tsx").is_file()
        assert (tmp_project_dir / "src" / "index.css").is_file()

    def test_vite_bootstrap(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        orchestrator.run(layout)

        for name in BOOTSTRAP_FILES:
            assert (tmp_project_dir / name).is_file(), name

        package = json.loads((tmp_project_dir / "package.json").read_text(encoding="utf-8"))
        assert {"react", "react-dom"} <= set(package["dependencies"])
        assert {"vite", "typescript", "@vitejs/plugin-react"} <= set(package["devDependencies"])
        assert package["scripts"]["dev"] == "vite"

        tsconfig = json.loads((tmp_project_dir / "tsconfig.json").read_text(encoding="utf-8"))
        assert {ref["path"] for ref in tsconfig["references"]} == {"./tsconfig.app.json", "./tsconfig.node.json"}

        index = (tmp_project_dir / "index.html").read_text(encoding="utf-8")
        assert 'src="/src/main.tsx"' in index

    def test_page_content(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        orchestrator.run(layout, {"pages": ["dashboard"]})

        content = (tmp_project_dir / "src" / "pages" / "Dashboard" / "DashboardPage.tsx").read_text(encoding="utf-8")
        assert "const DashboardPage: React.FC" in content
        assert 'className="dashboard-page"' in content
        assert "export default DashboardPage;" in content
        assert "{{" not in content

    def test_escaped_braces_survive(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        orchestrator.run(layout)

        auth = (tmp_project_dir / "src" / "providers" / "AuthProvider.tsx").read_text(encoding="utf-8")
        assert "value={{ user, login, logout }}" in auth

    def test_app_is_ready_for_page_routes(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        orchestrator.run(layout)

        app = (tmp_project_dir / "src" / "App.tsx").read_text(encoding="utf-8")
        assert "import { BrowserRouter, Route, Routes } from 'react-router-dom';" in app
        assert "<Routes>" in app
        assert "export default App;" in app

    def test_supplied_group_replaces_defaults(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        report = orchestrator.run(layout, {"pages": ["Home"]})

        assert report.success
        pages = sorted(p.name for p in (tmp_project_dir / "src" / "pages").iterdir())
        assert pages == ["Home"]
        # Components fall back to the layout defaults.
        assert len(list((tmp_project_dir / "src" / "components").iterdir())) == len(DEFAULT_COMPONENTS)

    def test_install_uses_blueprint_packages(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        seen_package_json = []

        def fake_run(cmd, cwd, timeout):
            seen_package_json.append((Path(cwd) / "package.json").is_file())
            return (0, "", "")

        with patch("scaffoldkit.installer.run_command", side_effect=fake_run) as mock_run:
            report = orchestrator.run(layout, install=True)

        assert report.success
        # npm install runs inside an already bootstrapped project.
        assert seen_package_json == [True]
        argv = mock_run.call_args.args[0]
        assert argv[:2] == ["npm", "install"]
        assert "react-router-dom" in argv


# ---------------------------------------------------------------------------
# Re-runs against an existing tree
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestRerun:
    def test_skip_leaves_edits_alone(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        orchestrator.run(layout)
        app = tmp_project_dir / "src" / "App.tsx"
        app.write_text("// edited\n", encoding="utf-8")

        report = orchestrator.run(layout, conflict_policy=ConflictPolicy.SKIP)

        assert report.success
        assert report.has_skips
        assert all(o.status is WriteStatus.SKIPPED for o in report.outcomes)
        assert app.read_text(encoding="utf-8") == "// edited\n"

    def test_overwrite_restores_template(self, orchestrator, blueprint, tmp_project_dir: Path):
        layout, _ = blueprint
        orchestrator.run(layout)
        app = tmp_project_dir / "src" / "App.tsx"
        app.write_text("// edited\n", encoding="utf-8")

        report = orchestrator.run(layout, conflict_policy=ConflictPolicy.OVERWRITE)

        assert report.success
        assert report.counts["overwritten"] == FILE_COUNT
        assert "// edited" not in app.read_text(encoding="utf-8")

    def test_default_policy_reports_every_conflict(self, orchestrator, blueprint):
        layout, _ = blueprint
        orchestrator.run(layout)

        report = orchestrator.run(layout)

        assert not report.success
        assert report.counts["failed"] == FILE_COUNT
        assert report.counts["skipped"] == 5
