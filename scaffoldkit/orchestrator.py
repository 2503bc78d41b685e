"""Top-level scaffold driver.

``ScaffoldOrchestrator.run`` validates the names, plans, writes, optionally
installs dependencies, and returns a single :class:`ScaffoldReport`.
Validation and planning failures come back as an empty report carrying the
error; nothing has been written at that point.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .errors import ScaffoldError
from .installer import DependencyInstaller
from .layout import LayoutSpec
from .planner import NamesInput, PathPlanner, Plan, resolve_name_groups
from .results import ScaffoldReport
from .templates import TemplateRegistry
from .writer import ConflictPolicy, FileTreeWriter


class ScaffoldOrchestrator:
    """Drives planning and writing for one project root.

    The layout and registry are read-only, so one orchestrator per root can
    run independently of any other; two runs against the same root must be
    serialized by the caller.
    """

    def __init__(
        self,
        root: str | Path,
        registry: TemplateRegistry,
        *,
        writer: Optional[FileTreeWriter] = None,
        install_timeout: int = 300,
    ) -> None:
        self.root = Path(root)
        self.planner = PathPlanner(registry)
        self.writer = writer or FileTreeWriter(self.root)
        self.install_timeout = install_timeout

    def plan(self, spec: LayoutSpec, names: NamesInput = None) -> Plan:
        """Plan without writing (dry run).  Errors propagate."""
        return self.planner.plan(spec, resolve_name_groups(spec, names))

    def run(
        self,
        spec: LayoutSpec,
        names: NamesInput = None,
        conflict_policy: ConflictPolicy = ConflictPolicy.FAIL,
        *,
        install: bool = False,
    ) -> ScaffoldReport:
        """Scaffold *spec* under the root and report every outcome.

        Args:
            spec: Layout to materialize.
            names: A NameSet / list of names, or a ``{group: names}`` mapping.
            conflict_policy: What to do with files that already exist.
            install: Run the layout's install command after a clean write.
        """
        try:
            groups = resolve_name_groups(spec, names)
        except ScaffoldError as exc:
            return ScaffoldReport.from_error(exc, str(self.root))

        try:
            plan = self.planner.plan(spec, groups)
        except ScaffoldError as exc:
            return ScaffoldReport.from_error(exc, str(self.root))

        report = self.writer.write(plan, conflict_policy)

        # Only install into a tree that was written without failures.
        if install and spec.install is not None and report.success:
            installer = DependencyInstaller.from_spec(spec.install, timeout=self.install_timeout)
            report.install = installer.install(self.root)

        return report
