"""Dependency installation via an external package manager.

The engine treats the package manager as a collaborator: it runs the
layout's install command inside the project root and records whether it
worked.  Output is captured, never interpreted.
"""

from __future__ import annotations

from pathlib import Path

from .layout import InstallSpec
from .results import InstallResult
from .utils import run_command


class DependencyInstaller:
    """Runs ``command + packages`` in a project root."""

    def __init__(self, command: list[str], packages: list[str] | None = None, timeout: int = 300) -> None:
        if not command:
            raise ValueError("install command must not be empty")
        self.command = list(command)
        self.packages = list(packages or [])
        self.timeout = timeout

    @classmethod
    def from_spec(cls, spec: InstallSpec, timeout: int = 300) -> "DependencyInstaller":
        return cls(spec.command, spec.packages, timeout=timeout)

    @property
    def argv(self) -> list[str]:
        return [*self.command, *self.packages]

    def install(self, cwd: str | Path) -> InstallResult:
        returncode, stdout, stderr = run_command(self.argv, cwd=cwd, timeout=self.timeout)
        return InstallResult(command=self.argv, returncode=returncode, stdout=stdout, stderr=stderr)
